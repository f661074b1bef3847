"""Command-line interface tests."""

import json

import pytest
import yaml
from click.testing import CliRunner
from loguru import logger

from civilsuite.cli import main


@pytest.fixture
def runner():
    """Click runner that resets loguru after each test."""
    yield CliRunner()
    # run enables engine logging on the runner's stderr; undo that
    logger.remove()
    logger.disable("civilsuite")


@pytest.fixture
def beam_file(tmp_path):
    """A valid simply supported beam input file."""
    path = tmp_path / "beam.yaml"
    path.write_text(yaml.safe_dump({
        "member": "beam",
        "parameters": {"span": 6.0, "udl": 20.0, "width": 230, "depth": 450},
    }), encoding="utf-8")
    return path


class TestRun:
    """Designing a member from a YAML file."""

    def test_report(self, runner, beam_file):
        """run prints the text report."""
        result = runner.invoke(main, ["run", str(beam_file)])
        assert result.exit_code == 0
        assert "Beam design" in result.output
        assert "PASS - utilization" in result.output

    def test_json(self, runner, beam_file):
        """run --json prints the result as JSON."""
        result = runner.invoke(main, ["run", str(beam_file), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["member_type"] == "beam"
        assert data["status"] == "pass"

    def test_log_file(self, runner, beam_file, tmp_path):
        """run --log-file writes the engine log to a file."""
        log_file = tmp_path / "design.log"
        result = runner.invoke(main, ["run", str(beam_file), "--log-file", str(log_file)])
        assert result.exit_code == 0
        logger.remove()
        assert "Designing beam" in log_file.read_text(encoding="utf-8")

    def test_invalid_input_exit_code(self, runner, tmp_path):
        """An INVALID result exits with code 2."""
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"member": "beam", "parameters": {"span": 6.0}}), encoding="utf-8")
        result = runner.invoke(main, ["run", str(path)])
        assert result.exit_code == 2
        assert "INVALID INPUT" in result.stdout

    def test_unknown_member(self, runner, tmp_path):
        """An unknown member type exits with code 1."""
        path = tmp_path / "bridge.yaml"
        path.write_text(yaml.safe_dump({"member": "bridge", "parameters": {}}), encoding="utf-8")
        result = runner.invoke(main, ["run", str(path)])
        assert result.exit_code == 1

    @pytest.mark.parametrize("parameters", [[1, 2], "span: 6", 6.0])
    def test_parameters_not_a_mapping(self, runner, tmp_path, parameters):
        """Parameters that are not a mapping exit with code 1 and a message."""
        path = tmp_path / "params.yaml"
        path.write_text(yaml.safe_dump({"member": "beam", "parameters": parameters}), encoding="utf-8")
        result = runner.invoke(main, ["run", str(path)])
        assert result.exit_code == 1
        assert "must be a YAML mapping" in result.output

    def test_missing_member_key(self, runner, tmp_path):
        """A file without a member key exits with code 1."""
        path = tmp_path / "empty.yaml"
        path.write_text(yaml.safe_dump({"parameters": {}}), encoding="utf-8")
        result = runner.invoke(main, ["run", str(path)])
        assert result.exit_code == 1

    def test_bad_parameter_type(self, runner, tmp_path):
        """A parameter that fails validation exits with code 1."""
        path = tmp_path / "typo.yaml"
        path.write_text(yaml.safe_dump({"member": "beam", "parameters": {"span": "six"}}), encoding="utf-8")
        result = runner.invoke(main, ["run", str(path)])
        assert result.exit_code == 1


class TestOtherCommands:
    """template, grades and bbs."""

    def test_template_round_trips_through_run(self, runner, tmp_path):
        """A template runs as an input file."""
        result = runner.invoke(main, ["template", "concrete_mix"])
        assert result.exit_code == 0
        data = yaml.safe_load(result.stdout)
        assert data["member"] == "concrete_mix"
        assert data["parameters"]["grade"] == 25

        path = tmp_path / "mix.yaml"
        path.write_text(result.stdout, encoding="utf-8")
        run = runner.invoke(main, ["run", str(path)])
        assert run.exit_code == 0
        assert "1 : 1.35 : 3.15" in run.stdout

    def test_template_unknown_member(self, runner):
        """template rejects unknown member types."""
        result = runner.invoke(main, ["template", "bridge"])
        assert result.exit_code != 0

    def test_grades(self, runner):
        """grades lists the material table."""
        result = runner.invoke(main, ["grades"])
        assert result.exit_code == 0
        for name in ("M25", "Fe500", "E250"):
            assert name in result.stdout

    def test_bar_bending_schedule(self, runner):
        """bbs prints the default schedule and its total weight."""
        result = runner.invoke(main, ["bbs"])
        assert result.exit_code == 0
        assert "Stirrups" in result.stdout
        assert "Total weight: 69.8" in result.stdout
