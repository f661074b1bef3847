"""Command-line interface for the member design engine.

Usage::

    civilsuite run <input_yaml> [--json] [-v] [--log-file PATH]
    civilsuite template <member>
    civilsuite grades
    civilsuite bbs <input_yaml>
"""

from __future__ import annotations

from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from .core.detailing import bar_bending_schedule
from .core.solvers import MemberType, parameters_model, solve
from .errors import UnknownMemberTypeError
from .logging_utils import configure_logging
from .materials import MaterialKind, get_material_table
from .models.inputs import BarScheduleParameters
from .reports.formatter import format_result


def _load_yaml(input_path: Path) -> dict:
    try:
        with open(input_path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        click.secho(f"YAML syntax error:\n  {exc}", fg="red", err=True)
        raise SystemExit(1) from exc
    if not isinstance(data, dict):
        click.secho("Input file does not contain a valid YAML mapping.", fg="red", err=True)
        raise SystemExit(1)
    return data


# ---------------------------------------------------------------------------
# Top-level group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(package_name="civilsuite")
def main():
    """RC and steel member design - IS 456:2000."""


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Log calculation details.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write the log to this file.",
)
def run(input_file: str, as_json: bool, verbose: bool, log_file: str | None) -> None:
    """Design the member described in INPUT_FILE.

    The file holds a ``member`` key naming the member type and a
    ``parameters`` mapping.
    """
    configure_logging(verbose=verbose, log_file=Path(log_file) if log_file else None)
    data = _load_yaml(Path(input_file))

    member = data.get("member")
    if member is None:
        click.secho("Missing required key: 'member'", fg="red", err=True)
        raise SystemExit(1)

    parameters = data.get("parameters") or {}
    if not isinstance(parameters, dict):
        click.secho("'parameters' must be a YAML mapping.", fg="red", err=True)
        raise SystemExit(1)

    try:
        result = solve(member, parameters)
    except UnknownMemberTypeError as exc:
        click.secho(f"Error: {exc}", fg="red", err=True)
        raise SystemExit(1) from exc
    except ValidationError as exc:
        click.secho(f"Invalid parameters:\n{exc}", fg="red", err=True)
        raise SystemExit(1) from exc

    if as_json:
        click.echo(result.model_dump_json(indent=2))
    else:
        click.echo("\n".join(format_result(result)))

    if not result.valid:
        raise SystemExit(2)


# ---------------------------------------------------------------------------
# template
# ---------------------------------------------------------------------------

@main.command()
@click.argument("member", type=click.Choice([m.value for m in MemberType]))
def template(member: str) -> None:
    """Print a sample input YAML for MEMBER to stdout."""
    defaults = parameters_model(member)().model_dump(mode="json")
    click.echo(yaml.safe_dump({"member": member, "parameters": defaults}, sort_keys=False))


# ---------------------------------------------------------------------------
# grades
# ---------------------------------------------------------------------------

_KIND_TITLES = {
    MaterialKind.CONCRETE: "Concrete (fck, Ec in MPa)",
    MaterialKind.STEEL: "Reinforcing steel (fy, Es in MPa)",
    MaterialKind.STRUCTURAL_STEEL: "Structural steel (fy, Es in MPa)",
}


@main.command()
def grades() -> None:
    """List the material grades the engine knows."""
    table = get_material_table()
    for kind, title in _KIND_TITLES.items():
        click.echo(title)
        for grade in table.grades(kind).values():
            click.echo(
                f"  {grade.name:<6} {grade.characteristic_strength:>7.1f} "
                f"{grade.elastic_modulus:>10.0f}"
            )


# ---------------------------------------------------------------------------
# bbs
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True), required=False)
def bbs(input_file: str | None) -> None:
    """Print a bar bending schedule for the beam bars in INPUT_FILE.

    Without a file the default beam detailing is scheduled.
    """
    data = _load_yaml(Path(input_file)) if input_file else {}
    try:
        params = BarScheduleParameters.model_validate(data)
        schedule = bar_bending_schedule(params)
    except ValidationError as exc:
        click.secho(f"Invalid parameters:\n{exc}", fg="red", err=True)
        raise SystemExit(1) from exc
    except ValueError as exc:
        click.secho(f"Error: {exc}", fg="red", err=True)
        raise SystemExit(1) from exc

    click.echo(f"{'Mark':<12} {'Dia':>4} {'Length m':>9} {'No.':>4} {'Total m':>8} {'kg':>8}")
    for row in schedule.rows:
        click.echo(
            f"{row.description:<12} {row.diameter:>4.0f} {row.cutting_length:>9.3f} "
            f"{row.count:>4d} {row.total_length:>8.2f} {row.weight:>8.2f}"
        )
    click.echo(f"Total weight: {schedule.total_weight:.2f} kg")
