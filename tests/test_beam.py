"""Beam internal forces and design tests against hand calculations."""

import numpy as np
import pytest

from civilsuite.core.beam import BeamDesigner, beam_forces, solve_beam
from civilsuite.errors import ErrorKind, InvalidGeometryError
from civilsuite.models.inputs import BeamParameters, SupportType
from civilsuite.models.outputs import UTILIZATION_SENTINEL, DesignStatus


@pytest.fixture(scope="module")
def beam_result():
    """6 m simply supported beam, 230 x 450, 20 kN/m, M25 / Fe500."""
    return solve_beam(BeamParameters(span=6.0, udl=20.0, width=230, depth=450))


class TestBeamForces:
    """Closed-form internal forces for each support type."""

    def test_simply_supported_udl(self):
        """wL²/8, wL/2 and 5wL⁴/384EI for a uniform load."""
        f = beam_forces(SupportType.SIMPLY_SUPPORTED, 6.0, 20.0, flexural_rigidity=43664.0)
        assert f.max_moment == pytest.approx(90.0)
        assert f.max_shear == pytest.approx(60.0)
        assert f.reactions.left == pytest.approx(60.0)
        assert f.reactions.right == pytest.approx(60.0)
        assert f.max_deflection == pytest.approx(5 * 20 * 6 ** 4 / (384 * 43664.0) * 1000)

    def test_simply_supported_offset_point_load(self):
        """30 kN at 2 m on a 6 m span: reactions 20 / 10 kN, M = Pab/L."""
        f = beam_forces(SupportType.SIMPLY_SUPPORTED, 6.0, 0.0, point_load=30.0, position=2.0)
        assert f.reactions.left == pytest.approx(20.0)
        assert f.reactions.right == pytest.approx(10.0)
        assert f.max_moment == pytest.approx(40.0)
        assert f.max_shear == pytest.approx(20.0)

    def test_cantilever_point_load_defaults_to_tip(self):
        """Without a position the cantilever point load acts at the free end."""
        f = beam_forces(SupportType.CANTILEVER, 2.0, 10.0, point_load=5.0)
        assert f.max_moment == pytest.approx(30.0)
        assert f.max_shear == pytest.approx(25.0)
        assert f.reactions.left == pytest.approx(25.0)
        assert f.reactions.right == 0.0

    def test_cantilever_udl(self):
        """3 m cantilever at 10 kN/m: M = 45 kNm, V = 30 kN."""
        f = beam_forces(SupportType.CANTILEVER, 3.0, 10.0)
        assert f.max_moment == pytest.approx(45.0)
        assert f.max_shear == pytest.approx(30.0)

    def test_fixed_udl_governed_by_hogging(self):
        """Fixed-end moment wL²/12 exceeds the wL²/24 mid-span moment."""
        f = beam_forces(SupportType.FIXED, 6.0, 12.0)
        assert f.max_moment == pytest.approx(36.0)
        assert f.max_shear == pytest.approx(36.0)

    def test_fixed_central_point_load(self):
        """Central point load on a fixed beam: M = PL/8."""
        f = beam_forces(SupportType.FIXED, 4.0, 0.0, point_load=16.0)
        assert f.max_moment == pytest.approx(16.0 * 4.0 / 8)
        assert f.reactions.left == pytest.approx(8.0)

    def test_continuous_two_span(self):
        """Two equal spans: end reactions 3wL/8, middle 10wL/8."""
        f = beam_forces(SupportType.CONTINUOUS, 5.0, 10.0)
        assert f.reactions.left == pytest.approx(18.75)
        assert f.reactions.middle == pytest.approx(62.5)
        assert f.reactions.maximum == pytest.approx(62.5)
        assert f.max_moment == pytest.approx(31.25)
        assert f.max_shear == pytest.approx(31.25)

    def test_reactions_balance_load(self):
        """Reactions sum to the total applied load."""
        for support in (SupportType.SIMPLY_SUPPORTED, SupportType.FIXED):
            f = beam_forces(support, 5.0, 8.0, point_load=12.0, position=1.5)
            assert f.reactions.left + f.reactions.right == pytest.approx(8.0 * 5.0 + 12.0)

    @pytest.mark.parametrize("position", [-0.1, 6.1])
    def test_point_load_outside_span(self, position):
        """A point load off the span is a geometry error."""
        with pytest.raises(InvalidGeometryError):
            beam_forces(SupportType.SIMPLY_SUPPORTED, 6.0, 10.0, point_load=5.0, position=position)

    @pytest.mark.parametrize("position", [-1.0, 7.0])
    def test_continuous_ignores_point_load_position(self, position):
        """Continuous beams drop the point load, so its position is not checked."""
        f = beam_forces(SupportType.CONTINUOUS, 5.0, 10.0, point_load=20.0, position=position)
        assert f.max_moment == pytest.approx(31.25)


class TestReferenceBeam:
    """6 m simply supported beam, 230 x 450, 20 kN/m, M25 / Fe500."""

    def test_forces(self, beam_result):
        """M = 90 kNm and V = 60 kN."""
        assert beam_result.forces.max_moment == pytest.approx(90.0)
        assert beam_result.forces.max_shear == pytest.approx(60.0)

    def test_effective_depth(self, beam_result):
        """d = 450 - 25 - 16/2 = 417 mm."""
        assert beam_result.details["effective_depth"] == pytest.approx(417.0)

    def test_steel(self, beam_result):
        """562 mm² required, 8 - T10 provided."""
        r = beam_result.reinforcement
        assert r.area_required == pytest.approx(562.0, abs=1.0)
        assert r.area_minimum == pytest.approx(0.85 * 230 * 417 / 500)
        assert r.bar_callout == "8 - T10 bars (628 mm²)"
        assert r.compression_callout is None

    def test_capacities(self, beam_result):
        """Provided bars give about 98.96 kNm; shear capacity is τc b d."""
        r = beam_result.reinforcement
        assert r.moment_capacity / 1e6 == pytest.approx(98.96, abs=0.05)
        assert r.shear_capacity == pytest.approx(1.25 * 230 * 417)
        assert r.utilization_ratio == pytest.approx(90.0 / (r.moment_capacity / 1e6))

    def test_deflection(self, beam_result):
        """Elastic mid-span deflection ≈ 7.73 mm against L/250 = 24 mm."""
        assert beam_result.forces.max_deflection == pytest.approx(7.73, abs=0.02)
        assert beam_result.details["deflection_limit"] == pytest.approx(24.0)

    def test_verdict(self, beam_result):
        """Every check passes and the verdict carries the governing ratio."""
        assert beam_result.status == DesignStatus.PASS
        assert beam_result.is_safe
        assert set(beam_result.verdict.checks) == {"moment", "shear", "deflection", "max_steel"}
        assert beam_result.verdict.utilization == pytest.approx(beam_result.reinforcement.utilization_ratio)
        assert not beam_result.issues

    def test_calculation_steps_numbered(self, beam_result):
        """Calculation steps are numbered from 1 without gaps."""
        numbers = [s.step_number for s in beam_result.calculation_steps]
        assert numbers == list(range(1, len(numbers) + 1))

    def test_development_length(self, beam_result):
        """Ld = fy φ / (4 × 1.2 √fck) for the T10 bars."""
        assert beam_result.details["development_length"] == pytest.approx(500 * 10 / (4 * 1.2 * 5))


class TestBeamDesignCases:
    """Doubly reinforced, failing and fallback designs."""

    def test_doubly_reinforced_section(self):
        """180 kNm exceeds Mu,lim so compression steel is added."""
        result = solve_beam(BeamParameters(span=6.0, udl=40.0, width=230, depth=450))
        assert result.valid
        assert result.details["doubly_reinforced"] is True
        assert result.has_issue(ErrorKind.DEGENERATE_SECTION)
        assert result.reinforcement.compression_area_required > 0
        assert result.reinforcement.compression_callout.startswith("6 - T8")
        assert result.reinforcement.moment_capacity >= 180e6

    def test_shear_failure(self):
        """120 kN on 230 x 417 exceeds the concrete shear capacity."""
        result = solve_beam(BeamParameters(span=6.0, udl=40.0, width=230, depth=450))
        assert not result.is_safe
        assert "shear" in result.verdict.failed_checks

    def test_deflection_limit(self):
        """A 10 m span at 20 kN/m on 300 x 450 deflects past L/250."""
        result = solve_beam(BeamParameters(span=10.0, udl=20.0, width=300, depth=450))
        assert result.forces.max_deflection > 40.0
        assert result.verdict.checks["deflection"] == DesignStatus.FAIL

    def test_continuous_ignores_point_load(self):
        """The point load on a continuous beam is dropped with a warning."""
        result = solve_beam(BeamParameters(
            span=5.0, udl=10.0, point_load=50.0, support="continuous", width=230, depth=450))
        assert result.forces.max_moment == pytest.approx(31.25)
        assert result.warnings

    def test_continuous_point_load_position_beyond_span(self):
        """An ignored point load never makes a continuous beam invalid."""
        result = solve_beam(BeamParameters(
            span=5.0, udl=10.0, point_load=20.0, point_load_position=7.0,
            support="continuous", width=230, depth=450))
        assert result.valid
        assert result.forces.max_moment == pytest.approx(31.25)

    def test_zero_load_gets_minimum_steel(self):
        """An unloaded beam still receives minimum steel and passes."""
        result = solve_beam(BeamParameters(span=4.0, udl=0.0, width=230, depth=450))
        assert result.reinforcement.area_required == 0.0
        assert result.reinforcement.area_provided >= result.reinforcement.area_minimum
        assert result.is_safe

    def test_undefined_grades_fall_back(self):
        """M27 and Fe450 fall back to M25 and Fe415, with one warning each."""
        result = solve_beam(BeamParameters(
            span=6.0, udl=20.0, width=230, depth=450, concrete_grade=27, steel_grade=450))
        assert result.valid
        assert result.has_issue(ErrorKind.INVALID_MATERIAL_GRADE)
        assert result.details["concrete_grade"] == "M25"
        assert result.details["steel_grade"] == "Fe415"
        assert len(result.warnings) == 2


class TestBeamInvalidInput:
    """Bad input gives an INVALID result instead of an exception."""

    @pytest.mark.parametrize("field", ["span", "width", "depth"])
    def test_missing_dimension(self, reference_beam, field):
        """A zero dimension is INVALID_GEOMETRY with the utilization sentinel."""
        params = reference_beam.model_copy(update={field: 0.0})
        result = solve_beam(params)
        assert result.status == DesignStatus.INVALID
        assert result.has_issue(ErrorKind.INVALID_GEOMETRY)
        assert result.verdict.utilization == UTILIZATION_SENTINEL
        assert result.verdict.checks == {"input": DesignStatus.FAIL}
        assert not result.is_safe

    def test_negative_load(self, reference_beam):
        """A negative UDL is INVALID_INPUT."""
        result = solve_beam(reference_beam.model_copy(update={"udl": -5.0}))
        assert not result.valid
        assert result.has_issue(ErrorKind.INVALID_INPUT)

    def test_cover_consumes_depth(self):
        """A 30 mm deep beam has no effective depth left after cover."""
        result = solve_beam(BeamParameters(span=4.0, udl=10.0, width=230, depth=30))
        assert not result.valid
        assert result.has_issue(ErrorKind.INVALID_GEOMETRY)

    def test_point_load_outside_span(self, reference_beam):
        """A point load at 7 m on a 6 m simply supported span is invalid."""
        params = reference_beam.model_copy(update={"point_load": 10.0, "point_load_position": 7.0})
        result = solve_beam(params)
        assert not result.valid

    def test_wrong_parameter_model(self):
        """Anything other than BeamParameters is a programming error."""
        with pytest.raises(TypeError):
            BeamDesigner().design(object())


class TestBeamProperties:
    """Properties over seeded random beams."""

    @pytest.mark.parametrize("seed", [21, 22, 23, 24, 25])
    def test_simply_supported_moment_is_wl2_over_8(self, seed):
        """Without a point load the simply supported moment is exactly wL²/8."""
        rng = np.random.default_rng(seed)
        spans = rng.uniform(0.5, 20.0, size=40)
        loads = rng.uniform(0.01, 200.0, size=40)
        for L, w in zip(spans.tolist(), loads.tolist()):
            forces = beam_forces(SupportType.SIMPLY_SUPPORTED, L, w)
            assert forces.max_moment == w * L ** 2 / 8

    @pytest.mark.parametrize("seed", [11, 12, 13])
    def test_random_beams_are_consistent(self, seed):
        """Valid designs provide at least minimum steel and a consistent verdict."""
        rng = np.random.default_rng(seed)
        supports = list(SupportType)
        for _ in range(20):
            params = BeamParameters(
                span=float(rng.uniform(2.0, 9.0)),
                udl=float(rng.uniform(0.0, 50.0)),
                point_load=float(rng.uniform(0.0, 40.0)),
                support=supports[int(rng.integers(len(supports)))],
                width=float(rng.choice([200, 230, 300, 350])),
                depth=float(rng.choice([300, 400, 450, 600, 750])),
            )
            result = solve_beam(params)
            assert result.valid
            assert result.reinforcement.area_provided >= result.reinforcement.area_minimum
            assert result.is_safe == all(c.passed for c in result.verdict.details)
            assert result.verdict.utilization == max(c.ratio for c in result.verdict.details)

    def test_more_load_never_needs_less_steel(self, reference_beam):
        """Required steel grows with the load."""
        areas = [
            solve_beam(reference_beam.model_copy(update={"udl": w})).reinforcement.area_required
            for w in (5.0, 10.0, 20.0, 30.0, 45.0)
        ]
        assert areas == sorted(areas)

    def test_repeat_design_is_identical(self, reference_beam):
        """Designing the same beam twice gives equal results."""
        first = solve_beam(reference_beam)
        second = solve_beam(reference_beam)
        assert first.model_dump() == second.model_dump()
