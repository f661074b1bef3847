"""Slab design tests."""

import pytest

from civilsuite.core.slab import solve_slab
from civilsuite.errors import ErrorKind
from civilsuite.models.inputs import SlabParameters, SlabSupport
from civilsuite.models.outputs import DesignStatus


@pytest.fixture(scope="module")
def two_way_slab():
    """3 x 4 m simply supported panel, 3 kN/m² live load."""
    return solve_slab(SlabParameters(short_span=3.0, long_span=4.0, live_load=3.0))


class TestTwoWaySlab:
    """3 x 4 m simply supported panel, 3 kN/m² live load."""

    def test_classified_two_way(self, two_way_slab):
        """ly / lx = 1.33 makes the panel two-way."""
        assert two_way_slab.details["slab_type"] == "two_way"
        assert two_way_slab.details["aspect_ratio"] == pytest.approx(4.0 / 3.0)

    def test_minimum_depth(self, two_way_slab):
        """The 125 mm minimum governs over the span/depth estimate."""
        assert two_way_slab.details["overall_depth"] == 125.0
        assert two_way_slab.details["effective_depth"] == pytest.approx(100.0)
        assert two_way_slab.details["span_depth_ratio"] == 35.0

    def test_factored_load(self, two_way_slab):
        """1.5 × (self weight + finishes + live load)."""
        assert two_way_slab.details["factored_load"] == pytest.approx(1.5 * (0.125 * 25 + 1.0 + 3.0))

    def test_moments_from_table_27(self, two_way_slab):
        """αx interpolated from IS 456 Table 27 at ly / lx = 1.33."""
        w = two_way_slab.details["factored_load"]
        alpha_x = 0.093 + (0.099 - 0.093) * (4.0 / 3.0 - 1.3) / 0.1
        assert two_way_slab.details["moment_x_positive"] == pytest.approx(alpha_x * w * 9.0)
        assert two_way_slab.details["moment_y_positive"] < two_way_slab.details["moment_x_positive"]

    def test_steel_and_spacing(self, two_way_slab):
        """About 220 mm²/m required, provided as T10 @ 300."""
        r = two_way_slab.reinforcement
        assert r.area_required == pytest.approx(219.7, abs=1.0)
        assert r.area_minimum == pytest.approx(150.0)
        assert r.bar_callout == "T10 @ 300 mm c/c"
        assert two_way_slab.details["bars_y"].startswith("T10 @ ")

    def test_serviceability(self, two_way_slab):
        """Deflection about 2.1 mm and crack width under 0.3 mm."""
        assert two_way_slab.forces.max_deflection == pytest.approx(2.1, abs=0.05)
        assert two_way_slab.details["crack_width"] < 0.3

    def test_passes(self, two_way_slab):
        """Every slab check passes."""
        assert two_way_slab.status == DesignStatus.PASS
        assert set(two_way_slab.verdict.checks) == {
            "moment", "shear", "span_depth", "deflection", "crack_width", "max_steel",
        }

    def test_quantities(self, two_way_slab):
        """Concrete volume of the panel and its cement bags."""
        assert two_way_slab.details["concrete_volume"] == pytest.approx(3.0 * 4.0 * 0.125)
        assert two_way_slab.details["cement_bags"] > 0


class TestSlabCases:
    """One-way, cantilever, continuous and invalid slabs."""

    def test_one_way_slab(self):
        """ly / lx > 2 spans one way: M = wl² / 8, V = wl / 2."""
        result = solve_slab(SlabParameters(short_span=3.0, long_span=7.0, live_load=3.0))
        assert result.details["slab_type"] == "one_way"
        assert result.details["overall_depth"] == 140.0
        w = result.details["factored_load"]
        assert result.forces.max_moment == pytest.approx(w * 9.0 / 8)
        assert result.forces.max_shear == pytest.approx(w * 3.0 / 2)

    def test_spans_are_swapped(self):
        """A long span given as the short one is swapped with a warning."""
        result = solve_slab(SlabParameters(short_span=4.0, long_span=3.0, live_load=3.0))
        assert result.details["aspect_ratio"] == pytest.approx(4.0 / 3.0)
        assert any("swapped" in w for w in result.warnings)

    def test_cantilever_is_one_way(self):
        """Cantilever slabs are one-way with M = wl² / 2 at the root."""
        result = solve_slab(SlabParameters(
            short_span=1.5, long_span=4.0, live_load=3.0, support=SlabSupport.CANTILEVER))
        assert result.details["slab_type"] == "one_way"
        assert result.details["span_depth_ratio"] == 10.0
        w = result.details["factored_load"]
        assert result.details["moment_x_negative"] == pytest.approx(w * 1.5 ** 2 / 2)
        assert result.forces.reactions.right == 0.0

    def test_continuous_two_way_has_support_moments(self):
        """Continuous panels carry hogging moments above the mid-span ones."""
        result = solve_slab(SlabParameters(
            short_span=4.0, long_span=5.0, live_load=4.0, support=SlabSupport.CONTINUOUS))
        assert result.details["slab_type"] == "two_way"
        assert result.details["moment_x_negative"] > result.details["moment_x_positive"] > 0
        assert result.details["span_depth_ratio"] == 40.0

    def test_given_thickness_is_used(self):
        """An explicit thickness overrides the depth estimate."""
        result = solve_slab(SlabParameters(short_span=3.0, long_span=4.0, live_load=3.0, thickness=150))
        assert result.details["overall_depth"] == 150.0

    def test_bars_too_close_are_flagged(self):
        """Steel that even 5 mm spacing cannot supply is a degenerate section."""
        result = solve_slab(SlabParameters(short_span=6.0, long_span=20.0, live_load=2000.0, thickness=130))
        assert result.valid
        assert result.has_issue(ErrorKind.DEGENERATE_SECTION)
        assert result.reinforcement.area_provided < result.reinforcement.area_required
        assert any("increase the bar size" in w for w in result.warnings)

    def test_ordinary_slab_is_not_degenerate(self, two_way_slab):
        """Normal spacings never raise the degenerate flag."""
        assert not two_way_slab.has_issue(ErrorKind.DEGENERATE_SECTION)

    def test_thin_slab_fails_span_depth(self):
        """A 100 mm slab over 5 m fails the span/depth check."""
        result = solve_slab(SlabParameters(short_span=5.0, long_span=6.0, live_load=3.0, thickness=100))
        assert result.valid
        assert result.verdict.checks["span_depth"] == DesignStatus.FAIL

    @pytest.mark.parametrize("update", [
        {"short_span": 0.0},
        {"long_span": -1.0},
        {"thickness": 0.0},
        {"bar_dia": 0.0},
    ])
    def test_invalid_geometry(self, update):
        """Zero or negative dimensions give an INVALID result."""
        params = SlabParameters(short_span=3.0, long_span=4.0, live_load=3.0).model_copy(update=update)
        result = solve_slab(params)
        assert result.status == DesignStatus.INVALID
        assert result.has_issue(ErrorKind.INVALID_GEOMETRY)

    def test_negative_live_load(self):
        """A negative live load is INVALID_INPUT."""
        result = solve_slab(SlabParameters(short_span=3.0, long_span=4.0, live_load=-1.0))
        assert result.has_issue(ErrorKind.INVALID_INPUT)
