"""Tests for the rectangular section and steel buckling formulas."""

import math

import numpy as np
import pytest

from civilsuite.errors import InvalidGeometryError
from civilsuite.core.sections import (
    buckling_design_stress,
    design_shear_stress,
    doubly_reinforced_moment_capacity,
    doubly_reinforced_steel,
    is_doubly_reinforced,
    limiting_moment_capacity,
    moment_capacity,
    moment_of_inertia,
    required_steel_area,
    shear_capacity,
)

FCK, FY, B, D = 25.0, 500.0, 230.0, 417.0

# Annex G steel area and the 0.416 xu lever arm disagree by under 0.6 %
LEVER_ARM_TOLERANCE = 0.006


def random_sections(seed, size=40):
    """Seeded (fck, fy, b, d) tuples over practical ranges."""
    rng = np.random.default_rng(seed)
    return zip(
        rng.uniform(15.0, 60.0, size).tolist(),
        rng.uniform(250.0, 550.0, size).tolist(),
        rng.uniform(100.0, 1500.0, size).tolist(),
        rng.uniform(60.0, 1200.0, size).tolist(),
    )


class TestSectionProperties:
    """Second moment of area and the limiting moment."""

    def test_moment_of_inertia(self):
        """I = b D³ / 12 in m⁴."""
        assert moment_of_inertia(0.23, 0.45) == pytest.approx(0.23 * 0.45 ** 3 / 12)

    def test_moment_of_inertia_rejects_zero_depth(self):
        """A zero depth is a geometry error."""
        with pytest.raises(InvalidGeometryError):
            moment_of_inertia(0.23, 0.0)

    def test_limiting_moment(self):
        """Mu,lim = 0.138 fck b d² ≈ 137.98 kNm for the reference section."""
        assert limiting_moment_capacity(FCK, B, D) / 1e6 == pytest.approx(137.98, abs=0.01)

    @pytest.mark.parametrize("fck, b, d", [(0, 230, 417), (25, 0, 417), (25, 230, -1), (25, 230, math.nan)])
    def test_limiting_moment_rejects_bad_geometry(self, fck, b, d):
        """Zero, negative or NaN inputs raise instead of returning nonsense."""
        with pytest.raises(InvalidGeometryError):
            limiting_moment_capacity(fck, b, d)


class TestRequiredSteel:
    """Singly and doubly reinforced steel areas."""

    def test_reference_singly_reinforced(self):
        """90 kNm on 230 x 417 needs about 562 mm² of Fe500."""
        assert required_steel_area(90e6, FCK, FY, B, D) == pytest.approx(562.0, abs=1.0)

    @pytest.mark.parametrize("moment", [0.0, -5e6])
    def test_no_steel_for_zero_or_negative_moment(self, moment):
        """No tension steel is needed without a sagging moment."""
        assert required_steel_area(moment, FCK, FY, B, D) == 0.0

    def test_rejects_zero_width(self):
        """A zero width is a geometry error."""
        with pytest.raises(InvalidGeometryError):
            required_steel_area(90e6, FCK, FY, 0.0, D)

    def test_limiting_moment_uses_singly_branch(self):
        """M = Mu,lim stays singly reinforced; anything above is doubly."""
        mu_lim = limiting_moment_capacity(FCK, B, D)
        assert not is_doubly_reinforced(mu_lim, FCK, B, D)
        assert is_doubly_reinforced(mu_lim * 1.001, FCK, B, D)

    def test_doubly_reinforced_split(self):
        """Asc carries M - Mu,lim over the lever arm d - d'."""
        moment = 200e6
        mu_lim = limiting_moment_capacity(FCK, B, D)
        ast, asc = doubly_reinforced_steel(moment, FCK, FY, B, D)
        assert asc == pytest.approx((moment - mu_lim) / (0.87 * FY * (D - 50.0)))
        assert ast > asc > 0
        assert required_steel_area(moment, FCK, FY, B, D) == pytest.approx(ast)

    def test_doubly_reinforced_needs_depth_beyond_compression_cover(self):
        """d must exceed d' for compression steel to work."""
        with pytest.raises(InvalidGeometryError):
            doubly_reinforced_steel(10e6, FCK, FY, B, 40.0, d_prime=50.0)

    def test_branches_meet_at_limiting_moment(self):
        """The two branches agree within 1 % at Mu,lim."""
        mu_lim = limiting_moment_capacity(FCK, B, D)
        below = required_steel_area(mu_lim, FCK, FY, B, D)
        above = required_steel_area(mu_lim * (1 + 1e-9), FCK, FY, B, D)
        assert above == pytest.approx(below, rel=0.01)

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_monotonic_in_moment(self, seed):
        """Required steel never drops as the moment grows."""
        rng = np.random.default_rng(seed)
        moments = np.sort(rng.uniform(0.0, 300e6, size=40))
        areas = [required_steel_area(float(m), FCK, FY, B, D) for m in moments]
        assert all(a2 >= a1 for a1, a2 in zip(areas, areas[1:]))


class TestMomentCapacity:
    """Moment of resistance of a given steel area."""

    def test_reference_capacity(self):
        """8 - T10 (628 mm²) on the reference section gives about 98.9 kNm."""
        ast = 8 * math.pi * 10 ** 2 / 4
        assert moment_capacity(ast, FY, FCK, B, D) / 1e6 == pytest.approx(98.96, abs=0.05)

    def test_zero_steel_has_zero_capacity(self):
        """No steel, no capacity."""
        assert moment_capacity(0.0, FY, FCK, B, D) == 0.0

    def test_over_reinforced_is_capped(self):
        """An over-reinforced section is capped at Mu,lim."""
        assert moment_capacity(10000.0, FY, FCK, B, D) == pytest.approx(
            limiting_moment_capacity(FCK, B, D))

    @pytest.mark.parametrize("moment", [20e6, 60e6, 90e6, 130e6])
    def test_capacity_of_required_steel_recovers_moment(self, moment):
        """The steel for M resists M, less the small lever-arm mismatch."""
        ast = required_steel_area(moment, FCK, FY, B, D)
        capacity = moment_capacity(ast, FY, FCK, B, D)
        assert capacity >= moment * (1 - LEVER_ARM_TOLERANCE)
        assert capacity <= moment

    @pytest.mark.parametrize("seed", [3, 4, 5])
    def test_positive_for_positive_inputs(self, seed):
        """Any positive steel on a positive section has positive capacity."""
        rng = np.random.default_rng(seed + 100)
        for fck, fy, b, d in random_sections(seed):
            ast = float(rng.uniform(1.0, 0.04 * b * d))
            assert moment_capacity(ast, fy, fck, b, d) > 0

    def test_compression_steel_adds_capacity(self):
        """Doubly reinforced steel for 200 kNm resists exactly 200 kNm."""
        ast, asc = doubly_reinforced_steel(200e6, FCK, FY, B, D)
        capacity = doubly_reinforced_moment_capacity(ast, asc, FY, FCK, B, D)
        assert capacity == pytest.approx(200e6, rel=1e-6)

    def test_without_compression_steel_falls_back_to_singly(self):
        """No compression steel gives the singly reinforced capacity."""
        assert doubly_reinforced_moment_capacity(500.0, 0.0, FY, FCK, B, D) == pytest.approx(
            moment_capacity(500.0, FY, FCK, B, D))


class TestShear:
    """Constant-τc shear capacity."""

    def test_design_shear_stress(self):
        """τc = 0.25 √25 = 1.25 MPa."""
        assert design_shear_stress(25.0) == pytest.approx(1.25)

    def test_shear_capacity(self):
        """Vc = τc b d."""
        assert shear_capacity(FCK, B, D) == pytest.approx(1.25 * 230 * 417)

    @pytest.mark.parametrize("seed", [6, 7, 8])
    def test_positive_for_positive_inputs(self, seed):
        """Shear capacity is strictly positive for any positive fck, b and d."""
        for fck, _, b, d in random_sections(seed):
            assert shear_capacity(fck, b, d) > 0

    def test_shear_capacity_rejects_zero_depth(self):
        """A zero depth is a geometry error."""
        with pytest.raises(InvalidGeometryError):
            shear_capacity(FCK, B, 0.0)


class TestBucklingStress:
    """IS 800 buckling class c design stress."""

    def test_stocky_member_reaches_yield_over_gamma(self):
        """At zero slenderness fcd = fy / γm0."""
        assert buckling_design_stress(0.0, 250.0) == pytest.approx(250.0 / 1.1)

    def test_never_above_yield_over_gamma(self):
        """fcd never exceeds fy / γm0."""
        for slenderness in np.linspace(0.0, 250.0, 26):
            assert buckling_design_stress(float(slenderness), 250.0) <= 250.0 / 1.1 + 1e-9

    def test_non_increasing_with_slenderness(self):
        """More slender members never get a higher design stress."""
        values = [buckling_design_stress(float(s), 350.0) for s in np.linspace(0.0, 200.0, 41)]
        assert all(v2 <= v1 + 1e-12 for v1, v2 in zip(values, values[1:]))

    def test_finite_and_non_negative(self):
        """The design stress stays finite and non-negative for large λ."""
        for slenderness in [0.0, 1.0, 50.0, 180.0, 1000.0]:
            value = buckling_design_stress(slenderness, 250.0)
            assert math.isfinite(value)
            assert value >= 0.0

    def test_rejects_negative_slenderness(self):
        """A negative slenderness is a geometry error."""
        with pytest.raises(InvalidGeometryError):
            buckling_design_stress(-1.0, 250.0)
