"""
IS 456:2000 code provisions for reinforced concrete member design.

Key clauses implemented:
- Clause 23.2: Span/depth ratios
- Clause 24.4 / Annex D: Two-way slab moment coefficients (Tables 26, 27)
- Clause 25.4: Minimum eccentricity
- Clause 26.5: Minimum and maximum reinforcement, lateral ties
- Clause 38.1: Limiting neutral axis depth
- Clause 40.2.1.1: Shear strength enhancement for solid slabs
- IS 3370 (Part 2): Permissible stresses in liquid retaining structures
"""

import math
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np

from .base_code import DesignCode, SlabMomentCoefficients
from ..utils import load_is456_tables


class IS456(DesignCode):
    """
    IS 456:2000 - Indian Standard for Plain and Reinforced Concrete.
    Code of Practice for Plain and Reinforced Concrete (Fourth Revision).
    """

    # Mu,lim = 0.138 fck b d² is the Fe415 value (xu,max/d = 0.48).
    # The engine uses it for every steel grade, so xu,max stays consistent.
    LIMITING_MOMENT_FACTOR = 0.138
    XU_MAX_RATIO = 0.48

    # Lever arm factor of the rectangular stress block (Clause 38.1)
    LEVER_ARM_FACTOR = 0.416

    # Stirrup/tie bar sizes in mm
    TIE_BAR_SIZES = [6, 8, 10, 12]

    def __init__(self, tables: Optional[Mapping[str, Any]] = None):
        self.tables = tables if tables is not None else load_is456_tables()

    def get_partial_safety_factors(self) -> Dict[str, float]:
        """
        Partial safety factors per IS 456.

        Clause 36.4.2: Partial safety factors for materials
        - Concrete: γm = 1.5
        - Steel: γm = 1.15

        Table 18: Partial safety factors for loads
        - Dead load: γf = 1.5
        - Live load: γf = 1.5
        """
        return {
            'gamma_c': 1.5,
            'gamma_s': 1.15,
            'gamma_f_dead': 1.5,
            'gamma_f_live': 1.5,
        }

    @property
    def load_factor(self) -> float:
        return self.get_partial_safety_factors()['gamma_f_dead']

    def get_span_depth_ratio(self, support_type: str, two_way: bool = False) -> float:
        """
        Span/effective depth ratio for slabs per Clause 23.2.1 and 24.1.

        Args:
            support_type: 'simply_supported', 'continuous', 'cantilever'
            two_way: True for slabs spanning in two directions

        Returns:
            L/d ratio; two-way cantilevers use the one-way value
        """
        ratios = self.tables['span_depth_ratios']
        if two_way and support_type in ratios['two_way']:
            return float(ratios['two_way'][support_type])
        return float(ratios['one_way'].get(support_type, ratios['one_way']['simply_supported']))

    def get_minimum_reinforcement_ratio(self, fy: float) -> float:
        """
        Minimum slab reinforcement per Clause 26.5.2.1.

        - 0.12% of gross area for high strength deformed bars
        - 0.15% for mild steel (Fe250)

        Args:
            fy: Steel yield strength in MPa

        Returns:
            Minimum reinforcement ratio as percentage
        """
        return 0.15 if fy <= 250 else 0.12

    def get_beam_minimum_steel(self, b: float, d: float, fy: float) -> float:
        """
        Minimum tension steel in beams per Clause 26.5.1.1(a).

        As/(b d) = 0.85/fy

        Returns:
            Area in mm²
        """
        return 0.85 * b * d / fy

    def get_maximum_reinforcement_ratio(self) -> float:
        """
        Maximum tension or compression steel per Clause 26.5.1.1(b) and 26.5.1.2.

        Returns:
            4% of the gross cross-sectional area
        """
        return 4.0

    def get_column_steel_limits(self) -> Tuple[float, float]:
        """Longitudinal steel in columns per Clause 26.5.3.1: 0.8% to 4%."""
        return 0.8, 4.0

    def get_slab_moment_coefficients(
        self, aspect_ratio: float, support_type: str
    ) -> SlabMomentCoefficients:
        """
        Bending moment coefficients for two-way slabs.

        Simply supported panels use Table 27 (corners not held down);
        continuous panels use Table 26 case 1 (interior panel).

        Args:
            aspect_ratio: ly/lx, clamped to the table range 1.0 - 2.0
            support_type: 'simply_supported' or 'continuous'

        Returns:
            Interpolated coefficients
        """
        r = max(1.0, min(aspect_ratio, 2.0))
        if support_type == 'continuous':
            table = self.tables['slab_interior_panel']
            return SlabMomentCoefficients(
                alpha_x_positive=float(np.interp(r, table['ratios'], table['alpha_x_positive'])),
                alpha_y_positive=float(table['alpha_y_positive']),
                alpha_x_negative=float(np.interp(r, table['ratios'], table['alpha_x_negative'])),
                alpha_y_negative=float(table['alpha_y_negative']),
            )

        table = self.tables['slab_simply_supported']
        return SlabMomentCoefficients(
            alpha_x_positive=float(np.interp(r, table['ratios'], table['alpha_x'])),
            alpha_y_positive=float(np.interp(r, table['ratios'], table['alpha_y'])),
        )

    def get_one_way_continuous_coefficients(self) -> Dict[str, float]:
        """Table 12 denominators for one-way continuous slabs (wl²/n)."""
        return {k: float(v) for k, v in self.tables['one_way_continuous_moments'].items()}

    def get_slab_depth_factor(self, overall_depth: float) -> float:
        """
        Factor k on τc for solid slabs per Clause 40.2.1.1.

        1.30 for D ≤ 150 mm reducing to 1.00 for D ≥ 300 mm.
        """
        table = self.tables['slab_depth_factor']
        return float(np.interp(overall_depth, table['depths'], table['factors']))

    def get_liquid_retaining_stresses(self, fck: float) -> Tuple[float, float]:
        """
        Permissible σcbc and direct tension σct per IS 3370 (Part 2), Table 1.

        Grades between table rows take the lower row.

        Returns:
            (σcbc, σct) in MPa
        """
        table = self.tables['liquid_retaining']
        grades = sorted(table['sigma_cbc'])
        lower = [g for g in grades if g <= fck]
        key = lower[-1] if lower else grades[0]
        return float(table['sigma_cbc'][key]), float(table['sigma_ct'][key])

    def get_liquid_retaining_min_steel(self, fy: float) -> float:
        """Minimum steel percentage in each direction for liquid retaining walls."""
        table = self.tables['liquid_retaining']['min_steel_percent']
        return float(table['mild'] if fy <= 250 else table['hysd'])

    def get_minimum_eccentricity(self, unsupported_length: float, dimension: float) -> float:
        """
        Minimum eccentricity per Clause 25.4.

        e_min = l/500 + D/30, not less than 20 mm

        Args:
            unsupported_length: l in mm
            dimension: lateral dimension in the plane of bending in mm
        """
        return max(unsupported_length / 500.0 + dimension / 30.0, 20.0)

    def get_tie_requirements(self, bar_dia: float, least_dimension: float) -> Tuple[int, float]:
        """
        Lateral ties per Clause 26.5.3.2(c).

        Diameter not less than φ/4 or 6 mm; pitch not more than the least
        lateral dimension, 16φ or 300 mm.

        Returns:
            (tie diameter in mm, pitch in mm)
        """
        required = max(6.0, bar_dia / 4.0)
        tie_dia = next((s for s in self.TIE_BAR_SIZES if s >= required), self.TIE_BAR_SIZES[-1])
        pitch = min(16.0 * bar_dia, least_dimension, 300.0)
        return tie_dia, math.floor(pitch / 5.0) * 5.0
