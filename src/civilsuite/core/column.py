"""
Short braced column design per IS 456:2000.

Key clauses:
- Clause 25.1.2: Short and slender compression members
- Clause 25.4: Minimum eccentricity
- Clause 26.5.3: Longitudinal steel limits and lateral ties
- Clause 39.3: Axially loaded members, Pu = 0.4 fck Ac + 0.67 fy Asc
- Clause 39.6: Biaxial bending (linear interaction)
"""

from .common import MemberDesigner, ResultBuilder
from .detailing import development_length
from .sections import limiting_moment_capacity, required_steel_area, shear_capacity
from ..errors import InvalidGeometryError
from ..models.inputs import ColumnParameters
from ..models.outputs import InternalForces, MemberResult, Reactions, ReinforcementResult
from ..reports.formatter import format_bars, select_bars

# Longitudinal bar sizes in mm and count limits for a rectangular column
COLUMN_BAR_SIZES = [12, 16, 20, 25, 32]
MIN_COLUMN_BARS = 4
MAX_COLUMN_BARS = 12

# Slenderness le / (0.3 × lateral dimension), i.e. le / r for a rectangle
SLENDERNESS_LIMIT = 50.0
RADIUS_OF_GYRATION_FACTOR = 0.3

# le / D below this is a short column
SHORT_COLUMN_RATIO = 12.0


class ColumnDesigner(MemberDesigner):
    """Axial capacity, biaxial bending and slenderness of a rectangular column."""

    member_type = "column"
    parameters_model = ColumnParameters

    def _design(self, params: ColumnParameters, out: ResultBuilder) -> MemberResult:
        ok = out.require_positive(
            width=params.width, depth=params.depth, height=params.height,
            effective_length_factor=params.effective_length_factor,
        )
        ok &= out.require_non_negative(
            axial_load=params.axial_load, moment_x=abs(params.moment_x),
            moment_y=abs(params.moment_y), cover=params.cover, bar_dia=params.bar_dia,
        )
        if not ok:
            return out.invalid()

        fck = out.resolve(self.materials.concrete(params.concrete_grade), "concrete")
        fy = out.resolve(self.materials.steel(params.steel_grade), "steel")

        b = params.width  # mm
        D = params.depth  # mm
        Pu = params.axial_load  # kN
        Mux = abs(params.moment_x)  # kNm
        Muy = abs(params.moment_y)  # kNm
        dx = D - params.cover - params.bar_dia / 2  # bending about x
        dy = b - params.cover - params.bar_dia / 2  # bending about y
        if dx <= 0 or dy <= 0:
            raise InvalidGeometryError("cover leaves no effective depth in the column section")

        # Step 1: Steel for axial load
        Ag = b * D
        Asc_axial = max(0.0, (Pu * 1e3 - 0.4 * fck * Ag) / (0.67 * fy - 0.4 * fck))
        out.step("Steel for axial load", "Asc = (Pu - 0.4 fck Ag) / (0.67 fy - 0.4 fck)",
                 f"({Pu:.0f}e3 - 0.4 × {fck:.0f} × {Ag:.0f}) / (0.67 × {fy:.0f} - 0.4 × {fck:.0f})",
                 Asc_axial, "mm²", "IS 456 Cl. 39.3")

        # Step 2: Steel for bending about each axis
        Ast_x = required_steel_area(Mux * 1e6, fck, fy, b, dx)
        Ast_y = required_steel_area(Muy * 1e6, fck, fy, D, dy)
        out.step("Steel for Mux", "Ast from Mux", f"Mux = {Mux:.1f} kNm", Ast_x, "mm²")
        out.step("Steel for Muy", "Ast from Muy", f"Muy = {Muy:.1f} kNm", Ast_y, "mm²")

        # Step 3: Governing steel within code limits
        p_min, p_max = self.code.get_column_steel_limits()
        As_min = p_min / 100 * Ag
        As_max = p_max / 100 * Ag
        As_required = max(Asc_axial, Ast_x, Ast_y)
        As_design = min(max(As_required, As_min), As_max)
        out.step("Design steel", "Asc = clamp(max(Asc, Ast,x, Ast,y), 0.8% Ag, 4% Ag)",
                 f"clamp({As_required:.0f}, {As_min:.0f}, {As_max:.0f})",
                 As_design, "mm²", "IS 456 Cl. 26.5.3.1")

        bars = select_bars(max(As_required, As_min), COLUMN_BAR_SIZES,
                           max_count=MAX_COLUMN_BARS, min_count=MIN_COLUMN_BARS)

        # Step 4: Capacities
        Pc = (0.4 * fck * Ag + 0.67 * fy * As_design) / 1000  # kN
        out.step("Axial capacity", "Pc = 0.4 fck Ag + 0.67 fy Asc",
                 f"0.4 × {fck:.0f} × {Ag:.0f} + 0.67 × {fy:.0f} × {As_design:.0f}",
                 Pc, "kN", "IS 456 Cl. 39.3")
        Mux_cap = limiting_moment_capacity(fck, b, dx) / 1e6  # kNm
        Muy_cap = limiting_moment_capacity(fck, D, dy) / 1e6  # kNm
        interaction = Mux / Mux_cap + Muy / Muy_cap

        le = params.effective_length_factor * params.height * 1000  # mm
        slenderness_x = le / (RADIUS_OF_GYRATION_FACTOR * D)
        slenderness_y = le / (RADIUS_OF_GYRATION_FACTOR * b)

        # Step 5: Checks
        axial = out.check("axial", Pu, Pc, "kN")
        out.check("biaxial", interaction, 1.0)
        out.check("min_steel", As_min, bars.area, "mm²")
        out.check("max_steel", As_required, As_max, "mm²")
        out.check("slenderness_x", slenderness_x, SLENDERNESS_LIMIT)
        out.check("slenderness_y", slenderness_y, SLENDERNESS_LIMIT)

        # Detailing
        tie_dia, tie_pitch = self.code.get_tie_requirements(bars.diameter, min(b, D))
        ex_min = self.code.get_minimum_eccentricity(params.height * 1000, D)
        ey_min = self.code.get_minimum_eccentricity(params.height * 1000, b)
        is_short = le / D < SHORT_COLUMN_RATIO and le / b < SHORT_COLUMN_RATIO
        if not is_short:
            out.warn("Column is slender (le/D ≥ 12); additional moments are not included")

        out.details.update({
            "gross_area": Ag,
            "axial_steel": Asc_axial,
            "bending_steel_x": Ast_x,
            "bending_steel_y": Ast_y,
            "design_steel": As_design,
            "steel_percentage": 100 * As_design / Ag,
            "axial_capacity": Pc,
            "moment_capacity_x": Mux_cap,
            "moment_capacity_y": Muy_cap,
            "interaction_ratio": interaction,
            "slenderness_x": slenderness_x,
            "slenderness_y": slenderness_y,
            "column_type": "short" if is_short else "slender",
            "min_eccentricity_x": ex_min,
            "min_eccentricity_y": ey_min,
            "min_eccentricity_moment_x": Pu * ex_min / 1000,
            "min_eccentricity_moment_y": Pu * ey_min / 1000,
            "tie_diameter": tie_dia,
            "tie_spacing": tie_pitch,
            "ties": f"T{tie_dia} @ {tie_pitch:.0f} mm c/c",
            "development_length": development_length(fy, fck, bars.diameter),
        })

        forces = InternalForces(
            max_shear=0.0,
            max_moment=max(Mux, Muy),
            max_deflection=0.0,
            reactions=Reactions(left=Pu, right=0.0),
        )
        reinforcement = ReinforcementResult(
            area_required=As_required,
            area_minimum=As_min,
            area_provided=bars.area,
            bar_callout=format_bars(bars),
            moment_capacity=Mux_cap * 1e6,
            shear_capacity=shear_capacity(fck, b, dx),
            utilization_ratio=axial.ratio,
        )
        return out.build(forces=forces, reinforcement=reinforcement)


def solve_column(params: ColumnParameters) -> MemberResult:
    """Design a column with the default code and material table."""
    return ColumnDesigner().design(params)
