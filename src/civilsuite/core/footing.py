"""
Isolated square pad footing per IS 456:2000.

Key clauses:
- Clause 34.1: Plan area from the safe bearing capacity
- Clause 34.2.3.1: Bending moment at the face of the column
- Clause 34.2.4.1: One-way and two-way (punching) shear
- Clause 31.6.3.1: Punching shear strength ks τc, τc = 0.25√fck
"""

import math

from .common import MemberDesigner, ResultBuilder
from .detailing import material_quantities
from .sections import design_shear_stress, limiting_moment_capacity, moment_capacity, required_steel_area
from ..errors import InvalidGeometryError
from ..models.inputs import FootingParameters
from ..models.outputs import InternalForces, MemberResult, Reactions, ReinforcementResult
from ..reports.formatter import bar_area, format_spacing
from ..utils import round_up

# Allowance for the self weight of footing and backfill
SELF_WEIGHT_ALLOWANCE = 1.1
MIN_FOOTING_DEPTH = 300.0  # mm
DEPTH_DIVISOR = 4.5  # depth = side / 4.5


class FootingDesigner(MemberDesigner):
    """Size and reinforce a square pad footing."""

    member_type = "footing"
    parameters_model = FootingParameters

    def _design(self, params: FootingParameters, out: ResultBuilder) -> MemberResult:
        ok = out.require_positive(
            axial_load=params.axial_load, bearing_capacity=params.bearing_capacity,
            column_width=params.column_width, column_depth=params.column_depth,
            bar_dia=params.bar_dia,
        )
        if params.thickness is not None:
            ok &= out.require_positive(thickness=params.thickness)
        ok &= out.require_non_negative(cover=params.cover)
        if not ok:
            return out.invalid()

        concrete = self.materials.concrete(params.concrete_grade)
        fck = out.resolve(concrete, "concrete")
        fy = out.resolve(self.materials.steel(params.steel_grade), "steel")

        P = params.axial_load  # kN, service
        sbc = params.bearing_capacity  # kN/m²
        cb, cd = params.column_width, params.column_depth  # mm

        # Step 1: Plan size
        area_required = SELF_WEIGHT_ALLOWANCE * P / sbc
        B = round_up(math.sqrt(area_required), 0.1)  # m
        B_mm = B * 1000
        if B_mm <= max(cb, cd):
            B = round_up(max(cb, cd) / 1000 + 0.1, 0.1)
            B_mm = B * 1000
            out.warn("Footing enlarged to project beyond the column")
        out.step("Required area", "A = 1.1 P / SBC", f"1.1 × {P:.0f} / {sbc:.0f}",
                 area_required, "m²", "IS 456 Cl. 34.1")
        out.step("Footing side", "B = √A rounded up to 0.1 m", f"√{area_required:.2f}", B, "m")

        # Step 2: Depth
        D_auto = max(MIN_FOOTING_DEPTH, round_up(B_mm / DEPTH_DIVISOR, 10))
        D = params.thickness if params.thickness is not None else D_auto
        d = D - params.cover - params.bar_dia  # mean of the two layers
        if d <= 0:
            raise InvalidGeometryError(f"footing depth {D:.0f} mm leaves no effective depth")

        # Step 3: Net factored pressure and actions
        qu = self.code.load_factor * P / B ** 2  # kN/m²
        projection = (B_mm - min(cb, cd)) / 2  # mm
        Mu = qu * B * (projection / 1000) ** 2 / 2  # kNm
        out.step("Net upward pressure", "qu = 1.5 P / B²", f"1.5 × {P:.0f} / {B:.1f}²", qu, "kN/m²")
        out.step("Moment at column face", "Mu = qu B a² / 2",
                 f"{qu:.1f} × {B:.1f} × {projection / 1000:.3f}² / 2", Mu, "kNm",
                 "IS 456 Cl. 34.2.3.1")

        Vu_one_way = qu * B * max(0.0, projection - d) / 1000  # kN
        punch_area = (cb + d) * (cd + d) / 1e6  # m²
        Vu_punch = qu * max(0.0, B ** 2 - punch_area)  # kN
        perimeter = 2 * (cb + d + cd + d)  # mm
        beta_c = min(cb, cd) / max(cb, cd)
        ks = min(1.0, 0.5 + beta_c)

        # Step 4: Steel across the full width
        Ast_req = required_steel_area(Mu * 1e6, fck, fy, B_mm, d)
        Ast_min = self.code.get_minimum_reinforcement_ratio(fy) / 100 * B_mm * D
        spacing = out.bar_spacing(max(Ast_req, Ast_min) / B, params.bar_dia, min(3 * d, 300.0))
        Ast_prov = 1000 * bar_area(params.bar_dia) / spacing * B
        out.step("Required steel", "Ast from Mu", f"Mu = {Mu:.1f} kNm", Ast_req, "mm²")

        tau_c = design_shear_stress(fck)
        Vc_one_way = tau_c * B_mm * d / 1e3  # kN
        Vc_punch = ks * tau_c * perimeter * d / 1e3  # kN
        Mu_lim = limiting_moment_capacity(fck, B_mm, d) / 1e6

        # Step 5: Checks
        out.check("bearing", SELF_WEIGHT_ALLOWANCE * P / B ** 2, sbc, "kN/m²")
        moment_check = out.check("moment", Mu, Mu_lim, "kNm")
        out.check("one_way_shear", Vu_one_way, Vc_one_way, "kN")
        out.check("punching_shear", Vu_punch, Vc_punch, "kN")

        quantities = material_quantities(B * B * D / 1000, concrete.grade.grade_label)
        out.details.update({
            "side": B,
            "overall_depth": D,
            "effective_depth": d,
            "net_pressure": qu,
            "projection": projection,
            "punching_perimeter": perimeter,
            "concrete_volume": quantities.concrete_volume,
            "cement_bags": quantities.cement_bags,
            "sand_volume": quantities.sand_volume,
            "aggregate_volume": quantities.aggregate_volume,
        })

        forces = InternalForces(
            max_shear=Vu_one_way,
            max_moment=Mu,
            max_deflection=0.0,
            reactions=Reactions(left=qu * B ** 2, right=0.0),
        )
        reinforcement = ReinforcementResult(
            area_required=Ast_req,
            area_minimum=Ast_min,
            area_provided=Ast_prov,
            bar_callout=f"{format_spacing(params.bar_dia, spacing)} both ways",
            moment_capacity=moment_capacity(Ast_prov, fy, fck, B_mm, d),
            shear_capacity=Vc_one_way * 1e3,
            utilization_ratio=moment_check.ratio,
        )
        return out.build(forces=forces, reinforcement=reinforcement)


def solve_footing(params: FootingParameters) -> MemberResult:
    """Design a footing with the default code and material table."""
    return FootingDesigner().design(params)
