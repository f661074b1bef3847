"""
Cantilever retaining wall: stability and stem design.

Rankine active pressure on a level backfill, stability about the toe, base
pressure from the eccentricity of the resultant and limit state design of the
stem at its base.

Key references:
- IS 456 Clause 20.1, 20.2: Stability against overturning and sliding
- IS 14458 (Part 1): FOS 2.0 overturning, 1.5 sliding
"""

import math

from .common import MemberDesigner, ResultBuilder
from .sections import limiting_moment_capacity, moment_capacity, required_steel_area, shear_capacity
from ..errors import InvalidGeometryError
from ..models.inputs import RetainingWallParameters
from ..models.outputs import InternalForces, MemberResult, Reactions, ReinforcementResult
from ..reports.formatter import bar_area, format_spacing

FOS_OVERTURNING = 2.0
FOS_SLIDING = 1.5

# Proportions of the retained height used when the base is not given
BASE_WIDTH_RATIO = 0.6
BASE_DEPTH_RATIO = 0.1


def active_pressure_coefficient(friction_angle: float) -> float:
    """Rankine Ka = tan²(45° - φ/2) for a level backfill."""
    return math.tan(math.radians(45.0 - friction_angle / 2.0)) ** 2


class RetainingWallDesigner(MemberDesigner):
    """Overturning, sliding, bearing and stem design of a cantilever wall."""

    member_type = "retaining_wall"
    parameters_model = RetainingWallParameters

    def _design(self, params: RetainingWallParameters, out: ResultBuilder) -> MemberResult:
        ok = out.require_positive(
            height=params.height, soil_density=params.soil_density,
            friction_angle=params.friction_angle, bearing_capacity=params.bearing_capacity,
            base_friction=params.base_friction, stem_thickness=params.stem_thickness,
            bar_dia=params.bar_dia,
        )
        if params.base_width is not None:
            ok &= out.require_positive(base_width=params.base_width)
        if params.base_thickness is not None:
            ok &= out.require_positive(base_thickness=params.base_thickness)
        ok &= out.require_non_negative(cover=params.cover)
        if not ok:
            return out.invalid()
        if params.friction_angle >= 90:
            raise InvalidGeometryError(f"friction angle {params.friction_angle}° must be below 90°")

        concrete = self.materials.concrete(params.concrete_grade)
        fck = out.resolve(concrete, "concrete")
        fy = out.resolve(self.materials.steel(params.steel_grade), "steel")
        gamma_c = concrete.grade.density
        gamma_s = params.soil_density

        H = params.height  # m
        B = params.base_width if params.base_width is not None else BASE_WIDTH_RATIO * H
        tb = params.base_thickness if params.base_thickness is not None else BASE_DEPTH_RATIO * H
        ts = params.stem_thickness / 1000  # m
        if ts >= B:
            raise InvalidGeometryError(f"stem {ts:.2f} m is not narrower than the base {B:.2f} m")

        # Step 1: Earth pressure
        Ka = active_pressure_coefficient(params.friction_angle)
        Pa = 0.5 * Ka * gamma_s * H ** 2  # kN/m
        out.step("Active pressure coefficient", "Ka = tan²(45 - φ/2)",
                 f"tan²(45 - {params.friction_angle}/2)", Ka, "-")
        out.step("Active thrust", "Pa = 0.5 Ka γ H²",
                 f"0.5 × {Ka:.3f} × {gamma_s} × {H}²", Pa, "kN/m")

        # Step 2: Stability about the toe (stem at the toe, soil over the heel)
        W_stem = ts * H * gamma_c
        W_base = B * tb * gamma_c
        W_soil = (B - ts) * H * gamma_s
        W = W_stem + W_base + W_soil
        M_resisting = W_stem * ts / 2 + W_base * B / 2 + W_soil * (ts + (B - ts) / 2)
        M_overturning = Pa * H / 3
        fos_ot = M_resisting / M_overturning
        fos_sl = params.base_friction * W / Pa
        out.step("FOS against overturning", "ΣMr / Mo", f"{M_resisting:.1f} / {M_overturning:.1f}",
                 fos_ot, "-", "IS 456 Cl. 20.1")
        out.step("FOS against sliding", "μ W / Pa", f"{params.base_friction} × {W:.1f} / {Pa:.1f}",
                 fos_sl, "-", "IS 456 Cl. 20.2")

        # Step 3: Base pressure
        x_resultant = (M_resisting - M_overturning) / W
        e = B / 2 - x_resultant
        p_max = W / B * (1 + 6 * abs(e) / B)
        p_min = W / B * (1 - 6 * abs(e) / B)
        out.step("Maximum base pressure", "W/B (1 + 6e/B)", f"e = {e:.3f} m", p_max, "kN/m²")

        # Step 4: Stem at the top of the base
        Hs = H - tb
        Mu = self.code.load_factor * Ka * gamma_s * Hs ** 3 / 6  # kNm/m
        Vu = self.code.load_factor * 0.5 * Ka * gamma_s * Hs ** 2  # kN/m
        d = params.stem_thickness - params.cover - params.bar_dia / 2
        if d <= 0 or Hs <= 0:
            raise InvalidGeometryError("stem has no effective depth or height")
        b = 1000.0
        Ast_req = required_steel_area(Mu * 1e6, fck, fy, b, d)
        Ast_min = self.code.get_minimum_reinforcement_ratio(fy) / 100 * b * params.stem_thickness
        spacing = out.bar_spacing(max(Ast_req, Ast_min), params.bar_dia, min(3 * d, 300.0))
        As_prov = 1000 * bar_area(params.bar_dia) / spacing
        out.step("Stem moment", "Mu = 1.5 Ka γ h³ / 6", f"h = {Hs:.2f} m", Mu, "kNm/m")

        Mu_lim = limiting_moment_capacity(fck, b, d) / 1e6
        Vc = shear_capacity(fck, b, d) / 1e3

        # Step 5: Checks
        out.check("overturning", FOS_OVERTURNING, fos_ot)
        out.check("sliding", FOS_SLIDING, fos_sl)
        out.check("bearing", p_max, params.bearing_capacity, "kN/m²")
        out.check("no_tension", abs(e), B / 6, "m")
        moment_check = out.check("stem_moment", Mu, Mu_lim, "kNm/m")
        out.check("stem_shear", Vu, Vc, "kN/m")

        out.details.update({
            "active_pressure_coefficient": Ka,
            "active_thrust": Pa,
            "base_width": B,
            "base_thickness": tb,
            "total_weight": W,
            "fos_overturning": fos_ot,
            "fos_sliding": fos_sl,
            "eccentricity": e,
            "max_pressure": p_max,
            "min_pressure": p_min,
        })

        forces = InternalForces(
            max_shear=Vu,
            max_moment=Mu,
            max_deflection=0.0,
            reactions=Reactions(left=W, right=0.0),
        )
        reinforcement = ReinforcementResult(
            area_required=Ast_req,
            area_minimum=Ast_min,
            area_provided=As_prov,
            bar_callout=format_spacing(params.bar_dia, spacing),
            moment_capacity=moment_capacity(As_prov, fy, fck, b, d),
            shear_capacity=Vc * 1e3,
            utilization_ratio=moment_check.ratio,
        )
        return out.build(forces=forces, reinforcement=reinforcement)


def solve_retaining_wall(params: RetainingWallParameters) -> MemberResult:
    """Design a retaining wall with the default code and material table."""
    return RetainingWallDesigner().design(params)
