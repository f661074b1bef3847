"""
Rectangular water tank wall by the working stress method of IS 3370.

Direct tension from the pressure on the adjoining walls plus bending from
hydrostatic pressure, with the uncracked section checked for direct tension.

Key references:
- IS 3370 (Part 2): Table 1 permissible concrete stresses, Clause 8.1 minimum steel
- IS 456 Annex B: Working stress design constants m, k, j, Q
"""

from .common import MemberDesigner, ResultBuilder
from .detailing import material_quantities
from .sections import shear_capacity
from ..errors import InvalidGeometryError
from ..models.inputs import WaterTankParameters
from ..models.outputs import InternalForces, MemberResult, Reactions, ReinforcementResult
from ..reports.formatter import bar_area, format_spacing


class WaterTankDesigner(MemberDesigner):
    """Wall thickness and steel of a rectangular tank."""

    member_type = "water_tank"
    parameters_model = WaterTankParameters

    def _design(self, params: WaterTankParameters, out: ResultBuilder) -> MemberResult:
        ok = out.require_positive(
            length=params.length, width=params.width, height=params.height,
            wall_thickness=params.wall_thickness, water_density=params.water_density,
            permissible_steel_stress=params.permissible_steel_stress, bar_dia=params.bar_dia,
        )
        ok &= out.require_non_negative(cover=params.cover)
        if not ok:
            return out.invalid()

        concrete = self.materials.concrete(params.concrete_grade)
        fck = out.resolve(concrete, "concrete")
        fy = out.resolve(self.materials.steel(params.steel_grade), "steel")

        H = params.height  # m
        gw = params.water_density  # kN/m³
        t = params.wall_thickness  # mm
        sigma_st = params.permissible_steel_stress  # MPa
        d = t - params.cover - params.bar_dia / 2
        if d <= 0:
            raise InvalidGeometryError(f"wall thickness {t:.0f} mm leaves no effective depth")

        # Step 1: Actions per metre run of wall
        T = gw * H * params.width / 2  # kN/m
        M = gw * H ** 3 / 12  # kNm/m
        V = gw * H ** 2 / 2  # kN/m
        out.step("Direct tension", "T = γw H W / 2", f"{gw} × {H} × {params.width} / 2", T, "kN/m")
        out.step("Bending moment", "M = γw H³ / 12", f"{gw} × {H}³ / 12", M, "kNm/m")

        # Step 2: Working stress constants
        sigma_cbc, sigma_ct = self.code.get_liquid_retaining_stresses(fck)
        m = 280 / (3 * sigma_cbc)
        k = m * sigma_cbc / (m * sigma_cbc + sigma_st)
        j = 1 - k / 3
        Q = 0.5 * sigma_cbc * k * j
        M_resist = Q * 1000 * d ** 2 / 1e6  # kNm/m
        out.step("Moment of resistance", "Mr = Q b d²", f"{Q:.3f} × 1000 × {d:.0f}²", M_resist, "kNm/m",
                 "IS 456 Annex B")

        # Step 3: Steel per face
        As_tension = T * 1000 / sigma_st  # mm²/m, both faces
        As_bending = M * 1e6 / (sigma_st * j * d)  # mm²/m, water face
        As_face = As_bending + As_tension / 2
        As_min_total = self.code.get_liquid_retaining_min_steel(fy) / 100 * 1000 * t
        As_min_face = As_min_total / 2
        spacing = out.bar_spacing(max(As_face, As_min_face), params.bar_dia, min(3 * d, 300.0))
        As_prov = 1000 * bar_area(params.bar_dia) / spacing
        out.step("Steel on the water face", "Ast = M / (σst j d) + T / (2 σst)",
                 f"{As_bending:.0f} + {As_tension:.0f} / 2", As_face, "mm²/m")

        # Step 4: Direct tension on the uncracked section
        sigma_t = T * 1000 / (1000 * t + (m - 1) * 2 * As_prov)

        # Step 5: Checks
        bending = out.check("bending", M, M_resist, "kNm/m")
        out.check("direct_tension", sigma_t, sigma_ct, "MPa")
        out.check("min_steel", As_min_total, 2 * As_prov, "mm²/m")

        wall_volume = 2 * (params.length + params.width + 2 * t / 1000) * H * t / 1000
        quantities = material_quantities(wall_volume, concrete.grade.grade_label)
        out.details.update({
            "direct_tension": T,
            "modular_ratio": m,
            "lever_arm_factor": j,
            "resistance_factor": Q,
            "sigma_cbc": sigma_cbc,
            "sigma_ct": sigma_ct,
            "tension_stress": sigma_t,
            "tension_steel": As_tension,
            "bending_steel": As_bending,
            "concrete_volume": quantities.concrete_volume,
            "cement_bags": quantities.cement_bags,
        })

        forces = InternalForces(
            max_shear=V,
            max_moment=M,
            max_deflection=0.0,
            reactions=Reactions(left=V, right=0.0),
        )
        reinforcement = ReinforcementResult(
            area_required=As_face,
            area_minimum=As_min_face,
            area_provided=As_prov,
            bar_callout=f"{format_spacing(params.bar_dia, spacing)} each face",
            moment_capacity=M_resist * 1e6,
            shear_capacity=shear_capacity(fck, 1000.0, d),
            utilization_ratio=bending.ratio,
        )
        return out.build(forces=forces, reinforcement=reinforcement)


def solve_water_tank(params: WaterTankParameters) -> MemberResult:
    """Design a tank wall with the default code and material table."""
    return WaterTankDesigner().design(params)
