"""
Waist slab staircase spanning longitudinally, designed per metre width.

Key clauses:
- IS 456 Clause 33.1: Effective span of stairs
- IS 456 Clause 33.2: Distribution of loading on stairs
- NBC 2016 Part 4: 2R + T between 550 and 700 mm
"""

import math

from .common import MemberDesigner, ResultBuilder
from .sections import limiting_moment_capacity, moment_capacity, required_steel_area, shear_capacity
from ..errors import InvalidGeometryError
from ..models.inputs import StaircaseParameters
from ..models.outputs import InternalForces, MemberResult, Reactions, ReinforcementResult
from ..reports.formatter import bar_area, format_spacing
from ..utils import round_up

SPAN_DEPTH_RATIO = 20.0
MOMENT_DIVISOR = 10.0  # M = w l² / 10

# Comfort rule for 2R + T in mm
STEP_RULE_MIN = 550.0
STEP_RULE_MAX = 700.0


class StaircaseDesigner(MemberDesigner):
    """Geometry, loads and waist slab steel of one flight."""

    member_type = "staircase"
    parameters_model = StaircaseParameters

    def _design(self, params: StaircaseParameters, out: ResultBuilder) -> MemberResult:
        ok = out.require_positive(
            floor_height=params.floor_height, riser=params.riser, tread=params.tread,
            landing_width=params.landing_width, bar_dia=params.bar_dia,
        )
        if params.thickness is not None:
            ok &= out.require_positive(thickness=params.thickness)
        ok &= out.require_non_negative(
            live_load=params.live_load, floor_finish=params.floor_finish, cover=params.cover,
        )
        if not ok:
            return out.invalid()

        concrete = self.materials.concrete(params.concrete_grade)
        fck = out.resolve(concrete, "concrete")
        fy = out.resolve(self.materials.steel(params.steel_grade), "steel")
        density = concrete.grade.density

        R, T = params.riser, params.tread  # mm

        # Step 1: Geometry
        risers = math.ceil(round(params.floor_height * 1000 / R, 9))
        treads = max(risers - 1, 1)
        going = treads * T / 1000  # m
        span = going + params.landing_width / 2  # m
        out.step("Number of risers", "n = H / R", f"{params.floor_height * 1000:.0f} / {R:.0f}",
                 risers, "-")
        out.step("Effective span", "l = going + landing / 2",
                 f"{going:.2f} + {params.landing_width:.2f} / 2", span, "m", "IS 456 Cl. 33.1")

        waist_auto = round_up(span * 1000 / SPAN_DEPTH_RATIO, 10)
        waist = params.thickness if params.thickness is not None else waist_auto
        d = waist - params.cover - params.bar_dia / 2
        if d <= 0:
            raise InvalidGeometryError(f"waist {waist:.0f} mm leaves no effective depth")

        # Step 2: Loads per m² of plan
        slope_factor = math.sqrt(R ** 2 + T ** 2) / T
        waist_load = waist / 1000 * density * slope_factor
        step_load = 0.5 * R / 1000 * density
        w = self.code.load_factor * (waist_load + step_load + params.floor_finish + params.live_load)
        out.step("Factored load", "w = 1.5 (waist + steps + finish + live)",
                 f"1.5 × ({waist_load:.2f} + {step_load:.2f} + {params.floor_finish} + {params.live_load})",
                 w, "kN/m²", "IS 456 Cl. 33.2")

        # Step 3: Actions per metre width
        Mu = w * span ** 2 / MOMENT_DIVISOR  # kNm/m
        Vu = w * span / 2  # kN/m
        out.step("Design moment", "Mu = w l² / 10", f"{w:.2f} × {span:.2f}² / 10", Mu, "kNm/m")

        # Step 4: Steel
        b = 1000.0
        Ast_req = required_steel_area(Mu * 1e6, fck, fy, b, d)
        Ast_min = self.code.get_minimum_reinforcement_ratio(fy) / 100 * b * waist
        spacing = out.bar_spacing(max(Ast_req, Ast_min), params.bar_dia, min(3 * d, 300.0))
        As_prov = 1000 * bar_area(params.bar_dia) / spacing
        dist_spacing = out.bar_spacing(Ast_min, 8, min(5 * d, 450.0))

        Mu_lim = limiting_moment_capacity(fck, b, d) / 1e6
        Vc = shear_capacity(fck, b, d) / 1e3
        step_rule = 2 * R + T

        # Step 5: Checks
        moment_check = out.check("moment", Mu, Mu_lim, "kNm/m")
        out.check("shear", Vu, Vc, "kN/m")
        out.check("riser_tread_max", step_rule, STEP_RULE_MAX, "mm")
        out.check("riser_tread_min", STEP_RULE_MIN, step_rule, "mm")

        out.details.update({
            "risers": risers,
            "treads": treads,
            "going": going,
            "effective_span": span,
            "waist": waist,
            "effective_depth": d,
            "slope_factor": slope_factor,
            "factored_load": w,
            "distribution_bars": format_spacing(8, dist_spacing),
        })

        forces = InternalForces(
            max_shear=Vu,
            max_moment=Mu,
            max_deflection=0.0,
            reactions=Reactions(left=Vu, right=Vu),
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


def solve_staircase(params: StaircaseParameters) -> MemberResult:
    """Design a staircase flight with the default code and material table."""
    return StaircaseDesigner().design(params)
