"""
Concrete mix proportioning after IS 10262:2019, simplified.

Target strength, water-cement ratio, water and cement contents and aggregate
contents per m³, with the durability limits of IS 456 Table 5.
"""

import math

from .common import MemberDesigner, ResultBuilder
from ..errors import ErrorKind
from ..models.inputs import ConcreteMixParameters
from ..models.outputs import MemberResult
from ..utils import load_is456_tables

# Standard normal deviate for 5% defectives
TARGET_STRENGTH_FACTOR = 1.65


def water_cement_ratio_for_strength(target_strength: float, table: dict) -> float:
    """w/c of the highest strength breakpoint the target reaches."""
    result = table["below"]
    for strength, ratio in zip(table["strengths"], table["ratios"]):
        if target_strength >= strength:
            result = ratio
    return float(result)


def format_mix_ratio(cement: float, fine: float, coarse: float) -> str:
    """``"1 : fa/c : ca/c"`` by mass."""
    return f"1 : {fine / cement:.2f} : {coarse / cement:.2f}"


class ConcreteMixDesigner(MemberDesigner):
    """Quantities of a cubic metre of concrete for a grade and exposure."""

    member_type = "concrete_mix"
    parameters_model = ConcreteMixParameters

    def _design(self, params: ConcreteMixParameters, out: ResultBuilder) -> MemberResult:
        mix = load_is456_tables()["mix_design"]

        ok = out.require_positive(grade=params.grade)
        ok &= out.require_non_negative(slump=params.slump)
        if params.standard_deviation is not None:
            ok &= out.require_positive(standard_deviation=params.standard_deviation)
        agg = params.max_aggregate_size
        if agg not in mix["coarse_aggregate"]:
            out.issue(ErrorKind.INVALID_INPUT,
                      f"maximum aggregate size must be one of {sorted(mix['coarse_aggregate'])} mm, got {agg}")
            ok = False
        if not ok:
            return out.invalid()

        fck = params.grade
        exposure = mix["exposure"][params.exposure.value]

        # Step 1: Target strength
        sd_table = mix["standard_deviation"]
        if params.standard_deviation is not None:
            s = params.standard_deviation
        else:
            s = sd_table[25] if fck <= 25 else sd_table["above"]
        target = fck + TARGET_STRENGTH_FACTOR * s
        out.step("Target mean strength", "f'ck = fck + 1.65 s", f"{fck:.0f} + 1.65 × {s}",
                 target, "MPa", "IS 10262 Cl. 4.2")

        # Step 2: Water-cement ratio
        wc_strength = water_cement_ratio_for_strength(target, mix["wc_breakpoints"])
        wc = min(wc_strength, exposure["max_wc"])
        out.step("Water-cement ratio", "min(w/c for strength, w/c for exposure)",
                 f"min({wc_strength}, {exposure['max_wc']})", wc, "-", "IS 456 Table 5")

        # Step 3: Water and cement
        water = mix["base_water"] + mix["water_aggregate_adjustment"][agg]
        if params.slump > mix["reference_slump"]:
            water += (params.slump - mix["reference_slump"]) * mix["water_per_mm_slump"]
        water = round(water)
        cement = water / wc
        if cement < exposure["min_cement"]:
            out.warn(f"Cement raised to the exposure minimum of {exposure['min_cement']} kg/m³")
            cement = float(exposure["min_cement"])
        out.step("Water content", "186 kg/m³ adjusted for aggregate and slump",
                 f"slump {params.slump:.0f} mm, {agg} mm aggregate", water, "kg/m³")
        out.step("Cement content", "C = W / (w/c)", f"{water} / {wc}", cement, "kg/m³")

        # Step 4: Aggregates
        fa_percent = mix["fine_aggregate_percent"][agg] - (2 if wc > 0.5 else 0)
        fine = round(mix["fine_aggregate_density"] * fa_percent / 100)
        coarse = mix["coarse_aggregate"][agg]

        # Step 5: Checks
        out.check("wc_ratio", wc, exposure["max_wc"])
        out.check("cement_content", cement, mix["max_cement"], "kg/m³")

        out.details.update({
            "target_strength": target,
            "standard_deviation": s,
            "water_cement_ratio": wc,
            "water_content": water,
            "cement_content": math.ceil(cement),
            "fine_aggregate": fine,
            "coarse_aggregate": coarse,
            "mix_ratio": format_mix_ratio(cement, fine, coarse),
        })
        return out.build()


def solve_concrete_mix(params: ConcreteMixParameters) -> MemberResult:
    """Proportion a concrete mix."""
    return ConcreteMixDesigner().design(params)
