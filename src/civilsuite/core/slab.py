"""
Solid slab design per IS 456:2000.

One-way or two-way action is decided from the aspect ratio; depth comes from
span/depth ratios, moments from the code coefficient tables and steel from
the section formulas, designed per metre width.

Key clauses:
- Clause 23.2.1 / 24.1: Span/depth ratios
- Clause 22.5 / Table 12, 13: One-way continuous slabs
- Annex D / Tables 26, 27: Two-way slabs
- Clause 26.3.3(b), 26.5.2.1: Bar spacing and minimum steel
- Clause 40.2.1.1: Shear in solid slabs
- Annex F: Crack width
"""

from .common import MemberDesigner, ResultBuilder
from .detailing import crack_width, material_quantities
from .sections import design_shear_stress, limiting_moment_capacity, moment_capacity, required_steel_area
from ..errors import InvalidGeometryError
from ..models.inputs import SlabParameters, SlabSupport
from ..models.outputs import InternalForces, MemberResult, Reactions, ReinforcementResult
from ..reports.formatter import bar_area, format_spacing
from ..utils import round_up

MIN_SLAB_DEPTH = 125.0  # mm
TWO_WAY_LIMIT = 2.0  # ly / lx
DEFLECTION_SPAN_RATIO = 250.0
CRACK_WIDTH_LIMIT = 0.3  # mm

# K in δ = K M L² / (E I)
DEFLECTION_COEFFICIENT = {
    SlabSupport.SIMPLY_SUPPORTED: 5.0 / 48.0,
    SlabSupport.CONTINUOUS: 5.0 / 48.0,
    SlabSupport.CANTILEVER: 1.0 / 4.0,
}


class SlabDesigner(MemberDesigner):
    """One-way or two-way solid slab designed per metre width."""

    member_type = "slab"
    parameters_model = SlabParameters

    def _design(self, params: SlabParameters, out: ResultBuilder) -> MemberResult:
        ok = out.require_positive(
            short_span=params.short_span, long_span=params.long_span, bar_dia=params.bar_dia,
        )
        if params.thickness is not None:
            ok &= out.require_positive(thickness=params.thickness)
        ok &= out.require_non_negative(
            live_load=params.live_load, floor_finish=params.floor_finish,
            cover=params.cover,
        )
        if not ok:
            return out.invalid()

        concrete = self.materials.concrete(params.concrete_grade)
        fck = out.resolve(concrete, "concrete")
        fy = out.resolve(self.materials.steel(params.steel_grade), "steel")
        Ec = concrete.grade.elastic_modulus
        gamma = self.code.load_factor

        lx, ly = params.short_span, params.long_span  # m
        if ly < lx:
            lx, ly = ly, lx
            out.warn("Spans swapped so that lx is the shorter span")
        support = params.support
        aspect = ly / lx
        two_way = support != SlabSupport.CANTILEVER and aspect <= TWO_WAY_LIMIT
        out.step("Aspect ratio", "ly / lx", f"{ly} / {lx}", aspect, "-")

        # Step 1: Depth
        ratio = self.code.get_span_depth_ratio(support.value, two_way)
        d_required = lx * 1000 / ratio
        D_auto = max(round_up(d_required + params.cover + params.bar_dia / 2, 10), MIN_SLAB_DEPTH)
        D = params.thickness if params.thickness is not None else D_auto
        d = D - params.cover - params.bar_dia / 2  # short span steel
        d_long = d - params.bar_dia if two_way else d  # second layer
        if d_long <= 0:
            raise InvalidGeometryError(f"slab depth {D:.0f} mm leaves no effective depth")
        out.step("Required effective depth", "d = lx / (l/d)", f"{lx * 1000:.0f} / {ratio:.0f}",
                 d_required, "mm", "IS 456 Cl. 23.2.1")
        out.step("Overall depth", "D = d + cover + φ/2, ≥ 125", f"D = {D:.0f}", D, "mm")

        # Step 2: Loads per m²
        self_weight = D / 1000 * concrete.grade.density
        dead = self_weight + params.floor_finish
        live = params.live_load
        w = gamma * (dead + live)  # kN/m²
        out.step("Factored load", "w = 1.5 (DL + LL)", f"1.5 × ({dead:.2f} + {live:.2f})", w, "kN/m²")

        # Step 3: Moments and shear per metre width
        Mx_neg = My_pos = My_neg = 0.0
        if two_way:
            coeffs = self.code.get_slab_moment_coefficients(aspect, support.value)
            Mx_pos = coeffs.alpha_x_positive * w * lx ** 2
            Mx_neg = coeffs.alpha_x_negative * w * lx ** 2
            My_pos = coeffs.alpha_y_positive * w * lx ** 2
            My_neg = coeffs.alpha_y_negative * w * lx ** 2
            V = w * lx / 3
        elif support == SlabSupport.SIMPLY_SUPPORTED:
            Mx_pos = w * lx ** 2 / 8
            V = w * lx / 2
        elif support == SlabSupport.CANTILEVER:
            Mx_pos = 0.0
            Mx_neg = w * lx ** 2 / 2
            V = w * lx
        else:
            c = self.code.get_one_way_continuous_coefficients()
            Mx_pos = gamma * (dead / c["dead_positive"] + live / c["live_positive"]) * lx ** 2
            Mx_neg = gamma * (dead / c["dead_negative"] + live / c["live_negative"]) * lx ** 2
            V = 0.6 * w * lx

        Mx = max(Mx_pos, Mx_neg)
        My = max(My_pos, My_neg)
        out.step("Short span moment", "Mx = α w lx²" if two_way else "Mx from support condition",
                 f"w = {w:.2f}, lx = {lx}", Mx, "kNm/m")
        if two_way:
            out.step("Long span moment", "My = α w lx²", f"w = {w:.2f}, lx = {lx}", My, "kNm/m")

        # Step 4: Steel
        b = 1000.0
        Ast_x = required_steel_area(Mx * 1e6, fck, fy, b, d)
        Ast_y = required_steel_area(My * 1e6, fck, fy, b, d_long) if two_way else 0.0
        Ast_min = self.code.get_minimum_reinforcement_ratio(fy) / 100 * b * D
        out.step("Short span steel", "Ast from Mx", f"Mx = {Mx:.2f} kNm/m", Ast_x, "mm²/m")
        out.step("Minimum steel", "0.12% b D", f"{Ast_min / (b * D) * 100:.2f}% × {b:.0f} × {D:.0f}",
                 Ast_min, "mm²/m", "IS 456 Cl. 26.5.2.1")

        s_x = out.bar_spacing(max(Ast_x, Ast_min), params.bar_dia, min(3 * d, 300.0))
        # distribution steel in one-way slabs may go to 5d / 450 mm
        s_y_max = min(3 * d_long, 300.0) if two_way else min(5 * d, 450.0)
        s_y = out.bar_spacing(max(Ast_y, Ast_min), params.bar_dia, s_y_max)
        As_x = 1000 * bar_area(params.bar_dia) / s_x
        As_y = 1000 * bar_area(params.bar_dia) / s_y

        # Step 5: Capacities
        Mu_lim = limiting_moment_capacity(fck, b, d) / 1e6
        k = self.code.get_slab_depth_factor(D)
        Vc = k * design_shear_stress(fck) * b * d / 1e3  # kN
        I = b * D ** 3 / 12  # mm⁴
        K = DEFLECTION_COEFFICIENT[support]
        M_defl = Mx_neg if support == SlabSupport.CANTILEVER else Mx_pos
        deflection = K * M_defl * 1e6 * (lx * 1000) ** 2 / (Ec * I)
        fs = 0.58 * fy * min(1.0, max(Ast_x, Ast_min) / As_x)
        w_crack = crack_width(fs, params.cover, s_x, params.bar_dia, D)

        # Step 6: Checks
        moment_check = out.check("moment", Mx, Mu_lim, "kNm/m")
        out.check("shear", V, Vc, "kN/m")
        out.check("span_depth", lx * 1000 / d, ratio)
        out.check("deflection", deflection, lx * 1000 / DEFLECTION_SPAN_RATIO, "mm", strict=True)
        out.check("crack_width", w_crack, CRACK_WIDTH_LIMIT, "mm")
        out.check("max_steel", As_x, self.code.get_maximum_reinforcement_ratio() / 100 * b * D, "mm²/m")

        volume = lx * ly * D / 1000
        quantities = material_quantities(volume, concrete.grade.grade_label)
        out.details.update({
            "slab_type": "two_way" if two_way else "one_way",
            "aspect_ratio": aspect,
            "overall_depth": D,
            "effective_depth": d,
            "span_depth_ratio": ratio,
            "factored_load": w,
            "moment_x_positive": Mx_pos,
            "moment_x_negative": Mx_neg,
            "moment_y_positive": My_pos,
            "moment_y_negative": My_neg,
            "steel_y_required": Ast_y,
            "steel_y_provided": As_y,
            "bars_y": format_spacing(params.bar_dia, s_y),
            "crack_width": w_crack,
            "concrete_volume": quantities.concrete_volume,
            "cement_bags": quantities.cement_bags,
            "sand_volume": quantities.sand_volume,
            "aggregate_volume": quantities.aggregate_volume,
        })

        forces = InternalForces(
            max_shear=V,
            max_moment=max(Mx, My),
            max_deflection=deflection,
            reactions=Reactions(left=V, right=0.0 if support == SlabSupport.CANTILEVER else V),
        )
        reinforcement = ReinforcementResult(
            area_required=Ast_x,
            area_minimum=Ast_min,
            area_provided=As_x,
            bar_callout=format_spacing(params.bar_dia, s_x),
            moment_capacity=moment_capacity(As_x, fy, fck, b, d),
            shear_capacity=Vc * 1e3,
            utilization_ratio=moment_check.ratio,
        )
        return out.build(forces=forces, reinforcement=reinforcement)


def solve_slab(params: SlabParameters) -> MemberResult:
    """Design a slab with the default code and material table."""
    return SlabDesigner().design(params)
