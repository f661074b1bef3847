"""
Rectangular beam design per IS 456:2000.

Closed-form internal forces for four support conditions under a uniform
load and an optional point load, followed by flexural steel, shear capacity
and a span/250 deflection limit.

Key clauses:
- Clause 23.2(a): Deflection limit span/250
- Clause 26.5.1.1: Minimum and maximum tension steel
- Clause 38.1 / Annex G: Flexure
- Clause 40: Shear
"""

from typing import Optional

from .common import MemberDesigner, ResultBuilder
from .detailing import development_length
from .sections import (
    doubly_reinforced_moment_capacity,
    doubly_reinforced_steel,
    is_doubly_reinforced,
    limiting_moment_capacity,
    moment_capacity,
    moment_of_inertia,
    required_steel_area,
    shear_capacity,
)
from ..errors import ErrorKind, InvalidGeometryError
from ..models.inputs import BeamParameters, SupportType
from ..models.outputs import InternalForces, MemberResult, Reactions, ReinforcementResult
from ..reports.formatter import format_bars, select_bars

# Deflection limit as a fraction of span (Clause 23.2(a))
DEFLECTION_SPAN_RATIO = 250.0

# Two-span continuous beam, uniform load on both spans
CONTINUOUS_DEFLECTION_DIVISOR = 185.0


def beam_forces(
    support: SupportType,
    span: float,
    udl: float,
    point_load: float = 0.0,
    position: Optional[float] = None,
    flexural_rigidity: float = 1.0,
) -> InternalForces:
    """
    Reactions, governing moment, shear and deflection of a beam.

    Args:
        support: Support condition
        span: Span L in m
        udl: Uniform load w in kN/m
        point_load: Point load P in kN
        position: Distance a of P from the left support (the fixed end of a
            cantilever) in m; mid-span, or the free end of a cantilever, if None
        flexural_rigidity: EI in kN·m²

    Returns:
        InternalForces with moment in kNm, shear in kN and deflection in mm

    Raises:
        InvalidGeometryError: If the point load lies outside the span
            (continuous beams ignore the point load and its position)
    """
    L, w, P, EI = span, udl, point_load, flexural_rigidity
    if position is None:
        a = L if support == SupportType.CANTILEVER else L / 2.0
    else:
        a = position
    if support != SupportType.CONTINUOUS and (a < 0 or a > L):
        raise InvalidGeometryError(f"point load position {a} m is outside the span 0 - {L} m")
    b = L - a

    if support == SupportType.SIMPLY_SUPPORTED:
        r_left = w * L / 2 + P * b / L
        r_right = w * L / 2 + P * a / L
        moment = w * L ** 2 / 8 + P * a * b / L
        # mid-span deflection, load measured from the nearer support
        a_near = min(a, b)
        deflection = (5 * w * L ** 4 / (384 * EI)
                      + P * a_near * (3 * L ** 2 - 4 * a_near ** 2) / (48 * EI))
        reactions = Reactions(left=r_left, right=r_right)
        shear = max(r_left, r_right)

    elif support == SupportType.CANTILEVER:
        r_fixed = w * L + P
        moment = w * L ** 2 / 2 + P * a
        deflection = w * L ** 4 / (8 * EI) + P * a ** 3 / (3 * EI)
        reactions = Reactions(left=r_fixed, right=0.0)
        shear = r_fixed

    elif support == SupportType.FIXED:
        r_left = w * L / 2 + P * b ** 2 * (3 * a + b) / L ** 3
        r_right = w * L / 2 + P * a ** 2 * (a + 3 * b) / L ** 3
        hogging = w * L ** 2 / 12 + P * max(a * b ** 2, a ** 2 * b) / L ** 2
        sagging = w * L ** 2 / 24 + 2 * P * a ** 2 * b ** 2 / L ** 3
        moment = max(hogging, sagging)
        deflection = w * L ** 4 / (384 * EI) + P * a ** 3 * b ** 3 / (3 * EI * L ** 3)
        reactions = Reactions(left=r_left, right=r_right)
        shear = max(r_left, r_right)

    else:
        # Two equal spans, point loads are not applied
        reactions = Reactions(left=3 * w * L / 8, right=3 * w * L / 8, middle=10 * w * L / 8)
        moment = w * L ** 2 / 8
        deflection = w * L ** 4 / (CONTINUOUS_DEFLECTION_DIVISOR * EI)
        shear = 5 * w * L / 8

    return InternalForces(
        max_shear=shear,
        max_moment=moment,
        max_deflection=deflection * 1000.0,  # m to mm
        reactions=reactions,
    )


class BeamDesigner(MemberDesigner):
    """Flexure, shear and deflection design of a rectangular beam."""

    member_type = "beam"
    parameters_model = BeamParameters

    def _design(self, params: BeamParameters, out: ResultBuilder) -> MemberResult:
        ok = out.require_positive(span=params.span, width=params.width, depth=params.depth)
        ok &= out.require_non_negative(
            udl=params.udl, point_load=params.point_load,
            cover=params.cover, bar_dia=params.bar_dia,
        )
        if params.point_load_position is not None and params.support != SupportType.CONTINUOUS:
            ok &= out.require_non_negative(point_load_position=params.point_load_position)
        if not ok:
            return out.invalid()

        concrete = self.materials.concrete(params.concrete_grade)
        fck = out.resolve(concrete, "concrete")
        fy = out.resolve(self.materials.steel(params.steel_grade), "steel")

        L = params.span  # m
        b = params.width  # mm
        D = params.depth  # mm
        d = D - params.cover - params.bar_dia / 2  # mm
        if d <= 0:
            raise InvalidGeometryError(f"effective depth {d:.0f} mm is not positive; check depth and cover")

        # Step 1: Stiffness
        Ec = concrete.grade.elastic_modulus
        I = moment_of_inertia(b / 1000.0, D / 1000.0)  # m⁴
        EI = Ec * 1e3 * I  # kN·m²
        out.step("Elastic modulus of concrete", "Ec = 5000√fck",
                 f"Ec = 5000 × √{fck:.0f}", Ec, "MPa", "IS 456 Cl. 6.2.3.1")

        # Step 2: Internal forces
        if params.support == SupportType.CONTINUOUS and params.point_load > 0:
            out.warn("Point load is not applied to two-span continuous beams")
        forces = beam_forces(
            params.support, L, params.udl, params.point_load,
            params.point_load_position, EI,
        )
        Mu = forces.max_moment  # kNm
        Vu = forces.max_shear  # kN
        out.step("Design moment", "Mu from support equations",
                 f"{params.support.value}, w = {params.udl} kN/m, P = {params.point_load} kN",
                 Mu, "kNm")
        out.step("Design shear", "Vu = max reaction", f"Vu = {Vu:.2f}", Vu, "kN")

        # Step 3: Flexural steel
        Mu_Nmm = Mu * 1e6
        Mu_lim = limiting_moment_capacity(fck, b, d)
        out.step("Limiting moment of resistance", "Mu,lim = 0.138 fck b d²",
                 f"0.138 × {fck:.0f} × {b:.0f} × {d:.0f}²", Mu_lim / 1e6, "kNm",
                 "IS 456 Annex G")

        Ast_req = required_steel_area(Mu_Nmm, fck, fy, b, d)
        Ast_min = self.code.get_beam_minimum_steel(b, d, fy)
        out.step("Required tension steel", "Ast from Mu", f"Mu = {Mu:.2f} kNm", Ast_req, "mm²",
                 "IS 456 Annex G")
        out.step("Minimum tension steel", "As,min = 0.85 b d / fy",
                 f"0.85 × {b:.0f} × {d:.0f} / {fy:.0f}", Ast_min, "mm²", "IS 456 Cl. 26.5.1.1")

        tension = select_bars(max(Ast_req, Ast_min))
        doubly = is_doubly_reinforced(Mu_Nmm, fck, b, d)
        compression = None
        Asc_req = None
        if doubly:
            _, Asc_req = doubly_reinforced_steel(Mu_Nmm, fck, fy, b, d)
            compression = select_bars(Asc_req)
            out.issue(ErrorKind.DEGENERATE_SECTION,
                      f"Mu = {Mu:.1f} kNm exceeds Mu,lim = {Mu_lim / 1e6:.1f} kNm; doubly reinforced")
            out.warn("Section is doubly reinforced; consider a deeper section")
            Mu_cap = doubly_reinforced_moment_capacity(
                tension.area, compression.area, fy, fck, b, d)
        else:
            Mu_cap = moment_capacity(tension.area, fy, fck, b, d)

        Vc = shear_capacity(fck, b, d)
        out.step("Shear capacity of concrete", "Vc = 0.25√fck b d",
                 f"0.25 × √{fck:.0f} × {b:.0f} × {d:.0f}", Vc / 1e3, "kN")

        # Step 4: Checks
        delta_limit = L * 1000.0 / DEFLECTION_SPAN_RATIO
        moment_check = out.check("moment", Mu, Mu_cap / 1e6, "kNm")
        out.check("shear", Vu, Vc / 1e3, "kN")
        out.check("deflection", forces.max_deflection, delta_limit, "mm", strict=True)
        max_steel = self.code.get_maximum_reinforcement_ratio() / 100 * b * D
        out.check("max_steel", tension.area, max_steel, "mm²")

        out.details.update({
            "effective_depth": d,
            "limiting_moment": Mu_lim / 1e6,
            "doubly_reinforced": doubly,
            "elastic_modulus": Ec,
            "moment_of_inertia_mm4": I * 1e12,
            "deflection_limit": delta_limit,
            "development_length": development_length(fy, fck, tension.diameter),
        })

        reinforcement = ReinforcementResult(
            area_required=Ast_req,
            area_minimum=Ast_min,
            area_provided=tension.area,
            bar_callout=format_bars(tension),
            moment_capacity=Mu_cap,
            shear_capacity=Vc,
            utilization_ratio=moment_check.ratio,
            compression_area_required=Asc_req,
            compression_area_provided=compression.area if compression else None,
            compression_callout=format_bars(compression) if compression else None,
        )
        return out.build(forces=forces, reinforcement=reinforcement)


def solve_beam(params: BeamParameters) -> MemberResult:
    """Design a beam with the default code and material table."""
    return BeamDesigner().design(params)
