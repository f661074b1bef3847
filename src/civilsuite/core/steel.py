"""
Structural steel member checks per IS 800:2007.

Key clauses:
- Clause 3.8 / Table 3: Maximum effective slenderness ratio (180 for members
  carrying compression from dead and imposed loads)
- Clause 7.1.2: Design compressive strength, buckling class c
- Clause 8.2.1.2: Design bending strength of laterally supported beams,
  Md = fy Ze / γm0
"""

from .common import MemberDesigner, ResultBuilder
from .sections import GAMMA_M0, buckling_design_stress
from ..models.inputs import SteelCheckMode, SteelSectionParameters
from ..models.outputs import InternalForces, MemberResult, Reactions

MAX_SLENDERNESS = 180.0


class SteelSectionDesigner(MemberDesigner):
    """Compression or flexure check of a rolled section."""

    member_type = "steel_section"
    parameters_model = SteelSectionParameters

    def _design(self, params: SteelSectionParameters, out: ResultBuilder) -> MemberResult:
        if params.mode == SteelCheckMode.COMPRESSION:
            ok = out.require_positive(
                length=params.length, effective_length_factor=params.effective_length_factor,
                area=params.area, radius_of_gyration=params.radius_of_gyration,
            )
            ok &= out.require_non_negative(axial_load=params.axial_load)
        else:
            ok = out.require_positive(section_modulus=params.section_modulus)
            ok &= out.require_non_negative(moment=abs(params.moment))
        if not ok:
            return out.invalid()

        fy = out.resolve(self.materials.structural_steel(params.steel_grade), "steel")
        out.details["yield_stress"] = fy

        if params.mode == SteelCheckMode.COMPRESSION:
            return self._compression(params, fy, out)
        return self._flexure(params, fy, out)

    def _compression(self, params: SteelSectionParameters, fy: float, out: ResultBuilder) -> MemberResult:
        KL = params.effective_length_factor * params.length * 1000  # mm
        slenderness = KL / params.radius_of_gyration
        out.step("Slenderness ratio", "λ = KL / r", f"{KL:.0f} / {params.radius_of_gyration:.0f}",
                 slenderness, "-", "IS 800 Cl. 7.1.2")

        fcd = buckling_design_stress(slenderness, fy)
        Pd = fcd * params.area / 1000  # kN
        out.step("Design compressive stress", "fcd = χ fy / γm0", f"λ = {slenderness:.1f}",
                 fcd, "MPa", "IS 800 Cl. 7.1.2.1")
        out.step("Design compressive strength", "Pd = fcd A", f"{fcd:.1f} × {params.area:.0f}",
                 Pd, "kN")

        out.check("compression", params.axial_load, Pd, "kN")
        out.check("slenderness", slenderness, MAX_SLENDERNESS)
        out.details.update({
            "slenderness": slenderness,
            "design_stress": fcd,
            "design_capacity": Pd,
        })

        forces = InternalForces(
            max_shear=0.0,
            max_moment=0.0,
            max_deflection=0.0,
            reactions=Reactions(left=params.axial_load, right=params.axial_load),
        )
        return out.build(forces=forces)

    def _flexure(self, params: SteelSectionParameters, fy: float, out: ResultBuilder) -> MemberResult:
        Md = fy * params.section_modulus / GAMMA_M0 / 1e6  # kNm
        out.step("Design bending strength", "Md = fy Ze / γm0",
                 f"{fy:.0f} × {params.section_modulus:.0f} / {GAMMA_M0}", Md, "kNm",
                 "IS 800 Cl. 8.2.1.2")

        out.check("flexure", abs(params.moment), Md, "kNm")
        out.details["design_capacity"] = Md

        forces = InternalForces(
            max_shear=0.0,
            max_moment=abs(params.moment),
            max_deflection=0.0,
            reactions=Reactions(left=0.0, right=0.0),
        )
        return out.build(forces=forces)


def solve_steel_section(params: SteelSectionParameters) -> MemberResult:
    """Check a steel section with the default material table."""
    return SteelSectionDesigner().design(params)
