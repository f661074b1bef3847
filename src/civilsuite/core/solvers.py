"""
Member type dispatch.

Maps each archetype to its designer class and parameter model so a caller
holding only a member type and a mapping of values can run a design.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Type, Union

from .beam import BeamDesigner
from .column import ColumnDesigner
from .common import MemberDesigner
from .footing import FootingDesigner
from .mix_design import ConcreteMixDesigner
from .retaining_wall import RetainingWallDesigner
from .slab import SlabDesigner
from .staircase import StaircaseDesigner
from .steel import SteelSectionDesigner
from .water_tank import WaterTankDesigner
from ..errors import UnknownMemberTypeError
from ..models.inputs import MemberParameters
from ..models.outputs import MemberResult


class MemberType(str, Enum):
    """Archetypes the engine can design."""
    BEAM = "beam"
    COLUMN = "column"
    SLAB = "slab"
    FOOTING = "footing"
    STAIRCASE = "staircase"
    RETAINING_WALL = "retaining_wall"
    WATER_TANK = "water_tank"
    STEEL_SECTION = "steel_section"
    CONCRETE_MIX = "concrete_mix"


DESIGNERS: Dict[MemberType, Type[MemberDesigner]] = {
    MemberType.BEAM: BeamDesigner,
    MemberType.COLUMN: ColumnDesigner,
    MemberType.SLAB: SlabDesigner,
    MemberType.FOOTING: FootingDesigner,
    MemberType.STAIRCASE: StaircaseDesigner,
    MemberType.RETAINING_WALL: RetainingWallDesigner,
    MemberType.WATER_TANK: WaterTankDesigner,
    MemberType.STEEL_SECTION: SteelSectionDesigner,
    MemberType.CONCRETE_MIX: ConcreteMixDesigner,
}


def resolve_member_type(member_type: Union[MemberType, str]) -> MemberType:
    """
    Member type from an enum value or its string key.

    Raises:
        UnknownMemberTypeError: If no designer is registered for the key
    """
    try:
        resolved = MemberType(member_type)
    except ValueError:
        raise UnknownMemberTypeError(
            f"unknown member type {member_type!r}; expected one of "
            f"{', '.join(m.value for m in MemberType)}"
        ) from None
    if resolved not in DESIGNERS:
        raise UnknownMemberTypeError(f"no designer registered for {resolved.value!r}")
    return resolved


def parameters_model(member_type: Union[MemberType, str]) -> Type[MemberParameters]:
    """Parameter model class of a member type."""
    return DESIGNERS[resolve_member_type(member_type)].parameters_model


def solve(
    member_type: Union[MemberType, str],
    params: Union[MemberParameters, Mapping[str, Any]],
) -> MemberResult:
    """
    Run the designer for a member type.

    Args:
        member_type: Archetype key
        params: Parameter model instance, or a mapping validated into one

    Returns:
        MemberResult; bad engineering input gives an INVALID result

    Raises:
        UnknownMemberTypeError: For an unregistered member type
        pydantic.ValidationError: If a mapping has values of the wrong type
        TypeError: If a parameter model of another member type is passed
    """
    designer_cls = DESIGNERS[resolve_member_type(member_type)]
    if not isinstance(params, MemberParameters):
        params = designer_cls.parameters_model.model_validate(dict(params))
    return designer_cls().design(params)
