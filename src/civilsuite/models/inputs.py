"""
Input data models for member design using Pydantic.

Fields are plain floats without range constraints: the solvers check
geometry and loads themselves and answer with an INVALID result instead of a
validation exception.  Absent dimensions default to 0 so they are reported
as invalid geometry; absent loads default to 0.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SupportType(str, Enum):
    """Beam support conditions."""
    SIMPLY_SUPPORTED = "simply_supported"
    CANTILEVER = "cantilever"
    FIXED = "fixed"
    CONTINUOUS = "continuous"


class SlabSupport(str, Enum):
    """Slab edge conditions."""
    SIMPLY_SUPPORTED = "simply_supported"
    CONTINUOUS = "continuous"
    CANTILEVER = "cantilever"


class SteelCheckMode(str, Enum):
    """Design action for a structural steel member."""
    COMPRESSION = "compression"
    FLEXURE = "flexure"


class ExposureCondition(str, Enum):
    """Exposure conditions per IS 456 Table 3."""
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"
    VERY_SEVERE = "very_severe"
    EXTREME = "extreme"


class MemberParameters(BaseModel):
    """Common base: parameter records are immutable once built."""
    model_config = ConfigDict(frozen=True)


class ReinforcedParameters(MemberParameters):
    """Material and detailing fields shared by RC members."""
    concrete_grade: float = Field(default=25, description="Concrete grade key, e.g. 25 for M25")
    steel_grade: float = Field(default=500, description="Steel grade key, e.g. 500 for Fe500")
    cover: float = Field(default=25, description="Clear cover to main bars in mm")
    bar_dia: float = Field(default=16, description="Main bar diameter in mm")


class BeamParameters(ReinforcedParameters):
    """Rectangular beam under a uniform load and an optional point load."""
    span: float = Field(default=0, description="Effective span in m (each span for continuous)")
    udl: float = Field(default=0, description="Design uniformly distributed load in kN/m")
    point_load: float = Field(default=0, description="Design point load in kN")
    point_load_position: Optional[float] = Field(
        default=None,
        description=(
            "Distance of the point load from the left support (fixed end) in m; "
            "mid-span, or the free end of a cantilever, if omitted"
        ),
    )
    support: SupportType = SupportType.SIMPLY_SUPPORTED
    width: float = Field(default=0, description="Beam width b in mm")
    depth: float = Field(default=0, description="Overall depth D in mm")


class ColumnParameters(ReinforcedParameters):
    """Rectangular braced column under axial load and biaxial bending."""
    width: float = Field(default=0, description="Column width b in mm")
    depth: float = Field(default=0, description="Column depth D in mm")
    height: float = Field(default=0, description="Unsupported length in m")
    effective_length_factor: float = Field(default=1.0, description="le / l")
    axial_load: float = Field(default=0, description="Factored axial load Pu in kN")
    moment_x: float = Field(default=0, description="Factored moment about the major axis Mux in kNm")
    moment_y: float = Field(default=0, description="Factored moment about the minor axis Muy in kNm")
    cover: float = Field(default=40, description="Clear cover to main bars in mm")


class SlabParameters(ReinforcedParameters):
    """Solid slab panel under uniform area load."""
    short_span: float = Field(default=0, description="Shorter span lx in m")
    long_span: float = Field(default=0, description="Longer span ly in m")
    live_load: float = Field(default=0, description="Imposed load in kN/m²")
    floor_finish: float = Field(default=1.0, description="Floor finish load in kN/m²")
    support: SlabSupport = SlabSupport.SIMPLY_SUPPORTED
    thickness: Optional[float] = Field(default=None, description="Overall depth in mm; sized from span/depth if omitted")
    cover: float = Field(default=20, description="Clear cover in mm")
    bar_dia: float = Field(default=10, description="Main bar diameter in mm")


class FootingParameters(ReinforcedParameters):
    """Square isolated pad footing under a rectangular column."""
    axial_load: float = Field(default=0, description="Service axial load P in kN")
    bearing_capacity: float = Field(default=0, description="Safe bearing capacity of soil in kN/m²")
    column_width: float = Field(default=0, description="Column width in mm")
    column_depth: float = Field(default=0, description="Column depth in mm")
    thickness: Optional[float] = Field(default=None, description="Footing depth in mm; sized if omitted")
    cover: float = Field(default=50, description="Clear cover in mm")
    bar_dia: float = Field(default=12, description="Main bar diameter in mm")


class StaircaseParameters(ReinforcedParameters):
    """Waist slab flight spanning between landings."""
    floor_height: float = Field(default=0, description="Height climbed by the flight in m")
    riser: float = Field(default=0, description="Riser height in mm")
    tread: float = Field(default=0, description="Tread (going) in mm")
    landing_width: float = Field(default=0, description="Landing width in m")
    live_load: float = Field(default=4.0, description="Imposed load in kN/m²")
    floor_finish: float = Field(default=1.0, description="Finish load in kN/m²")
    thickness: Optional[float] = Field(default=None, description="Waist thickness in mm; sized if omitted")
    cover: float = Field(default=20, description="Clear cover in mm")
    bar_dia: float = Field(default=12, description="Main bar diameter in mm")


class RetainingWallParameters(ReinforcedParameters):
    """Cantilever retaining wall with level backfill."""
    height: float = Field(default=0, description="Retained height H in m")
    soil_density: float = Field(default=18.0, description="Backfill unit weight in kN/m³")
    friction_angle: float = Field(default=30.0, description="Backfill angle of internal friction in degrees")
    bearing_capacity: float = Field(default=200.0, description="Safe bearing capacity in kN/m²")
    base_friction: float = Field(default=0.5, description="Coefficient of friction under the base")
    stem_thickness: float = Field(default=300, description="Stem thickness in mm")
    base_width: Optional[float] = Field(default=None, description="Base width in m; 0.6 H if omitted")
    base_thickness: Optional[float] = Field(default=None, description="Base slab depth in m; 0.1 H if omitted")
    cover: float = Field(default=50, description="Clear cover in mm")


class WaterTankParameters(ReinforcedParameters):
    """Rectangular ground water tank wall."""
    length: float = Field(default=0, description="Internal length in m")
    width: float = Field(default=0, description="Internal width in m")
    height: float = Field(default=0, description="Water depth in m")
    wall_thickness: float = Field(default=200, description="Wall thickness in mm")
    water_density: float = Field(default=9.81, description="Unit weight of water in kN/m³")
    permissible_steel_stress: float = Field(default=150.0, description="σst in MPa")
    cover: float = Field(default=40, description="Clear cover in mm")
    bar_dia: float = Field(default=12, description="Main bar diameter in mm")


class SteelSectionParameters(MemberParameters):
    """Rolled steel member checked in compression or bending."""
    mode: SteelCheckMode = SteelCheckMode.COMPRESSION
    steel_grade: float = Field(default=250, description="Structural steel grade key (fy in MPa)")
    length: float = Field(default=0, description="Member length in m")
    effective_length_factor: float = Field(default=1.0, description="K")
    axial_load: float = Field(default=0, description="Factored axial load in kN")
    moment: float = Field(default=0, description="Factored bending moment in kNm")
    area: float = Field(default=3200, description="Gross area in mm²")
    radius_of_gyration: float = Field(default=85, description="Governing radius of gyration in mm")
    section_modulus: float = Field(default=350000, description="Elastic section modulus in mm³")


class ConcreteMixParameters(MemberParameters):
    """Nominal inputs for a concrete mix proportioning."""
    grade: float = Field(default=25, description="Characteristic strength fck in MPa")
    slump: float = Field(default=75, description="Target slump in mm")
    max_aggregate_size: int = Field(default=20, description="Nominal maximum aggregate size in mm (10, 20 or 40)")
    exposure: ExposureCondition = ExposureCondition.MODERATE
    standard_deviation: Optional[float] = Field(default=None, description="Assumed standard deviation in MPa")


class BarScheduleParameters(MemberParameters):
    """Beam bars for a bar bending schedule."""
    span: float = Field(default=6.0, description="Beam length in m")
    width: float = Field(default=230, description="Beam width in mm")
    depth: float = Field(default=450, description="Overall depth in mm")
    cover: float = Field(default=25, description="Clear cover in mm")
    top_count: int = Field(default=2, description="Number of top bars")
    top_dia: float = Field(default=16, description="Top bar diameter in mm")
    bottom_count: int = Field(default=3, description="Number of bottom bars")
    bottom_dia: float = Field(default=16, description="Bottom bar diameter in mm")
    stirrup_dia: float = Field(default=8, description="Stirrup diameter in mm")
    stirrup_spacing: float = Field(default=150, description="Stirrup spacing in mm")
