# Data models for member design
from .inputs import (
    BeamParameters, ColumnParameters, SlabParameters, FootingParameters,
    StaircaseParameters, RetainingWallParameters, WaterTankParameters,
    SteelSectionParameters, ConcreteMixParameters, MemberParameters,
    BarScheduleParameters,
    SupportType, SlabSupport, SteelCheckMode, ExposureCondition,
)
from .outputs import (
    MemberResult, InternalForces, Reactions, ReinforcementResult,
    DesignCheck, DesignVerdict, DesignIssue, DesignStatus, CalculationStep,
    UTILIZATION_SENTINEL,
)
