"""
Output data models for member design results.
"""

import math
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from ..errors import ErrorKind

# Utilization reported when a capacity is zero or negative
UTILIZATION_SENTINEL = 999.0


class DesignStatus(str, Enum):
    """Status of a design check or of a whole result."""
    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"
    INVALID = "invalid"


class CalculationStep(BaseModel):
    """Single calculation step for transparency."""
    step_number: int
    description: str
    formula: str
    substitution: str
    result: float
    unit: str
    code_reference: Optional[str] = None


class DesignIssue(BaseModel):
    """A problem found while solving, tagged with its kind."""
    kind: ErrorKind
    message: str


class Reactions(BaseModel):
    """Support reactions in kN."""
    left: float
    right: float
    middle: Optional[float] = None  # two-span continuous only

    @property
    def maximum(self) -> float:
        values = [self.left, self.right]
        if self.middle is not None:
            values.append(self.middle)
        return max(values)


class InternalForces(BaseModel):
    """Governing internal forces of a member."""
    max_shear: float  # kN
    max_moment: float  # kNm
    max_deflection: float  # mm
    reactions: Reactions


class ReinforcementResult(BaseModel):
    """Steel areas, capacities and utilization of the designed section."""
    area_required: float  # mm² (per metre width for slabs)
    area_minimum: float  # mm²
    area_provided: float  # mm²
    bar_callout: str
    moment_capacity: float  # Nmm
    shear_capacity: float  # N
    utilization_ratio: float

    # Doubly reinforced sections
    compression_area_required: Optional[float] = None  # mm²
    compression_area_provided: Optional[float] = None  # mm²
    compression_callout: Optional[str] = None


class DesignCheck(BaseModel):
    """One code check: demand against capacity."""
    name: str
    demand: float
    capacity: float
    ratio: float
    status: DesignStatus
    unit: str = ""

    @property
    def passed(self) -> bool:
        return self.status == DesignStatus.PASS


class DesignVerdict(BaseModel):
    """Overall outcome derived from the individual checks."""
    is_safe: bool
    utilization: float
    checks: Dict[str, DesignStatus]
    details: List[DesignCheck] = Field(default_factory=list)

    @property
    def failed_checks(self) -> List[str]:
        return [name for name, status in self.checks.items() if status != DesignStatus.PASS]


DetailValue = Union[float, int, str, bool, None]


class MemberResult(BaseModel):
    """Complete result of one solver invocation."""
    member_type: str
    status: DesignStatus
    forces: Optional[InternalForces] = None
    reinforcement: Optional[ReinforcementResult] = None
    verdict: DesignVerdict
    issues: List[DesignIssue] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    details: Dict[str, DetailValue] = Field(default_factory=dict)
    calculation_steps: List[CalculationStep] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        return self.status != DesignStatus.INVALID

    @property
    def is_safe(self) -> bool:
        return self.verdict.is_safe

    def has_issue(self, kind: ErrorKind) -> bool:
        return any(issue.kind == kind for issue in self.issues)


def utilization_ratio(demand: float, capacity: float) -> float:
    """
    Demand over capacity.

    A capacity that is zero, negative or not finite gives
    ``UTILIZATION_SENTINEL`` rather than inf or NaN.
    """
    if not math.isfinite(capacity) or capacity <= 0 or not math.isfinite(demand):
        return UTILIZATION_SENTINEL
    return abs(demand) / capacity


def make_check(
    name: str,
    demand: float,
    capacity: float,
    unit: str = "",
    strict: bool = False,
) -> DesignCheck:
    """
    Build a check that passes when demand does not exceed capacity.

    Args:
        name: Check key reported in the verdict
        demand: Action effect
        capacity: Resistance or limit
        unit: Unit of demand and capacity, for reports
        strict: Require demand < capacity instead of demand <= capacity
    """
    ratio = utilization_ratio(demand, capacity)
    if ratio >= UTILIZATION_SENTINEL:
        passed = False
    elif strict:
        passed = abs(demand) < capacity
    else:
        passed = abs(demand) <= capacity
    return DesignCheck(
        name=name,
        demand=demand,
        capacity=capacity,
        ratio=ratio,
        status=DesignStatus.PASS if passed else DesignStatus.FAIL,
        unit=unit,
    )


def make_verdict(checks: List[DesignCheck]) -> DesignVerdict:
    """Combine checks: safe only when every check passes."""
    return DesignVerdict(
        is_safe=bool(checks) and all(c.passed for c in checks),
        utilization=max((c.ratio for c in checks), default=UTILIZATION_SENTINEL),
        checks={c.name: c.status for c in checks},
        details=list(checks),
    )
