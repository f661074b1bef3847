"""
Shared plumbing for the member designers.

``ResultBuilder`` collects calculation steps, issues, warnings and checks
while a designer runs and assembles the final ``MemberResult``.
``MemberDesigner`` is the base class every archetype designer derives from.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type

from loguru import logger

from ..codes.base_code import DesignCode
from ..codes.is456 import IS456
from ..errors import CivilSuiteError, ErrorKind
from ..materials import MaterialLookup, MaterialTable, get_material_table
from ..models.inputs import MemberParameters
from ..models.outputs import (
    UTILIZATION_SENTINEL,
    CalculationStep,
    DesignCheck,
    DesignIssue,
    DesignStatus,
    DesignVerdict,
    DetailValue,
    InternalForces,
    MemberResult,
    ReinforcementResult,
    make_check,
    make_verdict,
)
from ..reports.formatter import bar_area, slab_bar_spacing


class ResultBuilder:
    """Accumulates everything a designer reports for one invocation."""

    def __init__(self, member_type: str):
        self.member_type = member_type
        self.steps: List[CalculationStep] = []
        self.issues: List[DesignIssue] = []
        self.warnings: List[str] = []
        self.checks: List[DesignCheck] = []
        self.details: Dict[str, DetailValue] = {}

    def step(
        self,
        description: str,
        formula: str,
        substitution: str,
        result: float,
        unit: str,
        code_reference: Optional[str] = None,
    ) -> float:
        self.steps.append(CalculationStep(
            step_number=len(self.steps) + 1,
            description=description,
            formula=formula,
            substitution=substitution,
            result=round(result, 4),
            unit=unit,
            code_reference=code_reference,
        ))
        return result

    def issue(self, kind: ErrorKind, message: str) -> None:
        self.issues.append(DesignIssue(kind=kind, message=message))

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def check(
        self,
        name: str,
        demand: float,
        capacity: float,
        unit: str = "",
        strict: bool = False,
    ) -> DesignCheck:
        result = make_check(name, demand, capacity, unit=unit, strict=strict)
        if not math.isfinite(capacity) or capacity <= 0:
            self.issue(ErrorKind.ZERO_CAPACITY, f"{name} capacity is {capacity}")
        self.checks.append(result)
        return result

    def bar_spacing(self, area_per_metre: float, diameter: float, max_spacing: float) -> float:
        """Bar spacing for an area per metre; DEGENERATE_SECTION if the 5 mm floor falls short."""
        spacing = slab_bar_spacing(area_per_metre, diameter, max_spacing)
        provided = 1000 * bar_area(diameter) / spacing
        if provided < area_per_metre * (1 - 1e-9):
            message = (
                f"T{diameter:.0f} bars at {spacing:.0f} mm provide {provided:.0f} of "
                f"{area_per_metre:.0f} mm²/m; increase the bar size or the depth"
            )
            self.issue(ErrorKind.DEGENERATE_SECTION, message)
            self.warn(message)
        return spacing

    def require_positive(self, **values: Optional[float]) -> bool:
        """Record INVALID_GEOMETRY for every value that is not a positive number."""
        ok = True
        for name, value in values.items():
            if value is None or not math.isfinite(value) or value <= 0:
                self.issue(ErrorKind.INVALID_GEOMETRY, f"{name} must be a positive number, got {value}")
                ok = False
        return ok

    def require_non_negative(self, **values: Optional[float]) -> bool:
        """Record INVALID_INPUT for every value that is negative or not a number."""
        ok = True
        for name, value in values.items():
            if value is None or not math.isfinite(value) or value < 0:
                self.issue(ErrorKind.INVALID_INPUT, f"{name} must be zero or positive, got {value}")
                ok = False
        return ok

    def resolve(self, lookup: MaterialLookup, label: str) -> float:
        """Record a grade fallback and return the characteristic strength."""
        if lookup.fell_back:
            message = f"{label} grade {lookup.requested} is not defined; {lookup.grade.name} used"
            self.issue(ErrorKind.INVALID_MATERIAL_GRADE, message)
            self.warn(message)
        self.details[f"{label}_grade"] = lookup.grade.name
        return lookup.strength

    def invalid(self) -> MemberResult:
        """Result for input the engine cannot design."""
        return MemberResult(
            member_type=self.member_type,
            status=DesignStatus.INVALID,
            verdict=DesignVerdict(
                is_safe=False,
                utilization=UTILIZATION_SENTINEL,
                checks={"input": DesignStatus.FAIL},
            ),
            issues=self.issues,
            warnings=self.warnings,
            calculation_steps=self.steps,
        )

    def build(
        self,
        forces: Optional[InternalForces] = None,
        reinforcement: Optional[ReinforcementResult] = None,
    ) -> MemberResult:
        verdict = make_verdict(self.checks)
        return MemberResult(
            member_type=self.member_type,
            status=DesignStatus.PASS if verdict.is_safe else DesignStatus.FAIL,
            forces=forces,
            reinforcement=reinforcement,
            verdict=verdict,
            issues=self.issues,
            warnings=self.warnings,
            details=self.details,
            calculation_steps=self.steps,
        )


class MemberDesigner(ABC):
    """
    Base class for archetype designers.

    Subclasses implement ``_design``; ``design`` checks the parameter type,
    turns section-level exceptions into an INVALID result and logs.
    """

    member_type: str = ""
    parameters_model: Type[MemberParameters] = MemberParameters

    def __init__(self, code: DesignCode = None, materials: MaterialTable = None):
        self.code = code or IS456()
        self.materials = materials or get_material_table()

    def design(self, params: MemberParameters) -> MemberResult:
        if not isinstance(params, self.parameters_model):
            raise TypeError(
                f"{type(self).__name__} expects {self.parameters_model.__name__}, "
                f"got {type(params).__name__}"
            )
        logger.debug("Designing {} with {}", self.member_type, params.model_dump())

        out = ResultBuilder(self.member_type)
        try:
            result = self._design(params, out)
        except CivilSuiteError as exc:
            out.issue(exc.kind, str(exc))
            result = out.invalid()

        if result.valid:
            logger.debug(
                "{} design {}: utilization {:.3f}",
                self.member_type, result.status.value, result.verdict.utilization,
            )
        else:
            logger.warning(
                "{} input rejected: {}",
                self.member_type, "; ".join(issue.message for issue in result.issues),
            )
        return result

    @abstractmethod
    def _design(self, params: MemberParameters, out: ResultBuilder) -> MemberResult:
        """Run the design, recording into *out*."""
