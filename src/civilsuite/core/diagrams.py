"""
Shear force, bending moment and column interaction point series.

Each series is a finite iterable that computes its points lazily and can be
iterated any number of times with the same result.
"""

from abc import ABC, abstractmethod
from typing import Iterator, NamedTuple, Optional

from ..models.inputs import BeamParameters, SupportType

DEFAULT_STEPS = 50


class DiagramPoint(NamedTuple):
    """Abscissa and ordinate of one diagram point."""
    x: float
    y: float


class _BeamDiagram(ABC):
    """
    Series along a beam.

    Positions are measured from the left support (the fixed end of a
    cantilever).  Two-span continuous beams run over both spans, 0 to 2L.
    Sagging moments are positive.
    """

    def __init__(
        self,
        support: SupportType,
        span: float,
        udl: float,
        point_load: float = 0.0,
        position: Optional[float] = None,
        steps: int = DEFAULT_STEPS,
    ):
        if span <= 0:
            raise ValueError(f"span must be positive, got {span}")
        if steps < 1:
            raise ValueError(f"steps must be at least 1, got {steps}")
        self.support = SupportType(support)
        self.span = span
        self.udl = udl
        self.steps = steps
        if self.support == SupportType.CONTINUOUS:
            self.point_load = 0.0
            self.position = 0.0
        else:
            self.point_load = point_load
            default = span if self.support == SupportType.CANTILEVER else span / 2
            self.position = default if position is None else position

    @classmethod
    def from_parameters(cls, params: BeamParameters, steps: int = DEFAULT_STEPS):
        return cls(params.support, params.span, params.udl, params.point_load,
                   params.point_load_position, steps)

    @property
    def length(self) -> float:
        if self.support == SupportType.CONTINUOUS:
            return 2 * self.span
        return self.span

    def _left_reaction(self) -> float:
        L, w, P, a = self.span, self.udl, self.point_load, self.position
        b = L - a
        if self.support == SupportType.SIMPLY_SUPPORTED:
            return w * L / 2 + P * b / L
        if self.support == SupportType.FIXED:
            return w * L / 2 + P * b ** 2 * (3 * a + b) / L ** 3
        if self.support == SupportType.CONTINUOUS:
            return 3 * w * L / 8
        return w * L + P

    def _left_moment(self) -> float:
        """Hogging moment at the left support (negative), zero for a pin."""
        L, w, P, a = self.span, self.udl, self.point_load, self.position
        if self.support == SupportType.FIXED:
            return -(w * L ** 2 / 12 + P * a * (L - a) ** 2 / L ** 2)
        if self.support == SupportType.CANTILEVER:
            return -(w * L ** 2 / 2 + P * a)
        return 0.0

    def shear_at(self, x: float) -> float:
        V = self._left_reaction() - self.udl * x
        if self.point_load and x > self.position:
            V -= self.point_load
        if self.support == SupportType.CONTINUOUS and x > self.span:
            V += 10 * self.udl * self.span / 8
        return V

    def moment_at(self, x: float) -> float:
        M = self._left_moment() + self._left_reaction() * x - self.udl * x ** 2 / 2
        M -= self.point_load * max(0.0, x - self.position)
        if self.support == SupportType.CONTINUOUS:
            M += 10 * self.udl * self.span / 8 * max(0.0, x - self.span)
        return M

    @abstractmethod
    def value_at(self, x: float) -> float:
        """Ordinate of the series at *x*."""

    def __iter__(self) -> Iterator[DiagramPoint]:
        for i in range(self.steps + 1):
            x = self.length * i / self.steps
            yield DiagramPoint(x, self.value_at(x))

    def __len__(self) -> int:
        return self.steps + 1


class ShearDiagram(_BeamDiagram):
    """Shear force in kN along the beam."""

    def value_at(self, x: float) -> float:
        return self.shear_at(x)


class MomentDiagram(_BeamDiagram):
    """Bending moment in kNm along the beam."""

    def value_at(self, x: float) -> float:
        return self.moment_at(x)


class InteractionCurve:
    """
    Simplified column interaction points P = Pc (1 - r²), M = Mc r.

    x is the moment in kNm, y the axial load in kN.
    """

    def __init__(self, axial_capacity: float, moment_capacity: float, steps: int = 10):
        if steps < 1:
            raise ValueError(f"steps must be at least 1, got {steps}")
        self.axial_capacity = axial_capacity
        self.moment_capacity = moment_capacity
        self.steps = steps

    def __iter__(self) -> Iterator[DiagramPoint]:
        for i in range(self.steps + 1):
            r = i / self.steps
            yield DiagramPoint(self.moment_capacity * r, self.axial_capacity * (1 - r ** 2))

    def __len__(self) -> int:
        return self.steps + 1
