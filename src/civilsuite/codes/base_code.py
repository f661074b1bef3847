"""
Interface for design code provisions.
Keeps the member solvers independent of the clause tables they read.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass
class SlabMomentCoefficients:
    """Two-way slab bending moment coefficients for one aspect ratio."""
    alpha_x_positive: float
    alpha_y_positive: float
    alpha_x_negative: float = 0.0
    alpha_y_negative: float = 0.0


class DesignCode(ABC):
    """
    Clause lookups shared by the member solvers.

    Concrete codes read their numbers from the YAML tables so a project can
    override a value without touching solver code.
    """

    @abstractmethod
    def get_partial_safety_factors(self) -> Dict[str, float]:
        """Return partial safety factors for materials and loads."""
        pass

    @abstractmethod
    def get_span_depth_ratio(self, support_type: str, two_way: bool = False) -> float:
        """Return basic span/effective depth ratio per code."""
        pass

    @abstractmethod
    def get_minimum_reinforcement_ratio(self, fy: float) -> float:
        """Return minimum slab reinforcement percentage of the gross section."""
        pass

    @abstractmethod
    def get_maximum_reinforcement_ratio(self) -> float:
        """Return maximum reinforcement percentage."""
        pass

    @abstractmethod
    def get_column_steel_limits(self) -> Tuple[float, float]:
        """Return (minimum, maximum) longitudinal steel percentage in columns."""
        pass

    @abstractmethod
    def get_slab_moment_coefficients(
        self, aspect_ratio: float, support_type: str
    ) -> SlabMomentCoefficients:
        """Return two-way slab moment coefficients."""
        pass
