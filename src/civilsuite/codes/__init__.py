"""Design code provisions."""

from .base_code import DesignCode, SlabMomentCoefficients
from .is456 import IS456

__all__ = ["DesignCode", "SlabMomentCoefficients", "IS456"]
