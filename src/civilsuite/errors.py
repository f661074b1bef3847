"""
Error kinds and exceptions raised by the calculation engine.

Solvers never raise for bad engineering input; they return an INVALID result
carrying one or more issues tagged with an ``ErrorKind``. Exceptions are
reserved for the section formulas (caught by the solvers) and for programmer
errors such as asking for a member type that does not exist.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a problem recorded on a result."""
    INVALID_GEOMETRY = "invalid_geometry"
    INVALID_INPUT = "invalid_input"
    INVALID_MATERIAL_GRADE = "invalid_material_grade"
    DEGENERATE_SECTION = "degenerate_section"
    ZERO_CAPACITY = "zero_capacity"


class CivilSuiteError(Exception):
    """Base class for all engine exceptions."""
    kind: ErrorKind = ErrorKind.INVALID_INPUT


class InvalidGeometryError(CivilSuiteError, ValueError):
    """A section or member dimension is zero, negative or not a number."""
    kind = ErrorKind.INVALID_GEOMETRY


class InvalidInputError(CivilSuiteError, ValueError):
    """A load or other non-geometric input is outside its valid range."""
    kind = ErrorKind.INVALID_INPUT


class UnknownMemberTypeError(CivilSuiteError, KeyError):
    """No solver is registered for the requested member type."""
