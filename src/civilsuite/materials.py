"""Material grades for member design per IS 456:2000 and IS 800:2007.

Provides an immutable table of concrete, reinforcing steel and structural
steel grades read once from ``is456_tables.yaml``.  Lookups never fail on an
unknown grade: they fall back to a defined grade and report that they did so.

Key references
--------------
* IS 456:2000, Clause 6.2.3.1 -- Modulus of elasticity of concrete
* IS 456:2000, Clause 5.6.3 -- Modulus of elasticity of steel
* IS 456:2000, Table 2 -- Grades of concrete
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from loguru import logger

from .utils import load_is456_tables


class MaterialKind(str, Enum):
    """Family a grade belongs to."""
    CONCRETE = "concrete"
    STEEL = "steel"
    STRUCTURAL_STEEL = "structural_steel"


# ---------------------------------------------------------------------------
# Grade records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MaterialGrade:
    """Design properties of one grade.

    Attributes
    ----------
    kind : MaterialKind
        Concrete, reinforcing steel or structural steel.
    grade_label : int
        Table key, e.g. 25 for M25 or 500 for Fe500.
    characteristic_strength : float
        fck for concrete, fy for steel, MPa.
    elastic_modulus : float
        MPa.  ``5000 * sqrt(fck)`` for concrete.
    density : float | None
        Unit weight in kN/m^3 where the table gives one.
    """

    kind: MaterialKind
    grade_label: int
    characteristic_strength: float
    elastic_modulus: float
    density: float | None = None

    @property
    def name(self) -> str:
        if self.kind is MaterialKind.CONCRETE:
            return f"M{self.grade_label}"
        if self.kind is MaterialKind.STEEL:
            return f"Fe{self.grade_label}"
        return f"E{self.grade_label}"


@dataclass(frozen=True)
class MaterialLookup:
    """Result of a grade lookup.

    ``fell_back`` is True when ``requested`` is not a defined grade and
    ``grade`` is the substitute.
    """

    grade: MaterialGrade
    requested: float | None
    fell_back: bool

    @property
    def strength(self) -> float:
        return self.grade.characteristic_strength


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------

def _grade_key(requested: float | None) -> int | None:
    """Integer table key for *requested*, or None if it cannot be one."""
    value = _finite_or_none(requested)
    if value is None or value != int(value):
        return None
    return int(value)


class MaterialTable:
    """Read-only lookup of material grades.

    Built from the parsed YAML tables; the grade mappings are wrapped in
    ``MappingProxyType`` so no caller can mutate them.
    """

    def __init__(self, tables: Mapping[str, Any]):
        concrete = {}
        for key, row in tables["concrete_grades"].items():
            fck = float(row["fck"])
            concrete[int(key)] = MaterialGrade(
                kind=MaterialKind.CONCRETE,
                grade_label=int(key),
                characteristic_strength=fck,
                elastic_modulus=5000.0 * math.sqrt(fck),
                density=float(row["density"]),
            )

        steel = {
            int(key): MaterialGrade(
                kind=MaterialKind.STEEL,
                grade_label=int(key),
                characteristic_strength=float(row["fy"]),
                elastic_modulus=float(row["Es"]),
            )
            for key, row in tables["steel_grades"].items()
        }

        structural = {
            int(key): MaterialGrade(
                kind=MaterialKind.STRUCTURAL_STEEL,
                grade_label=int(key),
                characteristic_strength=float(row["fy"]),
                elastic_modulus=float(row["Es"]),
                density=float(row["density"]),
            )
            for key, row in tables["structural_steel_grades"].items()
        }

        self._grades = MappingProxyType({
            MaterialKind.CONCRETE: MappingProxyType(concrete),
            MaterialKind.STEEL: MappingProxyType(steel),
            MaterialKind.STRUCTURAL_STEEL: MappingProxyType(structural),
        })
        self._defaults = MappingProxyType({
            MaterialKind.CONCRETE: int(tables["default_concrete_grade"]),
            MaterialKind.STEEL: int(tables["default_steel_grade"]),
            MaterialKind.STRUCTURAL_STEEL: int(tables["default_structural_steel_grade"]),
        })

    def grades(self, kind: MaterialKind) -> Mapping[int, MaterialGrade]:
        """All defined grades of one kind, keyed by grade label."""
        return self._grades[kind]

    def lookup(self, kind: MaterialKind, requested: float | None) -> MaterialLookup:
        """Look up a grade, falling back when it is not defined.

        Parameters
        ----------
        kind : MaterialKind
            Family to search.
        requested : float or None
            Grade key such as 25 (M25) or 500 (Fe500).

        Returns
        -------
        MaterialLookup
            Concrete falls back to the default grade (M25); both steel
            families fall back to the nearest defined grade, the lower one
            on a tie.  A request that is not a number at all gets the
            family default.
        """
        table = self._grades[kind]
        key = _grade_key(requested)
        if key is not None and key in table:
            return MaterialLookup(grade=table[key], requested=requested, fell_back=False)

        target = _finite_or_none(requested)
        if kind is MaterialKind.CONCRETE or target is None:
            substitute = self._defaults[kind]
        else:
            substitute = min(table, key=lambda g: (abs(g - target), g))

        logger.warning(
            "{} grade {} is not defined; using {}",
            kind.value, requested, table[substitute].name,
        )
        return MaterialLookup(grade=table[substitute], requested=requested, fell_back=True)

    def concrete(self, requested: float | None) -> MaterialLookup:
        return self.lookup(MaterialKind.CONCRETE, requested)

    def steel(self, requested: float | None) -> MaterialLookup:
        return self.lookup(MaterialKind.STEEL, requested)

    def structural_steel(self, requested: float | None) -> MaterialLookup:
        return self.lookup(MaterialKind.STRUCTURAL_STEEL, requested)


def _finite_or_none(requested: float | None) -> float | None:
    if requested is None:
        return None
    try:
        value = float(requested)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


_material_table: MaterialTable | None = None


def get_material_table() -> MaterialTable:
    """Shared table built on first use from the cached YAML tables."""
    global _material_table
    if _material_table is None:
        _material_table = MaterialTable(load_is456_tables())
    return _material_table


def _clear_material_table() -> None:
    """Drop the shared table (useful in tests)."""
    global _material_table
    _material_table = None
