"""Reinforcement detailing and quantity helpers.

Provides:
- Development length of bars in tension
- Bar unit weights and a beam bar bending schedule
- Surface crack width estimate (IS 456 Annex F)
- Concrete material quantities for nominal mixes
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List

from ..models.inputs import BarScheduleParameters
from ..utils import load_is456_tables

# Hook allowance per bar end, in bar diameters
HOOK_DIAMETERS = 9

# Unit weight denominator: dia² / 162.2 gives kg/m for steel at 7850 kg/m³
BAR_WEIGHT_DIVISOR = 162.2


# ---------------------------------------------------------------------------
# Bars
# ---------------------------------------------------------------------------

def development_length(fy: float, fck: float, bar_dia: float) -> float:
    """Development length of a deformed bar in tension.

    Ld = fy * phi / (4 * tau_bd), with the bond stress taken as 1.2 * sqrt(fck).

    Parameters
    ----------
    fy : float
        Steel yield strength, MPa.
    fck : float
        Concrete characteristic strength, MPa.
    bar_dia : float
        Bar diameter, mm.

    Returns
    -------
    float
        Ld in mm.
    """
    bond_stress = 1.2 * math.sqrt(fck)
    return fy * bar_dia / (4.0 * bond_stress)


def bar_unit_weight(bar_dia: float) -> float:
    """Mass of a bar per metre length in kg/m."""
    return bar_dia ** 2 / BAR_WEIGHT_DIVISOR


@dataclass(frozen=True)
class BarScheduleRow:
    """One bar mark of a bar bending schedule."""
    description: str
    diameter: float  # mm
    cutting_length: float  # m
    count: int
    total_length: float  # m
    weight: float  # kg


@dataclass(frozen=True)
class BarSchedule:
    """Rows of a bar bending schedule and their total weight."""
    rows: List[BarScheduleRow] = field(default_factory=list)

    @property
    def total_weight(self) -> float:
        return sum(row.weight for row in self.rows)


def _schedule_row(description: str, dia: float, length_mm: float, count: int) -> BarScheduleRow:
    total = length_mm / 1000.0 * count
    return BarScheduleRow(
        description=description,
        diameter=dia,
        cutting_length=length_mm / 1000.0,
        count=count,
        total_length=total,
        weight=bar_unit_weight(dia) * total,
    )


def bar_bending_schedule(params: BarScheduleParameters) -> BarSchedule:
    """Cutting lengths and weights of the bars of a simply supported beam.

    Longitudinal bars run the length less cover at both ends plus a
    ``9 * dia`` hook at each end.  Closed stirrups are the perimeter inside
    the cover plus two hooks; their count fills the length at the given
    spacing.

    Raises
    ------
    ValueError
        If the cover leaves no room for a bar or stirrup.
    """
    length = params.span * 1000.0
    cover = params.cover
    if length <= 2 * cover or params.width <= 2 * cover or params.depth <= 2 * cover:
        raise ValueError("cover leaves no room for reinforcement")
    if params.stirrup_spacing <= 0:
        raise ValueError("stirrup spacing must be positive")

    top = length - 2 * cover + 2 * HOOK_DIAMETERS * params.top_dia
    bottom = length - 2 * cover + 2 * HOOK_DIAMETERS * params.bottom_dia
    stirrup = (2 * ((params.width - 2 * cover) + (params.depth - 2 * cover))
               + 2 * HOOK_DIAMETERS * params.stirrup_dia)
    n_stirrups = math.floor((length - 2 * cover) / params.stirrup_spacing) + 1

    return BarSchedule(rows=[
        _schedule_row("Top bars", params.top_dia, top, params.top_count),
        _schedule_row("Bottom bars", params.bottom_dia, bottom, params.bottom_count),
        _schedule_row("Stirrups", params.stirrup_dia, stirrup, n_stirrups),
    ])


# ---------------------------------------------------------------------------
# Serviceability
# ---------------------------------------------------------------------------

def crack_width(
    steel_stress: float,
    cover: float,
    bar_spacing: float,
    bar_dia: float,
    overall_depth: float,
    es: float = 200000.0,
) -> float:
    """Surface crack width midway between bars (IS 456 Annex F).

    w = 3 acr em / (1 + 2 (acr - cmin) / (h - x)), with the depth below the
    neutral axis taken as 0.85 h and em as the bar strain.

    Parameters
    ----------
    steel_stress : float
        Service stress in the bars, MPa.
    cover : float
        Clear cover cmin, mm.
    bar_spacing : float
        Centre-to-centre bar spacing, mm.
    bar_dia : float
        Bar diameter, mm.
    overall_depth : float
        Section depth h, mm.

    Returns
    -------
    float
        Crack width in mm.
    """
    acr = math.sqrt((cover + bar_dia / 2) ** 2 + (bar_spacing / 2) ** 2)
    strain = steel_stress / es
    return 3 * acr * strain / (1 + 2 * (acr - cover) / (0.85 * overall_depth))


# ---------------------------------------------------------------------------
# Quantities
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MaterialQuantities:
    """Dry materials for a volume of nominal mix concrete."""
    concrete_volume: float  # m³
    cement_bags: int
    sand_volume: float  # m³
    aggregate_volume: float  # m³


def material_quantities(volume: float, grade: float) -> MaterialQuantities:
    """Cement, sand and coarse aggregate for a concrete volume.

    Grades without a nominal mix in the table use the M25 proportions.

    Parameters
    ----------
    volume : float
        Wet concrete volume, m³.
    grade : float
        Concrete grade key, e.g. 20 for M20.

    Raises
    ------
    ValueError
        If *volume* is not a positive number.
    """
    if not math.isfinite(volume) or volume <= 0:
        raise ValueError(f"volume must be positive, got {volume}")

    table = load_is456_tables()["quantities"]
    ratios = table["mix_ratios"]
    key = int(grade) if math.isfinite(grade) and int(grade) in ratios else 25
    cement, sand, aggregate = ratios[key]
    parts = cement + sand + aggregate

    dry = volume * table["dry_volume_factor"]
    cement_volume = dry * cement / parts
    return MaterialQuantities(
        concrete_volume=volume,
        cement_bags=math.ceil(round(cement_volume * table["cement_density"] / table["bag_mass"], 9)),
        sand_volume=dry * sand / parts,
        aggregate_volume=dry * aggregate / parts,
    )
