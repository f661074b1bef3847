"""
Text formatting of design results.

Bar selection, bar call-outs, verdict strings, report lines and diagram
point records.  Nothing here touches a display; callers render the strings.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from ..models.outputs import DesignVerdict, MemberResult

# Standard bar sizes in mm, smallest first
STANDARD_BAR_SIZES = [8, 10, 12, 16, 20, 25, 32]

# Beam bars are placed in a single row of at most this many
MAX_BARS_PER_ROW = 8
MIN_BARS = 2

NOT_APPLICABLE = "N/A"


@dataclass(frozen=True)
class BarArrangement:
    """A number of bars of one diameter."""
    diameter: int  # mm
    count: int
    area: float  # mm²


def bar_area(diameter: float) -> float:
    """Cross-sectional area of one bar in mm²."""
    return math.pi * diameter ** 2 / 4.0


def select_bars(
    required_area: float,
    diameters: Sequence[int] = STANDARD_BAR_SIZES,
    max_count: int = MAX_BARS_PER_ROW,
    min_count: int = MIN_BARS,
) -> Optional[BarArrangement]:
    """
    Pick the smallest bar diameter whose count stays within ``max_count``.

    Greedy first-fit over ascending diameters.  When no diameter fits, the
    largest diameter is used with as many bars as the area needs.

    Args:
        required_area: Steel area to provide in mm²
        diameters: Candidate bar sizes in mm, ascending
        max_count: Largest acceptable number of bars
        min_count: Smallest number of bars placed

    Returns:
        BarArrangement, or None when the area is not a positive number
    """
    if required_area is None or not math.isfinite(required_area) or required_area <= 0:
        return None

    for dia in diameters:
        count = max(min_count, math.ceil(required_area / bar_area(dia)))
        if count <= max_count:
            return BarArrangement(dia, count, count * bar_area(dia))

    dia = diameters[-1]
    count = max(min_count, math.ceil(required_area / bar_area(dia)))
    return BarArrangement(dia, count, count * bar_area(dia))


def format_bars(arrangement: Optional[BarArrangement]) -> str:
    """``"<count> - T<dia> bars (<area> mm²)"``."""
    if arrangement is None:
        return NOT_APPLICABLE
    return f"{arrangement.count} - T{arrangement.diameter} bars ({arrangement.area:.0f} mm²)"


def format_reinforcement(required_area: float) -> str:
    """Select bars for an area and format the call-out."""
    return format_bars(select_bars(required_area))


def slab_bar_spacing(area_per_metre: float, diameter: float, max_spacing: float) -> float:
    """
    Centre-to-centre spacing of bars providing an area per metre width.

    The spacing is floored to 5 mm and limited to ``max_spacing``.

    Returns:
        Spacing in mm; ``max_spacing`` for a zero requirement
    """
    if area_per_metre <= 0:
        return math.floor(max_spacing / 5.0) * 5.0
    spacing = min(1000.0 * bar_area(diameter) / area_per_metre, max_spacing)
    return max(5.0, math.floor(spacing / 5.0) * 5.0)


def format_spacing(diameter: float, spacing: float) -> str:
    """``"T<dia> @ <spacing> mm c/c"``."""
    return f"T{diameter:.0f} @ {spacing:.0f} mm c/c"


def format_verdict(verdict: DesignVerdict) -> str:
    """One-line verdict with the governing utilization and any failed checks."""
    if verdict.is_safe:
        return f"PASS - utilization {verdict.utilization:.2f}"
    failed = ", ".join(verdict.failed_checks)
    return f"FAIL - utilization {verdict.utilization:.2f} ({failed})"


def format_result(result: MemberResult) -> List[str]:
    """Report lines for a solver result."""
    title = result.member_type.replace("_", " ").title()
    lines = [f"{title} design", "=" * (len(title) + 7)]

    if not result.valid:
        lines.append("INVALID INPUT")
        lines.extend(f"  [{issue.kind.value}] {issue.message}" for issue in result.issues)
        return lines

    if result.forces is not None:
        f = result.forces
        lines.append("Internal forces")
        lines.append(f"  Max moment      : {f.max_moment:.2f} kNm")
        lines.append(f"  Max shear       : {f.max_shear:.2f} kN")
        lines.append(f"  Max deflection  : {f.max_deflection:.2f} mm")

    if result.reinforcement is not None:
        r = result.reinforcement
        lines.append("Reinforcement")
        lines.append(f"  Required        : {r.area_required:.0f} mm²")
        lines.append(f"  Minimum         : {r.area_minimum:.0f} mm²")
        lines.append(f"  Provided        : {r.bar_callout}")
        if r.compression_callout:
            lines.append(f"  Compression     : {r.compression_callout}")

    if result.details:
        lines.append("Details")
        for key, value in result.details.items():
            shown = f"{value:.3f}" if isinstance(value, float) else str(value)
            lines.append(f"  {key:<28}: {shown}")

    lines.append("Checks")
    for check in result.verdict.details:
        lines.append(
            f"  {check.name:<16} {check.status.value.upper():<5} "
            f"{check.demand:.2f} / {check.capacity:.2f} {check.unit}".rstrip()
        )

    for warning in result.warnings:
        lines.append(f"Warning: {warning}")

    lines.append(format_verdict(result.verdict))
    return lines


def diagram_points(series: Iterable) -> List[dict]:
    """``[{"x": ..., "y": ...}]`` records for a chart collaborator."""
    return [{"x": point.x, "y": point.y} for point in series]
