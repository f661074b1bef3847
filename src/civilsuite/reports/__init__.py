"""Report formatting."""

from .formatter import (
    BarArrangement, select_bars, format_bars, format_reinforcement,
    format_spacing, format_verdict, format_result, diagram_points,
)
