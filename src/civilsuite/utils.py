"""Shared utilities for member design.

Provides:
- IS 456 table loading from YAML configuration
- Rounding to construction increments
"""

from __future__ import annotations

import math
import os
from pathlib import Path
from typing import Any

import yaml


TABLES_ENV_VAR = "CIVILSUITE_TABLES"


# ---------------------------------------------------------------------------
# IS 456 table loading
# ---------------------------------------------------------------------------

_tables_cache: dict[str, Any] | None = None


def load_is456_tables() -> dict[str, Any]:
    """Load the code tables from the YAML config file.

    Looks at the ``CIVILSUITE_TABLES`` environment variable first, then the
    ``config/is456_tables.yaml`` file shipped inside the package.  The result
    is cached so that repeated calls do not re-read from disk.

    Returns
    -------
    dict
        Parsed YAML content keyed by table name (e.g. ``concrete_grades``,
        ``span_depth_ratios``, ``mix_design``).

    Raises
    ------
    FileNotFoundError
        If the YAML file cannot be located in any of the expected paths.
    """
    global _tables_cache
    if _tables_cache is not None:
        return _tables_cache

    config_paths = [
        Path(__file__).resolve().parent / "config" / "is456_tables.yaml",
    ]
    override = os.environ.get(TABLES_ENV_VAR)
    if override:
        config_paths.insert(0, Path(override))

    for path in config_paths:
        if path.exists():
            with open(path, encoding="utf-8") as fh:
                _tables_cache = yaml.safe_load(fh)
            return _tables_cache

    searched = "\n  ".join(str(p) for p in config_paths)
    raise FileNotFoundError(
        f"is456_tables.yaml not found.  Searched:\n  {searched}"
    )


def _clear_tables_cache() -> None:
    """Reset the internal cache (useful in tests)."""
    global _tables_cache
    _tables_cache = None


def round_up(value: float, step: float) -> float:
    """Round *value* up to the next multiple of *step*."""
    return math.ceil(round(value / step, 9)) * step

