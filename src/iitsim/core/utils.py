"""Utility functions for the IIT Simulator."""

import math
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .config import get_config
from .exceptions import ValidationError

if TYPE_CHECKING:
    from ..topology.architecture import Architecture


def validate_element_count(n: Any) -> int:
    """Validate the number of elements to generate (must be an int >= 1)."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise ValidationError(f"Element count must be an integer: {n!r}")
    if n < 1:
        raise ValidationError(f"Element count must be at least 1: {n}")
    return n


def validate_columns(columns: Any) -> int:
    """Validate the grid width used for layout."""
    if isinstance(columns, bool) or not isinstance(columns, int):
        raise ValidationError(f"Grid columns must be an integer: {columns!r}")
    if columns < 1:
        raise ValidationError(f"Grid columns must be at least 1: {columns}")
    return columns


def validate_architecture(label: Any) -> "Architecture":
    """Parse an architecture label ('integrated', 'modular', 'random')."""
    from ..topology.architecture import Architecture

    return Architecture.parse(label)


def grid_rows(n: int, columns: int) -> int:
    """Number of rows needed to lay out n elements on a grid of the given width."""
    return math.ceil(n / columns)


def grid_position(
    index: int,
    columns: int,
    origin: float = 50.0,
    spacing: float = 70.0,
) -> tuple[float, float]:
    """Return the (x, y) layout position of the element at index."""
    row, col = divmod(index, columns)
    return (origin + col * spacing, origin + row * spacing)


def ensure_results_dir() -> Path:
    """Ensure results directory exists and return its path."""
    config = get_config()
    config.results_dir.mkdir(parents=True, exist_ok=True)
    return config.results_dir
