"""Core module - configuration, exceptions, and utilities."""

from .config import (
    DisplayConfig,
    GridConfig,
    ModularConfig,
    PhiConfig,
    SimulatorConfig,
    get_config,
    set_config,
)
from .exceptions import (
    ConfigError,
    NotFoundError,
    SimulatorError,
    ValidationError,
)
from .utils import (
    ensure_results_dir,
    grid_position,
    grid_rows,
    validate_architecture,
    validate_columns,
    validate_element_count,
)

__all__ = [
    "SimulatorConfig",
    "GridConfig",
    "ModularConfig",
    "PhiConfig",
    "DisplayConfig",
    "get_config",
    "set_config",
    "SimulatorError",
    "NotFoundError",
    "ValidationError",
    "ConfigError",
    "validate_element_count",
    "validate_columns",
    "validate_architecture",
    "grid_rows",
    "grid_position",
    "ensure_results_dir",
]
