"""Configuration management for the IIT Simulator."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ConfigError


def _default_phi_values() -> dict[str, float]:
    return {
        "integrated": 74.5,
        "modular": 3.2,
        "random": 12.8,
    }


@dataclass
class GridConfig:
    """Element count and grid layout."""

    element_count: int = 16
    columns: int = 4
    origin: float = 50.0
    spacing: float = 70.0


@dataclass
class ModularConfig:
    """Modular architecture configuration."""

    clique_size: int = 4


@dataclass
class PhiConfig:
    """Conceptual Φ values per architecture and display bands."""

    values: dict[str, float] = field(default_factory=_default_phi_values)
    high_threshold: float = 50.0
    medium_threshold: float = 10.0


@dataclass
class DisplayConfig:
    """Rendering configuration."""

    figure_size: tuple[int, int] = (8, 8)
    node_size: int = 400
    font_size: int = 8
    show_labels: bool = True


@dataclass
class SimulatorConfig:
    """Main configuration for the IIT Simulator."""

    results_dir: Path = field(default_factory=lambda: Path("./results"))
    grid: GridConfig = field(default_factory=GridConfig)
    modular: ModularConfig = field(default_factory=ModularConfig)
    phi: PhiConfig = field(default_factory=PhiConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    seed: int | None = None
    verbose: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.results_dir, str):
            self.results_dir = Path(self.results_dir)

    @classmethod
    def from_file(cls, path: Path) -> "SimulatorConfig":
        """Load configuration from JSON file."""
        if not path.exists():
            return cls()

        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(str(path), str(e)) from e

        if not isinstance(data, dict):
            raise ConfigError(str(path), "top-level value must be an object")

        config = cls()
        if "results_dir" in data:
            config.results_dir = Path(data["results_dir"])
        if "seed" in data:
            config.seed = data["seed"]
        if "verbose" in data:
            config.verbose = data["verbose"]

        for section in ("grid", "modular", "display", "phi"):
            if section in data and not isinstance(data[section], dict):
                raise ConfigError(str(path), f"section '{section}' must be an object")

        for section in ("grid", "modular", "display"):
            if section in data:
                target = getattr(config, section)
                for key, value in data[section].items():
                    if hasattr(target, key):
                        setattr(target, key, value)

        if isinstance(config.display.figure_size, list):
            config.display.figure_size = tuple(config.display.figure_size)

        if "phi" in data:
            phi = data["phi"]
            try:
                if "values" in phi:
                    if not isinstance(phi["values"], dict):
                        raise TypeError("phi.values must be an object")
                    # Partial mappings keep the remaining reference values
                    config.phi.values.update({k: float(v) for k, v in phi["values"].items()})
                if "high_threshold" in phi:
                    config.phi.high_threshold = float(phi["high_threshold"])
                if "medium_threshold" in phi:
                    config.phi.medium_threshold = float(phi["medium_threshold"])
            except (TypeError, ValueError) as e:
                raise ConfigError(str(path), str(e)) from e

            if config.phi.medium_threshold > config.phi.high_threshold:
                raise ConfigError(
                    str(path),
                    f"phi.medium_threshold {config.phi.medium_threshold} exceeds "
                    f"phi.high_threshold {config.phi.high_threshold}",
                )

        return config

    def to_dict(self) -> dict:
        return {
            "results_dir": str(self.results_dir),
            "seed": self.seed,
            "verbose": self.verbose,
            "grid": {
                "element_count": self.grid.element_count,
                "columns": self.grid.columns,
                "origin": self.grid.origin,
                "spacing": self.grid.spacing,
            },
            "modular": {
                "clique_size": self.modular.clique_size,
            },
            "phi": {
                "values": dict(self.phi.values),
                "high_threshold": self.phi.high_threshold,
                "medium_threshold": self.phi.medium_threshold,
            },
            "display": {
                "figure_size": list(self.display.figure_size),
                "node_size": self.display.node_size,
                "font_size": self.display.font_size,
                "show_labels": self.display.show_labels,
            },
        }

    def save(self, path: Path) -> None:
        """Save configuration to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)


_config: SimulatorConfig | None = None


def get_config() -> SimulatorConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config_path = Path(os.environ.get("IITSIM_CONFIG", ".iitsim.json"))
        _config = SimulatorConfig.from_file(config_path)
    return _config


def set_config(config: SimulatorConfig | None) -> None:
    """Set the global configuration instance (None forces a reload)."""
    global _config
    _config = config
