"""Conceptual integrated-information (Φ) values.

Computing Φ for a real system requires a search over every partition of its
cause-effect structure. The simulator instead assigns each architecture a
conceptual value that illustrates the theory: an integrated system is
irreducible and scores high, while a modular one decomposes into parts with
little loss and scores low.

See Tononi, G. and Sporns, O. (2003). Measuring Information Integration.
BMC Neuroscience 4: 31.
"""

from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from ..core.exceptions import ValidationError
from .architecture import Architecture

if TYPE_CHECKING:
    from ..core.config import PhiConfig
    from .graph import GraphModel

REFERENCE_PHI: dict[Architecture, float] = {
    Architecture.INTEGRATED: 74.5,
    Architecture.MODULAR: 3.2,
    Architecture.RANDOM: 12.8,
}


class PhiMetric(Protocol):
    """Strategy mapping a generated system to its Φ value."""

    def compute(self, architecture: Architecture, graph: "GraphModel | None" = None) -> float: ...


class LabelPhiMetric:
    """Φ looked up from the architecture label; the graph itself is ignored."""

    def __init__(self, values: Mapping[Architecture | str, float] | None = None):
        self._values: dict[Architecture, float] = dict(REFERENCE_PHI)
        for key, value in (values or {}).items():
            self._values[Architecture.parse(key)] = float(value)

    @classmethod
    def from_config(cls, config: "PhiConfig") -> "LabelPhiMetric":
        return cls(config.values)

    @property
    def values(self) -> dict[Architecture, float]:
        return dict(self._values)

    def value_for(self, architecture: Architecture | str) -> float:
        return self._values[Architecture.parse(architecture)]

    def compute(self, architecture: Architecture, graph: "GraphModel | None" = None) -> float:
        return self.value_for(architecture)


class PhiBand(Enum):
    """Three-band classification of a Φ value for display."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def classify_phi(value: float, high: float = 50.0, medium: float = 10.0) -> PhiBand:
    """Classify Φ: above `high` is high, above `medium` is medium, else low."""
    if medium > high:
        raise ValidationError(f"Medium threshold {medium} exceeds high threshold {high}")
    if value > high:
        return PhiBand.HIGH
    if value > medium:
        return PhiBand.MEDIUM
    return PhiBand.LOW
