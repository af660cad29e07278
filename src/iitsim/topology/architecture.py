"""System architectures selectable in the simulation."""

from enum import Enum
from typing import Any

from ..core.exceptions import ValidationError


class Architecture(Enum):
    """Topology-generation rule for a simulated system."""

    INTEGRATED = "integrated"
    MODULAR = "modular"
    RANDOM = "random"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def parse(cls, label: Any) -> "Architecture":
        """Resolve a member or a case-insensitive label, failing on anything else."""
        if isinstance(label, cls):
            return label
        if isinstance(label, str):
            try:
                return cls(label.strip().lower())
            except ValueError:
                pass
        choices = ", ".join(a.value for a in cls)
        raise ValidationError(f"Unknown architecture: {label!r}", f"expected one of {choices}")


_DISPLAY_NAMES = {
    Architecture.INTEGRATED: "Integrated (Thalamocortical-like)",
    Architecture.MODULAR: "Modular (Cerebellum-like)",
    Architecture.RANDOM: "Random",
}

_DESCRIPTIONS = {
    Architecture.INTEGRATED: (
        "Grid lattice with long-range links between opposite corners. "
        "Information from any part can influence any other; the whole is irreducible."
    ),
    Architecture.MODULAR: (
        "Two dense modules joined by a single weak link. "
        "Decomposes into near-independent parts with little loss."
    ),
    Architecture.RANDOM: (
        "Each element links to one randomly chosen partner. "
        "No designed structure; a baseline for comparison."
    ),
}
