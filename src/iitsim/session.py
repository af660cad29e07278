"""Observable holder of the current simulated system.

A session owns the currently displayed SystemComplex together with the two
presentational module flags. Selecting an architecture always builds a new
complex and publishes it with a single assignment before observers run, so a
reader never sees a partially wired graph.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .core.config import SimulatorConfig, get_config
from .topology.architecture import Architecture
from .topology.generator import SystemComplex, TopologyGenerator
from .topology.phi import PhiBand, classify_phi

logger = logging.getLogger(__name__)

Observer = Callable[["SimulationSession"], None]


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session for rendering."""

    system: SystemComplex
    has_language_module: bool
    has_self_model: bool
    phi_band: PhiBand

    def to_dict(self) -> dict:
        return {
            "system": self.system.to_dict(),
            "has_language_module": self.has_language_module,
            "has_self_model": self.has_self_model,
            "phi_band": self.phi_band.value,
        }


class SimulationSession:
    """Current system complex plus module toggles, with change notification."""

    def __init__(
        self,
        generator: TopologyGenerator | None = None,
        architecture: Architecture | str = Architecture.INTEGRATED,
        config: SimulatorConfig | None = None,
    ):
        self.config = config or get_config()
        self.generator = generator or TopologyGenerator.from_config(self.config)
        self._observers: list[Observer] = []

        self.has_language_module = False
        self.has_self_model = False
        self.selected_architecture = Architecture.parse(architecture)
        self.system: SystemComplex = self.generator.generate(self.selected_architecture)

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer; returns a function that removes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def select(self, architecture: Architecture | str) -> SystemComplex:
        """Regenerate the system for an architecture and notify observers."""
        arch = Architecture.parse(architecture)
        system = self.generator.generate(arch)

        self.selected_architecture = arch
        self.system = system
        logger.debug("Published %s system %s", arch.value, system.id)

        self._notify()
        return system

    def set_language_module(self, enabled: bool) -> None:
        self.has_language_module = bool(enabled)
        self._notify()

    def set_self_model(self, enabled: bool) -> None:
        self.has_self_model = bool(enabled)
        self._notify()

    @property
    def phi_band(self) -> PhiBand:
        return classify_phi(
            self.system.phi,
            high=self.config.phi.high_threshold,
            medium=self.config.phi.medium_threshold,
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            system=self.system,
            has_language_module=self.has_language_module,
            has_self_model=self.has_self_model,
            phi_band=self.phi_band,
        )

    def _notify(self) -> None:
        for observer in list(self._observers):
            observer(self)
