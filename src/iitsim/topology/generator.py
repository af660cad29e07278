"""System complex generation for each architecture."""

import logging
import random
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field

from ..core.config import GridConfig, ModularConfig, SimulatorConfig
from ..core.exceptions import ValidationError
from ..core.utils import grid_position, grid_rows, validate_columns, validate_element_count
from .architecture import Architecture
from .graph import Element, GraphModel
from .phi import LabelPhiMetric, PhiMetric

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SystemComplex:
    """A generated system: elements, their connectivity, and its Φ value."""

    architecture: Architecture
    graph: GraphModel
    phi: float
    columns: int
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def elements(self) -> tuple[Element, ...]:
        return self.graph.elements()

    @property
    def connectivity(self) -> dict[str, list[str]]:
        return self.graph.connectivity

    def neighbors(self, element_id: str) -> list[str]:
        return self.graph.neighbors(element_id)

    def edges(self) -> list[tuple[str, str]]:
        return self.graph.edges()

    def to_dict(self) -> dict:
        data = self.graph.to_dict()
        data.update(
            {
                "id": self.id,
                "architecture": self.architecture.value,
                "architecture_name": self.architecture.display_name,
                "phi": self.phi,
                "columns": self.columns,
            }
        )
        return data


WiringRule = Callable[[GraphModel, list[str], "TopologyGenerator"], None]


def _wire_integrated(graph: GraphModel, ids: list[str], gen: "TopologyGenerator") -> None:
    """Grid lattice plus long-range links between opposite corners."""
    n = len(ids)
    width = gen.columns
    rows = grid_rows(n, width)

    for i in range(n):
        if i % width != width - 1 and i + 1 < n:
            graph.connect(ids[i], ids[i + 1])
        if i + width < n:
            graph.connect(ids[i], ids[i + width])

    if n > 1:
        graph.connect(ids[0], ids[n - 1])
    last_row_start = (rows - 1) * width
    if rows > 1 and width - 1 < n:
        graph.connect(ids[width - 1], ids[last_row_start])


def _wire_modular(graph: GraphModel, ids: list[str], gen: "TopologyGenerator") -> None:
    """Two cliques at either end of the element range, joined by one bridge."""
    n = len(ids)
    k = min(gen.clique_size, n // 2)
    if k == 0:
        return

    for start in (0, n - k):
        members = ids[start : start + k]
        for i, a in enumerate(members):
            for b in members[i + 1 :]:
                graph.connect(a, b)

    graph.connect(ids[k - 1], ids[n - k])


def _wire_random(graph: GraphModel, ids: list[str], gen: "TopologyGenerator") -> None:
    """Each element connects to one other element chosen uniformly at random."""
    n = len(ids)
    if n < 2:
        return

    for i in range(n):
        j = gen.rng.randrange(n - 1)
        if j >= i:
            j += 1
        graph.connect(ids[i], ids[j])


_RULES: dict[Architecture, WiringRule] = {
    Architecture.INTEGRATED: _wire_integrated,
    Architecture.MODULAR: _wire_modular,
    Architecture.RANDOM: _wire_random,
}


class TopologyGenerator:
    """Generate system complexes for the selectable architectures.

    The generator holds no per-call state; each call to generate() returns a
    new, fully wired SystemComplex and leaves earlier results untouched.
    """

    def __init__(
        self,
        grid: GridConfig | None = None,
        modular: ModularConfig | None = None,
        metric: PhiMetric | None = None,
        rng: random.Random | None = None,
    ):
        self.grid = grid or GridConfig()
        self.modular = modular or ModularConfig()
        self.metric_strategy: PhiMetric = metric or LabelPhiMetric()
        self.rng = rng or random.Random()

        validate_element_count(self.grid.element_count)
        validate_columns(self.grid.columns)
        if self.modular.clique_size < 1:
            raise ValidationError(f"Clique size must be at least 1: {self.modular.clique_size}")

    @classmethod
    def from_config(
        cls,
        config: SimulatorConfig,
        metric: PhiMetric | None = None,
        seed: int | None = None,
    ) -> "TopologyGenerator":
        """Build a generator from configuration; seed overrides config.seed."""
        seed = seed if seed is not None else config.seed
        return cls(
            grid=config.grid,
            modular=config.modular,
            metric=metric or LabelPhiMetric.from_config(config.phi),
            rng=random.Random(seed) if seed is not None else None,
        )

    @property
    def columns(self) -> int:
        return self.grid.columns

    @property
    def clique_size(self) -> int:
        return self.modular.clique_size

    def metric(self, architecture: Architecture | str) -> float:
        """Return the Φ value associated with an architecture."""
        arch = Architecture.parse(architecture)
        return self.metric_strategy.compute(arch)

    def generate(self, architecture: Architecture | str, n: int | None = None) -> SystemComplex:
        """
        Generate a system complex.

        Args:
            architecture: Architecture (or its label) selecting the wiring rule
            n: Number of elements (defaults to the grid element count)

        Returns:
            Newly built SystemComplex
        """
        arch = Architecture.parse(architecture)
        n = validate_element_count(self.grid.element_count if n is None else n)

        elements = [
            Element(
                position=grid_position(i, self.columns, self.grid.origin, self.grid.spacing)
            )
            for i in range(n)
        ]
        graph = GraphModel(elements)
        ids = [e.id for e in elements]

        _RULES[arch](graph, ids, self)
        phi = self.metric_strategy.compute(arch, graph)

        logger.debug(
            "Generated %s system: %d elements, %d edges, phi=%.1f",
            arch.value,
            n,
            len(graph.edges()),
            phi,
        )
        return SystemComplex(architecture=arch, graph=graph, phi=phi, columns=self.columns)


def generate_system(
    architecture: Architecture | str,
    n: int | None = None,
    seed: int | None = None,
    config: SimulatorConfig | None = None,
) -> SystemComplex:
    """
    Generate a system complex using the global configuration.

    Args:
        architecture: Architecture label ("integrated", "modular", "random")
        n: Number of elements (defaults to configuration)
        seed: Random seed for the random architecture
        config: Configuration to use instead of the global one

    Returns:
        SystemComplex for the architecture
    """
    from ..core.config import get_config

    generator = TopologyGenerator.from_config(config or get_config(), seed=seed)
    return generator.generate(architecture, n)
