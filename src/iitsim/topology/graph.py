"""Element graph with an undirected, duplicate-tolerant adjacency list."""

import logging
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field

import networkx as nx

from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _new_element_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Element:
    """A node of the simulated system (analog of a neuron or logic gate)."""

    position: tuple[float, float]
    is_active: bool = False
    _id: str = field(default_factory=_new_element_id)

    @property
    def id(self) -> str:
        return self._id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "position": list(self.position),
            "is_active": self.is_active,
        }


class GraphModel:
    """Fixed set of elements and the undirected connections between them.

    Elements are fixed at construction. Connections are stored as an adjacency
    list and always added in both directions, so the relation stays symmetric.
    Connecting the same pair twice produces a parallel edge.
    """

    def __init__(self, elements: Iterable[Element]):
        self._elements: tuple[Element, ...] = tuple(elements)
        self._index: dict[str, int] = {}
        for i, element in enumerate(self._elements):
            if element.id in self._index:
                raise ValidationError(f"Duplicate element id: {element.id}")
            self._index[element.id] = i

        self._adjacency: dict[str, list[str]] = {e.id: [] for e in self._elements}
        self._edges: list[tuple[str, str]] = []

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._index

    def elements(self) -> tuple[Element, ...]:
        """Return the elements in construction order."""
        return self._elements

    def element(self, element_id: str) -> Element:
        return self._elements[self.index_of(element_id)]

    def index_of(self, element_id: str) -> int:
        """Return the construction-order index of an element."""
        self._require(element_id)
        return self._index[element_id]

    def neighbors(self, element_id: str) -> list[str]:
        """Return the ids connected to element_id (parallel edges repeat)."""
        self._require(element_id)
        return list(self._adjacency[element_id])

    def degree(self, element_id: str) -> int:
        self._require(element_id)
        return len(self._adjacency[element_id])

    def connect(self, a: str, b: str) -> None:
        """Connect a and b in both directions. Not idempotent."""
        self._require(a)
        self._require(b)
        if a == b:
            raise ValidationError(f"Cannot connect element to itself: {a}")

        self._adjacency[a].append(b)
        self._adjacency[b].append(a)
        self._edges.append((a, b))

    @property
    def connectivity(self) -> dict[str, list[str]]:
        """Copy of the adjacency mapping."""
        return {k: list(v) for k, v in self._adjacency.items()}

    def edges(self) -> list[tuple[str, str]]:
        """One (a, b) pair per connect call, in insertion order."""
        return list(self._edges)

    def edge_set(self) -> set[frozenset[str]]:
        """Unordered edges with parallel duplicates collapsed."""
        return {frozenset(edge) for edge in self._edges}

    def to_networkx(self, multigraph: bool = False) -> nx.Graph:
        """Build a NetworkX graph keyed by element id.

        A plain Graph collapses parallel edges; pass multigraph=True to keep them.
        """
        graph: nx.Graph = nx.MultiGraph() if multigraph else nx.Graph()
        for i, element in enumerate(self._elements):
            x, y = element.position
            graph.add_node(element.id, index=i, x=x, y=y, active=element.is_active)
        graph.add_edges_from(self._edges)
        return graph

    def to_dict(self) -> dict:
        """Export graph to dictionary."""
        return {
            "elements": [e.to_dict() for e in self._elements],
            "connectivity": self.connectivity,
            "element_count": len(self._elements),
            "edge_count": len(self._edges),
        }

    def _require(self, element_id: str) -> None:
        if element_id not in self._index:
            logger.warning("Lookup of element %s outside this graph", element_id)
            raise NotFoundError(element_id, f"graph has {len(self._elements)} elements")
