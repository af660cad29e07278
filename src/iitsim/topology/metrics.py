"""Structural graph metrics for generated systems using NetworkX.

These describe the shape of a generated graph for display next to Φ. They are
not used to compute Φ.
"""

from dataclasses import dataclass

import networkx as nx

from .generator import SystemComplex
from .graph import GraphModel


@dataclass
class StructuralMetrics:
    """Structural metrics of a generated system."""

    node_count: int
    edge_count: int
    parallel_edge_count: int
    density: float
    average_degree: float
    clustering_coefficient: float
    connected_components: int
    isolated_elements: int
    diameter: int | None
    average_path_length: float | None
    global_efficiency: float
    bridges: list[tuple[int, int]]
    articulation_points: list[int]

    def to_dict(self) -> dict:
        return {
            "node_count": self.node_count,
            "edge_count": self.edge_count,
            "parallel_edge_count": self.parallel_edge_count,
            "density": round(self.density, 4),
            "average_degree": round(self.average_degree, 2),
            "clustering_coefficient": round(self.clustering_coefficient, 4),
            "connected_components": self.connected_components,
            "isolated_elements": self.isolated_elements,
            "diameter": self.diameter,
            "average_path_length": (
                round(self.average_path_length, 2)
                if self.average_path_length is not None
                else None
            ),
            "global_efficiency": round(self.global_efficiency, 4),
            "bridges": [list(b) for b in self.bridges],
            "articulation_points": self.articulation_points,
        }

    def __str__(self) -> str:
        lines = [
            f"Elements: {self.node_count}",
            f"Edges: {self.edge_count}",
            f"Density: {self.density:.4f}",
            f"Average Degree: {self.average_degree:.2f}",
            f"Clustering Coefficient: {self.clustering_coefficient:.4f}",
            f"Connected Components: {self.connected_components}",
            f"Global Efficiency: {self.global_efficiency:.4f}",
        ]

        if self.parallel_edge_count:
            lines.append(f"Parallel Edges: {self.parallel_edge_count}")
        if self.isolated_elements:
            lines.append(f"Isolated Elements: {self.isolated_elements}")
        if self.diameter is not None:
            lines.append(f"Diameter: {self.diameter}")
        if self.average_path_length is not None:
            lines.append(f"Average Path Length: {self.average_path_length:.2f}")

        if self.bridges:
            shown = ", ".join(f"{a}-{b}" for a, b in self.bridges[:5])
            lines.append(f"\nBridges: {shown}")
        if self.articulation_points:
            shown = ", ".join(str(p) for p in self.articulation_points[:5])
            lines.append(f"Articulation Points: {shown}")

        return "\n".join(lines)


def _index_graph(model: GraphModel) -> nx.Graph:
    """Simple graph relabelled by element index, parallel edges collapsed."""
    graph = model.to_networkx()
    mapping = {node: data["index"] for node, data in graph.nodes(data=True)}
    return nx.relabel_nodes(graph, mapping)


def find_bridges(graph: nx.Graph) -> list[tuple[int, int]]:
    """Find edges whose removal disconnects their component."""
    if not graph.edges():
        return []
    return sorted(tuple(sorted(edge)) for edge in nx.bridges(graph))


def find_articulation_points(graph: nx.Graph) -> list[int]:
    """Find elements whose removal disconnects their component."""
    if not graph.nodes():
        return []
    return sorted(nx.articulation_points(graph))


def calculate_metrics(system: SystemComplex | GraphModel) -> StructuralMetrics:
    """
    Calculate structural metrics of a generated system.

    Args:
        system: SystemComplex or bare GraphModel

    Returns:
        StructuralMetrics with element indices in place of ids
    """
    model = system.graph if isinstance(system, SystemComplex) else system
    graph = _index_graph(model)

    node_count = graph.number_of_nodes()
    if node_count == 0:
        return StructuralMetrics(
            node_count=0,
            edge_count=0,
            parallel_edge_count=0,
            density=0.0,
            average_degree=0.0,
            clustering_coefficient=0.0,
            connected_components=0,
            isolated_elements=0,
            diameter=None,
            average_path_length=None,
            global_efficiency=0.0,
            bridges=[],
            articulation_points=[],
        )

    edge_count = graph.number_of_edges()
    parallel = len(model.edges()) - edge_count

    components = nx.number_connected_components(graph)

    diameter = None
    avg_path_length = None
    if components == 1 and node_count > 1:
        diameter = nx.diameter(graph)
        avg_path_length = nx.average_shortest_path_length(graph)

    return StructuralMetrics(
        node_count=node_count,
        edge_count=edge_count,
        parallel_edge_count=parallel,
        density=nx.density(graph),
        average_degree=sum(d for _, d in graph.degree()) / node_count,
        clustering_coefficient=nx.average_clustering(graph),
        connected_components=components,
        isolated_elements=nx.number_of_isolates(graph),
        diameter=diameter,
        average_path_length=avg_path_length,
        global_efficiency=nx.global_efficiency(graph),
        bridges=find_bridges(graph),
        articulation_points=find_articulation_points(graph),
    )
