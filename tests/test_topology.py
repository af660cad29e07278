"""Tests for topology module."""

import logging
import random

import networkx as nx
import pytest

from iitsim.core.config import GridConfig, ModularConfig, SimulatorConfig
from iitsim.core.exceptions import NotFoundError, ValidationError
from iitsim.topology.architecture import Architecture
from iitsim.topology.generator import SystemComplex, TopologyGenerator, generate_system
from iitsim.topology.graph import Element, GraphModel
from iitsim.topology.metrics import StructuralMetrics, calculate_metrics
from iitsim.topology.phi import LabelPhiMetric, PhiBand, classify_phi


def index_edges(system: SystemComplex) -> set[frozenset[int]]:
    """Edge set of a system expressed in element indices."""
    graph = system.graph
    return {frozenset(graph.index_of(i) for i in edge) for edge in graph.edge_set()}


def neighbor_indices(system: SystemComplex, index: int) -> list[int]:
    graph = system.graph
    element_id = system.elements[index].id
    return sorted(graph.index_of(n) for n in graph.neighbors(element_id))


def assert_symmetric_and_covered(system: SystemComplex) -> None:
    connectivity = system.connectivity
    ids = [e.id for e in system.elements]
    assert set(connectivity) == set(ids)
    for a, neighbors in connectivity.items():
        for b in neighbors:
            assert connectivity[b].count(a) == neighbors.count(b)


def _graph(n: int) -> tuple[GraphModel, list[str]]:
    elements = [Element(position=(float(i), 0.0)) for i in range(n)]
    return GraphModel(elements), [e.id for e in elements]


class TestElement:
    """Test Element dataclass."""

    def test_element_defaults(self):
        """Test elements start inactive with a generated id."""
        element = Element(position=(50.0, 120.0))
        assert element.is_active is False
        assert isinstance(element.id, str) and element.id

    def test_element_ids_unique(self):
        ids = {Element(position=(0.0, 0.0)).id for _ in range(50)}
        assert len(ids) == 50

    def test_element_to_dict(self):
        element = Element(position=(1.0, 2.0))
        data = element.to_dict()
        assert data["position"] == [1.0, 2.0]
        assert data["is_active"] is False
        assert data["id"] == element.id

    def test_element_id_read_only(self):
        """Test the id cannot be reassigned while the active flag can."""
        element = Element(position=(0.0, 0.0))
        original = element.id
        with pytest.raises(AttributeError):
            element.id = "other"
        assert element.id == original
        element.is_active = True
        assert element.is_active is True


class TestGraphModel:
    """Test element graph."""

    def test_every_element_has_entry(self):
        """Test coverage of the adjacency mapping at construction."""
        graph, ids = _graph(3)
        assert graph.connectivity == {i: [] for i in ids}
        assert len(graph) == 3

    def test_elements_fixed_order(self):
        graph, ids = _graph(4)
        assert [e.id for e in graph.elements()] == ids
        assert graph.index_of(ids[2]) == 2

    def test_connect_is_symmetric(self):
        """Test a connection is added in both directions."""
        graph, ids = _graph(3)
        graph.connect(ids[0], ids[1])

        assert graph.neighbors(ids[0]) == [ids[1]]
        assert graph.neighbors(ids[1]) == [ids[0]]
        assert graph.neighbors(ids[2]) == []

    def test_connect_twice_keeps_duplicate(self):
        """Test connect is not idempotent."""
        graph, ids = _graph(2)
        graph.connect(ids[0], ids[1])
        graph.connect(ids[0], ids[1])

        assert graph.neighbors(ids[0]) == [ids[1], ids[1]]
        assert graph.neighbors(ids[1]) == [ids[0], ids[0]]
        assert len(graph.edges()) == 2
        assert graph.edge_set() == {frozenset(ids)}

    def test_neighbors_unknown_id(self, caplog):
        """Test NotFoundError is raised and logged."""
        graph, _ = _graph(2)
        with caplog.at_level(logging.WARNING, logger="iitsim.topology.graph"):
            with pytest.raises(NotFoundError) as exc:
                graph.neighbors("missing")
        assert exc.value.element_id == "missing"
        assert "missing" in caplog.text

    def test_connect_unknown_id(self):
        graph, ids = _graph(2)
        with pytest.raises(NotFoundError):
            graph.connect(ids[0], "missing")
        assert graph.neighbors(ids[0]) == []

    def test_connect_self_rejected(self):
        graph, ids = _graph(2)
        with pytest.raises(ValidationError):
            graph.connect(ids[0], ids[0])

    def test_duplicate_element_rejected(self):
        element = Element(position=(0.0, 0.0))
        with pytest.raises(ValidationError):
            GraphModel([element, element])

    def test_connectivity_is_copy(self):
        """Test callers cannot mutate the adjacency through the mapping."""
        graph, ids = _graph(2)
        graph.connectivity[ids[0]].append(ids[1])
        graph.neighbors(ids[0]).append(ids[1])
        assert graph.neighbors(ids[0]) == []

    def test_to_networkx(self):
        """Test NetworkX export collapses or keeps parallel edges."""
        graph, ids = _graph(3)
        graph.connect(ids[0], ids[1])
        graph.connect(ids[0], ids[1])
        graph.connect(ids[1], ids[2])

        simple = graph.to_networkx()
        assert simple.number_of_edges() == 2
        assert simple.nodes[ids[2]]["index"] == 2

        multi = graph.to_networkx(multigraph=True)
        assert multi.number_of_edges() == 3

    def test_to_dict(self):
        graph, ids = _graph(2)
        graph.connect(ids[0], ids[1])
        data = graph.to_dict()
        assert data["element_count"] == 2
        assert data["edge_count"] == 1
        assert len(data["elements"]) == 2


class TestArchitecture:
    """Test architecture labels."""

    def test_labels(self):
        assert [a.value for a in Architecture] == ["integrated", "modular", "random"]

    def test_display_names(self):
        assert Architecture.INTEGRATED.display_name == "Integrated (Thalamocortical-like)"
        assert Architecture.MODULAR.display_name == "Modular (Cerebellum-like)"
        assert Architecture.RANDOM.display_name == "Random"

    def test_parse_unknown(self):
        with pytest.raises(ValidationError):
            Architecture.parse("cortex")
        with pytest.raises(ValidationError):
            Architecture.parse(3)


class TestIntegrated:
    """Test integrated architecture wiring."""

    def test_corner_element_neighbors(self):
        """Test element 0 links right, down and to the far corner."""
        system = TopologyGenerator().generate(Architecture.INTEGRATED, 16)
        assert neighbor_indices(system, 0) == [1, 4, 15]

    def test_edge_set(self):
        """Test the 4x4 lattice plus both long-range links."""
        system = TopologyGenerator().generate("integrated", 16)
        edges = index_edges(system)

        assert len(system.edges()) == 26
        assert len(edges) == 26
        assert frozenset({0, 15}) in edges
        assert frozenset({3, 12}) in edges
        # No wrap-around at row ends
        assert frozenset({3, 4}) not in edges
        assert frozenset({7, 8}) not in edges

    def test_interior_element(self):
        system = TopologyGenerator().generate("integrated", 16)
        assert neighbor_indices(system, 5) == [1, 4, 6, 9]

    def test_deterministic(self):
        """Test repeated generation yields the same edge set."""
        generator = TopologyGenerator()
        first = generator.generate("integrated", 16)
        second = generator.generate("integrated", 16)
        assert index_edges(first) == index_edges(second)
        assert first.elements[0].id != second.elements[0].id

    def test_partial_last_row(self):
        """Test a grid whose last row is not full."""
        system = TopologyGenerator().generate("integrated", 6)
        assert index_edges(system) == {
            frozenset(p)
            for p in [(0, 1), (1, 2), (2, 3), (4, 5), (0, 4), (1, 5), (0, 5), (3, 4)]
        }

    def test_single_element(self):
        system = TopologyGenerator().generate("integrated", 1)
        assert system.connectivity == {system.elements[0].id: []}


class TestModular:
    """Test modular architecture wiring."""

    def test_reference_cliques(self):
        """Test two 4-cliques, one bridge and isolated middle elements."""
        system = TopologyGenerator().generate(Architecture.MODULAR, 16)
        edges = index_edges(system)

        first = {e for e in edges if e <= set(range(0, 4))}
        second = {e for e in edges if e <= set(range(12, 16))}
        bridges = edges - first - second

        assert len(first) == 6
        assert len(second) == 6
        assert bridges == {frozenset({3, 12})}
        assert len(system.edges()) == 13

        for i in range(4, 12):
            assert neighbor_indices(system, i) == []

    def test_deterministic(self):
        generator = TopologyGenerator()
        assert index_edges(generator.generate("modular", 16)) == index_edges(
            generator.generate("modular", 16)
        )

    def test_small_system_shrinks_cliques(self):
        """Test cliques never overlap when there are few elements."""
        system = TopologyGenerator().generate("modular", 5)
        assert index_edges(system) == {frozenset({0, 1}), frozenset({3, 4}), frozenset({1, 3})}
        assert neighbor_indices(system, 2) == []

    def test_single_element(self):
        system = TopologyGenerator().generate("modular", 1)
        assert system.edges() == []

    def test_configured_clique_size(self):
        generator = TopologyGenerator(modular=ModularConfig(clique_size=3))
        system = generator.generate("modular", 16)
        assert len(system.edges()) == 3 + 3 + 1
        assert frozenset({2, 13}) in index_edges(system)


class TestRandom:
    """Test random architecture wiring."""

    def test_one_call_per_element(self):
        """Test every element initiates exactly one connection, never to itself."""
        system = TopologyGenerator(rng=random.Random(1)).generate("random", 16)
        assert len(system.edges()) == 16
        for a, b in system.edges():
            assert a != b
        for i in range(16):
            assert neighbor_indices(system, i)

    def test_seeded_reproducible(self):
        """Test a seeded source reproduces the same edges."""
        first = TopologyGenerator(rng=random.Random(7)).generate("random", 16)
        second = TopologyGenerator(rng=random.Random(7)).generate("random", 16)
        assert index_edges(first) == index_edges(second)

    def test_unseeded_varies(self):
        """Test unseeded generation does not always produce the same graph."""
        generator = TopologyGenerator()
        edge_sets = {frozenset(index_edges(generator.generate("random", 16))) for _ in range(20)}
        assert len(edge_sets) > 1

    def test_two_elements(self):
        system = TopologyGenerator().generate("random", 2)
        assert system.graph.edge_set() == {frozenset(e.id for e in system.elements)}
        assert len(system.edges()) == 2

    def test_single_element(self):
        system = TopologyGenerator().generate("random", 1)
        assert system.edges() == []


class TestGenerator:
    """Test generator contract shared by all architectures."""

    @pytest.mark.parametrize("architecture", list(Architecture))
    @pytest.mark.parametrize("n", [1, 2, 7, 16, 25])
    def test_symmetry_and_coverage(self, architecture, n):
        system = TopologyGenerator().generate(architecture, n)
        assert len(system.elements) == n
        assert_symmetric_and_covered(system)

    def test_positions_on_grid(self):
        """Test elements are laid out row by row."""
        system = TopologyGenerator().generate("modular", 16)
        positions = [e.position for e in system.elements]
        assert positions[0] == (50.0, 50.0)
        assert positions[3] == (260.0, 50.0)
        assert positions[4] == (50.0, 120.0)
        assert all(e.is_active is False for e in system.elements)

    def test_custom_grid(self):
        generator = TopologyGenerator(grid=GridConfig(element_count=9, columns=3))
        system = generator.generate("integrated")
        assert len(system.elements) == 9
        assert system.columns == 3
        assert neighbor_indices(system, 0) == [1, 3, 8]
        assert frozenset({2, 6}) in index_edges(system)

    def test_invalid_count(self):
        """Test preconditions fail fast."""
        generator = TopologyGenerator()
        with pytest.raises(ValidationError):
            generator.generate("integrated", 0)
        with pytest.raises(ValidationError):
            generator.generate("integrated", -1)

    def test_unknown_architecture(self):
        with pytest.raises(ValidationError):
            TopologyGenerator().generate("hierarchical", 16)

    def test_invalid_grid(self):
        with pytest.raises(ValidationError):
            TopologyGenerator(grid=GridConfig(columns=0))
        with pytest.raises(ValidationError):
            TopologyGenerator(modular=ModularConfig(clique_size=0))

    def test_previous_instance_untouched(self):
        """Test generation never mutates an earlier result."""
        generator = TopologyGenerator()
        first = generator.generate("integrated", 16)
        before = first.connectivity
        generator.generate("integrated", 16)
        generator.generate("random", 16)
        assert first.connectivity == before

    def test_system_to_dict(self):
        system = TopologyGenerator().generate("integrated", 16)
        data = system.to_dict()
        assert data["architecture"] == "integrated"
        assert data["phi"] == 74.5
        assert data["element_count"] == 16
        assert data["edge_count"] == 26

    def test_generate_system_uses_config(self, default_config):
        default_config.grid.element_count = 8
        system = generate_system("modular", seed=1)
        assert len(system.elements) == 8

    def test_from_config_seed(self):
        config = SimulatorConfig(seed=11)
        first = TopologyGenerator.from_config(config).generate("random")
        second = TopologyGenerator.from_config(config).generate("random")
        assert index_edges(first) == index_edges(second)


class TestPhi:
    """Test Φ mapping and classification."""

    def test_reference_values(self):
        generator = TopologyGenerator()
        assert generator.metric("integrated") == 74.5
        assert generator.metric(Architecture.MODULAR) == 3.2
        assert generator.metric("random") == 12.8

    def test_reference_ordering(self):
        """Test integrated > random > modular."""
        generator = TopologyGenerator()
        assert (
            generator.metric("integrated")
            > generator.metric("random")
            > generator.metric("modular")
        )

    def test_phi_ignores_generated_edges(self):
        """Test Φ depends only on the label."""
        generator = TopologyGenerator()
        assert generator.generate("random", 16).phi == 12.8
        assert generator.generate("modular", 4).phi == 3.2

    def test_override_mapping(self):
        """Test the mapping is configurable without touching the generator."""
        metric = LabelPhiMetric({"modular": 1.0})
        generator = TopologyGenerator(metric=metric)
        assert generator.generate("modular", 16).phi == 1.0
        assert generator.metric("integrated") == 74.5

    def test_from_config(self, default_config):
        default_config.phi.values["random"] = 20.0
        generator = TopologyGenerator.from_config(default_config)
        assert generator.metric("random") == 20.0

    def test_unknown_key(self):
        with pytest.raises(ValidationError):
            LabelPhiMetric({"unknown": 1.0})

    def test_custom_strategy_sees_graph(self):
        """Test a strategy computed from the generated graph."""

        class EdgeCountMetric:
            def compute(self, architecture, graph=None):
                return float(len(graph.edges())) if graph is not None else 0.0

        generator = TopologyGenerator(metric=EdgeCountMetric())
        assert generator.generate("integrated", 16).phi == 26.0
        assert generator.generate("modular", 16).phi == 13.0

    def test_classify_phi(self):
        """Test the three display bands."""
        assert classify_phi(74.5) is PhiBand.HIGH
        assert classify_phi(12.8) is PhiBand.MEDIUM
        assert classify_phi(3.2) is PhiBand.LOW
        assert classify_phi(50.0) is PhiBand.MEDIUM
        assert classify_phi(10.0) is PhiBand.LOW

    def test_classify_invalid_thresholds(self):
        with pytest.raises(ValidationError):
            classify_phi(5.0, high=10.0, medium=20.0)


class TestStructuralMetrics:
    """Test structural metrics calculation."""

    def test_empty_graph(self):
        metrics = calculate_metrics(GraphModel([]))
        assert metrics.node_count == 0
        assert metrics.edge_count == 0

    def test_integrated(self):
        """Test the integrated system is a single component."""
        metrics = calculate_metrics(TopologyGenerator().generate("integrated", 16))
        assert metrics.node_count == 16
        assert metrics.edge_count == 26
        assert metrics.connected_components == 1
        assert metrics.isolated_elements == 0
        assert metrics.diameter is not None
        assert metrics.bridges == []

    def test_modular(self):
        """Test the modular bridge and isolated elements are detected."""
        metrics = calculate_metrics(TopologyGenerator().generate("modular", 16))
        assert metrics.edge_count == 13
        assert metrics.isolated_elements == 8
        assert metrics.connected_components == 9
        assert metrics.diameter is None
        assert metrics.bridges == [(3, 12)]
        assert metrics.articulation_points == [3, 12]

    def test_parallel_edges_counted(self):
        graph, ids = _graph(2)
        graph.connect(ids[0], ids[1])
        graph.connect(ids[1], ids[0])
        metrics = calculate_metrics(graph)
        assert metrics.edge_count == 1
        assert metrics.parallel_edge_count == 1

    def test_integrated_more_efficient_than_modular(self):
        generator = TopologyGenerator()
        integrated = calculate_metrics(generator.generate("integrated", 16))
        modular = calculate_metrics(generator.generate("modular", 16))
        assert integrated.global_efficiency > modular.global_efficiency

    def test_metrics_to_dict(self):
        metrics = calculate_metrics(TopologyGenerator().generate("modular", 16))
        data = metrics.to_dict()
        assert data["bridges"] == [[3, 12]]
        assert "density" in data
        assert "global_efficiency" in data
        assert isinstance(metrics, StructuralMetrics)
        assert "Isolated Elements: 8" in str(metrics)

    def test_matches_networkx(self):
        system = TopologyGenerator().generate("integrated", 16)
        metrics = calculate_metrics(system)
        assert metrics.density == pytest.approx(nx.density(system.graph.to_networkx()))
