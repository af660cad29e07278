"""Topology module - element graphs, architectures, Φ, metrics, visualization."""

from .architecture import Architecture
from .generator import SystemComplex, TopologyGenerator, generate_system
from .graph import Element, GraphModel
from .metrics import StructuralMetrics, calculate_metrics
from .phi import LabelPhiMetric, PhiBand, PhiMetric, classify_phi
from .visualizer import ComplexVisualizer, visualize_complex

__all__ = [
    "Architecture",
    "Element",
    "GraphModel",
    "SystemComplex",
    "TopologyGenerator",
    "generate_system",
    "PhiMetric",
    "LabelPhiMetric",
    "PhiBand",
    "classify_phi",
    "StructuralMetrics",
    "calculate_metrics",
    "ComplexVisualizer",
    "visualize_complex",
]
