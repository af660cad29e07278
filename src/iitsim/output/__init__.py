"""Output module - JSON and GraphML export."""

from .export import export_graphml, export_json

__all__ = [
    "export_json",
    "export_graphml",
]
