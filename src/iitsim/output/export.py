"""Data export functionality."""

import json
from enum import Enum
from pathlib import Path
from typing import Any


def export_json(
    data: Any,
    output_file: str,
    pretty: bool = True,
) -> str:
    """
    Export data to JSON file.

    Args:
        data: Data to export (objects with to_dict() are converted)
        output_file: Output file path
        pretty: Pretty print JSON

    Returns:
        Path to output file
    """
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        if pretty:
            json.dump(data, f, indent=2, default=_json_serializer)
        else:
            json.dump(data, f, default=_json_serializer)

    return str(output_path)


def export_graphml(system: Any, output_file: str) -> str:
    """Export a SystemComplex to GraphML."""
    from ..topology.visualizer import ComplexVisualizer

    ComplexVisualizer(system).to_graphml(output_file)
    return output_file


def _json_serializer(obj: Any) -> Any:
    """Custom JSON serializer for special types."""
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    if isinstance(obj, Path):
        return str(obj)
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")
