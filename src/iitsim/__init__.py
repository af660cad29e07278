"""IIT Simulator - system architectures, connectivity, and conceptual integrated information."""

__version__ = "0.1.0"
__author__ = "IIT Simulator Team"

__all__ = [
    "__version__",
    "__author__",
]
