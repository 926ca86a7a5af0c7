"""Isometric tile-map viewer built on a small entity-component-system core."""

__version__ = "0.1.0"
__all__ = ["__version__"]