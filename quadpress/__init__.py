"""Quadtree image compression with selectable block error metrics."""

__version__ = "0.1.0"
__all__ = ["__version__"]