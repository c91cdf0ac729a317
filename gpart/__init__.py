"""Sparse graph and mesh I/O, vertex-separator refinement and fill-in analysis."""

__version__ = "0.1.0"