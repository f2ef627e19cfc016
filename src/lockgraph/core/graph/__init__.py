"""Dependency graph primitive handed to the resolver as its locking input."""

from lockgraph.core.graph.graph import (
    DependencyGraph,
    Edge,
    Vertex,
)

__all__ = [
    "DependencyGraph",
    "Edge",
    "Vertex",
]
