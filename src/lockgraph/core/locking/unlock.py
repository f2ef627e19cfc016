"""Unlock filter and the fully unlocked graph.

Removal matches by root name, case-insensitively, so asking to update
``"foo"`` also drops ``"Foo/Core"`` and ``"Foo/UI"``. Qualified names only
exist once the whole graph is built, so removal always runs after the build.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from lockgraph.core.graph import DependencyGraph
from lockgraph.core.requirement import root_name

logger = logging.getLogger(__name__)


def apply_removals(
    graph: DependencyGraph,
    pods_to_update: Iterable[str],
) -> DependencyGraph:
    """Detach every vertex sharing a root name with a requested package.

    Matching vertices are collected for all requested names before any is
    detached. Names with no matching vertex are ignored.

    Args:
        graph: The locking graph, modified in place.
        pods_to_update: Package names to re-resolve from scratch.

    Returns:
        The same *graph*, for chaining.
    """
    doomed: list[str] = []
    for name in pods_to_update:
        target = root_name(name).lower()
        doomed.extend(
            v.name for v in graph.vertices if root_name(v.name).lower() == target
        )

    for name in doomed:
        if graph.detach_vertex_named(name):
            logger.debug("Detached %s from locking graph", name)

    return graph


def unlocked_dependency_graph() -> DependencyGraph:
    """Return an empty graph: nothing is locked, everything re-resolves."""
    return DependencyGraph()
