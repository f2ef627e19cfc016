"""Entry points that compose building and unlocking for the installer.

``generate_version_locking_dependencies`` is the graph passed to the
resolver unless the installer is updating everything, in which case
``locked_dependencies`` hands it the unlocked graph instead.
"""

from __future__ import annotations

from collections.abc import Iterable

from lockgraph.core.graph import DependencyGraph
from lockgraph.core.lockfile import LockRecordSet
from lockgraph.core.locking.builder import build_locking_graph
from lockgraph.core.locking.unlock import apply_removals, unlocked_dependency_graph


def generate_version_locking_dependencies(
    records: LockRecordSet | None,
    pods_to_update: Iterable[str] = (),
    pods_to_unlock: Iterable[str] = (),
) -> DependencyGraph:
    """Generate the graph that stops the resolver from changing locked pods.

    Args:
        records: Decoded lock records, or None when there is no lockfile.
        pods_to_update: Names to drop from the graph entirely (matched by
            root name, case-insensitively).
        pods_to_unlock: Root names to keep in the graph without a version.

    Returns:
        The locking graph; empty when *records* is None.
    """
    if records is None:
        return unlocked_dependency_graph()

    graph = build_locking_graph(records, pods_to_unlock)
    return apply_removals(graph, pods_to_update)


def locked_dependencies(
    records: LockRecordSet | None,
    update: bool | Iterable[str] | None = None,
    pods_to_unlock: Iterable[str] = (),
) -> DependencyGraph:
    """Select the locking graph for an installer update mode.

    Args:
        records: Decoded lock records, or None when there is no lockfile.
        update: ``True`` to update everything (no locking), an iterable of
            names to update only those, or None/False to lock everything.
        pods_to_unlock: Root names to float without removing them.
    """
    if update is True:
        return unlocked_dependency_graph()
    if isinstance(update, str):
        update = [update]
    pods_to_update: Iterable[str] = () if not update else update
    return generate_version_locking_dependencies(records, pods_to_update, pods_to_unlock)
