"""Lock-graph builder: turns lock records into the resolver's locking graph.

The walk visits ``DEPENDENCIES`` first, adding one explicit vertex per
declared name, then every ``PODS`` entry depth-first. Each requirement
string becomes a vertex named after the package; nested entries are linked
from their parent with an edge.

Payloads (the version lock) are attached only at top-level occurrences. A
nested occurrence contributes an edge and nothing else, since the resolver
derives transitive requirements itself once the top-level lock exists.
Packages whose root name is in the unlock set get a name-only payload, so
their version floats while their identity and edges stay in the graph.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from lockgraph.core.graph import DependencyGraph
from lockgraph.core.lockfile import LockEntry, LockLeaf, LockNode, LockRecordSet
from lockgraph.core.requirement import Requirement, parse_requirement
from lockgraph.exceptions import MalformedLockRecordError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _WalkContext:
    """State shared by one build's recursive walk."""

    graph: DependencyGraph
    pods_to_unlock: frozenset[str]


def _add_child_vertex(
    requirement_string: str,
    parents: tuple[str, ...],
    ctx: _WalkContext,
) -> Requirement:
    """Parse one requirement string and insert it under *parents*.

    Returns:
        The requirement used for the vertex (name-only if unlocked).

    Raises:
        InvalidRequirementError: If the string cannot be parsed.
    """
    requirement = parse_requirement(requirement_string)
    if requirement.root_name in ctx.pods_to_unlock:
        logger.debug("Floating %s (was %s)", requirement.name, requirement)
        requirement = Requirement.name_only(requirement.name)

    payload = None if parents else requirement
    ctx.graph.add_child_vertex(requirement.name, payload, parents)
    return requirement


def _add_entry(entry: LockEntry, parents: tuple[str, ...], ctx: _WalkContext) -> None:
    if isinstance(entry, LockLeaf):
        _add_child_vertex(entry.requirement, parents, ctx)
    elif isinstance(entry, LockNode):
        requirement = _add_child_vertex(entry.requirement, parents, ctx)
        for child in entry.children:
            _add_entry(child, (requirement.name,), ctx)
    else:
        raise MalformedLockRecordError(
            f"Unsupported lock entry {entry!r}; expected LockLeaf or LockNode"
        )


class LockingGraphBuilder:
    """Builds the version-locking ``DependencyGraph`` for one lock record set.

    Each call to :meth:`build` produces a fresh graph; the unlock set is
    fixed at construction and never shared between builders.

    Args:
        records: The decoded lock records.
        pods_to_unlock: Root names whose locked version should float. Matched
            exactly against each requirement's root name.
    """

    def __init__(
        self,
        records: LockRecordSet,
        pods_to_unlock: Iterable[str] = (),
    ) -> None:
        self._records = records
        self._pods_to_unlock = frozenset(pods_to_unlock)

    def build(self) -> DependencyGraph:
        """Walk the lock records and return the populated graph.

        Raises:
            InvalidRequirementError: If any requirement string is malformed.
            MalformedLockRecordError: If a pod entry is not a known variant.
            CircularDependencyError: If the recorded dependencies form a cycle.
        """
        graph = DependencyGraph()
        ctx = _WalkContext(graph=graph, pods_to_unlock=self._pods_to_unlock)

        for string in self._records.explicit_dependencies:
            requirement = parse_requirement(string)
            graph.add_vertex(requirement.name, None, explicit=True)

        for entry in self._records.pods:
            _add_entry(entry, (), ctx)

        logger.debug(
            "Built locking graph with %d vertices and %d edges",
            graph.vertex_count,
            len(graph.edges),
        )
        return graph


def build_locking_graph(
    records: LockRecordSet,
    pods_to_unlock: Iterable[str] = (),
) -> DependencyGraph:
    """Build the locking graph for *records*, floating *pods_to_unlock*."""
    return LockingGraphBuilder(records, pods_to_unlock).build()
