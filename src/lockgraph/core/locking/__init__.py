"""Version-locking graph construction.

Builds the ``DependencyGraph`` a resolver starts from: top-level locked
packages pinned to their locked requirement, transitive packages present as
unconstrained vertices, floated packages unpinned and updated packages
removed.
"""

from lockgraph.core.locking.analyzer import (
    generate_version_locking_dependencies,
    locked_dependencies,
)
from lockgraph.core.locking.builder import (
    LockingGraphBuilder,
    build_locking_graph,
)
from lockgraph.core.locking.unlock import (
    apply_removals,
    unlocked_dependency_graph,
)

__all__ = [
    "LockingGraphBuilder",
    "apply_removals",
    "build_locking_graph",
    "generate_version_locking_dependencies",
    "locked_dependencies",
    "unlocked_dependency_graph",
]
