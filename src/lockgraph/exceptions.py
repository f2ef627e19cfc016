"""lockgraph exception hierarchy.

All public exceptions inherit from LockGraphError, giving callers a single
base class to catch when they want to handle any lockgraph-specific failure
without swallowing unrelated errors.
"""


class LockGraphError(Exception):
    """Base exception for all lockgraph errors."""


class InvalidRequirementError(LockGraphError, ValueError):
    """Raised when a requirement string cannot be parsed.

    Covers empty names, unbalanced parentheses, unknown version operators
    and malformed version numbers.
    """


class MalformedLockRecordError(LockGraphError):
    """Raised when a lock record has a shape the decoder does not recognize.

    A pod entry must be either a requirement string or a mapping from a
    requirement string to a list of further entries.
    """


class LockfileError(LockGraphError):
    """Raised when a lockfile cannot be read or decoded.

    Covers missing files, invalid YAML and documents whose top level is
    not a mapping.
    """


class GraphError(LockGraphError):
    """Raised for invalid operations on a dependency graph.

    Covers edges whose endpoints are not vertices of the graph.
    """


class CircularDependencyError(GraphError):
    """Raised when adding an edge would introduce a cycle.

    Attributes:
        cycle: Vertex names along the offending path, first and last equal.
    """

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__(
            "Circular dependency detected: " + " -> ".join(cycle)
        )
