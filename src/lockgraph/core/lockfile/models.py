"""Lock record data models: the tagged pod entry variants and the record set.

A lockfile's ``PODS`` section is a list whose items are either a plain
requirement string or a mapping from a requirement string to the list of
that package's own dependencies. These shapes are decoded into the two
variants below so the locking walk can match on them exhaustively.

These are pure data holders with no I/O. They depend only on the requirement
parser, making them safe to import without circular-dependency concerns.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Union

from lockgraph.core.requirement import parse_requirement


# ---------------------------------------------------------------------------
# Pod entries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LockLeaf:
    """A locked package with no recorded dependencies.

    Attributes:
        requirement: Requirement string, e.g. ``"Foo (1.2.0)"``.
    """

    requirement: str


@dataclass(frozen=True)
class LockNode:
    """A locked package together with the dependencies resolved for it.

    Attributes:
        requirement: Requirement string of the package itself.
        children: Entries for the package's dependencies at lock time.
    """

    requirement: str
    children: tuple[LockEntry, ...] = ()


LockEntry = Union[LockLeaf, LockNode]


# ---------------------------------------------------------------------------
# LockRecordSet
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LockRecordSet:
    """The decoded contents of a lockfile relevant to version locking.

    Attributes:
        explicit_dependencies: Requirement strings declared directly by the
            manifest (lockfile key ``DEPENDENCIES``).
        pods: Resolved package entries (lockfile key ``PODS``).
    """

    explicit_dependencies: tuple[str, ...] = ()
    pods: tuple[LockEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True when the record set has neither dependencies nor pods."""
        return not self.explicit_dependencies and not self.pods

    def requirement_strings(self) -> Iterator[str]:
        """Yield every pod requirement string in depth-first walk order."""
        stack = list(reversed(self.pods))
        while stack:
            entry = stack.pop()
            yield entry.requirement
            if isinstance(entry, LockNode):
                stack.extend(reversed(entry.children))

    def pod_names(self) -> Iterator[str]:
        """Yield the package name of every pod entry in depth-first walk order.

        Raises:
            InvalidRequirementError: If an entry's requirement string is
                malformed.
        """
        for text in self.requirement_strings():
            yield parse_requirement(text).name

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the lockfile mapping shape."""
        return {
            "DEPENDENCIES": list(self.explicit_dependencies),
            "PODS": [_entry_to_data(entry) for entry in self.pods],
        }


def _entry_to_data(entry: LockEntry) -> Any:
    if isinstance(entry, LockNode):
        return {entry.requirement: [_entry_to_data(c) for c in entry.children]}
    return entry.requirement
