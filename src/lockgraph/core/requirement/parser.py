"""Requirement strings as they appear in lockfiles.

A requirement string names a package, optionally qualified by a sub-spec
path, followed by an optional parenthesized version constraint or source
hint::

    Foo
    Foo (1.2.0)
    Foo/Core (~> 1.2)
    Foo (>= 1.0, < 2.0)
    Foo (from `https://example.com/foo.git`, tag `v1.0`)

Source hints and the legacy ``(HEAD)`` marker produce name-only
requirements: the resolver is free to pick any version for them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from lockgraph.core.requirement.constraints import VersionConstraint
from lockgraph.exceptions import InvalidRequirementError

_REQUIREMENT_RE = re.compile(
    r"^\s*(?P<name>[^\s()]+)\s*(?:\((?P<spec>[^()]*)\))?\s*$"
)

_SOURCE_PREFIX = "from "
_HEAD_MARKER = "HEAD"


def root_name(name: str) -> str:
    """Return the unqualified top-level package name.

    ``"Foo/Core/Utils"`` has root name ``"Foo"``; an unqualified name is its
    own root name.
    """
    return name.split("/", 1)[0]


def _validate_name(name: str) -> str:
    if not name or any(not part for part in name.split("/")):
        raise InvalidRequirementError(f"Invalid package name: {name!r}")
    return name


@dataclass(frozen=True)
class Requirement:
    """A package requirement parsed from a lockfile string.

    Attributes:
        name: Package name, possibly qualified (e.g., "Foo/Subspec").
        constraint: Version constraint, or None for a name-only requirement
            that accepts any version.
        source: Raw source hint (e.g., "from `../Foo`") when the package was
            locked from an external source rather than a registry version.
    """

    name: str
    constraint: VersionConstraint | None = None
    source: str | None = None

    @classmethod
    def name_only(cls, name: str) -> Requirement:
        """Build a requirement with no version constraint.

        Raises:
            InvalidRequirementError: If *name* is empty or malformed.
        """
        return cls(name=_validate_name(name))

    @classmethod
    def parse(cls, text: str) -> Requirement:
        """Alias for :func:`parse_requirement`."""
        return parse_requirement(text)

    @property
    def root_name(self) -> str:
        """The unqualified top-level package name used for identity checks."""
        return root_name(self.name)

    @property
    def is_name_only(self) -> bool:
        """True when the requirement carries no version constraint."""
        return self.constraint is None

    @property
    def exact_version(self) -> str | None:
        """The locked version for an ``= x`` requirement, else None."""
        if self.constraint is None:
            return None
        return self.constraint.exact_version

    def satisfied_by(self, version: str) -> bool:
        """Check a candidate version; name-only requirements accept any."""
        if self.constraint is None:
            return True
        return self.constraint.satisfies(version)

    def __str__(self) -> str:
        if self.constraint is not None:
            return f"{self.name} ({self.constraint.raw})"
        if self.source is not None:
            return f"{self.name} ({self.source})"
        return self.name


def parse_requirement(text: str) -> Requirement:
    """Parse a lockfile requirement string.

    Args:
        text: Requirement string such as ``"Foo/Core (= 1.2.0)"``.

    Returns:
        The parsed ``Requirement``.

    Raises:
        InvalidRequirementError: If *text* is not a string, has no package
            name, has unbalanced parentheses, or carries a malformed
            constraint.
    """
    if not isinstance(text, str):
        raise InvalidRequirementError(
            f"Requirement must be a string, got {type(text).__name__}"
        )

    m = _REQUIREMENT_RE.match(text)
    if not m:
        raise InvalidRequirementError(f"Invalid requirement: {text!r}")

    name = _validate_name(m.group("name"))
    spec = m.group("spec")
    if spec is None:
        return Requirement(name=name)

    spec = spec.strip()
    if not spec:
        raise InvalidRequirementError(f"Empty version constraint in {text!r}")
    if spec.startswith(_SOURCE_PREFIX):
        return Requirement(name=name, source=spec)
    if spec == _HEAD_MARKER:
        return Requirement(name=name)

    try:
        constraint = VersionConstraint.parse(spec)
    except InvalidRequirementError as exc:
        raise InvalidRequirementError(f"Invalid requirement {text!r}: {exc}") from exc
    return Requirement(name=name, constraint=constraint)
