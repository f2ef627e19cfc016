"""Version numbers and version constraints for locked requirements.

Lockfile requirement strings carry version constraints such as ``= 1.2.0``,
``~> 2.1`` or ``>= 1.0, < 2.0``. This module provides the version ordering
and the constraint type those strings are parsed into.

Constraint semantics follow RubyGems conventions: exact match (``=``),
not-equal (``!=``), range (``>``, ``>=``, ``<``, ``<=``), pessimistic
(``~>``) and compound comma-separated constraints. A bare version is an
exact match.

References
----------
.. [RubyGems] RubyGems Guides. "Patterns: Pessimistic Version Constraint."
   https://guides.rubygems.org/patterns/
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from lockgraph.exceptions import InvalidRequirementError


# ---------------------------------------------------------------------------
# Version comparison utilities
# ---------------------------------------------------------------------------

# Release segments are numeric. A pre-release follows either a hyphen
# ("2.0.0-beta-1") or a dot and a letter ("1.0.0.beta.1"). Build metadata
# after "+" is accepted and ignored for ordering.
_VERSION_RE = re.compile(
    r"^(?P<release>\d+(?:\.\d+)*)"
    r"(?:-(?P<pre>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)"
    r"|\.(?P<dotted_pre>[A-Za-z][0-9A-Za-z-]*(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

_PRERELEASE_SEPARATOR_RE = re.compile(r"[.-]")


def _match_version(version: str) -> re.Match[str]:
    m = _VERSION_RE.match(version.strip())
    if not m:
        raise InvalidRequirementError(f"Invalid version: {version!r}")
    return m


def _release_segments(version: str) -> list[int]:
    """Return the numeric release segments of a version string.

    Raises:
        InvalidRequirementError: If the string is not a valid version.
    """
    m = _match_version(version)
    return [int(seg) for seg in m.group("release").split(".")]


def version_key(version: str) -> tuple:
    """Sort key for version strings.

    Trailing zero segments are ignored (``1.0`` equals ``1``) and a
    pre-release sorts before the release it precedes (``1.0-beta.2`` <
    ``1.0``). Pre-release identifiers are split on dots and hyphens, so
    ``1.0.beta.1``, ``1.0-beta.1`` and ``1.0-beta-1`` are equal. They compare
    numerically when they are digits and lexically otherwise, with numbers
    first. Build metadata (``1.0+build.5``) does not affect ordering.

    Args:
        version: Version string (e.g., "1.2", "2.0.0-rc.1").

    Returns:
        A tuple usable with the built-in comparison operators.

    Raises:
        InvalidRequirementError: If the string is not a valid version.
    """
    m = _match_version(version)

    release = [int(seg) for seg in m.group("release").split(".")]
    while len(release) > 1 and release[-1] == 0:
        release.pop()

    pre = m.group("pre") or m.group("dotted_pre")
    if pre is None:
        return (tuple(release), 1, ())
    pre_key = tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part)
        for part in _PRERELEASE_SEPARATOR_RE.split(pre)
    )
    return (tuple(release), 0, pre_key)


def _bump(version: str) -> str:
    """Return the exclusive upper bound of a pessimistic ``~>`` constraint.

    ``1.2.3`` bumps to ``1.3``, ``1.2`` to ``2`` and ``1`` to ``2``.
    """
    segments = _release_segments(version)
    if len(segments) > 1:
        segments.pop()
    segments[-1] += 1
    return ".".join(str(seg) for seg in segments)


# ---------------------------------------------------------------------------
# VersionConstraint: Declarative version requirement
# ---------------------------------------------------------------------------

# A single constraint atom like ">= 1.2.3", "~>2.0" or a bare "1.0"
_CONSTRAINT_ATOM_RE = re.compile(
    r"^\s*(?P<op>~>|>=|<=|!=|=|>|<)?\s*(?P<ver>[^\s,]+)\s*$"
)


@dataclass(frozen=True)
class VersionConstraint:
    """A conjunction of version requirements, e.g. ``>= 1.0, < 2.0``.

    Attributes:
        atoms: Ordered ``(operator, version)`` pairs. Every atom must hold
            for a version to satisfy the constraint.
    """

    atoms: tuple[tuple[str, str], ...]

    @classmethod
    def parse(cls, text: str) -> VersionConstraint:
        """Parse a comma-separated constraint string.

        A bare version without operator is an exact match, so ``"1.0"`` and
        ``"= 1.0"`` parse to the same constraint.

        Args:
            text: Constraint text without surrounding parentheses.

        Returns:
            The parsed ``VersionConstraint``.

        Raises:
            InvalidRequirementError: If any atom is empty, uses an unknown
                operator, or carries a malformed version.
        """
        atoms: list[tuple[str, str]] = []
        for atom in text.split(","):
            m = _CONSTRAINT_ATOM_RE.match(atom)
            if not m:
                raise InvalidRequirementError(
                    f"Invalid constraint atom: {atom.strip()!r} in {text!r}"
                )
            version = m.group("ver")
            # Validates the version eagerly so bad lock data fails at parse time.
            version_key(version)
            atoms.append((m.group("op") or "=", version))
        return cls(atoms=tuple(atoms))

    @property
    def raw(self) -> str:
        """Canonical text form, e.g. ``"~> 1.2, != 1.2.5"``."""
        return ", ".join(f"{op} {ver}" for op, ver in self.atoms)

    @property
    def exact_version(self) -> str | None:
        """The pinned version if this is a single ``=`` atom, else None."""
        if len(self.atoms) == 1 and self.atoms[0][0] == "=":
            return self.atoms[0][1]
        return None

    def satisfies(self, version: str) -> bool:
        """Check whether a version string satisfies every atom.

        Args:
            version: Version string (e.g., "1.2.3").

        Returns:
            True if the version satisfies the whole conjunction.

        Raises:
            InvalidRequirementError: If *version* is not a valid version.
        """
        key = version_key(version)
        return all(self._atom_satisfies(op, ver, key) for op, ver in self.atoms)

    @staticmethod
    def _atom_satisfies(op: str, target: str, key: tuple) -> bool:
        """Evaluate a single constraint atom against a version key."""
        target_key = version_key(target)

        if op == "=":
            return key == target_key
        elif op == "!=":
            return key != target_key
        elif op == ">=":
            return key >= target_key
        elif op == "<=":
            return key <= target_key
        elif op == ">":
            return key > target_key
        elif op == "<":
            return key < target_key
        elif op == "~>":
            return target_key <= key < version_key(_bump(target))
        else:  # pragma: no cover
            raise InvalidRequirementError(f"Unknown operator: {op!r}")

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"VersionConstraint({self.raw!r})"
