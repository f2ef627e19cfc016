"""Lock record decoding from mappings, YAML text and files.

This module extends ``LockRecordSet`` (defined in ``models.py``) with the
classmethods ``from_dict``, ``from_yaml`` and ``read``. They are attached to
the class at import time (in ``__init__.py``) to keep the data model free of
I/O while presenting a single API to callers.

Decoding runs in one of two modes:

- **strict** (default): any entry that is neither a requirement string nor
  a mapping of requirement strings to entry lists raises
  ``MalformedLockRecordError``.
- **lenient**: such entries are logged and skipped, matching lockfile
  consumers that ignore shapes they do not recognize.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from lockgraph.core.lockfile.models import LockEntry, LockLeaf, LockNode
from lockgraph.exceptions import LockfileError, MalformedLockRecordError

logger = logging.getLogger(__name__)

DEPENDENCIES_KEY = "DEPENDENCIES"
PODS_KEY = "PODS"


def _malformed(message: str, strict: bool) -> None:
    """Raise in strict mode, otherwise log that the entry is skipped."""
    if strict:
        raise MalformedLockRecordError(message)
    logger.warning("Skipping malformed lock record: %s", message)


def _decode_entries(items: Any, path: str, strict: bool) -> list[LockEntry]:
    """Decode a list of pod entries, recursing into nested mappings.

    Args:
        items: The raw list from the lockfile.
        path: Location of *items* for error messages (e.g. "PODS[2].Foo").
        strict: Whether unknown shapes raise or are skipped.

    Returns:
        The decoded entries, in lockfile order.
    """
    if not isinstance(items, list):
        _malformed(f"{path} must be a list, got {type(items).__name__}", strict)
        return []

    entries: list[LockEntry] = []
    for index, item in enumerate(items):
        item_path = f"{path}[{index}]"

        if isinstance(item, str):
            entries.append(LockLeaf(item))
            continue

        if not isinstance(item, Mapping):
            _malformed(
                f"{item_path} must be a string or mapping, "
                f"got {type(item).__name__}: {item!r}",
                strict,
            )
            continue

        for key, value in item.items():
            if not isinstance(key, str):
                _malformed(f"{item_path} has non-string key {key!r}", strict)
                continue
            if value is None:
                _malformed(f"{item_path}.{key} has no dependency list", strict)
                entries.append(LockNode(key))
                continue
            children = _decode_entries(value, f"{item_path}.{key}", strict)
            entries.append(LockNode(key, tuple(children)))

    return entries


def _decode_strings(items: Any, path: str, strict: bool) -> list[str]:
    """Decode a flat list of requirement strings."""
    if not isinstance(items, list):
        _malformed(f"{path} must be a list, got {type(items).__name__}", strict)
        return []

    strings: list[str] = []
    for index, item in enumerate(items):
        if isinstance(item, str):
            strings.append(item)
        else:
            _malformed(
                f"{path}[{index}] must be a string, got {type(item).__name__}",
                strict,
            )
    return strings


def _from_dict(cls: type, data: Mapping[str, Any], strict: bool = True) -> Any:
    """Decode a lock record set from a parsed lockfile mapping.

    Missing ``DEPENDENCIES`` or ``PODS`` keys decode to empty sequences;
    other top-level keys are ignored.

    Args:
        data: Mapping with optional ``DEPENDENCIES`` and ``PODS`` keys.
        strict: Raise on unknown entry shapes instead of skipping them.

    Returns:
        A new ``LockRecordSet``.

    Raises:
        LockfileError: If *data* is not a mapping.
        MalformedLockRecordError: In strict mode, for unknown entry shapes.
    """
    if not isinstance(data, Mapping):
        raise LockfileError(
            f"Lockfile must be a mapping at top level, got {type(data).__name__}"
        )

    explicit = _decode_strings(
        data.get(DEPENDENCIES_KEY) or [], DEPENDENCIES_KEY, strict
    )
    pods = _decode_entries(data.get(PODS_KEY) or [], PODS_KEY, strict)
    logger.debug(
        "Decoded lock records: %d explicit dependencies, %d top-level pods",
        len(explicit),
        len(pods),
    )
    return cls(explicit_dependencies=tuple(explicit), pods=tuple(pods))


def _from_yaml(cls: type, text: str, strict: bool = True) -> Any:
    """Decode a lock record set from lockfile YAML text.

    An empty document decodes to an empty record set.

    Raises:
        LockfileError: If the text is not valid YAML or not a mapping.
        MalformedLockRecordError: In strict mode, for unknown entry shapes.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise LockfileError(f"Invalid lockfile YAML: {exc}") from exc
    if data is None:
        return cls()
    return cls.from_dict(data, strict=strict)


def _read(cls: type, path: Path | str, strict: bool = True) -> Any:
    """Read and decode a lockfile from disk.

    Args:
        path: Filesystem path to the lockfile (e.g. "Podfile.lock").
        strict: Raise on unknown entry shapes instead of skipping them.

    Returns:
        A new ``LockRecordSet``.

    Raises:
        LockfileError: If the file cannot be read or decoded.
        MalformedLockRecordError: In strict mode, for unknown entry shapes.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LockfileError(f"Cannot read lockfile {path}: {exc}") from exc
    return cls.from_yaml(text, strict=strict)
