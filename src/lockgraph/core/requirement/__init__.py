"""Requirement parsing for lockfile entries.

All public names are re-exported here so callers can write
``from lockgraph.core.requirement import Requirement``.
"""

from lockgraph.core.requirement.constraints import (
    VersionConstraint,
    version_key,
)
from lockgraph.core.requirement.parser import (
    Requirement,
    parse_requirement,
    root_name,
)

__all__ = [
    "Requirement",
    "VersionConstraint",
    "parse_requirement",
    "root_name",
    "version_key",
]
