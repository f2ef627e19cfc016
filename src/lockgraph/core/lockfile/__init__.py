"""Lock Record Set --- the persisted resolution state fed to the locking walk.

The package is split into focused submodules:

- ``models``: The tagged pod entries (``LockLeaf``, ``LockNode``) and the
  ``LockRecordSet`` holding them.
- ``operations``: Decoding (``from_dict``, ``from_yaml``, ``read``) in
  strict or lenient mode.

All public names are re-exported here so that imports like
``from lockgraph.core.lockfile import LockRecordSet`` work.
"""

from lockgraph.core.lockfile.models import (
    LockEntry,
    LockLeaf,
    LockNode,
    LockRecordSet,
)

# Attach decoding operations to LockRecordSet as classmethods
from lockgraph.core.lockfile import operations as _ops

LockRecordSet.from_dict = classmethod(_ops._from_dict)
LockRecordSet.from_yaml = classmethod(_ops._from_yaml)
LockRecordSet.read = classmethod(_ops._read)

__all__ = [
    "LockEntry",
    "LockLeaf",
    "LockNode",
    "LockRecordSet",
]
