"""lockgraph: Version-locking dependency graphs for incremental re-resolution."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
