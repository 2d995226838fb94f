"""Block export/import.

This package provides:
- BlockSnapshot, the portable (scale, cells) copy of a block's grid
- export_block / import_snapshot to go between blocks and snapshots
- A versioned JSON codec validated with JSON Schema
- SnapshotStore implementations (JSON files with atomic writes, in-memory)
"""

from .codec import SNAPSHOT_SCHEMA, decode_snapshot, encode_snapshot, migrate_data
from .snapshot import (
    SCHEMA_VERSION,
    BlockSnapshot,
    ImportResult,
    SnapshotCell,
    export_block,
    import_snapshot,
    place_bare,
)
from .storage import InMemorySnapshotStore, JsonFileSnapshotStore, SnapshotStore, default_store_dir

__all__ = [
    "SCHEMA_VERSION",
    "SNAPSHOT_SCHEMA",
    "BlockSnapshot",
    "ImportResult",
    "SnapshotCell",
    "export_block",
    "import_snapshot",
    "place_bare",
    "encode_snapshot",
    "decode_snapshot",
    "migrate_data",
    "SnapshotStore",
    "JsonFileSnapshotStore",
    "InMemorySnapshotStore",
    "default_store_dir",
]
