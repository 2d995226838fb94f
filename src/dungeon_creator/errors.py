class DungeonCreatorError(Exception):
    """Base error for dungeon creator exceptions."""


class ConfigError(DungeonCreatorError):
    """Raised when an editor configuration file cannot be parsed or holds invalid values."""


class CatalogError(DungeonCreatorError):
    """Raised when a catalog file is missing, malformed or declares duplicate pieces."""


class SnapshotError(DungeonCreatorError):
    """Base exception for snapshot encode/decode and storage errors."""


class SnapshotValidationError(SnapshotError):
    """Raised when snapshot data fails parsing, schema validation or version checks."""


class SnapshotNotFoundError(SnapshotError):
    """Raised when a store has no snapshot under the requested id."""


class PersistenceError(SnapshotError):
    """Raised when a snapshot store cannot read or write its backing storage."""
