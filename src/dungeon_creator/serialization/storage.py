from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union

from platformdirs import user_data_dir

from ..errors import PersistenceError, SnapshotError, SnapshotNotFoundError
from ..utils.fs import atomic_write_text, ensure_dir
from .codec import decode_snapshot, encode_snapshot
from .snapshot import BlockSnapshot

logger = logging.getLogger(__name__)

APP_NAME = "DungeonCreator"

_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.\- ]{0,127}$")


def default_store_dir() -> Path:
    """Platform-specific default directory for exported blocks."""
    return Path(user_data_dir(appname=APP_NAME, appauthor=False)) / "blocks"


def check_snapshot_id(snapshot_id: str) -> str:
    if not isinstance(snapshot_id, str) or not _ID_PATTERN.match(snapshot_id) or ".." in snapshot_id:
        raise SnapshotError(f"Invalid snapshot id: {snapshot_id!r}")
    return snapshot_id


class SnapshotStore(ABC):
    """Abstract persistence sink for block snapshots."""

    @abstractmethod
    def save(self, snapshot: BlockSnapshot, snapshot_id: str) -> None:
        """Durably store ``snapshot`` under ``snapshot_id``, replacing any previous one."""

    @abstractmethod
    def load(self, snapshot_id: str) -> BlockSnapshot:
        """Return the snapshot stored under ``snapshot_id``.

        Raises:
            SnapshotNotFoundError: if nothing is stored under that id.
        """

    @abstractmethod
    def exists(self, snapshot_id: str) -> bool:
        """Whether a snapshot is stored under ``snapshot_id``."""

    @abstractmethod
    def delete(self, snapshot_id: str) -> None:
        """Remove the snapshot; no-op when absent."""

    @abstractmethod
    def list_ids(self) -> List[str]:
        """Stored ids, sorted."""


class JsonFileSnapshotStore(SnapshotStore):
    """SnapshotStore writing one JSON document per snapshot.

    Layout: ``<base_dir>/<snapshot_id>.json``. Writes are atomic.
    """

    SUFFIX = ".json"

    def __init__(self, base_dir: Optional[Union[str, Path]] = None) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else default_store_dir()

    def path_for(self, snapshot_id: str) -> Path:
        return self.base_dir / f"{check_snapshot_id(snapshot_id)}{self.SUFFIX}"

    def save(self, snapshot: BlockSnapshot, snapshot_id: str) -> None:
        path = self.path_for(snapshot_id)
        try:
            ensure_dir(self.base_dir)
            atomic_write_text(path, encode_snapshot(snapshot) + "\n")
        except OSError as exc:
            logger.exception("Failed to save snapshot to %s", path)
            raise PersistenceError(str(exc)) from exc
        logger.info("Saved snapshot %r (%d cells) to %s", snapshot_id, len(snapshot), path)

    def load(self, snapshot_id: str) -> BlockSnapshot:
        path = self.path_for(snapshot_id)
        if not path.exists():
            raise SnapshotNotFoundError(f"Snapshot not found: {path}")
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.exception("Failed to read snapshot from %s", path)
            raise PersistenceError(str(exc)) from exc
        snapshot = decode_snapshot(text, source=str(path))
        logger.info("Loaded snapshot %r (%d cells) from %s", snapshot_id, len(snapshot), path)
        return snapshot

    def exists(self, snapshot_id: str) -> bool:
        return self.path_for(snapshot_id).exists()

    def delete(self, snapshot_id: str) -> None:
        path = self.path_for(snapshot_id)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise PersistenceError(str(exc)) from exc

    def list_ids(self) -> List[str]:
        if not self.base_dir.is_dir():
            return []
        return sorted(p.stem for p in self.base_dir.glob(f"*{self.SUFFIX}"))


class InMemorySnapshotStore(SnapshotStore):
    """Test/deterministic store that holds encoded snapshots in memory only."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def save(self, snapshot: BlockSnapshot, snapshot_id: str) -> None:
        self._data[check_snapshot_id(snapshot_id)] = encode_snapshot(snapshot)

    def load(self, snapshot_id: str) -> BlockSnapshot:
        try:
            text = self._data[snapshot_id]
        except KeyError as e:
            raise SnapshotNotFoundError(f"Snapshot not found: {snapshot_id!r}") from e
        return decode_snapshot(text, source=f"memory:{snapshot_id}")

    def exists(self, snapshot_id: str) -> bool:
        return snapshot_id in self._data

    def delete(self, snapshot_id: str) -> None:
        self._data.pop(snapshot_id, None)

    def list_ids(self) -> List[str]:
        return sorted(self._data)


__all__ = [
    "APP_NAME",
    "default_store_dir",
    "check_snapshot_id",
    "SnapshotStore",
    "JsonFileSnapshotStore",
    "InMemorySnapshotStore",
]
