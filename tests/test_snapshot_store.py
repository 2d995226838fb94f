import json
from pathlib import Path

import pytest

from dungeon_creator.errors import SnapshotError, SnapshotNotFoundError, SnapshotValidationError
from dungeon_creator.serialization import (
    BlockSnapshot,
    InMemorySnapshotStore,
    JsonFileSnapshotStore,
    SnapshotCell,
    default_store_dir,
)


def _snapshot(name="Crypt"):
    return BlockSnapshot(scale=2.0, name=name, cells=[SnapshotCell(0, 0, 3), SnapshotCell(0, 1, 2)])


def test_file_store_save_load_list_delete(tmp_path):
    store = JsonFileSnapshotStore(tmp_path / "blocks")
    assert store.list_ids() == []
    store.save(_snapshot(), "crypt")
    store.save(_snapshot("Vault"), "vault")
    assert store.exists("crypt")
    assert store.list_ids() == ["crypt", "vault"]
    assert store.load("crypt") == _snapshot()

    store.delete("crypt")
    store.delete("crypt")
    assert store.list_ids() == ["vault"]


def test_file_store_writes_readable_json(tmp_path):
    store = JsonFileSnapshotStore(tmp_path)
    store.save(_snapshot(), "crypt")
    data = json.loads((tmp_path / "crypt.json").read_text(encoding="utf-8"))
    assert data["name"] == "Crypt"
    assert len(data["elements"]) == 2
    assert not list(tmp_path.glob("*.tmp"))


def test_file_store_overwrites(tmp_path):
    store = JsonFileSnapshotStore(tmp_path)
    store.save(_snapshot("First"), "slot")
    store.save(_snapshot("Second"), "slot")
    assert store.load("slot").name == "Second"


def test_file_store_missing_snapshot(tmp_path):
    store = JsonFileSnapshotStore(tmp_path)
    with pytest.raises(SnapshotNotFoundError):
        store.load("nothing")


def test_file_store_corrupt_file(tmp_path):
    (tmp_path / "broken.json").write_text("{oops", encoding="utf-8")
    store = JsonFileSnapshotStore(tmp_path)
    with pytest.raises(SnapshotValidationError):
        store.load("broken")


@pytest.mark.parametrize("bad_id", ["", "../escape", "a/b", ".hidden", "x" * 200])
def test_invalid_ids_rejected(tmp_path, bad_id):
    store = JsonFileSnapshotStore(tmp_path)
    with pytest.raises(SnapshotError):
        store.save(_snapshot(), bad_id)


def test_default_store_dir_uses_platformdirs(monkeypatch, tmp_path):
    import dungeon_creator.serialization.storage as storage

    monkeypatch.setattr(storage, "user_data_dir", lambda appname, appauthor: str(tmp_path / appname))
    assert default_store_dir() == tmp_path / "DungeonCreator" / "blocks"
    assert JsonFileSnapshotStore().base_dir == Path(tmp_path / "DungeonCreator" / "blocks")


def test_in_memory_store():
    store = InMemorySnapshotStore()
    store.save(_snapshot(), "a")
    assert store.exists("a")
    assert store.load("a") == _snapshot()
    assert store.list_ids() == ["a"]
    store.delete("a")
    assert not store.exists("a")
    with pytest.raises(SnapshotNotFoundError):
        store.load("a")
