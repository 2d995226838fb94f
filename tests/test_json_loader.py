import json
from pathlib import Path

import pytest

from dungeon_creator.utils.fs import atomic_write_text
from dungeon_creator.utils.json_loader import (
    JsonFileNotFoundError,
    JsonParseError,
    JsonSchemaError,
    load_json_file,
    loads_json,
    validate_data,
)


BASIC_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["id"],
    "properties": {
        "id": {"type": "string"},
        "scale": {"type": "number", "default": 1.0},
        "tags": {"type": "array", "items": {"type": "string"}, "default": []},
    },
    "additionalProperties": False,
}


def write_json(path: Path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


def test_load_valid_json_with_schema_and_defaults(tmp_path: Path, caplog):
    file_path = tmp_path / "piece.json"
    write_json(file_path, {"id": "cross"})

    caplog.set_level("INFO")
    loaded = load_json_file(file_path, schema=BASIC_SCHEMA)

    assert loaded == {"id": "cross", "scale": 1.0, "tags": []}
    assert any("Applied default values for missing keys" in rec.message for rec in caplog.records)


def test_missing_required_key_raises_readable_error(tmp_path: Path):
    file_path = tmp_path / "bad.json"
    write_json(file_path, {"scale": 2})

    with pytest.raises(JsonSchemaError) as ei:
        load_json_file(file_path, schema=BASIC_SCHEMA)

    msg = str(ei.value)
    assert "Schema validation failed" in msg
    assert "'id' is a required property" in msg


def test_parse_error_reports_location():
    with pytest.raises(JsonParseError) as ei:
        loads_json('{"id": }', source="inline")
    assert ei.value.lineno == 1
    assert "inline" in str(ei.value)


def test_missing_file(tmp_path: Path):
    with pytest.raises(JsonFileNotFoundError):
        load_json_file(tmp_path / "nope.json")


def test_validate_data_returns_applied_keys():
    data = {"id": "x", "tags": ["a"]}
    assert validate_data(data, BASIC_SCHEMA) == ["scale"]
    assert data["tags"] == ["a"]


def test_atomic_write_replaces_content(tmp_path: Path):
    target = tmp_path / "nested" / "out.json"
    atomic_write_text(target, "one")
    atomic_write_text(target, "two")
    assert target.read_text(encoding="utf-8") == "two"
    assert [p.name for p in target.parent.iterdir()] == ["out.json"]
