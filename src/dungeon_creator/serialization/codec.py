from __future__ import annotations

import json
import logging
from typing import Any, Dict

from ..errors import SnapshotValidationError
from ..utils.json_loader import JsonLoaderError, loads_json, validate_data
from .snapshot import SCHEMA_VERSION, BlockSnapshot

logger = logging.getLogger(__name__)

SNAPSHOT_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["scale", "elements"],
    "properties": {
        "schema_version": {"type": "integer", "minimum": 0},
        "name": {"type": "string", "default": ""},
        "scale": {"type": "number", "exclusiveMinimum": 0},
        "elements": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["i", "j", "connections"],
                "properties": {
                    "i": {"type": "integer"},
                    "j": {"type": "integer"},
                    "connections": {"type": "integer", "minimum": 0, "maximum": 15},
                },
                "additionalProperties": False,
            },
        },
    },
}


def encode_snapshot(snapshot: BlockSnapshot) -> str:
    """Encode a snapshot as pretty-printed JSON with sorted keys."""
    return json.dumps(snapshot.to_dict(), ensure_ascii=False, sort_keys=True, indent=2)


def decode_snapshot(text: str, *, source: str = "<snapshot>") -> BlockSnapshot:
    """Decode JSON text into a BlockSnapshot with version migration and schema validation."""
    try:
        data = loads_json(text, source=source)
    except JsonLoaderError as e:
        raise SnapshotValidationError(str(e)) from e
    if not isinstance(data, dict):
        raise SnapshotValidationError(f"Snapshot root must be an object in {source}")

    version = _detect_version(data)
    if version != SCHEMA_VERSION:
        data = migrate_data(data, from_version=version, to_version=SCHEMA_VERSION)

    try:
        validate_data(data, SNAPSHOT_SCHEMA, source=source)
    except JsonLoaderError as e:
        raise SnapshotValidationError(str(e)) from e
    return BlockSnapshot.from_dict(data)


def _detect_version(data: Dict[str, Any]) -> int:
    if "schema_version" in data:
        try:
            return int(data["schema_version"])
        except (TypeError, ValueError) as e:
            raise SnapshotValidationError(f"Invalid schema_version: {data['schema_version']!r}") from e
    # Raw editor asset layout: {"matrix": {"scale": ..., "elements": [...]}}
    if "matrix" in data and "elements" not in data:
        return 0
    return SCHEMA_VERSION


def migrate_data(data: Dict[str, Any], from_version: int, to_version: int) -> Dict[str, Any]:
    """Migrate snapshot data between schema versions, one step at a time."""
    if from_version == to_version:
        return data
    if from_version > to_version:
        raise SnapshotValidationError(
            f"Snapshot schema version {from_version} is newer than supported {to_version}."
        )

    for v in range(from_version, to_version):
        if v == 0:
            data = _migrate_v0_to_v1(data)
    data["schema_version"] = to_version
    logger.info("Migrated snapshot data from schema %d to %d", from_version, to_version)
    return data


def _migrate_v0_to_v1(data: Dict[str, Any]) -> Dict[str, Any]:
    matrix = data.get("matrix")
    if not isinstance(matrix, dict):
        raise SnapshotValidationError("Schema 0 snapshot is missing its 'matrix' object")
    return {
        "name": data.get("name", ""),
        "scale": matrix.get("scale", 1.0),
        "elements": matrix.get("elements", []),
    }


__all__ = ["SNAPSHOT_SCHEMA", "encode_snapshot", "decode_snapshot", "migrate_data"]
