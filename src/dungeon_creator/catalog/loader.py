from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from ..errors import CatalogError
from ..utils.json_loader import JsonLoaderError, load_json_file
from .catalog import Catalog
from .models import PieceDefinition

logger = logging.getLogger(__name__)

_VEC3 = {
    "type": "array",
    "items": {"type": "number"},
    "minItems": 3,
    "maxItems": 3,
}

CATALOG_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["pieces"],
    "properties": {
        "pieces": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "connections"],
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "name": {"type": "string"},
                    "connections": {
                        "oneOf": [
                            {"type": "integer", "minimum": 0, "maximum": 15},
                            {
                                "type": "array",
                                "items": {
                                    "type": "string",
                                    "enum": ["north", "south", "east", "west", "n", "s", "e", "w"],
                                },
                                "uniqueItems": True,
                            },
                        ]
                    },
                    "scale": dict(_VEC3, default=[1.0, 1.0, 1.0]),
                    "rotation": dict(_VEC3, default=[0.0, 0.0, 0.0]),
                    "footprint_offset": dict(_VEC3, default=[0.0, 0.0, 0.0]),
                    "tags": {"type": "array", "items": {"type": "string"}, "default": []},
                },
                "additionalProperties": False,
            },
        }
    },
}


def catalog_from_dict(data: Dict[str, Any]) -> Catalog:
    """Build a Catalog from already-validated data, keeping file order."""
    seen: Dict[str, int] = {}
    definitions: List[PieceDefinition] = []
    for idx, raw in enumerate(data.get("pieces", [])):
        piece_id = raw["id"]
        if piece_id in seen:
            raise CatalogError(f"Duplicate piece id {piece_id!r} at entries {seen[piece_id]} and {idx}")
        seen[piece_id] = idx
        definitions.append(PieceDefinition.from_dict(raw))
    return Catalog(definitions)


def load_catalog(path: Union[str, Path]) -> Catalog:
    """Load and validate a catalog JSON file.

    Raises:
        CatalogError: if the file is missing, malformed, or invalid.
    """
    try:
        data = load_json_file(path, schema=CATALOG_SCHEMA, log=logger)
    except JsonLoaderError as e:
        raise CatalogError(str(e)) from e
    catalog = catalog_from_dict(data)
    logger.info("Loaded catalog with %d pieces from %s", len(catalog), path)
    return catalog


__all__ = ["CATALOG_SCHEMA", "catalog_from_dict", "load_catalog"]
