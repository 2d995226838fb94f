from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from jsonschema import Draft202012Validator, exceptions as js_exceptions, validators

logger = logging.getLogger(__name__)


class JsonLoaderError(Exception):
    """Base error for JSON loader issues."""


class JsonFileNotFoundError(JsonLoaderError):
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"JSON file not found: {self.path}")


class JsonParseError(JsonLoaderError):
    def __init__(self, source: str, message: str, lineno: Optional[int] = None, colno: Optional[int] = None):
        self.source = source
        self.message = message
        self.lineno = lineno
        self.colno = colno
        location = f" (line {lineno}, column {colno})" if lineno is not None and colno is not None else ""
        super().__init__(f"Failed to parse JSON from {source}{location}: {message}")


class JsonSchemaError(JsonLoaderError):
    def __init__(self, source: str, errors: Sequence[js_exceptions.ValidationError]):
        self.source = source
        self.errors = list(errors)
        super().__init__(format_schema_errors(source, self.errors))


def _extend_with_default(validator_class):
    """Extend a jsonschema validator so that missing properties with a 'default' get it injected."""

    validate_properties = validator_class.VALIDATORS["properties"]

    def set_defaults(validator, properties, instance, schema):
        if isinstance(instance, dict):
            for prop, subschema in properties.items():
                if "default" in subschema and prop not in instance:
                    instance[prop] = deepcopy(subschema["default"])
        for error in validate_properties(validator, properties, instance, schema):
            yield error

    return validators.extend(validator_class, {"properties": set_defaults})


DefaultingValidator = _extend_with_default(Draft202012Validator)


def format_schema_errors(source: str, errors: Sequence[js_exceptions.ValidationError]) -> str:
    lines = [f"Schema validation failed for {source}:"]
    for err in errors:
        where = ".".join(str(p) for p in err.absolute_path) or "root"
        lines.append(f" - At {where}: {err.message}")
    return "\n".join(lines)


def validate_data(data: Any, schema: Mapping[str, Any], *, source: str = "<data>") -> List[str]:
    """Validate ``data`` in place against ``schema``, applying schema defaults.

    Returns the top-level keys that were filled from defaults.
    Raises JsonSchemaError on validation failure.
    """
    before = set(data.keys()) if isinstance(data, dict) else set()
    validator = DefaultingValidator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        raise JsonSchemaError(source, errors)
    after = set(data.keys()) if isinstance(data, dict) else set()
    return sorted(after - before)


def loads_json(text: str, *, source: str = "<string>") -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise JsonParseError(source, e.msg, e.lineno, e.colno) from e


def load_json_file(
    path: Union[str, Path],
    *,
    schema: Optional[Mapping[str, Any]] = None,
    log: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """Load a JSON file and, when a schema is given, validate it and apply its defaults.

    Raises JsonLoaderError subclasses on failure.
    """
    lg = log or logger
    p = Path(path)
    if not p.exists():
        raise JsonFileNotFoundError(p)
    data = loads_json(p.read_text(encoding="utf-8"), source=str(p))
    if schema:
        applied = validate_data(data, schema, source=str(p))
        if applied:
            lg.info("Applied default values for missing keys in %s: %s", p, ", ".join(applied))
    return data


__all__ = [
    "JsonLoaderError",
    "JsonFileNotFoundError",
    "JsonParseError",
    "JsonSchemaError",
    "DefaultingValidator",
    "format_schema_errors",
    "validate_data",
    "loads_json",
    "load_json_file",
]
