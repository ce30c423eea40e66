"""Build a :class:`Schema` from a JSON layout document.

Layout documents describe fields either as objects or as a flat triple list::

    {
      "encoding": "latin-1",
      "fields": [
        {"name": "fname", "format": "%10s"},
        {"name": "points", "format": "%04d", "default": "0", "truncate": true}
      ],
      "truncate": ["fname"]
    }

    {"attributes": ["fname", "undef", "%10s", "points", "0", "%04d"]}

Documents are checked against :data:`LAYOUT_SCHEMA` with ``jsonschema``
before any field is declared.
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Optional

from jsonschema import Draft202012Validator, ValidationError

from ..errors import LayoutValidationError
from .registry import Schema

__all__ = ["LAYOUT_SCHEMA", "LayoutValidator", "schema_from_layout", "load_layout"]

LAYOUT_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "encoding": {"type": "string", "minLength": 1},
        "fields": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "length": {"type": "integer", "minimum": 1},
                    "format": {"type": "string", "pattern": "%"},
                    "default": {"type": ["string", "number", "null"]},
                    "truncate": {"type": "boolean"},
                },
                "required": ["name"],
                "anyOf": [{"required": ["format"]}, {"required": ["length"]}],
                "additionalProperties": False,
            },
        },
        "attributes": {"type": "array", "items": {"type": ["string", "number", "null"]}},
        "truncate": {"type": "array", "items": {"type": "string"}},
    },
    "oneOf": [{"required": ["fields"]}, {"required": ["attributes"]}],
    "additionalProperties": False,
}


class LayoutValidator:
    def __init__(self, schema: Dict[str, Any] | None = None):
        self._validator = Draft202012Validator(schema or LAYOUT_SCHEMA)

    def validate(self, document: Dict[str, Any]) -> Optional[ValidationError]:
        try:
            self._validator.validate(document)
            return None
        except ValidationError as e:
            return e


def schema_from_layout(document: Dict[str, Any]) -> Schema:
    """Validate ``document`` and declare its fields into a new Schema.

    :raises LayoutValidationError: the document does not match :data:`LAYOUT_SCHEMA`.
    """
    error = LayoutValidator().validate(document)
    if error is not None:
        location = "/".join(str(p) for p in error.absolute_path) or "<root>"
        raise LayoutValidationError(f"Invalid layout at {location}: {error.message}") from error

    schema = Schema()
    if "attributes" in document:
        schema.declare_fields(document["attributes"])
    for field in document.get("fields", []):
        schema.declare_field(**field)
    if document.get("truncate"):
        schema.enable_truncation(*document["truncate"])
    return schema


def load_layout(path: str | Path) -> tuple[Schema, str]:
    """Read a layout file and return ``(schema, encoding)``."""
    document = json.loads(Path(path).read_text(encoding="utf-8"))
    return schema_from_layout(document), document.get("encoding", "utf-8")
