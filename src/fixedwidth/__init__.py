"""Schema-driven fixed-width record parsing and rendering."""
from .engine.record import Record
from .errors import (
    DuplicateFieldError,
    FixedWidthError,
    FixedWidthWarning,
    FormatLengthError,
    InvalidArityError,
    InvalidSchemaError,
    MissingInputError,
    UnknownFieldError,
)
from .schema.registry import Schema
from .types import FieldSpec

__version__ = "0.1.0"

__all__ = [
    "DuplicateFieldError",
    "FieldSpec",
    "FixedWidthError",
    "FixedWidthWarning",
    "FormatLengthError",
    "InvalidArityError",
    "InvalidSchemaError",
    "MissingInputError",
    "Record",
    "Schema",
    "UnknownFieldError",
    "__version__",
]
