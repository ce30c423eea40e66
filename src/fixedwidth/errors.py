"""Exceptions and warning categories raised by fixedwidth.

Exceptions signal failures the caller must handle (broken schemas, unknown
fields, missing input). Warnings are the recoverable diagnostic channel: the
operation carries on (or returns a failure value) and the warning records what
happened. Filters are left to the application (the CLI installs a
``default`` filter); escalate them with ``warnings.simplefilter("error", FixedWidthWarning)``.
"""
from __future__ import annotations
import warnings


class FixedWidthError(Exception):
    """Base error for this package."""


class SchemaError(FixedWidthError):
    """Raised when a schema is declared or configured incorrectly."""


class DuplicateFieldError(SchemaError):
    """Raised when a field name is declared twice in the same schema."""


class InvalidSchemaError(SchemaError):
    """Raised when a field's length cannot be determined or is not positive."""


class InvalidArityError(SchemaError):
    """Raised when bulk declaration is not given complete (name, default, format) triples."""


class FormatLengthError(SchemaError):
    """Raised when a field's format produces output of the wrong width."""


class LayoutValidationError(SchemaError):
    """Raised when a JSON layout document fails structural validation."""


class MissingInputError(FixedWidthError, ValueError):
    """Raised when parse() is handed an empty or missing line."""


class UnknownFieldError(FixedWidthError, KeyError):
    """Raised on access to a field name that was never declared."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class OversizedValueError(FixedWidthError, ValueError):
    """Raised by item assignment when a value does not fit its field."""


class FixedWidthWarning(UserWarning):
    """Base category for recoverable diagnostics."""


class OversizedValueWarning(FixedWidthWarning):
    """A value is longer than its field and truncation is not enabled."""


class MissingFormatWarning(FixedWidthWarning):
    """A field has no format; ``%s`` is used."""


class NonNumericValueWarning(FixedWidthWarning):
    """A numeric format received a non-numeric value; ``0`` is used."""


class UnknownFieldWarning(FixedWidthWarning):
    """A non-fatal operation named a field that does not exist."""


class TruncationWarning(FixedWidthWarning):
    """A value was shortened to fit its field."""


def warn(message: str, category: type[FixedWidthWarning], stacklevel: int = 3) -> None:
    warnings.warn(message, category, stacklevel=stacklevel)
