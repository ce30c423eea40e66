"""Record engine: parse and render one fixed-width line against a Schema.

A :class:`Record` stores the raw value of every field declared in its
:class:`~fixedwidth.schema.registry.Schema`. Values go in through
:meth:`Record.parse` or :meth:`Record.set` and come out through
:meth:`Record.get` (trimmed raw value), :meth:`Record.get_formatted` (one
fixed-width slot) or :meth:`Record.render` (the whole line).

    rec = Record(schema)
    rec.parse("       JayHannah    0003")
    rec.get("lname")        # 'Hannah'
    rec.set("points", 17)
    rec.render()            # '       JayHannah    0017'

Data problems (oversized values, non-numeric text in a numeric slot, missing
formats) are reported through :mod:`warnings` and answered with a failure value
or a substitute. A format whose output does not match the declared width is a
broken schema and raises :class:`~fixedwidth.errors.FormatLengthError`.
"""
from __future__ import annotations
import copy
import logging
from typing import Any, Dict, Mapping, Optional

from .formatting import is_numeric_format, is_numeric_value, sprintf
from ..errors import (
    FormatLengthError,
    MissingFormatWarning,
    MissingInputError,
    NonNumericValueWarning,
    OversizedValueError,
    OversizedValueWarning,
    TruncationWarning,
    UnknownFieldError,
    warn,
)
from ..schema.registry import Schema
from ..types import FieldSpec, Row

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "%s"


class Record:
    """One live fixed-width record bound to a schema.

    :param schema: Declared field layout. Shared, never copied.
    :param encoding: Used to decode ``bytes`` handed to :meth:`parse`.
    """

    def __init__(self, schema: Schema, encoding: str = "utf-8"):
        self.schema = schema
        self.encoding = encoding
        self._values: Dict[str, Any] = {
            spec.name: copy.deepcopy(spec.default) for spec in schema.fields()
        }

    def _spec(self, name: str, action: str) -> FieldSpec:
        spec = self.schema.lookup(name)
        if spec is None:
            raise UnknownFieldError(f"Can't {action} '{name}'. No such field: {name}")
        return spec

    # ---------------- Parse / render -------------
    def parse(self, line: str | bytes | None, clone: bool = False) -> "Record | bool":
        """Split ``line`` into field values in declaration order.

        Each slice overwrites the stored value with no validation. A line
        shorter than the layout yields short or empty slices.

        :param line: One fixed-width record, without checking its total width.
        :param clone: Parse into an independent copy and return it.
        :returns: The copy when ``clone`` is true, otherwise ``True``.
        :raises MissingInputError: ``line`` is empty or ``None``.
        """
        if not line:
            raise MissingInputError(f"{type(self).__name__}: please provide a line to parse")
        if isinstance(line, (bytes, bytearray)):
            line = bytes(line).decode(self.encoding, errors="replace")

        target = self.clone() if clone else self
        offset = 0
        for spec in target.schema.fields():
            target._values[spec.name] = line[offset:offset + spec.length]
            offset += spec.length
        if len(line) < offset:
            logger.debug("parsed short line: %d of %d characters", len(line), offset)
        return target if clone else True

    def _format_field(self, spec: FieldSpec) -> Optional[str]:
        value = spec.reader(self) if spec.reader is not None else self._values.get(spec.name)
        if value is None:
            value = ""
        text = _measured_text(value)
        if isinstance(value, float):
            value = text

        if len(text) > spec.length:
            warn(
                f"render error: length of field '{spec.name}' cannot exceed {spec.length}, "
                f"but it does. Please shorten the value '{text}'",
                OversizedValueWarning,
                stacklevel=4,
            )
            return None

        fmt = spec.format
        if not fmt and spec.reader is not None:
            fmt = DEFAULT_FORMAT
        elif not fmt:
            warn(f"render error: format not set on field '{spec.name}'. Using '{DEFAULT_FORMAT}'",
                 MissingFormatWarning, stacklevel=4)
            fmt = DEFAULT_FORMAT

        if is_numeric_format(fmt) and not is_numeric_value(text):
            warn(
                f"render warning: field '{spec.name}' contains '{text}' which is not numeric, "
                f"yet the format '{fmt}' is numeric. Using 0",
                NonNumericValueWarning,
                stacklevel=4,
            )
            value = 0

        formatted = sprintf(fmt, value)
        if len(formatted) != spec.length:
            raise FormatLengthError(
                f"Format '{fmt}' of field '{spec.name}' turned value '{text}' into '{formatted}', "
                f"which is {len(formatted)} characters long instead of {spec.length}. Please correct the schema."
            )
        return formatted

    def render(self) -> Optional[str]:
        """Render every field in order into one line.

        :returns: The line, or ``None`` if any field value is too long
            (nothing partial is returned).
        :raises FormatLengthError: a field's format yields the wrong width.
        """
        parts = []
        for spec in self.schema.fields():
            formatted = self._format_field(spec)
            if formatted is None:
                return None
            parts.append(formatted)
        return "".join(parts)

    def get_formatted(self, name: str) -> Optional[str]:
        """Render a single field's fixed-width slot, or ``None`` if it is too long."""
        return self._format_field(self._spec(name, "get_formatted"))

    # ---------------- Field access ----------------
    def get(self, name: str) -> Any:
        """Return the raw stored value with surrounding whitespace removed."""
        self._spec(name, "get")
        value = self._values.get(name)
        if isinstance(value, str):
            return value.strip()
        return value

    def set(self, name: str, value: Any) -> bool:
        """Store ``value`` verbatim if it fits the field.

        Oversized values are shortened when the field truncates; otherwise they
        are rejected with :class:`OversizedValueWarning` and ``False`` is
        returned, leaving the previous value in place.
        """
        spec = self._spec(name, "set")
        if value is not None and len(_measured_text(value)) > spec.length:
            if not spec.truncate:
                warn(f"Can't set '{name}' to '{value}'. Value must be {spec.length} characters or shorter",
                     OversizedValueWarning)
                return False
            truncated = _measured_text(value)[:spec.length]
            warn(f"Truncated value of '{name}' from '{value}' to '{truncated}'", TruncationWarning)
            value = truncated
        self._values[name] = value
        return True

    def update(self, values: Mapping[str, Any]) -> bool:
        """``set`` each pair; ``False`` if any value was rejected."""
        ok = True
        for name, value in values.items():
            ok = self.set(name, value) and ok
        return ok

    def to_dict(self, stripped: bool = True) -> Row:
        if stripped:
            return {name: self.get(name) for name in self.schema.ordered_names()}
        return {name: self._values.get(name) for name in self.schema.ordered_names()}

    def clone(self) -> "Record":
        """Return an independent copy sharing the schema."""
        other = type(self).__new__(type(self))
        other.schema = self.schema
        other.encoding = self.encoding
        other._values = copy.deepcopy(self._values)
        return other

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        if not self.set(name, value):
            spec = self._spec(name, "set")
            raise OversizedValueError(f"Value for '{name}' must be {spec.length} characters or shorter")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict(stripped=False)!r})"


def _measured_text(value: Any) -> str:
    """Text whose length is checked against a field width.

    Floats are measured by their ``%.15g`` form so binary rounding noise
    (``0.1 + 0.2``) does not count against the width.
    """
    if isinstance(value, float):
        return "%.15g" % value
    return str(value)
