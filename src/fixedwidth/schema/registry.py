"""Schema registry: the ordered field layout of a fixed-width record.

A :class:`Schema` holds one :class:`~fixedwidth.types.FieldSpec` per field, in
declaration order. That order is the byte order used by both parse and render.

    schema = Schema()
    schema.declare_fields([
        "fname",  "undef", "%10s",
        "lname",  "undef", "%-10s",
        "points", "0",     "%04d",
    ])
    schema.total_length   # 24
"""
from __future__ import annotations
import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..engine.formatting import derive_length
from ..errors import (
    DuplicateFieldError,
    InvalidArityError,
    InvalidSchemaError,
    UnknownFieldWarning,
    warn,
)
from ..types import FieldSpec, Reader

logger = logging.getLogger(__name__)

UNDEF = "undef"


class Schema:
    """Ordered, name-unique collection of field specs.

    :param fields: Optional iterable of :class:`FieldSpec` objects or mappings
        with ``declare_field`` keyword arguments, declared in order.
    """

    def __init__(self, fields: Iterable[FieldSpec | Mapping[str, Any]] | None = None):
        self._fields: Dict[str, FieldSpec] = {}
        self._order: List[str] = []
        for spec in fields or ():
            if isinstance(spec, FieldSpec):
                self._add(spec)
            else:
                self.declare_field(**dict(spec))

    @staticmethod
    def _resolve_length(name: str, length: Optional[int], fmt: Optional[str]) -> int:
        if length is None:
            length = derive_length(fmt)
            if length is None:
                raise InvalidSchemaError(
                    f"Field '{name}' must have either an explicit length or a format with a width."
                )
        if isinstance(length, bool) or not isinstance(length, int) or length < 1:
            raise InvalidSchemaError(f"Field '{name}' has invalid length {length!r}; must be a positive integer.")
        return length

    def _add(self, spec: FieldSpec) -> FieldSpec:
        if not spec.name:
            raise InvalidSchemaError("Field name must be a non-empty string.")
        if spec.name in self._fields:
            raise DuplicateFieldError(
                f"Field '{spec.name}' is already declared; field names must be unique."
            )
        self._fields[spec.name] = spec
        self._order.append(spec.name)
        logger.debug("declared field %s length=%d format=%r", spec.name, spec.length, spec.format)
        return spec

    def declare_field(
        self,
        name: str,
        length: Optional[int] = None,
        format: Optional[str] = None,
        default: Any = None,
        reader: Optional[Reader] = None,
        truncate: bool = False,
    ) -> FieldSpec:
        """Declare one field at the end of the layout.

        :param name: Unique field name.
        :param length: Width in characters; derived from ``format`` when omitted.
        :param format: printf-style format (``%10s``, ``%-10s``, ``%04d``, ``%7.2f``).
        :param default: Initial raw value of new records (``None`` = unset).
        :param reader: Callable taking the record and returning the value to format.
        :param truncate: Shorten oversized values on set instead of rejecting them.
        :raises DuplicateFieldError: ``name`` already declared.
        :raises InvalidSchemaError: no usable length.
        """
        if name in self._fields:
            raise DuplicateFieldError(f"Field '{name}' is already declared; field names must be unique.")
        resolved = self._resolve_length(name, length, format)
        return self._add(FieldSpec(
            name=name,
            length=resolved,
            format=format,
            default=default,
            reader=reader,
            truncate=bool(truncate),
        ))

    def declare_fields(self, flat: Sequence[Any]) -> bool:
        """Declare fields from a flat ``name, default, format`` sequence.

        A default of ``"undef"`` means no default.

        :raises InvalidArityError: sequence length not a multiple of 3.
        """
        items = list(flat)
        if len(items) % 3 != 0:
            raise InvalidArityError(
                f"declare_fields() requires (name, default, format) triples; got {len(items)} items."
            )
        for i in range(0, len(items), 3):
            name, default, fmt = items[i:i + 3]
            if default == UNDEF:
                default = None
            self.declare_field(name, format=fmt, default=default)
        return True

    def lookup(self, name: str) -> Optional[FieldSpec]:
        return self._fields.get(name)

    def ordered_names(self) -> Tuple[str, ...]:
        return tuple(self._order)

    def fields(self) -> Tuple[FieldSpec, ...]:
        return tuple(self._fields[n] for n in self._order)

    def enable_truncation(self, *names: str) -> bool:
        """Mark existing fields as truncating.

        Unknown names emit :class:`UnknownFieldWarning` and are skipped. Flags
        accumulate: a later call adds to the truncating fields (including those
        declared with ``truncate=True``) and never clears earlier ones.
        """
        for name in names:
            spec = self._fields.get(name)
            if spec is None:
                warn(f"Can't enable truncation on field '{name}' because that field does not exist",
                     UnknownFieldWarning)
                continue
            if not spec.truncate:
                self._fields[name] = replace(spec, truncate=True)
        return True

    @property
    def total_length(self) -> int:
        return sum(spec.length for spec in self._fields.values())

    def offsets(self) -> Dict[str, Tuple[int, int]]:
        """Map each field to its zero-based ``(start, end)`` span in a line."""
        spans: Dict[str, Tuple[int, int]] = {}
        offset = 0
        for name in self._order:
            length = self._fields[name].length
            spans[name] = (offset, offset + length)
            offset += length
        return spans

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields())

    def __repr__(self) -> str:
        return f"Schema({list(self._order)!r}, total_length={self.total_length})"
