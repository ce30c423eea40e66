"""printf-style formatting helpers for fixed-width fields.

Only one conversion per format is supported (``%[flags][width][.precision]conv``),
which is all a fixed-width slot needs. Numeric text is coerced the way C
printf coerces it: integer conversions truncate toward zero, float conversions
parse the text as a float. ``%b``/``%B`` are rendered by hand because Python's
``%`` operator does not know them.
"""
from __future__ import annotations
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

__all__ = [
    "INTEGER_CONVERSIONS",
    "FLOAT_CONVERSIONS",
    "NUMERIC_CONVERSIONS",
    "derive_length",
    "is_numeric_format",
    "is_numeric_value",
    "sprintf",
]

INTEGER_CONVERSIONS = frozenset("diuoxXbB")
FLOAT_CONVERSIONS = frozenset("eEfFgG")
NUMERIC_CONVERSIONS = INTEGER_CONVERSIONS | FLOAT_CONVERSIONS

_CONVERSION_RE = re.compile(
    r"%(?P<flags>[-+ 0#]*)(?P<width>\d*)(?:\.(?P<precision>\d+))?(?P<conv>[a-zA-Z])"
)
_NUMERIC_FORMAT_RE = re.compile(r"%[-+ 0#]*\d*(?:\.\d+)?[diuoxXeEfFgGbB]")
_NUMERIC_VALUE_RE = re.compile(r"^(\d+\.?\d*|\.\d+)$")
_LENGTH_RE = re.compile(r"\d+")


def derive_length(fmt: Optional[str]) -> Optional[int]:
    """Return the first run of digits in ``fmt`` as the field width.

    ``%10s`` -> 10, ``%-10s`` -> 10, ``%04d`` -> 4, ``%7.2f`` -> 7.
    Returns ``None`` when the format carries no digits.
    """
    if not fmt:
        return None
    match = _LENGTH_RE.search(fmt)
    return int(match.group(0)) if match else None


def is_numeric_format(fmt: Optional[str]) -> bool:
    return bool(fmt) and _NUMERIC_FORMAT_RE.search(fmt) is not None


def is_numeric_value(value: Any) -> bool:
    """True for unsigned integers or decimal fractions (no sign, no exponent).

    Surrounding whitespace is ignored so space-padded numbers read back from a
    line still count as numeric.
    """
    if value is None or isinstance(value, bool):
        return False
    return _NUMERIC_VALUE_RE.match(str(value).strip()) is not None


def _coerce(conv: str, value: Any) -> Any:
    if conv in INTEGER_CONVERSIONS:
        if isinstance(value, int):
            return value
        try:
            return int(Decimal(str(value).strip()))
        except (InvalidOperation, ValueError):
            raise ValueError(f"cannot format {value!r} with integer conversion '%{conv}'")
    if conv in FLOAT_CONVERSIONS:
        try:
            return float(str(value).strip()) if not isinstance(value, (int, float)) else value
        except ValueError:
            raise ValueError(f"cannot format {value!r} with float conversion '%{conv}'")
    if conv == "s":
        return "" if value is None else str(value)
    return value


def _format_binary(match: re.Match, number: int) -> str:
    flags = match.group("flags")
    width = int(match.group("width") or 0)
    digits = format(abs(number), "b")
    if match.group("precision"):
        digits = digits.zfill(int(match.group("precision")))
    prefix = "-" if number < 0 else ("+" if "+" in flags else (" " if " " in flags else ""))
    if "#" in flags and number:
        prefix += "0" + match.group("conv")
    body = prefix + digits
    if "-" in flags:
        return body.ljust(width)
    if "0" in flags and not match.group("precision"):
        return prefix + digits.rjust(width - len(prefix), "0")
    return body.rjust(width)


def sprintf(fmt: str, value: Any) -> str:
    """Format ``value`` with a single-conversion printf format."""
    match = _CONVERSION_RE.search(fmt)
    if match is None:
        return fmt.replace("%%", "%")
    conv = match.group("conv")
    coerced = _coerce(conv, value)
    if conv in "bB":
        head = fmt[:match.start()].replace("%%", "%")
        tail = fmt[match.end():].replace("%%", "%")
        return head + _format_binary(match, coerced) + tail
    if conv == "u":
        fmt = fmt[:match.end() - 1] + "d" + fmt[match.end():]
    return fmt % (coerced,)
