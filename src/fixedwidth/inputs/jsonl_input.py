"""
JSONLInput: Reads JSON Lines and yields one row dict per line.

Used as the source of the render direction: every object holds field values
keyed by field name.
"""
from __future__ import annotations
import json
from typing import Iterator, Tuple

from .base import BaseInput
from ..types import Row


class JSONLInput(BaseInput):
    def iter_rows(self) -> Iterator[Tuple[int, Row]]:
        """
        Yield ``(line_number, row)`` pairs, skipping blank lines.

        :raises ValueError: a line holds valid JSON that is not an object.
        """
        encoding = self.opts.get("encoding") or "utf-8"
        with open(self.source, "r", encoding=encoding) as fh:
            for line_no, raw in enumerate(fh, start=1):
                if not raw.strip():
                    continue
                row = json.loads(raw)
                if not isinstance(row, dict):
                    raise ValueError(f"{self.source}:{line_no}: expected a JSON object, got {type(row).__name__}")
                yield line_no, row
