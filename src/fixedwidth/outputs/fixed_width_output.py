"""Fixed-width output writer.

Writes each rendered line (the ``_line`` key of the row) to ``<dest>/<filename>``
followed by ``newline``. Default file name is ``data.txt``.
"""
from __future__ import annotations
from typing import Any

from .base import BaseOutput
from ..schema.registry import Schema
from ..types import Row

LINE_KEY = "_line"


class FixedWidthOutput(BaseOutput):
    def __init__(self, dest: str, schema: Schema, *, filename: str = "data.txt",
                 newline: str = "\n", encoding: str = "utf-8", **kwargs: Any):
        super().__init__(dest, schema, **kwargs)
        self.filename = filename
        self.newline = newline
        self.encoding = encoding

    def _open_data(self) -> None:
        self.data_file_path = self.output_dir / self.filename
        self.data_handle = self.data_file_path.open("w", encoding=self.encoding, newline="")

    def _write_row(self, row: Row) -> None:
        self.data_handle.write(row[LINE_KEY] + self.newline)

    def _close_data(self) -> None:
        if hasattr(self, "data_handle") and not self.data_handle.closed:
            self.data_handle.close()
