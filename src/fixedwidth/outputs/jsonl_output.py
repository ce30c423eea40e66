"""JSON Lines output writer: one object per parsed record in ``<dest>/data.jsonl``."""
from __future__ import annotations
import json

from .base import BaseOutput
from ..types import Row


class JSONLOutput(BaseOutput):
    def _open_data(self) -> None:
        self.data_file_path = self.output_dir / "data.jsonl"
        self.data_handle = self.data_file_path.open("w", encoding="utf-8")

    def _write_row(self, row: Row) -> None:
        self.data_handle.write(json.dumps(row, ensure_ascii=False) + "\n")

    def _close_data(self) -> None:
        if hasattr(self, "data_handle") and not self.data_handle.closed:
            self.data_handle.close()
