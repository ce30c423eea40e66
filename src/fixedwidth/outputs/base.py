from __future__ import annotations
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict

from ..schema.registry import Schema
from ..types import RecordResult, Row


class BaseOutput(ABC):
    """Abstract base for output writers.

    Every writer produces, under the ``dest`` directory, its data file plus:

    * ``_quarantine.jsonl`` – one JSON object per rejected record (may be empty)
    * ``_manifest.json`` – summary counters: ``read``, ``kept``, ``rejected``

    :param dest: Output directory path (created if missing).
    :param schema: Field layout of the records being written.
    :param opts: Additional implementation-specific options.
    """
    def __init__(self, dest: str, schema: Schema, **opts: Any):
        self.dest = dest
        self.schema = schema
        self.opts = opts
        self.counters: Dict[str, int] = {"read": 0, "kept": 0, "rejected": 0}

    def open(self) -> None:
        """Create the destination directory and the quarantine file."""
        self.output_dir = Path(self.dest)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.quarantine_file_path = self.output_dir / "_quarantine.jsonl"
        self.quarantine_handle = self.quarantine_file_path.open("w", encoding="utf-8")
        self.counters = {"read": 0, "kept": 0, "rejected": 0}
        self._open_data()

    def write(self, row: Row) -> None:
        """Persist a single accepted row.

        :param row: Row dictionary to write.
        """
        self.counters["read"] += 1
        self.counters["kept"] += 1
        self._write_row(row)

    def quarantine(self, rr: RecordResult) -> None:
        """Record a rejected record and its associated error.

        :param rr: RecordResult containing original row, error and warnings.
        """
        self.counters["read"] += 1
        self.counters["rejected"] += 1
        payload = {"row": rr.row, "error": str(rr.error), "warnings": rr.warnings}
        self.quarantine_handle.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")

    def close(self) -> None:
        """Flush data, close the quarantine file and write the manifest."""
        try:
            self._close_data()
            if hasattr(self, "quarantine_handle") and not self.quarantine_handle.closed:
                self.quarantine_handle.close()
        finally:
            manifest = self.output_dir / "_manifest.json"
            manifest.write_text(json.dumps(self.counters, indent=2), encoding="utf-8")

    @abstractmethod
    def _open_data(self) -> None:
        ...

    @abstractmethod
    def _write_row(self, row: Row) -> None:
        ...

    @abstractmethod
    def _close_data(self) -> None:
        ...
