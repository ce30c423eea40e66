"""
FixedWidthInput: Reads a fixed-width file and yields one decoded line per record.

Lines are decoded with the ``encoding`` option (default ``utf-8``, undecodable
bytes replaced) and stripped of their ``\\r\\n``/``\\n`` separator only. Empty
lines are skipped; lines of spaces are records whose fields are all blank and
are kept. Splitting a line into fields is left to
:meth:`fixedwidth.engine.record.Record.parse`.
"""
from __future__ import annotations
from typing import Iterator, Tuple

from .base import BaseInput


class FixedWidthInput(BaseInput):
    """
    Input class for fixed-width text files.
    """

    def iter_rows(self) -> Iterator[Tuple[int, str]]:
        """
        Iterate over the file and yield ``(line_number, line)`` pairs.

        :return: 1-based line numbers with the decoded line text.
        :rtype: Iterator[tuple[int, str]]
        """
        encoding = self.opts.get("encoding") or "utf-8"
        with open(self.source, "rb") as fh:
            for line_no, raw in enumerate(fh, start=1):
                line = raw.decode(encoding, errors="replace").rstrip("\r\n")
                if not line:
                    continue
                yield line_no, line
