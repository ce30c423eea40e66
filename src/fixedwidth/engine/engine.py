from __future__ import annotations
import logging
import warnings
from typing import Any, Dict, Iterable, Iterator, Tuple

from .record import Record
from .registry import get_input_cls, get_output_cls
from ..errors import FixedWidthWarning, MissingInputError, OversizedValueError, UnknownFieldError
from ..outputs.fixed_width_output import LINE_KEY
from ..schema.registry import Schema
from ..types import RecordResult, Row

logger = logging.getLogger(__name__)

# Recoverable per-record failures; FormatLengthError (a broken schema) propagates.
_RECORD_ERRORS = (MissingInputError, UnknownFieldError, OversizedValueError, ValueError)


class Engine:
    def __init__(
            self,
            schema: Schema,
            input_kind: str = "fixedwidth",
            output_kind: str = "jsonl",
            encoding: str = "utf-8",
            strict_length: bool = False,
            strip_values: bool = False,
            **output_opts: Any,
    ) -> None:
        """Wire a schema to an input and an output plugin.

        The direction follows the input: ``fixedwidth`` input parses lines into
        rows (for ``jsonl`` or ``parquet`` output); ``jsonl`` input renders rows
        into lines (for ``fixedwidth`` output).

        :param schema: Declared field layout, shared read-only by every record.
        :param input_kind: Registered input kind.
        :param output_kind: Registered output kind.
        :param encoding: Encoding of fixed-width files, read or written.
        :param strict_length: Quarantine lines whose width differs from the
            schema's total length instead of parsing them permissively.
        :param strip_values: Trim surrounding whitespace from parsed values.
            By default rows keep each slice exactly as read, padding included,
            so rendering them again reproduces the original line.
        :param output_opts: Additional keyword options forwarded to the output class.
        """
        self.schema = schema
        self.encoding = encoding
        self.strict_length = strict_length
        self.strip_values = strip_values
        self.input_kind = input_kind
        self.output_kind = output_kind
        if input_kind == "fixedwidth" and output_kind == "fixedwidth":
            raise ValueError("fixedwidth input must be paired with a row output (jsonl or parquet)")
        if input_kind != "fixedwidth" and output_kind != "fixedwidth":
            raise ValueError(f"{input_kind} input must be paired with fixedwidth output")
        self.Input = get_input_cls(input_kind)
        self.Output = get_output_cls(output_kind)
        self.output_opts = output_opts
        if output_kind == "fixedwidth":
            self.output_opts.setdefault("encoding", encoding)
        self._template = Record(schema, encoding=encoding)

    def parse_line(self, line_no: int, line: str) -> RecordResult:
        """Parse one line into a row dict, capturing warnings and record errors."""
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", FixedWidthWarning)
            try:
                if self.strict_length and len(line) != self.schema.total_length:
                    raise ValueError(
                        f"line {line_no}: expected {self.schema.total_length} characters, got {len(line)}"
                    )
                record = self._template.parse(line, clone=True)
                result = RecordResult(row=record.to_dict(stripped=self.strip_values), error=None)
            except _RECORD_ERRORS as exc:
                result = RecordResult(row={LINE_KEY: line}, error=exc)
        result.warnings = [str(w.message) for w in caught]
        return result

    def render_row(self, line_no: int, row: Row) -> RecordResult:
        """Render one row dict into a line, capturing warnings and record errors."""
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", FixedWidthWarning)
            try:
                record = Record(self.schema, encoding=self.encoding)
                if not record.update(row):
                    raise OversizedValueError(f"record {line_no}: a value does not fit its field")
                line = record.render()
                if line is None:
                    raise OversizedValueError(f"record {line_no}: render failed")
                result = RecordResult(row={LINE_KEY: line}, error=None)
            except _RECORD_ERRORS as exc:
                result = RecordResult(row=dict(row), error=exc)
        result.warnings = [str(w.message) for w in caught]
        return result

    def iter_results(self, items: Iterable[Tuple[int, Any]]) -> Iterator[RecordResult]:
        convert = self.parse_line if self.input_kind == "fixedwidth" else self.render_row
        for line_no, item in items:
            rr = convert(line_no, item)
            if rr.error is not None:
                logger.warning("record %d rejected: %s", line_no, rr.error)
            else:
                for message in rr.warnings:
                    logger.info("record %d: %s", line_no, message)
            yield rr

    def run(self, source: str, dest: str) -> Dict[str, int]:
        """Execute read → convert → write.

        Accepted records are written, failures are quarantined.

        :param source: Input file path.
        :param dest: Output directory.
        :return: Output counters (``read``, ``kept``, ``rejected``).
        """
        input_opts = {"encoding": self.encoding} if self.input_kind == "fixedwidth" else {}
        input_plugin = self.Input(source, **input_opts)
        output_plugin = self.Output(dest, schema=self.schema, **self.output_opts)

        output_plugin.open()
        try:
            for rr in self.iter_results(input_plugin.iter_rows()):
                if rr.error is None:
                    output_plugin.write(rr.row)
                else:
                    output_plugin.quarantine(rr)
        finally:
            output_plugin.close()
        logger.info("%s -> %s: %s", source, dest, output_plugin.counters)
        return output_plugin.counters
