"""Parquet output writer.

Writes parsed records to ``<dest>/data.parquet``, one string column per
declared field in declaration order. Default mode is vectorized via
``polars``: rows are buffered and written once on close. ``mode='chunked'``
appends row batches through a ``pyarrow.parquet.ParquetWriter`` whenever
``chunk_size`` rows are buffered, for files too large to hold in memory.
"""
from __future__ import annotations
from typing import Any, List, Literal

import polars as pl
import pyarrow as pa
import pyarrow.parquet as pq

from .base import BaseOutput
from ..schema.registry import Schema
from ..types import Row


class ParquetOutput(BaseOutput):
    """Parquet output writer.

    :param dest: Output directory path (created if missing).
    :param schema: Field layout; its names become the column list.
    :param mode: ``vectorized`` or ``chunked``.
    :param chunk_size: Row count threshold for flushing in ``chunked`` mode.
    :param compression: Parquet compression codec (default ``snappy``).
    """

    def __init__(
        self,
        dest: str,
        schema: Schema,
        *,
        mode: str = "vectorized",
        chunk_size: int = 50_000,
        compression: str = "snappy",
        **kwargs: Any,
    ):
        super().__init__(dest, schema, **kwargs)
        allowed_comp: set[str] = {"snappy", "gzip", "brotli", "zstd", "lz4", "uncompressed"}
        if compression not in allowed_comp:
            raise ValueError(f"Unsupported compression '{compression}'. Allowed: {sorted(allowed_comp)}")
        self.compression: Literal["snappy", "gzip", "brotli", "zstd", "lz4", "uncompressed"] = compression  # type: ignore[assignment]
        self.mode = mode.lower()
        if self.mode not in {"vectorized", "chunked"}:
            raise ValueError("mode must be 'vectorized' or 'chunked'")
        self.chunk_size = chunk_size
        self.columns = list(schema.ordered_names())
        self.row_buffer: List[Row] = []
        self._writer: pq.ParquetWriter | None = None

    def _open_data(self) -> None:
        self.data_file_path = self.output_dir / "data.parquet"
        self.row_buffer = []

    def _write_row(self, row: Row) -> None:
        self.row_buffer.append({name: _as_text(row.get(name)) for name in self.columns})
        if self.mode == "chunked" and len(self.row_buffer) >= self.chunk_size:
            self._flush_chunk()

    def _arrow_schema(self) -> pa.Schema:
        return pa.schema([(name, pa.string()) for name in self.columns])

    def _flush_chunk(self) -> None:
        if not self.row_buffer:
            return
        table_pa = pa.Table.from_pylist(self.row_buffer, schema=self._arrow_schema())
        if self._writer is None:
            self._writer = pq.ParquetWriter(self.data_file_path, table_pa.schema, compression=self.compression)
        self._writer.write_table(table_pa)
        self.row_buffer.clear()

    def _close_data(self) -> None:
        if self.mode == "chunked":
            self._flush_chunk()
            if self._writer is not None:
                self._writer.close()
                self._writer = None
            return
        if not self.row_buffer:
            return
        df = pl.DataFrame(self.row_buffer, schema={name: pl.Utf8 for name in self.columns})
        df.write_parquet(self.data_file_path, compression=self.compression)
        self.row_buffer.clear()


def _as_text(value: Any) -> str | None:
    return None if value is None else str(value)
