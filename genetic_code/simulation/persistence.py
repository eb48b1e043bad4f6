"""Parquet persistence helpers for buffered log columns."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq


def flush_columns(
    columns: dict[str, list[int | str | float | None]],
    path: Path,
    schema: pa.Schema,
    writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated rows to Parquet and clear the in-memory buffers.

    The writer is opened lazily on the first non-empty flush and returned so
    the caller can keep appending row groups to the same file.
    """
    if not columns["run_id"]:
        return writer
    table = pa.Table.from_pydict(columns, schema=schema)
    if writer is None:
        writer = pq.ParquetWriter(path, schema)
    writer.write_table(table)
    for values in columns.values():
        values.clear()
    return writer


def empty_columns(schema: pa.Schema) -> dict[str, list[int | str | float | None]]:
    return {name: [] for name in schema.names}


def write_empty_log(path: Path, schema: pa.Schema) -> None:
    """Create a zero-row Parquet file so downstream readers always find the log."""
    pq.write_table(schema.empty_table(), path)
