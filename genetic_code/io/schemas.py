"""Parquet schema definitions for simulation artifacts.

All Arrow schemas used for persisting population and entity logs are
centralised here so that the engine, the renderers and the tests work
against the same column contracts.
"""

from __future__ import annotations

import pyarrow as pa

RUN_PAYLOAD_SCHEMA_VERSION = 1

POPULATION_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("step", pa.int64()),
        ("population", pa.int64()),
        ("population_delta", pa.int64()),
        ("food", pa.int64()),
        ("walls", pa.int64()),
        ("births", pa.int64()),
        ("deaths", pa.int64()),
        ("distinct_programs", pa.int64()),
        ("mean_energy", pa.float64()),
    ]
)

ENTITY_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("step", pa.int64()),
        ("entity_id", pa.int64()),
        ("x", pa.int64()),
        ("y", pa.int64()),
        ("direction", pa.string()),
        ("energy", pa.int64()),
        ("program", pa.string()),
        ("program_length", pa.int64()),
    ]
)
