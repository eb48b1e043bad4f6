"""Simulation driver: batch runs with Parquet persistence."""

from genetic_code.simulation.engine import run_simulation
from genetic_code.simulation.persistence import flush_columns

__all__ = ["flush_columns", "run_simulation"]
