"""Centralized domain constants for the simulation engine.

Defaults for every configurable parameter and the fixed engine constants
live here. Consuming modules should import from this module rather than
defining their own inline literals.
"""

from __future__ import annotations

PERCENT = 100
"""Denominator for every percentage-valued parameter."""

REGROWTH_CADENCE = 10
"""Countdown value restored after each food injection."""

FIELD_WIDTH = 100
"""Default field width in cells."""

FIELD_HEIGHT = 100
"""Default field height in cells."""

INITIAL_FOOD_PERCENT = 25
"""Default share of cells seeded with food at reset."""

INITIAL_WALL_PERCENT = 0
"""Default share of cells seeded with walls at reset."""

INITIAL_POPULATION = 1
"""Default number of entities placed at reset."""

INITIAL_ENERGY = 1000
"""Energy of every entity placed at reset."""

MUTATION_RATE = 50
"""Default chance (percent) that an offspring program is edited."""

REGROWTH_RATE = 40
"""Default number of food cells injected every REGROWTH_CADENCE ticks."""

ENERGY_PER_FOOD = 10
"""Default energy gained per consumed food cell."""

ENERGY_PER_STEP = 1
"""Default energy lost by every entity on every tick."""

REPRODUCTION_THRESHOLD = 100
"""Default energy an entity must exceed to split."""

RANDOM_PROGRAM_LENGTH = 5
"""Length of randomly generated initial programs."""

NUM_STEPS = 1000
"""Default number of ticks per batch run."""

SNAPSHOT_INTERVAL = 10
"""Log per-entity state every K ticks."""

TOP_PROGRAMS = 10
"""Number of most common programs reported per run."""

FLUSH_THRESHOLD = 8_192
"""Flush buffered log rows to Parquet once this in-memory row count is reached."""

MAX_SEED = 2**32 - 1
"""Largest accepted RNG seed."""
