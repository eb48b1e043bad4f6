"""Configuration dataclasses and parameter bounds for simulation runs.

Every integer parameter has a documented ``(min, default, max)`` triple in
``PARAMETER_SPECS``; ``FieldConfig.__post_init__`` enforces them. Parameters
flagged ``tunable`` may be changed between ticks through
``Field.update_parameters``; the rest are fixed at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from genetic_code.config import constants as c
from genetic_code.domain.commands import DEFAULT_PROGRAM, Command, CommandSet

__all__ = [
    "FieldConfig",
    "PARAMETER_SPECS",
    "ParameterSpec",
    "RunConfig",
    "SimulationResult",
    "TUNABLE_PARAMETERS",
    "TerminationReason",
]


# ---------------------------------------------------------------------------
# Parameter table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParameterSpec:
    """Bounds and mutability of one integer parameter."""

    name: str
    title: str
    min_value: int
    default: int
    max_value: int
    tunable: bool = False

    def validate(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{self.name} must be an integer")
        if not self.min_value <= value <= self.max_value:
            raise ValueError(f"{self.name} must be in [{self.min_value}, {self.max_value}]")


PARAMETER_SPECS: tuple[ParameterSpec, ...] = (
    ParameterSpec("width", "Field width", 1, c.FIELD_WIDTH, 512),
    ParameterSpec("height", "Field height", 1, c.FIELD_HEIGHT, 512),
    ParameterSpec(
        "initial_food_percent",
        "Initial food on the field in percent",
        0,
        c.INITIAL_FOOD_PERCENT,
        c.PERCENT,
    ),
    ParameterSpec(
        "initial_wall_percent",
        "Initial walls on the field in percent",
        0,
        c.INITIAL_WALL_PERCENT,
        c.PERCENT,
    ),
    ParameterSpec("initial_population", "Initial population", 0, c.INITIAL_POPULATION, 10_000),
    ParameterSpec("initial_energy", "Initial energy", 1, c.INITIAL_ENERGY, 1_000_000),
    ParameterSpec(
        "mutation_rate", "Mutation rate in percent", 0, c.MUTATION_RATE, c.PERCENT, tunable=True
    ),
    ParameterSpec(
        "regrowth_rate", "Regrowth rate in food per 10 ticks", 0, c.REGROWTH_RATE, 100, tunable=True
    ),
    ParameterSpec("energy_per_food", "Energy per food", 0, c.ENERGY_PER_FOOD, 100, tunable=True),
    ParameterSpec(
        "energy_per_step", "Energy loss per step", 0, c.ENERGY_PER_STEP, 10, tunable=True
    ),
    ParameterSpec(
        "reproduction_threshold",
        "Reproduction energy",
        1,
        c.REPRODUCTION_THRESHOLD,
        1_000_000,
        tunable=True,
    ),
    ParameterSpec("seed", "Random seed", 0, 0, c.MAX_SEED),
)

TUNABLE_PARAMETERS: frozenset[str] = frozenset(
    spec.name for spec in PARAMETER_SPECS if spec.tunable
)


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldConfig:
    """World geometry, initial content and energy economy."""

    width: int = c.FIELD_WIDTH
    height: int = c.FIELD_HEIGHT
    wrap_x: bool = True
    wrap_y: bool = True
    initial_food_percent: int = c.INITIAL_FOOD_PERCENT
    initial_wall_percent: int = c.INITIAL_WALL_PERCENT
    initial_population: int = c.INITIAL_POPULATION
    initial_energy: int = c.INITIAL_ENERGY
    mutation_rate: int = c.MUTATION_RATE
    regrowth_rate: int = c.REGROWTH_RATE
    energy_per_food: int = c.ENERGY_PER_FOOD
    energy_per_step: int = c.ENERGY_PER_STEP
    reproduction_threshold: int = c.REPRODUCTION_THRESHOLD
    seed: int = 0
    command_set: CommandSet = CommandSet.EXTENDED
    initial_program: tuple[Command, ...] | None = DEFAULT_PROGRAM
    """Program of every initial entity; None draws a random one per entity."""
    random_program_length: int = c.RANDOM_PROGRAM_LENGTH

    def __post_init__(self) -> None:
        for spec in PARAMETER_SPECS:
            spec.validate(getattr(self, spec.name))
        if self.random_program_length < 1:
            raise ValueError("random_program_length must be >= 1")
        if self.initial_program is not None:
            if not all(isinstance(cmd, Command) for cmd in self.initial_program):
                raise ValueError("initial_program must contain only Command values")


@dataclass(frozen=True)
class RunConfig:
    """Batch-run knobs: duration, logging cadence and output destinations."""

    steps: int = c.NUM_STEPS
    snapshot_interval: int = c.SNAPSHOT_INTERVAL
    """Log per-entity rows every K ticks (0 disables the entity log)."""
    stop_on_extinction: bool = True
    out_dir: Path = Path("data")
    stats_files: tuple[tuple[Path, str], ...] = ()
    """Pattern-formatted statistics destinations as ``(path, pattern)`` pairs."""
    top_programs: int = c.TOP_PROGRAMS

    def __post_init__(self) -> None:
        if self.steps < 1:
            raise ValueError("steps must be >= 1")
        if self.snapshot_interval < 0:
            raise ValueError("snapshot_interval must be >= 0")
        if self.top_programs < 1:
            raise ValueError("top_programs must be >= 1")


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


class TerminationReason(Enum):
    """Why a batch run stopped before its configured step count."""

    EXTINCT = "extinct"


@dataclass(frozen=True)
class SimulationResult:
    """Top-level result for one batch run."""

    run_id: str
    steps_run: int
    final_population: int
    final_food: int
    extinct: bool
    termination_reason: str | None
