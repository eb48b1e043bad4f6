"""Configuration layer: constants and typed config dataclasses."""

from genetic_code.config.constants import (
    ENERGY_PER_FOOD,
    ENERGY_PER_STEP,
    FIELD_HEIGHT,
    FIELD_WIDTH,
    FLUSH_THRESHOLD,
    INITIAL_ENERGY,
    INITIAL_FOOD_PERCENT,
    INITIAL_POPULATION,
    INITIAL_WALL_PERCENT,
    MUTATION_RATE,
    NUM_STEPS,
    PERCENT,
    REGROWTH_CADENCE,
    REGROWTH_RATE,
    REPRODUCTION_THRESHOLD,
)
from genetic_code.config.types import (
    PARAMETER_SPECS,
    TUNABLE_PARAMETERS,
    FieldConfig,
    ParameterSpec,
    RunConfig,
    SimulationResult,
    TerminationReason,
)

__all__ = [
    "ENERGY_PER_FOOD",
    "ENERGY_PER_STEP",
    "FIELD_HEIGHT",
    "FIELD_WIDTH",
    "FLUSH_THRESHOLD",
    "FieldConfig",
    "INITIAL_ENERGY",
    "INITIAL_FOOD_PERCENT",
    "INITIAL_POPULATION",
    "INITIAL_WALL_PERCENT",
    "MUTATION_RATE",
    "NUM_STEPS",
    "PARAMETER_SPECS",
    "PERCENT",
    "ParameterSpec",
    "REGROWTH_CADENCE",
    "REGROWTH_RATE",
    "REPRODUCTION_THRESHOLD",
    "RunConfig",
    "SimulationResult",
    "TUNABLE_PARAMETERS",
    "TerminationReason",
]
