"""Batch driver: ticks a seeded field and persists population/entity logs."""

from __future__ import annotations

import json
from pathlib import Path

import pyarrow.parquet as pq

from genetic_code.config.constants import FLUSH_THRESHOLD
from genetic_code.config.types import (
    FieldConfig,
    RunConfig,
    SimulationResult,
    TerminationReason,
)
from genetic_code.domain.field import Field
from genetic_code.domain.snapshot import FieldSnapshot, TickReport
from genetic_code.io.paths import (
    entity_log_path,
    logs_dir,
    population_log_path,
    run_payload_path,
    runs_dir,
)
from genetic_code.io.schemas import (
    ENTITY_LOG_SCHEMA,
    POPULATION_LOG_SCHEMA,
    RUN_PAYLOAD_SCHEMA_VERSION,
)
from genetic_code.simulation.persistence import empty_columns, flush_columns, write_empty_log
from genetic_code.stats.line_format import StatisticsWriter
from genetic_code.stats.programs import (
    mean_energy,
    program_census,
    program_label,
    top_programs,
)
from genetic_code.stats.sampler import StatisticsSampler


def deterministic_run_id(config: FieldConfig) -> str:
    """Build a run ID stable across runs for identical seeds and geometry."""
    return f"seed{config.seed}_w{config.width}_h{config.height}"


def _append_population_row(
    columns: dict[str, list[int | str | float | None]],
    run_id: str,
    snapshot: FieldSnapshot,
    report: TickReport,
    population_delta: int,
) -> None:
    columns["run_id"].append(run_id)
    columns["step"].append(snapshot.step)
    columns["population"].append(snapshot.population)
    columns["population_delta"].append(population_delta)
    columns["food"].append(snapshot.food_count)
    columns["walls"].append(len(snapshot.walls))
    columns["births"].append(report.births)
    columns["deaths"].append(report.deaths)
    columns["distinct_programs"].append(len(program_census(snapshot)))
    columns["mean_energy"].append(mean_energy(snapshot))


def _append_entity_rows(
    columns: dict[str, list[int | str | float | None]],
    run_id: str,
    snapshot: FieldSnapshot,
) -> None:
    for entity in snapshot.entities:
        columns["run_id"].append(run_id)
        columns["step"].append(snapshot.step)
        columns["entity_id"].append(entity.entity_id)
        columns["x"].append(entity.x)
        columns["y"].append(entity.y)
        columns["direction"].append(entity.direction)
        columns["energy"].append(entity.energy)
        columns["program"].append(entity.program_label)
        columns["program_length"].append(len(entity.program))


def run_simulation(
    field_config: FieldConfig,
    run_config: RunConfig,
    field: Field | None = None,
) -> SimulationResult:
    """Tick a field for ``run_config.steps`` ticks and persist its logs.

    When *field* is given it is driven as-is (already populated); otherwise a
    fresh field is created from *field_config*. Writes
    ``logs/population_log.parquet``, ``logs/entity_log.parquet`` (when
    ``snapshot_interval > 0``) and ``runs/<run_id>.json`` under
    ``run_config.out_dir``.
    """
    world = field if field is not None else Field.create(field_config)
    run_id = deterministic_run_id(world.config)

    out_dir = Path(run_config.out_dir)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    runs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    population_path = population_log_path(out_dir)
    entity_path = entity_log_path(out_dir)

    population_columns = empty_columns(POPULATION_LOG_SCHEMA)
    entity_columns = empty_columns(ENTITY_LOG_SCHEMA)
    population_writer: pq.ParquetWriter | None = None
    entity_writer: pq.ParquetWriter | None = None
    sampler = StatisticsSampler()
    total_births = 0
    total_deaths = 0
    termination_reason: str | None = None
    snapshot = world.snapshot()

    try:
        with StatisticsWriter(run_config.stats_files) as stats_writer:
            for _ in range(run_config.steps):
                report = world.tick()
                snapshot = world.snapshot()
                point = sampler.sample(snapshot)
                stats_writer.update(snapshot)
                total_births += report.births
                total_deaths += report.deaths

                _append_population_row(
                    population_columns, run_id, snapshot, report, point.population_delta
                )
                interval = run_config.snapshot_interval
                if interval > 0 and snapshot.step % interval == 0:
                    _append_entity_rows(entity_columns, run_id, snapshot)

                if len(population_columns["run_id"]) >= FLUSH_THRESHOLD:
                    population_writer = flush_columns(
                        population_columns,
                        population_path,
                        POPULATION_LOG_SCHEMA,
                        population_writer,
                    )
                if len(entity_columns["run_id"]) >= FLUSH_THRESHOLD:
                    entity_writer = flush_columns(
                        entity_columns, entity_path, ENTITY_LOG_SCHEMA, entity_writer
                    )

                if snapshot.population == 0 and run_config.stop_on_extinction:
                    termination_reason = TerminationReason.EXTINCT.value
                    break

        population_writer = flush_columns(
            population_columns, population_path, POPULATION_LOG_SCHEMA, population_writer
        )
        entity_writer = flush_columns(
            entity_columns, entity_path, ENTITY_LOG_SCHEMA, entity_writer
        )
    finally:
        if population_writer is not None:
            population_writer.close()
        if entity_writer is not None:
            entity_writer.close()

    if run_config.snapshot_interval > 0 and entity_writer is None:
        write_empty_log(entity_path, ENTITY_LOG_SCHEMA)

    config = world.config
    result = SimulationResult(
        run_id=run_id,
        steps_run=snapshot.step,
        final_population=snapshot.population,
        final_food=snapshot.food_count,
        extinct=snapshot.population == 0,
        termination_reason=termination_reason,
    )
    run_payload = {
        "run_id": run_id,
        "steps_run": result.steps_run,
        "final_population": result.final_population,
        "final_food": result.final_food,
        "extinct": result.extinct,
        "total_births": total_births,
        "total_deaths": total_deaths,
        "top_programs": [
            {"program": label, "count": count}
            for label, count in top_programs(snapshot, run_config.top_programs)
        ],
        "metadata": {
            "seed": config.seed,
            "steps": run_config.steps,
            "width": config.width,
            "height": config.height,
            "wrap_x": config.wrap_x,
            "wrap_y": config.wrap_y,
            "initial_food_percent": config.initial_food_percent,
            "initial_wall_percent": config.initial_wall_percent,
            "initial_population": config.initial_population,
            "initial_energy": config.initial_energy,
            "mutation_rate": config.mutation_rate,
            "regrowth_rate": config.regrowth_rate,
            "energy_per_food": config.energy_per_food,
            "energy_per_step": config.energy_per_step,
            "reproduction_threshold": config.reproduction_threshold,
            "command_set": config.command_set.value,
            "initial_program": (
                None
                if config.initial_program is None
                else program_label(config.initial_program)
            ),
            "random_program_length": config.random_program_length,
            "snapshot_interval": run_config.snapshot_interval,
            "termination_reason": termination_reason,
            "schema_version": RUN_PAYLOAD_SCHEMA_VERSION,
        },
    }
    run_payload_path(out_dir, run_id).write_text(
        json.dumps(run_payload, ensure_ascii=False, indent=2)
    )
    return result
