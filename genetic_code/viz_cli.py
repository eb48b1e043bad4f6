"""Visualization CLI: population time series and replayed field frames."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from genetic_code.config.constants import RANDOM_PROGRAM_LENGTH
from genetic_code.config.types import PARAMETER_SPECS, FieldConfig
from genetic_code.domain.commands import CommandSet
from genetic_code.domain.field import Field
from genetic_code.domain.program import parse_program
from genetic_code.viz.render import render_field_snapshot, render_population_timeseries


def _parse_series(raw: str) -> tuple[str, ...]:
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    if not items:
        raise ValueError("--series must name at least one column")
    return items


def field_config_from_payload(payload: dict[str, object]) -> FieldConfig:
    """Rebuild the ``FieldConfig`` recorded in a run payload's metadata."""
    metadata = payload["metadata"]
    if not isinstance(metadata, dict):
        raise ValueError("run payload has no metadata object")
    parameters = {
        spec.name: int(metadata[spec.name])
        for spec in PARAMETER_SPECS
        if spec.name in metadata
    }
    program = metadata.get("initial_program")
    return FieldConfig(
        **parameters,
        wrap_x=bool(metadata.get("wrap_x", True)),
        wrap_y=bool(metadata.get("wrap_y", True)),
        command_set=CommandSet(metadata.get("command_set", CommandSet.EXTENDED.value)),
        initial_program=None if program is None else parse_program(str(program)).commands,
        random_program_length=int(metadata.get("random_program_length", RANDOM_PROGRAM_LENGTH)),
    )


def _build_timeseries_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("timeseries", help="Plot population log columns over steps")
    p.set_defaults(func=_handle_timeseries)
    p.add_argument("--population-log", type=Path, required=True)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--base-dir", type=Path, default=Path("."))
    p.add_argument(
        "--series",
        type=str,
        default="population,food",
        help="Comma-separated population log columns",
    )


def _build_frame_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("frame", help="Replay a recorded run and render one field frame")
    p.set_defaults(func=_handle_frame)
    p.add_argument("--run-json", type=Path, required=True)
    p.add_argument("--step", type=int, required=True)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--base-dir", type=Path, default=Path("."))


def _handle_timeseries(args: argparse.Namespace) -> Path:
    return render_population_timeseries(
        population_log_path=args.population_log,
        output_path=args.output,
        base_dir=args.base_dir,
        series=_parse_series(args.series),
    )


def _handle_frame(args: argparse.Namespace) -> Path:
    if args.step < 0:
        raise ValueError("--step must be >= 0")
    payload = json.loads(Path(args.run_json).read_text())
    field = Field.create(field_config_from_payload(payload))
    # Replay is exact because the field owns its seeded RNG.
    while field.step < args.step:
        field.tick()
    return render_field_snapshot(field.snapshot(), args.output, base_dir=args.base_dir)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint with subcommands."""
    parser = argparse.ArgumentParser(description="Visualization tools for simulation data")
    sub = parser.add_subparsers(dest="command", required=True)
    _build_timeseries_parser(sub)
    _build_frame_parser(sub)
    args = parser.parse_args(argv)

    try:
        output = args.func(args)
    except ValueError as exc:
        parser.error(str(exc))
    print(json.dumps({"command": args.command, "output": str(output)}, ensure_ascii=False))


if __name__ == "__main__":
    main()
