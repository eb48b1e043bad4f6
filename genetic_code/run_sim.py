"""CLI entrypoint for batch simulation runs.

Owns only argument parsing and dispatch; the engine lives in
``genetic_code.simulation``. Prints a JSON summary to stdout.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from genetic_code.config.constants import (
    NUM_STEPS,
    RANDOM_PROGRAM_LENGTH,
    SNAPSHOT_INTERVAL,
    TOP_PROGRAMS,
)
from genetic_code.config.types import PARAMETER_SPECS, FieldConfig, RunConfig
from genetic_code.domain.commands import DEFAULT_PROGRAM, Command, CommandSet
from genetic_code.domain.field import Field
from genetic_code.domain.program import parse_program
from genetic_code.io.paths import resolve_within_base
from genetic_code.simulation.engine import run_simulation
from genetic_code.stats.line_format import parse_pattern
from genetic_code.viz.render import render_field_snapshot

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _parse_command_set(raw: str) -> CommandSet:
    try:
        return CommandSet(raw.lower())
    except ValueError as exc:
        valid = ", ".join(member.value for member in CommandSet)
        raise ValueError(f"command-set must be one of {valid}") from exc


def _parse_initial_program(raw: str) -> tuple[Command, ...] | None:
    """``random`` selects per-entity random programs; otherwise a comma list of opcodes."""
    if raw.strip().lower() == "random":
        return None
    return parse_program(raw).commands


def _parse_stats_files(raw_items: list[str]) -> tuple[tuple[Path, str], ...]:
    """Parse repeated ``PATH=PATTERN`` arguments, validating each pattern."""
    result: list[tuple[Path, str]] = []
    for item in raw_items:
        if "=" not in item:
            raise ValueError(f"Expected PATH=PATTERN format, got: {item}")
        path_str, pattern = item.split("=", 1)
        if not path_str:
            raise ValueError(f"stats-file path must not be empty: {item}")
        parse_pattern(pattern)
        result.append((Path(path_str), pattern))
    return tuple(result)


def _coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool; accepts common string spellings."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError as exc:
            raise ValueError(f"{key} must be an integer value, got {raw!r}") from exc
    raise ValueError(f"{key} must be an integer value")


def _coerce_str(raw: object, key: str) -> str:
    """Coerce raw value to str; rejects booleans and nulls."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a string-coercible value")
    if isinstance(raw, (str, Path, int, float)):
        return str(raw)
    raise ValueError(f"{key} must be a string-coercible value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_bool(cli_val: bool | None, key: str, file_cfg: dict[str, object], default: bool) -> bool:
    return _coerce_bool(_get_val(cli_val, key, file_cfg, default), key)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_str(cli_val: str | None, key: str, file_cfg: dict[str, object], default: str) -> str:
    return _coerce_str(_get_val(cli_val, key, file_cfg, default), key)


def _load_config_file(path: Path) -> dict[str, object]:
    """Read a JSON object of config values; raises ValueError when unusable."""
    try:
        loaded = json.loads(Path(path).read_text())
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Config file is not valid JSON: {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")
    return loaded


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run an evolving-program field simulation")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    for spec in PARAMETER_SPECS:
        parser.add_argument(
            f"--{spec.name.replace('_', '-')}",
            dest=spec.name,
            type=int,
            default=None,
            help=f"{spec.title} [{spec.min_value}..{spec.max_value}, default {spec.default}]",
        )
    parser.add_argument("--wrap-x", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--wrap-y", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--command-set", type=str, default=None, help="basic or extended")
    parser.add_argument(
        "--initial-program",
        type=str,
        default=None,
        help="Comma-separated opcodes, or 'random'",
    )
    parser.add_argument("--random-program-length", type=int, default=None)
    parser.add_argument("--steps", type=int, default=None)
    parser.add_argument("--snapshot-interval", type=int, default=None)
    parser.add_argument(
        "--stop-on-extinction", action=argparse.BooleanOptionalAction, default=None
    )
    parser.add_argument("--top-programs", type=int, default=None)
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument(
        "--stats-file",
        action="append",
        default=[],
        metavar="PATH=PATTERN",
        help="Write a pattern-formatted statistics record per tick (can repeat)",
    )
    parser.add_argument(
        "--render-final",
        type=Path,
        default=None,
        help="Render the final field state to this image path (inside out-dir)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for a single batch run.

    CLI arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        file_cfg: dict[str, object] = {}
        if args.config is not None:
            file_cfg = _load_config_file(args.config)

        parameters = {
            spec.name: _get_int(getattr(args, spec.name), spec.name, file_cfg, spec.default)
            for spec in PARAMETER_SPECS
        }
        program_raw = _get_val(args.initial_program, "initial_program", file_cfg, None)
        field_config = FieldConfig(
            **parameters,
            wrap_x=_get_bool(args.wrap_x, "wrap_x", file_cfg, True),
            wrap_y=_get_bool(args.wrap_y, "wrap_y", file_cfg, True),
            command_set=_parse_command_set(
                _get_str(args.command_set, "command_set", file_cfg, CommandSet.EXTENDED.value)
            ),
            initial_program=(
                DEFAULT_PROGRAM
                if program_raw is None
                else _parse_initial_program(_coerce_str(program_raw, "initial_program"))
            ),
            random_program_length=_get_int(
                args.random_program_length,
                "random_program_length",
                file_cfg,
                RANDOM_PROGRAM_LENGTH,
            ),
        )
        out_dir = Path(_get_str(args.out_dir, "out_dir", file_cfg, "data"))
        run_config = RunConfig(
            steps=_get_int(args.steps, "steps", file_cfg, NUM_STEPS),
            snapshot_interval=_get_int(
                args.snapshot_interval, "snapshot_interval", file_cfg, SNAPSHOT_INTERVAL
            ),
            stop_on_extinction=_get_bool(
                args.stop_on_extinction, "stop_on_extinction", file_cfg, True
            ),
            out_dir=out_dir,
            stats_files=_parse_stats_files(list(args.stats_file)),
            top_programs=_get_int(args.top_programs, "top_programs", file_cfg, TOP_PROGRAMS),
        )
        render_path = (
            resolve_within_base(args.render_final, out_dir)
            if args.render_final is not None
            else None
        )
    except ValueError as exc:
        parser.error(str(exc))

    field = Field.create(field_config)
    result = run_simulation(field_config, run_config, field=field)

    summary: dict[str, object] = {
        "run_id": result.run_id,
        "steps_run": result.steps_run,
        "final_population": result.final_population,
        "final_food": result.final_food,
        "extinct": result.extinct,
        "termination_reason": result.termination_reason,
        "out_dir": str(out_dir),
    }
    if render_path is not None:
        rendered = render_field_snapshot(field.snapshot(), render_path, base_dir=out_dir)
        summary["rendered"] = str(rendered)
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
