"""Matplotlib-based rendering functions for simulation output."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pyarrow.parquet as pq
from matplotlib.colors import BoundaryNorm, ListedColormap
from matplotlib.patches import Patch

from genetic_code.domain.snapshot import FieldSnapshot
from genetic_code.io.paths import resolve_within_base

EMPTY, FOOD, WALL, ENTITY = 0, 1, 2, 3

CELL_COLORS: tuple[str, ...] = ("#F0F0F0", "#4CAF50", "#424242", "#FF5722")
"""Fill colors indexed by cell code: empty, food, wall, entity."""

_CELL_LABELS = ("Empty", "Food", "Wall", "Entity")

SERIES_COLORS: dict[str, str] = {
    "population": "tab:red",
    "food": "tab:green",
    "distinct_programs": "tab:purple",
}


def _resolve_output(output_path: Path, base_dir: Path | None) -> Path:
    resolved = resolve_within_base(Path(output_path), Path(base_dir or Path.cwd()))
    resolved.parent.mkdir(parents=True, exist_ok=True)
    return resolved


def build_field_array(snapshot: FieldSnapshot) -> np.ndarray:
    """Return an (H, W) int array of cell codes; entities are drawn over food and walls."""
    grid = np.full((snapshot.height, snapshot.width), EMPTY, dtype=int)
    for x, y in snapshot.food:
        grid[y, x] = FOOD
    for x, y in snapshot.walls:
        grid[y, x] = WALL
    for entity in snapshot.entities:
        grid[entity.y, entity.x] = ENTITY
    return grid


def render_field_snapshot(
    snapshot: FieldSnapshot,
    output_path: Path,
    base_dir: Path | None = None,
    cell_size: float = 0.08,
) -> Path:
    """Render one field frame to an image file and return its resolved path."""
    resolved = _resolve_output(output_path, base_dir)
    grid = build_field_array(snapshot)
    cmap = ListedColormap(list(CELL_COLORS))
    norm = BoundaryNorm([-0.5, 0.5, 1.5, 2.5, 3.5], cmap.N)

    width_in = max(3.0, snapshot.width * cell_size)
    height_in = max(3.0, snapshot.height * cell_size)
    fig, ax = plt.subplots(figsize=(width_in, height_in))
    try:
        ax.imshow(grid, cmap=cmap, norm=norm, origin="upper", aspect="equal")
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_title(f"Step {snapshot.step} | population {snapshot.population}")
        handles = [
            Patch(facecolor=color, edgecolor="gray", label=label)
            for color, label in zip(CELL_COLORS, _CELL_LABELS, strict=True)
        ]
        ax.legend(handles=handles, loc="upper right", fontsize=7, framealpha=0.8)
        fig.savefig(resolved, dpi=100, bbox_inches="tight")
    finally:
        plt.close(fig)
    return resolved


def render_population_timeseries(
    population_log_path: Path,
    output_path: Path,
    base_dir: Path | None = None,
    series: tuple[str, ...] = ("population", "food"),
) -> Path:
    """Plot per-tick counts from a population log Parquet file."""
    table = pq.read_table(population_log_path)
    unknown = [name for name in series if name not in table.column_names]
    if unknown:
        raise ValueError(f"unknown series: {', '.join(unknown)}")
    if table.num_rows == 0:
        raise ValueError("population log is empty")
    resolved = _resolve_output(output_path, base_dir)

    steps = table.column("step").to_pylist()
    fig, ax = plt.subplots(figsize=(8, 4))
    try:
        for name in series:
            ax.plot(
                steps,
                table.column(name).to_pylist(),
                label=name.replace("_", " "),
                color=SERIES_COLORS.get(name),
                linewidth=1.2,
            )
        ax.set_xlabel("Step")
        ax.set_ylabel("Count")
        ax.legend(loc="best")
        ax.grid(alpha=0.3)
        fig.tight_layout()
        fig.savefig(resolved, dpi=100)
    finally:
        plt.close(fig)
    return resolved
