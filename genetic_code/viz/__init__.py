"""Matplotlib renderers for field frames and population time series."""

from genetic_code.viz.render import (
    CELL_COLORS,
    build_field_array,
    render_field_snapshot,
    render_population_timeseries,
)

__all__ = [
    "CELL_COLORS",
    "build_field_array",
    "render_field_snapshot",
    "render_population_timeseries",
]
