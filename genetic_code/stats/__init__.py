"""Statistics collaborators: samplers, program census and line writers."""

from genetic_code.stats.line_format import (
    LineElement,
    StatisticsFile,
    StatisticsWriter,
    format_data_point,
    parse_pattern,
)
from genetic_code.stats.programs import mean_energy, program_census, program_label, top_programs
from genetic_code.stats.sampler import DataPoint, StatisticsSampler

__all__ = [
    "DataPoint",
    "LineElement",
    "StatisticsFile",
    "StatisticsSampler",
    "StatisticsWriter",
    "format_data_point",
    "mean_energy",
    "parse_pattern",
    "program_census",
    "program_label",
    "top_programs",
]
