"""Per-tick aggregate samples computed purely from field snapshots."""

from __future__ import annotations

from dataclasses import dataclass

from genetic_code.domain.snapshot import FieldSnapshot


@dataclass(frozen=True)
class DataPoint:
    """Aggregate counts after one tick."""

    step: int
    population: int
    population_delta: int
    food: int


class StatisticsSampler:
    """Turns successive snapshots into data points with population deltas.

    The first sample reports its full population as the delta.
    """

    def __init__(self) -> None:
        self.last: DataPoint | None = None

    def sample(self, snapshot: FieldSnapshot) -> DataPoint:
        previous = 0 if self.last is None else self.last.population
        point = DataPoint(
            step=snapshot.step,
            population=snapshot.population,
            population_delta=snapshot.population - previous,
            food=snapshot.food_count,
        )
        self.last = point
        return point
