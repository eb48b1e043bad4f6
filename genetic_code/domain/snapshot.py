"""Immutable views of field state handed to observers.

Renderers and statistics samplers never touch live ``Entity`` objects; they
read a ``FieldSnapshot`` built under the field lock, so a snapshot always
reflects a fully completed tick.
"""

from __future__ import annotations

from dataclasses import dataclass

from genetic_code.domain.commands import Command


@dataclass(frozen=True)
class EntityState:
    """Immutable snapshot of a single entity at one point in time."""

    entity_id: int
    x: int
    y: int
    direction: str
    energy: int
    program: tuple[Command, ...]
    pointer: int = 0

    @property
    def program_label(self) -> str:
        return ",".join(command.value for command in self.program)


@dataclass(frozen=True)
class FieldSnapshot:
    """Whole-world view after a completed tick."""

    step: int
    width: int
    height: int
    food: frozenset[tuple[int, int]]
    walls: frozenset[tuple[int, int]]
    entities: tuple[EntityState, ...]

    @property
    def population(self) -> int:
        return len(self.entities)

    @property
    def food_count(self) -> int:
        return len(self.food)


@dataclass(frozen=True)
class TickReport:
    """Outcome of one ``Field.tick()`` call."""

    step: int
    births: int
    deaths: int
    population: int
    food_count: int
