"""Autonomous agent: position, heading, energy and an owned program."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from genetic_code.domain.direction import Direction
from genetic_code.domain.program import Program

if TYPE_CHECKING:
    from genetic_code.domain.field import Coordinate, Field


@dataclass(eq=False)
class Entity:
    """A single live agent. Identity is object identity, not value equality."""

    energy: int
    position: Coordinate
    direction: Direction
    program: Program
    entity_id: int = -1

    def left(self) -> None:
        """Rotate 90 degrees counter-clockwise. Always succeeds."""
        self.direction = self.direction.left()

    def right(self) -> None:
        """Rotate 90 degrees clockwise. Always succeeds."""
        self.direction = self.direction.right()

    def cell_ahead(self, field: Field) -> Coordinate | None:
        """Normalized cell in front of the entity, or None when off the field."""
        return field.normalize(*self.direction.ahead_of(*self.position))

    def move(self, field: Field) -> bool:
        """Step one cell forward if walkable, eating any food there.

        A blocked move is a no-op, not an error. Returns whether the entity moved.
        """
        goal = self.cell_ahead(field)
        if goal is None or not field.is_walkable(goal):
            return False
        self._eat(field, goal)
        field.relocate(self, goal)
        return True

    def _eat(self, field: Field, cell: Coordinate) -> None:
        if field.remove_food(cell):
            self.energy += field.config.energy_per_food

    def step(self, field: Field) -> None:
        """Execute one instruction, feed on the current cell, then pay the step cost."""
        self.program.execute(field, self)
        self._eat(field, self.position)
        self.energy -= field.config.energy_per_step

    def replicate(self, field: Field) -> Entity:
        """Split off a child with half the energy and a mutated program copy.

        The parent keeps the other half. The child lands on a fresh random
        cell with a random heading, independent of the parent's position.
        """
        position = field.random_cell()
        direction = Direction.random(field.rng)
        program = self.program.mutate(
            field.rng, field.config.mutation_rate, field.config.command_set
        )
        # Only called above a positive threshold, so floor equals truncation.
        self.energy //= 2
        return Entity(
            energy=self.energy,
            position=position,
            direction=direction,
            program=program,
        )
