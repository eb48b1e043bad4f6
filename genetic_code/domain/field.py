"""Bounded grid world with food, walls and entities, and the tick algorithm.

Coordinates are normalized through :meth:`Field.normalize` on every read and
write path, so every stored cell lies inside ``[0, width) x [0, height)``.
The field exclusively owns its ``random.Random`` instance; every stochastic
decision in the engine draws from it in a fixed order, which makes runs
reproducible for a given seed.
"""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass, field, replace
from random import Random
from typing import TYPE_CHECKING, Any, TypeAlias

from genetic_code.config.constants import PERCENT, REGROWTH_CADENCE
from genetic_code.domain.direction import Direction
from genetic_code.domain.entity import Entity
from genetic_code.domain.program import Program, random_program
from genetic_code.domain.snapshot import EntityState, FieldSnapshot, TickReport

if TYPE_CHECKING:
    from genetic_code.config.types import FieldConfig

Coordinate: TypeAlias = tuple[int, int]


@dataclass
class Field:
    """World model: owns the grid, the live entity list and the RNG."""

    config: FieldConfig
    rng: Random
    food: set[Coordinate] = field(default_factory=set)
    walls: set[Coordinate] = field(default_factory=set)
    entities: list[Entity] = field(default_factory=list)
    step: int = 0
    regrowth_countdown: int = 0
    occupancy: Counter[Coordinate] = field(default_factory=Counter, repr=False)
    """Live entities per cell, kept in step with every position change."""
    _next_entity_id: int = field(default=0, repr=False)
    _lock: Any = field(default_factory=threading.RLock, repr=False, compare=False)

    @classmethod
    def create(cls, config: FieldConfig, rng: Random | None = None) -> Field:
        """Build a field and seed it with the configured initial content."""
        world = cls(config=config, rng=rng if rng is not None else Random(config.seed))
        world.reset()
        return world

    @classmethod
    def empty(cls, config: FieldConfig, rng: Random | None = None) -> Field:
        """Build a field with no food, walls or entities (for hand-built scenarios)."""
        return cls(config=config, rng=rng if rng is not None else Random(config.seed))

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def normalize(self, x: int, y: int) -> Coordinate | None:
        """Fold ``(x, y)`` into the grid, or return None if it lies off a closed axis."""
        if not 0 <= x < self.width:
            if not self.config.wrap_x:
                return None
            x %= self.width
        if not 0 <= y < self.height:
            if not self.config.wrap_y:
                return None
            y %= self.height
        return x, y

    def _require_cell(self, cell: Coordinate) -> Coordinate:
        normalized = self.normalize(*cell)
        if normalized is None:
            raise ValueError(f"cell {cell} lies outside the field")
        return normalized

    def is_walkable(self, cell: Coordinate) -> bool:
        normalized = self.normalize(*cell)
        return normalized is not None and normalized not in self.walls

    def is_food(self, cell: Coordinate) -> bool:
        normalized = self.normalize(*cell)
        return normalized is not None and normalized in self.food

    def is_wall(self, cell: Coordinate) -> bool:
        normalized = self.normalize(*cell)
        return normalized is not None and normalized in self.walls

    def has_entity_at(self, cell: Coordinate, exclude: Entity | None = None) -> bool:
        """Whether any entity other than *exclude* currently stands on *cell*."""
        normalized = self.normalize(*cell)
        if normalized is None:
            return False
        count = self.occupancy[normalized]
        if exclude is not None and exclude.position == normalized:
            count -= 1
        return count > 0

    def random_cell(self) -> Coordinate:
        """Uniformly drawn in-bounds cell (x drawn before y)."""
        x = self.rng.randrange(self.width)
        y = self.rng.randrange(self.height)
        return x, y

    # ------------------------------------------------------------------
    # Content editing
    # ------------------------------------------------------------------

    def add_food(self, cell: Coordinate) -> None:
        self.food.add(self._require_cell(cell))

    def remove_food(self, cell: Coordinate) -> bool:
        """Remove food from *cell*; returns whether there was any."""
        normalized = self.normalize(*cell)
        if normalized is None or normalized not in self.food:
            return False
        self.food.remove(normalized)
        return True

    def add_wall(self, cell: Coordinate) -> None:
        self.walls.add(self._require_cell(cell))

    def add_entity(self, entity: Entity) -> Entity:
        """Append *entity* to the live list, assigning its id."""
        entity.position = self._require_cell(entity.position)
        self.occupancy[entity.position] += 1
        entity.entity_id = self._next_entity_id
        self._next_entity_id += 1
        self.entities.append(entity)
        return entity

    def relocate(self, entity: Entity, cell: Coordinate) -> None:
        """Move *entity* to *cell*, keeping the occupancy count current."""
        target = self._require_cell(cell)
        self._vacate(entity.position)
        self.occupancy[target] += 1
        entity.position = target

    def _vacate(self, cell: Coordinate) -> None:
        self.occupancy[cell] -= 1
        if self.occupancy[cell] <= 0:
            del self.occupancy[cell]

    def place_entity(
        self,
        position: Coordinate,
        direction: Direction,
        program: Program,
        energy: int | None = None,
    ) -> Entity:
        """Create and add an entity at a chosen cell."""
        return self.add_entity(
            Entity(
                energy=self.config.initial_energy if energy is None else energy,
                position=position,
                direction=direction,
                program=program,
            )
        )

    def update_parameters(self, **changes: int) -> None:
        """Change tunable parameters between ticks.

        Raises ValueError for unknown or construction-only parameters and for
        out-of-range values.
        """
        from genetic_code.config.types import TUNABLE_PARAMETERS

        fixed = sorted(name for name in changes if name not in TUNABLE_PARAMETERS)
        if fixed:
            raise ValueError(f"parameters cannot be changed during a run: {', '.join(fixed)}")
        with self._lock:
            self.config = replace(self.config, **changes)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self, seed: int | None = None) -> None:
        """Clear all state and re-seed food, walls and the initial population.

        Placements are drawn independently; collisions are allowed.
        """
        with self._lock:
            if seed is not None:
                self.rng.seed(seed)
            self.food.clear()
            self.walls.clear()
            self.entities.clear()
            self.occupancy.clear()
            self.step = 0
            self.regrowth_countdown = 0
            self._next_entity_id = 0

            cells = self.width * self.height
            for _ in range(cells * self.config.initial_food_percent // PERCENT):
                self.food.add(self.random_cell())
            for _ in range(cells * self.config.initial_wall_percent // PERCENT):
                self.walls.add(self.random_cell())
            for _ in range(self.config.initial_population):
                position = self.random_cell()
                direction = Direction.random(self.rng)
                self.place_entity(position, direction, self._initial_program())

    def _initial_program(self) -> Program:
        if self.config.initial_program is not None:
            return Program(self.config.initial_program)
        return random_program(
            self.rng, self.config.random_program_length, self.config.command_set
        )

    def _regrow(self) -> None:
        self.regrowth_countdown -= 1
        if self.regrowth_countdown < 0:
            self.regrowth_countdown = REGROWTH_CADENCE
            for _ in range(self.config.regrowth_rate):
                self.food.add(self.random_cell())

    def tick(self) -> TickReport:
        """Advance the world by one time unit.

        Every entity alive at the start of the tick executes exactly one
        instruction; deaths and offspring are applied only after all of them
        have stepped, so newborns never act in their birth tick.
        """
        with self._lock:
            self.step += 1
            self._regrow()

            cohort = list(self.entities)
            for entity in cohort:
                entity.step(self)

            threshold = self.config.reproduction_threshold
            survivors: list[Entity] = []
            parents: list[Entity] = []
            for entity in cohort:
                if entity.energy <= 0:
                    continue
                survivors.append(entity)
                if entity.energy > threshold:
                    parents.append(entity)

            deaths = len(cohort) - len(survivors)
            for entity in cohort:
                if entity.energy <= 0:
                    self._vacate(entity.position)
            self.entities = list(survivors)
            births = 0
            for parent in parents:
                self.add_entity(parent.replicate(self))
                births += 1

            return TickReport(
                step=self.step,
                births=births,
                deaths=deaths,
                population=len(self.entities),
                food_count=len(self.food),
            )

    def snapshot(self) -> FieldSnapshot:
        """Consistent immutable view of the field after the last completed tick."""
        with self._lock:
            return FieldSnapshot(
                step=self.step,
                width=self.width,
                height=self.height,
                food=frozenset(self.food),
                walls=frozenset(self.walls),
                entities=tuple(
                    EntityState(
                        entity_id=entity.entity_id,
                        x=entity.position[0],
                        y=entity.position[1],
                        direction=entity.direction.name,
                        energy=entity.energy,
                        program=entity.program.commands,
                        pointer=entity.program.pointer,
                    )
                    for entity in self.entities
                ),
            )
