"""Tests for genetic_code.domain.entity module."""

from __future__ import annotations

from genetic_code.config.types import FieldConfig
from genetic_code.domain.commands import Command
from genetic_code.domain.direction import Direction
from genetic_code.domain.field import Field
from genetic_code.domain.program import Program


def _field(**overrides: object) -> Field:
    params: dict[str, object] = {
        "width": 6,
        "height": 6,
        "initial_food_percent": 0,
        "initial_population": 0,
        "energy_per_food": 10,
        "energy_per_step": 1,
    }
    params.update(overrides)
    return Field.empty(FieldConfig(**params))  # type: ignore[arg-type]


class TestMove:
    def test_move_wraps(self) -> None:
        field = _field()
        entity = field.place_entity((5, 0), Direction.RIGHT, Program([Command.MOVE]))
        assert entity.move(field) is True
        assert entity.position == (0, 0)

    def test_move_blocked_by_closed_edge(self) -> None:
        field = _field(wrap_x=False)
        entity = field.place_entity((5, 0), Direction.RIGHT, Program([Command.MOVE]))
        assert entity.move(field) is False
        assert entity.position == (5, 0)

    def test_move_blocked_by_wall(self) -> None:
        field = _field()
        field.add_wall((0, 1))
        entity = field.place_entity((0, 0), Direction.DOWN, Program([Command.MOVE]))
        assert entity.move(field) is False
        assert entity.position == (0, 0)

    def test_move_eats_food(self) -> None:
        field = _field()
        field.add_food((1, 0))
        entity = field.place_entity((0, 0), Direction.RIGHT, Program([Command.MOVE]), energy=5)
        entity.move(field)
        assert entity.energy == 15
        assert not field.is_food((1, 0))

    def test_entities_may_share_cells(self) -> None:
        field = _field()
        field.place_entity((1, 0), Direction.UP, Program([Command.SLEEP]))
        entity = field.place_entity((0, 0), Direction.RIGHT, Program([Command.MOVE]))
        assert entity.move(field) is True
        assert entity.position == (1, 0)


class TestStep:
    def test_step_pays_cost(self) -> None:
        field = _field(energy_per_step=3)
        entity = field.place_entity((0, 0), Direction.UP, Program([Command.SLEEP]), energy=10)
        entity.step(field)
        assert entity.energy == 7

    def test_step_eats_food_underfoot(self) -> None:
        field = _field()
        field.add_food((2, 2))
        entity = field.place_entity((2, 2), Direction.UP, Program([Command.SLEEP]), energy=10)
        entity.step(field)
        assert entity.energy == 10 + 10 - 1
        assert not field.is_food((2, 2))

    def test_turns_do_not_cost_extra(self) -> None:
        field = _field()
        entity = field.place_entity((0, 0), Direction.UP, Program([Command.LEFT]), energy=10)
        entity.step(field)
        assert entity.direction is Direction.LEFT
        assert entity.energy == 9


class TestReplicate:
    def test_energy_split(self) -> None:
        field = _field(mutation_rate=0)
        parent = field.place_entity(
            (0, 0), Direction.UP, Program([Command.MOVE, Command.LEFT]), energy=1001
        )
        child = parent.replicate(field)
        assert parent.energy == 500
        assert child.energy == 500
        assert child.program == parent.program
        assert child.program is not parent.program

    def test_child_lands_in_bounds(self) -> None:
        field = _field(width=3, height=4, mutation_rate=100)
        parent = field.place_entity((0, 0), Direction.UP, Program([Command.MOVE]), energy=2)
        for _ in range(50):
            parent.energy = 200
            child = parent.replicate(field)
            x, y = child.position
            assert 0 <= x < 3
            assert 0 <= y < 4
            assert len(child.program) >= 1

    def test_child_is_not_registered(self) -> None:
        field = _field(mutation_rate=0)
        parent = field.place_entity((0, 0), Direction.UP, Program([Command.MOVE]), energy=10)
        child = parent.replicate(field)
        assert child not in field.entities
        assert child.entity_id == -1

    def test_identity_equality(self) -> None:
        field = _field()
        a = field.place_entity((0, 0), Direction.UP, Program([Command.MOVE]), energy=10)
        b = field.place_entity((0, 0), Direction.UP, Program([Command.MOVE]), energy=10)
        assert a != b
