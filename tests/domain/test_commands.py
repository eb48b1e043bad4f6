"""Tests for genetic_code.domain.commands module."""

from __future__ import annotations

from genetic_code.config.types import FieldConfig
from genetic_code.domain.commands import (
    BASIC_COMMANDS,
    COMMAND_DESCRIPTIONS,
    EXTENDED_COMMANDS,
    Command,
    CommandSet,
    execute_command,
)
from genetic_code.domain.direction import Direction
from genetic_code.domain.entity import Entity
from genetic_code.domain.field import Field
from genetic_code.domain.program import Program


def _field(**overrides: object) -> Field:
    params: dict[str, object] = {
        "width": 10,
        "height": 10,
        "initial_food_percent": 0,
        "initial_population": 0,
        "regrowth_rate": 0,
    }
    params.update(overrides)
    return Field.empty(FieldConfig(**params))  # type: ignore[arg-type]


def _entity(field: Field, position: tuple[int, int], direction: Direction) -> Entity:
    return field.place_entity(position, direction, Program([Command.SLEEP]), energy=50)


class TestCommandSets:
    def test_extended_is_every_command(self) -> None:
        assert EXTENDED_COMMANDS == tuple(Command)
        assert CommandSet.EXTENDED.commands == EXTENDED_COMMANDS

    def test_basic_is_movement_only(self) -> None:
        assert CommandSet.BASIC.commands == BASIC_COMMANDS
        assert set(BASIC_COMMANDS) == {
            Command.DOUBLEMOVE,
            Command.MOVE,
            Command.LEFT,
            Command.RIGHT,
            Command.SLEEP,
        }

    def test_every_command_described(self) -> None:
        assert set(COMMAND_DESCRIPTIONS) == set(Command)


class TestMovementCommands:
    def test_move(self) -> None:
        field = _field()
        entity = _entity(field, (2, 2), Direction.RIGHT)
        assert execute_command(Command.MOVE, field, entity) == 0
        assert entity.position == (3, 2)

    def test_double_move(self) -> None:
        field = _field()
        entity = _entity(field, (2, 2), Direction.DOWN)
        execute_command(Command.DOUBLEMOVE, field, entity)
        assert entity.position == (2, 4)

    def test_double_move_stops_at_wall(self) -> None:
        field = _field()
        field.add_wall((4, 2))
        entity = _entity(field, (2, 2), Direction.RIGHT)
        execute_command(Command.DOUBLEMOVE, field, entity)
        assert entity.position == (3, 2)

    def test_turns(self) -> None:
        field = _field()
        entity = _entity(field, (0, 0), Direction.UP)
        execute_command(Command.LEFT, field, entity)
        assert entity.direction is Direction.LEFT
        execute_command(Command.RIGHT, field, entity)
        execute_command(Command.RIGHT, field, entity)
        assert entity.direction is Direction.RIGHT

    def test_sleep_is_noop(self) -> None:
        field = _field()
        entity = _entity(field, (1, 1), Direction.UP)
        assert execute_command(Command.SLEEP, field, entity) == 0
        assert entity.position == (1, 1)
        assert entity.energy == 50


class TestConditionalCommands:
    def test_if_food(self) -> None:
        field = _field()
        entity = _entity(field, (1, 1), Direction.RIGHT)
        assert execute_command(Command.IFFOOD, field, entity) == 0
        field.add_food((2, 1))
        assert execute_command(Command.IFFOOD, field, entity) == 1
        assert field.is_food((2, 1))

    def test_if_wall(self) -> None:
        field = _field()
        entity = _entity(field, (1, 1), Direction.UP)
        assert execute_command(Command.IFWALL, field, entity) == 0
        field.add_wall((1, 0))
        assert execute_command(Command.IFWALL, field, entity) == 1

    def test_if_wall_counts_closed_edge(self) -> None:
        field = _field(wrap_y=False)
        entity = _entity(field, (1, 0), Direction.UP)
        assert execute_command(Command.IFWALL, field, entity) == 1

    def test_if_wall_sees_wrapped_wall(self) -> None:
        field = _field()
        field.add_wall((9, 5))
        entity = _entity(field, (0, 5), Direction.LEFT)
        assert execute_command(Command.IFWALL, field, entity) == 1

    def test_if_entity(self) -> None:
        field = _field()
        entity = _entity(field, (1, 1), Direction.DOWN)
        assert execute_command(Command.IFENTITY, field, entity) == 0
        _entity(field, (1, 2), Direction.UP)
        assert execute_command(Command.IFENTITY, field, entity) == 1

    def test_if_entity_off_closed_edge(self) -> None:
        field = _field(wrap_x=False)
        entity = _entity(field, (0, 0), Direction.LEFT)
        assert execute_command(Command.IFENTITY, field, entity) == 0

    def test_skips(self) -> None:
        field = _field()
        entity = _entity(field, (0, 0), Direction.UP)
        assert execute_command(Command.SKIP, field, entity) == 1
        assert execute_command(Command.SKIP2, field, entity) == 2
