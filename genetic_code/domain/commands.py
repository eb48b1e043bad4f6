"""Closed instruction set and its single dispatch function.

Every command is a pure function of ``(field, entity)``: it may change the
entity's position, direction or energy and the field's food set, but never
the entity list. The return value of :func:`execute_command` is the number of
*extra* program instructions to skip after the normal single-step advance.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from genetic_code.domain.entity import Entity
    from genetic_code.domain.field import Field


class Command(Enum):
    """One opcode of an entity program.

    Declaration order is significant: uniform random draws index into it.
    """

    DOUBLEMOVE = "DOUBLEMOVE"
    MOVE = "MOVE"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    IFENTITY = "IFENTITY"
    IFFOOD = "IFFOOD"
    IFWALL = "IFWALL"
    SKIP = "SKIP"
    SKIP2 = "SKIP2"
    SLEEP = "SLEEP"


class CommandSet(Enum):
    """Vocabulary that random command draws are taken from."""

    BASIC = "basic"
    EXTENDED = "extended"

    @property
    def commands(self) -> tuple[Command, ...]:
        if self is CommandSet.BASIC:
            return BASIC_COMMANDS
        return EXTENDED_COMMANDS


BASIC_COMMANDS: tuple[Command, ...] = (
    Command.DOUBLEMOVE,
    Command.MOVE,
    Command.LEFT,
    Command.RIGHT,
    Command.SLEEP,
)
"""Movement-only opcode set."""

EXTENDED_COMMANDS: tuple[Command, ...] = tuple(Command)
"""Full opcode set including conditionals and skips."""

DEFAULT_PROGRAM: tuple[Command, ...] = (
    Command.LEFT,
    Command.MOVE,
    Command.RIGHT,
    Command.MOVE,
    Command.MOVE,
)
"""Program given to initial entities unless configured otherwise."""

COMMAND_DESCRIPTIONS: dict[Command, str] = {
    Command.DOUBLEMOVE: "Move two steps forward",
    Command.MOVE: "Move one step forward",
    Command.LEFT: "Turn left",
    Command.RIGHT: "Turn right",
    Command.IFENTITY: "Skips the next command if the entity faces another entity",
    Command.IFFOOD: "Skips the next command if the entity faces food",
    Command.IFWALL: "Skips the next command if the entity faces a wall",
    Command.SKIP: "Skip one command",
    Command.SKIP2: "Skip two commands",
    Command.SLEEP: "Do nothing",
}


def _double_move(field: Field, entity: Entity) -> int:
    entity.move(field)
    entity.move(field)
    return 0


def _move(field: Field, entity: Entity) -> int:
    entity.move(field)
    return 0


def _left(field: Field, entity: Entity) -> int:
    entity.left()
    return 0


def _right(field: Field, entity: Entity) -> int:
    entity.right()
    return 0


def _if_entity(field: Field, entity: Entity) -> int:
    ahead = entity.cell_ahead(field)
    if ahead is None:
        return 0
    return 1 if field.has_entity_at(ahead, exclude=entity) else 0


def _if_food(field: Field, entity: Entity) -> int:
    ahead = entity.cell_ahead(field)
    if ahead is None:
        return 0
    return 1 if field.is_food(ahead) else 0


def _if_wall(field: Field, entity: Entity) -> int:
    ahead = entity.cell_ahead(field)
    # Out-of-bounds on a non-wrapping axis counts as a wall.
    if ahead is None:
        return 1
    return 0 if field.is_walkable(ahead) else 1


def _skip(field: Field, entity: Entity) -> int:
    return 1


def _skip2(field: Field, entity: Entity) -> int:
    return 2


def _sleep(field: Field, entity: Entity) -> int:
    return 0


_HANDLERS: dict[Command, Callable[[Field, Entity], int]] = {
    Command.DOUBLEMOVE: _double_move,
    Command.MOVE: _move,
    Command.LEFT: _left,
    Command.RIGHT: _right,
    Command.IFENTITY: _if_entity,
    Command.IFFOOD: _if_food,
    Command.IFWALL: _if_wall,
    Command.SKIP: _skip,
    Command.SKIP2: _skip2,
    Command.SLEEP: _sleep,
}


def execute_command(command: Command, field: Field, entity: Entity) -> int:
    """Apply *command* for *entity* on *field* and return the extra skip count."""
    return _HANDLERS[command](field, entity)
