"""Domain layer: instruction set, programs, entities and the field."""

from genetic_code.domain.commands import (
    BASIC_COMMANDS,
    COMMAND_DESCRIPTIONS,
    DEFAULT_PROGRAM,
    EXTENDED_COMMANDS,
    Command,
    CommandSet,
    execute_command,
)
from genetic_code.domain.direction import Direction
from genetic_code.domain.program import Program, parse_program, random_program
from genetic_code.domain.snapshot import EntityState, FieldSnapshot, TickReport
from genetic_code.domain.entity import Entity
from genetic_code.domain.field import Coordinate, Field

__all__ = [
    "BASIC_COMMANDS",
    "COMMAND_DESCRIPTIONS",
    "Command",
    "CommandSet",
    "Coordinate",
    "DEFAULT_PROGRAM",
    "Direction",
    "EXTENDED_COMMANDS",
    "Entity",
    "EntityState",
    "Field",
    "FieldSnapshot",
    "Program",
    "TickReport",
    "execute_command",
    "parse_program",
    "random_program",
]
