"""Circular instruction tape executed one command per tick.

A program's identity is its command sequence; the instruction pointer is
runtime cursor state and does not take part in equality or hashing.
Mutation never edits the receiver: it always returns a fresh Program.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from random import Random
from typing import TYPE_CHECKING

from genetic_code.config.constants import PERCENT
from genetic_code.domain.commands import Command, CommandSet, execute_command

if TYPE_CHECKING:
    from genetic_code.domain.entity import Entity
    from genetic_code.domain.field import Field

# Mutation edit kinds, drawn uniformly.
_DELETE, _INSERT, _OVERWRITE = 0, 1, 2
_N_EDIT_KINDS = 3


class Program:
    """Non-empty command sequence plus an instruction pointer."""

    __slots__ = ("_commands", "pointer")

    def __init__(self, commands: Iterable[Command] = (), pointer: int = 0) -> None:
        normalized = tuple(commands)
        if not normalized:
            normalized = (Command.SLEEP,)
        self._commands: tuple[Command, ...] = normalized
        self.pointer = pointer % len(normalized)

    @property
    def commands(self) -> tuple[Command, ...]:
        return self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Program):
            return NotImplemented
        return self._commands == other._commands

    def __hash__(self) -> int:
        return hash(self._commands)

    def __repr__(self) -> str:
        return f"Program({self.label()!r}, pointer={self.pointer})"

    def label(self) -> str:
        """Comma-separated opcode names, e.g. ``"LEFT,MOVE"``."""
        return ",".join(command.value for command in self._commands)

    @property
    def current(self) -> Command:
        return self._commands[self.pointer]

    def advance(self, extra: int = 0) -> None:
        """Move the pointer one step plus *extra* skipped instructions."""
        self.pointer = (self.pointer + 1 + extra) % len(self._commands)

    def execute(self, field: Field, entity: Entity) -> Command:
        """Run the command under the pointer, advance, and return the command run."""
        command = self.current
        extra = execute_command(command, field, entity)
        self.advance(extra)
        return command

    def copy(self) -> Program:
        """Structurally equal program with a fresh pointer."""
        return Program(self._commands)

    def mutate(
        self,
        rng: Random,
        mutation_rate: int,
        command_set: CommandSet = CommandSet.EXTENDED,
    ) -> Program:
        """Return a copy, edited exactly once with probability ``mutation_rate`` percent.

        Draw order: percentage roll, candidate command, edit kind, index.
        The candidate command is drawn even for deletions so that the RNG
        stream does not depend on which edit was picked.
        """
        if rng.randrange(PERCENT) >= mutation_rate:
            return self.copy()

        commands = list(self._commands)
        candidate = rng.choice(command_set.commands)
        kind = rng.randrange(_N_EDIT_KINDS)
        length = len(commands)

        if kind == _DELETE:
            del commands[rng.randrange(length)]
        elif kind == _INSERT:
            commands.insert(rng.randrange(length + 1), candidate)
        else:
            commands[rng.randrange(length)] = candidate

        # A delete on a single-instruction program leaves the list empty;
        # the constructor substitutes SLEEP.
        return Program(commands)


def random_program(
    rng: Random, length: int, command_set: CommandSet = CommandSet.EXTENDED
) -> Program:
    """Build a program of *length* uniformly drawn commands."""
    if length < 1:
        raise ValueError("length must be >= 1")
    pool = command_set.commands
    return Program(rng.choice(pool) for _ in range(length))


def parse_program(raw: str) -> Program:
    """Parse a comma-separated opcode list such as ``"MOVE,LEFT"``."""
    names = [part.strip().upper() for part in raw.split(",") if part.strip()]
    if not names:
        raise ValueError("program must contain at least one command")
    try:
        return Program(Command[name] for name in names)
    except KeyError as exc:
        valid = ", ".join(command.value for command in Command)
        raise ValueError(f"unknown command {exc.args[0]!r}; expected one of {valid}") from exc
