"""Tests for genetic_code.domain.program module."""

from __future__ import annotations

from random import Random

import pytest

from genetic_code.config.types import FieldConfig
from genetic_code.domain.commands import Command, CommandSet
from genetic_code.domain.direction import Direction
from genetic_code.domain.field import Field
from genetic_code.domain.program import Program, parse_program, random_program


def _field() -> Field:
    return Field.empty(
        FieldConfig(width=8, height=8, initial_food_percent=0, initial_population=0)
    )


class TestProgramBasics:
    def test_empty_becomes_sleep(self) -> None:
        assert Program([]).commands == (Command.SLEEP,)

    def test_pointer_is_wrapped(self) -> None:
        assert Program([Command.MOVE, Command.LEFT], pointer=5).pointer == 1

    def test_equality_ignores_pointer(self) -> None:
        a = Program([Command.MOVE, Command.LEFT])
        b = Program([Command.MOVE, Command.LEFT], pointer=1)
        assert a == b
        assert hash(a) == hash(b)
        assert a != Program([Command.LEFT, Command.MOVE])

    def test_copy_resets_pointer(self) -> None:
        program = Program([Command.MOVE, Command.LEFT], pointer=1)
        clone = program.copy()
        assert clone == program
        assert clone is not program
        assert clone.pointer == 0

    def test_label(self) -> None:
        assert Program([Command.LEFT, Command.MOVE]).label() == "LEFT,MOVE"


class TestProgramExecution:
    def test_pointer_cycles(self) -> None:
        field = _field()
        program = Program([Command.LEFT, Command.SLEEP, Command.RIGHT])
        entity = field.place_entity((3, 3), Direction.UP, program)
        seen = []
        for _ in range(7):
            seen.append(program.pointer)
            program.execute(field, entity)
        assert seen == [0, 1, 2, 0, 1, 2, 0]

    def test_execute_returns_command_run(self) -> None:
        field = _field()
        program = Program([Command.RIGHT, Command.MOVE])
        entity = field.place_entity((3, 3), Direction.UP, program)
        assert program.execute(field, entity) is Command.RIGHT
        assert entity.direction is Direction.RIGHT

    def test_skip_advances_past_next(self) -> None:
        field = _field()
        program = Program([Command.SKIP, Command.LEFT, Command.RIGHT])
        entity = field.place_entity((3, 3), Direction.UP, program)
        program.execute(field, entity)
        assert program.pointer == 2

    def test_skip2_wraps(self) -> None:
        field = _field()
        program = Program([Command.SLEEP, Command.SKIP2, Command.LEFT])
        program.pointer = 1
        entity = field.place_entity((3, 3), Direction.UP, program)
        program.execute(field, entity)
        assert program.pointer == (1 + 1 + 2) % 3

    def test_conditional_skips_only_when_true(self) -> None:
        field = _field()
        program = Program([Command.IFFOOD, Command.MOVE, Command.LEFT])
        entity = field.place_entity((3, 3), Direction.UP, program)
        program.execute(field, entity)
        assert program.pointer == 1

        program.pointer = 0
        field.add_food((3, 2))
        program.execute(field, entity)
        assert program.pointer == 2


class TestMutation:
    def test_rate_zero_copies(self) -> None:
        program = Program([Command.MOVE, Command.LEFT])
        rng = Random(0)
        for _ in range(50):
            mutated = program.mutate(rng, 0)
            assert mutated == program
            assert mutated is not program

    def test_rate_hundred_always_edits_length(self) -> None:
        program = Program([Command.MOVE, Command.LEFT, Command.RIGHT])
        rng = Random(1)
        for _ in range(100):
            mutated = program.mutate(rng, 100)
            assert abs(len(mutated) - len(program)) <= 1

    def test_never_empties(self) -> None:
        program = Program([Command.MOVE])
        rng = Random(3)
        for _ in range(300):
            mutated = program.mutate(rng, 100)
            assert len(mutated) >= 1

    def test_does_not_modify_receiver(self) -> None:
        program = Program([Command.MOVE, Command.LEFT])
        rng = Random(5)
        for _ in range(50):
            program.mutate(rng, 100)
        assert program.commands == (Command.MOVE, Command.LEFT)

    def test_draw_order(self) -> None:
        program = Program([Command.MOVE, Command.LEFT, Command.RIGHT])
        rng = Random(11)
        mutated = program.mutate(rng, 100)

        replay = Random(11)
        assert replay.randrange(100) < 100
        candidate = replay.choice(CommandSet.EXTENDED.commands)
        kind = replay.randrange(3)
        commands = list(program.commands)
        if kind == 0:
            del commands[replay.randrange(3)]
        elif kind == 1:
            commands.insert(replay.randrange(4), candidate)
        else:
            commands[replay.randrange(3)] = candidate
        assert mutated.commands == tuple(commands or [Command.SLEEP])

    def test_basic_set_restricts_new_commands(self) -> None:
        program = Program([Command.MOVE])
        rng = Random(2)
        allowed = set(CommandSet.BASIC.commands)
        for _ in range(200):
            program = program.mutate(rng, 100, CommandSet.BASIC)
            assert set(program.commands) <= allowed


class TestRandomAndParse:
    def test_random_program_length(self) -> None:
        program = random_program(Random(0), 6)
        assert len(program) == 6

    def test_random_program_rejects_zero(self) -> None:
        with pytest.raises(ValueError, match="length"):
            random_program(Random(0), 0)

    def test_random_program_basic(self) -> None:
        program = random_program(Random(4), 50, CommandSet.BASIC)
        assert set(program.commands) <= set(CommandSet.BASIC.commands)

    def test_parse_program(self) -> None:
        program = parse_program(" move, Left ,IFWALL")
        assert program.commands == (Command.MOVE, Command.LEFT, Command.IFWALL)

    def test_parse_empty(self) -> None:
        with pytest.raises(ValueError, match="at least one"):
            parse_program(" , ")

    def test_parse_unknown(self) -> None:
        with pytest.raises(ValueError, match="unknown command"):
            parse_program("MOVE,JUMP")
