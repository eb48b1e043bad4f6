"""Tests for genetic_code.domain.direction module."""

from __future__ import annotations

from random import Random

from genetic_code.domain.direction import Direction


class TestDirection:
    def test_offsets(self) -> None:
        assert (Direction.UP.dx, Direction.UP.dy) == (0, -1)
        assert (Direction.RIGHT.dx, Direction.RIGHT.dy) == (1, 0)
        assert (Direction.DOWN.dx, Direction.DOWN.dy) == (0, 1)
        assert (Direction.LEFT.dx, Direction.LEFT.dy) == (-1, 0)

    def test_right_is_clockwise(self) -> None:
        assert Direction.UP.right() is Direction.RIGHT
        assert Direction.RIGHT.right() is Direction.DOWN
        assert Direction.DOWN.right() is Direction.LEFT
        assert Direction.LEFT.right() is Direction.UP

    def test_left_inverts_right(self) -> None:
        for direction in Direction:
            assert direction.right().left() is direction
            assert direction.left().left().left().left() is direction

    def test_ahead_of_is_unnormalized(self) -> None:
        assert Direction.LEFT.ahead_of(0, 0) == (-1, 0)
        assert Direction.DOWN.ahead_of(3, 4) == (3, 5)

    def test_random_covers_all_headings(self) -> None:
        rng = Random(0)
        seen = {Direction.random(rng) for _ in range(200)}
        assert seen == set(Direction)

    def test_random_is_seeded(self) -> None:
        a = [Direction.random(Random(7)) for _ in range(5)]
        b = [Direction.random(Random(7)) for _ in range(5)]
        assert a == b
