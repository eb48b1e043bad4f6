"""Compass headings with unit offsets and 90-degree rotation."""

from __future__ import annotations

from enum import Enum
from random import Random


class Direction(Enum):
    """Heading on the field; y grows downwards."""

    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def left(self) -> Direction:
        """Return the heading 90 degrees counter-clockwise."""
        return _CLOCKWISE[(_CLOCKWISE.index(self) - 1) % len(_CLOCKWISE)]

    def right(self) -> Direction:
        """Return the heading 90 degrees clockwise."""
        return _CLOCKWISE[(_CLOCKWISE.index(self) + 1) % len(_CLOCKWISE)]

    def ahead_of(self, x: int, y: int) -> tuple[int, int]:
        """Raw (unnormalized) neighbor of ``(x, y)`` in this heading."""
        return x + self.dx, y + self.dy

    @classmethod
    def random(cls, rng: Random) -> Direction:
        return _CLOCKWISE[rng.randrange(len(_CLOCKWISE))]


_CLOCKWISE: tuple[Direction, ...] = (
    Direction.UP,
    Direction.RIGHT,
    Direction.DOWN,
    Direction.LEFT,
)
