"""
A cell on the board + the four jump directions

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

Vector = tuple[int, int]


class Direction(IntEnum):
    """The value is the code written to the replay log. The order is also the order in which directions get tried."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @property
    def vector(self) -> Vector:
        return DIRECTION_VECTORS[self]


# x is the column, y is the row (row 0 is the top line of the board)
DIRECTION_VECTORS: dict[Direction, Vector] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

ALL_DIRECTIONS: tuple[Direction, ...] = tuple(Direction)


@dataclass(frozen=True)
class Square:
    x: int
    y: int

    def step(self, direction: Direction, distance: int = 1) -> Square:
        dx, dy = direction.vector
        return Square(self.x + distance * dx, self.y + distance * dy)

    def is_within_bounds(self, size: int) -> bool:
        return (0 <= self.x < size) and (0 <= self.y < size)
