"""Defines the piece colors (and the empty cell)"""

from enum import Enum
from typing import Self


class PieceColor(Enum):
    """
    The value is the character used for the color on the board / in the replay log.

    NOTE: EMPTY is part of the enum (just like an empty square is a 'piece' in the broad sense), use PIECE_COLORS for
    the five actual colors.
    """

    EMPTY = " "
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"

    @classmethod
    def from_char(cls, character: str) -> Self:
        return cls(character)

    def to_char(self) -> str:
        return self.value

    @property
    def is_empty(self) -> bool:
        return self == PieceColor.EMPTY


PIECE_COLORS: tuple[PieceColor, ...] = (
    PieceColor.A,
    PieceColor.B,
    PieceColor.C,
    PieceColor.D,
    PieceColor.E,
)

VALID_CELL_CHARACTERS = frozenset(color.value for color in PieceColor)
