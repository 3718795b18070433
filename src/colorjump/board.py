"""The board only owns the grid of cells. Whether a change to the grid is allowed is decided by the jump rules in jumps.py"""

import random
from copy import deepcopy
from dataclasses import dataclass
from typing import Optional, Self

from src.colorjump.pieces import PIECE_COLORS, VALID_CELL_CHARACTERS, PieceColor
from src.colorjump.square import Square
from src.core.config import MAX_BOARD_SIZE, MIN_BOARD_SIZE, is_valid_board_size
from src.core.exceptions import InvalidBoardError, InvalidSizeError, OutOfBoundsError


def center_squares(size: int) -> list[Square]:
    """The 2x2 block in the middle of the board that starts out empty"""
    half = size // 2
    return [Square(x, y) for y in (half - 1, half) for x in (half - 1, half)]


@dataclass
class Board:
    size: int
    cells: list[list[PieceColor]]  # cells[y][x]

    @classmethod
    def create(cls, size: int, rng: Optional[random.Random] = None) -> Self:
        """
        A fresh board: every cell gets a random color, except the central 2x2 block which is left empty.
        ---

        Pass in your own random.Random (with a seed) to get the same board twice.
        """
        if not is_valid_board_size(size):
            raise InvalidSizeError(
                f"Board size must be an even number between {MIN_BOARD_SIZE} and "
                f"{MAX_BOARD_SIZE}, got {size}."
            )
        rng = rng or random.Random()
        cells = [[rng.choice(PIECE_COLORS) for _ in range(size)] for _ in range(size)]
        for square in center_squares(size):
            cells[square.y][square.x] = PieceColor.EMPTY
        return cls(size, cells)

    @classmethod
    def from_rows(cls, rows: list[str]) -> Self:
        """
        Construct a board from its text form: one string per row, one character per cell.
        A space is an empty cell, the letters A-E are the colors.

        ex) a 4x4 board
        "ABCD"
        "E  A"
        "B  C"
        "DEAB"
        """
        size = len(rows)
        if not is_valid_board_size(size):
            raise InvalidSizeError(
                f"Board size must be an even number between {MIN_BOARD_SIZE} and "
                f"{MAX_BOARD_SIZE}, got {size}."
            )
        cells: list[list[PieceColor]] = []
        for y, row in enumerate(rows):
            if len(row) != size or not set(row) <= VALID_CELL_CHARACTERS:
                raise InvalidBoardError(
                    f"Row {y} does not describe {size} cells: {row!r}"
                )
            cells.append([PieceColor.from_char(character) for character in row])
        return cls(size, cells)

    def to_rows(self) -> list[str]:
        return ["".join(color.to_char() for color in row) for row in self.cells]

    def copy(self) -> Self:
        return deepcopy(self)

    # --- CELL ACCESS ---
    def piece(self, square: Square) -> PieceColor:
        self._assert_within_bounds(square)
        return self.cells[square.y][square.x]

    def place_piece(self, square: Square, color: PieceColor) -> None:
        self._assert_within_bounds(square)
        self.cells[square.y][square.x] = color

    def remove_piece(self, square: Square) -> None:
        self.place_piece(square, PieceColor.EMPTY)

    def is_empty(self, square: Square) -> bool:
        return self.piece(square).is_empty

    def is_within_bounds(self, square: Square) -> bool:
        return square.is_within_bounds(self.size)

    # --- QUERIES ---
    def squares(self) -> list[Square]:
        """All squares in row-major order (top row first, left to right)"""
        return [Square(x, y) for y in range(self.size) for x in range(self.size)]

    def _assert_within_bounds(self, square: Square) -> None:
        if not self.is_within_bounds(square):
            raise OutOfBoundsError(
                f"({square.x}, {square.y}) is not on the {self.size}x{self.size} board."
            )
