"""
Jump rules
----

A piece jumps two cells in one of the four directions, over the (non-empty) cell next to it, and captures the piece it
jumped over. The cell it lands on must be empty.

Validation and execution are kept apart: `execute_jump()` trusts that `validate_jump()` was called on the same board
state first.
"""

from dataclasses import dataclass
from typing import Protocol, Self

from src.colorjump.pieces import PieceColor
from src.colorjump.square import ALL_DIRECTIONS, Direction, Square
from src.core.exceptions import InvalidJumpError


class Board(Protocol):
    """Just the parts the jump rules need (see board.py for the real thing)"""

    size: int

    def piece(self, square: Square) -> PieceColor: ...
    def place_piece(self, square: Square, color: PieceColor) -> None: ...
    def is_within_bounds(self, square: Square) -> bool: ...
    def squares(self) -> list[Square]: ...


@dataclass(frozen=True)
class Jump:
    """A single jump. Only a value: mid and landing squares are derived from the source square + direction."""

    x: int
    y: int
    direction: Direction

    @classmethod
    def from_square(cls, square: Square, direction: Direction) -> Self:
        return cls(square.x, square.y, direction)

    @property
    def source(self) -> Square:
        return Square(self.x, self.y)

    @property
    def mid(self) -> Square:
        return self.source.step(self.direction)

    @property
    def landing(self) -> Square:
        return self.source.step(self.direction, 2)


def validate_jump(board: Board, jump: Jump) -> PieceColor:
    """
    Check the jump against the current board.
    ---

    Returns the color of the piece that would be captured.
    Raises InvalidJumpError when:
    1. the source, mid or landing square is off the board
    2. there is no piece to jump with
    3. there is nothing to capture (mid is empty)
    4. there is no room to land (landing is occupied)
    """
    for square in (jump.source, jump.mid, jump.landing):
        if not board.is_within_bounds(square):
            raise InvalidJumpError(f"{_describe(jump)} leaves the board.")

    if board.piece(jump.source).is_empty:
        raise InvalidJumpError(f"{_describe(jump)}: there is no piece to move.")

    captured = board.piece(jump.mid)
    if captured.is_empty:
        raise InvalidJumpError(f"{_describe(jump)}: there is nothing to capture.")

    if not board.piece(jump.landing).is_empty:
        raise InvalidJumpError(f"{_describe(jump)}: the landing cell is occupied.")

    return captured


def is_valid_jump(board: Board, jump: Jump) -> bool:
    try:
        validate_jump(board, jump)
    except InvalidJumpError:
        return False
    return True


def execute_jump(board: Board, jump: Jump) -> None:
    """Move the piece to the landing square, clear the source and the captured piece. NOTE: no re-validation here."""
    moving_piece = board.piece(jump.source)
    board.place_piece(jump.landing, moving_piece)
    board.place_piece(jump.mid, PieceColor.EMPTY)
    board.place_piece(jump.source, PieceColor.EMPTY)


def undo_jump(board: Board, jump: Jump, captured: PieceColor) -> None:
    """Exact inverse of execute_jump(): the piece goes back to the source square and the captured piece is put back."""
    moving_piece = board.piece(jump.landing)
    board.place_piece(jump.source, moving_piece)
    board.place_piece(jump.mid, captured)
    board.place_piece(jump.landing, PieceColor.EMPTY)


def legal_directions(board: Board, square: Square) -> list[Direction]:
    """The directions the piece on the square can jump in (in the order Up, Down, Left, Right)"""
    return [
        direction
        for direction in ALL_DIRECTIONS
        if is_valid_jump(board, Jump.from_square(square, direction))
    ]


def has_any_continuation(board: Board, square: Square) -> bool:
    """Can the piece on this square jump again? (Checked after every jump of a chain)"""
    return any(
        is_valid_jump(board, Jump.from_square(square, direction))
        for direction in ALL_DIRECTIONS
    )


def any_move_available(board: Board, scan_all_directions: bool = True) -> bool:
    """
    Is there any legal jump left on the board (for either player, pieces are not owned)?
    ---

    NOTE: with scan_all_directions=False only upward jumps are tried for every cell. This is how the old version of
    the game decided whether it was over, and can end a game while sideways/downward jumps are still possible.
    """
    directions = ALL_DIRECTIONS if scan_all_directions else (Direction.UP,)
    return any(
        is_valid_jump(board, Jump.from_square(square, direction))
        for square in board.squares()
        for direction in directions
    )


def _describe(jump: Jump) -> str:
    return f"Jump from ({jump.x}, {jump.y}) {jump.direction.name.lower()}"
