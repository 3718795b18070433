"""
Players and the set-completion scoring rule
----

Every captured piece is added to the capturing player's counts (one count per color).
As soon as the player holds at least one piece of every color, those five pieces are 'banked' for one point.
"""

from dataclasses import dataclass, field

from src.colorjump.pieces import PIECE_COLORS, PieceColor
from src.core.shared_types import PlayerKind


def empty_counts() -> dict[PieceColor, int]:
    return {color: 0 for color in PIECE_COLORS}


@dataclass
class PlayerState:
    """Snapshot of the mutable part of a player (used to undo a jump)"""

    score: int
    piece_counts: dict[PieceColor, int]


@dataclass
class Player:
    id: int
    kind: PlayerKind
    name: str
    score: int = 0
    piece_counts: dict[PieceColor, int] = field(default_factory=empty_counts)

    @property
    def is_computer(self) -> bool:
        return self.kind == PlayerKind.COMPUTER

    def record_capture(self, color: PieceColor) -> int:
        """Add the captured piece to the counts and bank every full set. Returns the number of sets completed."""
        if color.is_empty:
            raise ValueError("Cannot capture an empty cell.")
        self.piece_counts[color] += 1
        return self.complete_sets()

    def complete_sets(self) -> int:
        """
        Convert full sets into points.
        ---

        NOTE: this has to be a loop. During live play it fires at most once per capture, but a replay
        credits all captures first and only then scores, so multiple sets can be waiting.
        """
        completed = 0
        while all(self.piece_counts[color] >= 1 for color in PIECE_COLORS):
            self.score += 1
            for color in PIECE_COLORS:
                self.piece_counts[color] -= 1
            completed += 1
        return completed

    def save_state(self) -> PlayerState:
        return PlayerState(self.score, dict(self.piece_counts))

    def restore_state(self, state: PlayerState) -> None:
        self.score = state.score
        self.piece_counts = dict(state.piece_counts)
