"""
Boundary layer data model(s).

Read-only view of a game session. The rendering side (and the tests) only ever see these, never the mutable Board / Player
objects of the domain layer.
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make the snapshot easier to read
ColorName = str
PlayerName = str


@dataclass(frozen=True)
class PlayerSnapshot:
    id: int
    kind: str
    name: PlayerName
    score: int
    piece_counts: dict[ColorName, int]


@dataclass(frozen=True)
class GameSnapshot:
    """Transport-safe representation of a game, used between the Service and whatever draws the board."""

    board_rows: list[str]
    players: list[PlayerSnapshot]
    current_player_id: int
    chain_position: Optional[tuple[int, int]]
    status: str
    winner: Optional[PlayerName]
