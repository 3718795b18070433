"""Request models: the (already parsed) input the game receives from the outside world"""

from typing import Any, Optional

from pydantic import BaseModel, field_validator

from src.colorjump.square import Direction
from src.core.config import is_valid_board_size
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import PlayerKind

PlayerName = str


def _enum_by_name_or_value(enum_type: Any, value: Any) -> Any:
    """Accept either the member itself, its integer code, or its (case-insensitive) name"""
    if isinstance(value, str) and not value.isdigit():
        name = value.strip().upper()
        if name not in enum_type.__members__:
            names = ", ".join(member.lower() for member in enum_type.__members__)
            raise InvalidRequestError(f"{value!r} is not one of {names}.")
        return enum_type[name]
    return value


class PlayerRequest(BaseModel):
    name: PlayerName
    kind: PlayerKind = PlayerKind.HUMAN

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Names are written to the replay log as a single token"""
        if not value or any(
            character.isspace() or character == "," for character in value
        ):
            raise InvalidRequestError(
                f"Player name {value!r} must be a single word (no spaces or commas)."
            )
        return value

    @field_validator("kind", mode="before")
    @classmethod
    def validate_kind(cls, value: Any) -> Any:
        return _enum_by_name_or_value(PlayerKind, value)


# --- REQUEST MODELS ---
class NewGameRequest(BaseModel):
    players: list[PlayerRequest]
    board_size: Optional[int] = None
    seed: Optional[int] = None

    @field_validator("players")
    @classmethod
    def validate_players(cls, value: list[PlayerRequest]) -> list[PlayerRequest]:
        if len(value) != 2:
            raise InvalidRequestError(
                f"A game needs exactly 2 players, got {len(value)}."
            )
        return value

    @field_validator("board_size")
    @classmethod
    def validate_board_size(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and not is_valid_board_size(value):
            raise InvalidRequestError(
                f"Board size must be an even number between 4 and 20, got {value}."
            )
        return value


class SelectStartRequest(BaseModel):
    """0-based column (x) and row (y). Translating the on-screen coordinates is up to the input layer."""

    x: int
    y: int

    @field_validator(*["x", "y"])
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        if value < 0:
            raise InvalidRequestError(f"Coordinates cannot be negative, got {value}.")
        return value


class JumpRequest(BaseModel):
    direction: Direction

    @field_validator("direction", mode="before")
    @classmethod
    def validate_direction(cls, value: Any) -> Any:
        return _enum_by_name_or_value(Direction, value)
