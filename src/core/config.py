"""
Game configuration.

The rule variants (see DESIGN.md) are switched here rather than hard-coded, so the same engine can play
either version of the game.
"""

import os
from typing import Self

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidSizeError

MIN_BOARD_SIZE = 4
MAX_BOARD_SIZE = 20
ENV_PREFIX = "COLORJUMP_"


def is_valid_board_size(size: int) -> bool:
    return size % 2 == 0 and MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE


class GameConfig(BaseModel):
    """
    Settings for a single game session
    ----

    * board_size: even number between 4 and 20
    * forced_continuation: a chain must keep going while the moving piece can still jump.
        If False, a player may stop after any jump.
    * scan_all_directions: the "is there any move left?" check looks in all four directions.
        If False, only jumps upwards are considered (the behaviour of the old version of the game).
    * ai_replan_each_step: the computer re-runs its search (with fresh weights) after every jump of its chain,
        instead of following the chain it planned at the start of its turn.
    * log_path: where the replay log is appended to.
    """

    board_size: int = 8
    forced_continuation: bool = True
    scan_all_directions: bool = True
    ai_replan_each_step: bool = False
    log_path: str = "game.log"

    @field_validator("board_size")
    @classmethod
    def validate_board_size(cls, value: int) -> int:
        if not is_valid_board_size(value):
            raise InvalidSizeError(
                f"Board size must be an even number between {MIN_BOARD_SIZE} and "
                f"{MAX_BOARD_SIZE}, got {value}."
            )
        return value

    @classmethod
    def from_env(cls) -> Self:
        """Override the defaults with COLORJUMP_<FIELD NAME> environment variables (pydantic does the type coercion)."""
        overrides = {
            name: os.environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in os.environ
        }
        return cls(**overrides)
