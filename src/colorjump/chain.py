"""
One turn of one player: a chain of jumps made by a single piece.

State machine
----
SELECTING_START --select_start()--> JUMPING --jump()--> JUMPING (piece can jump again)
                                                  \\--> DONE    (piece is stuck)

* An invalid direction does not change anything: the caller simply asks for another one.
* With forced continuation the chain only ends when the piece cannot jump anymore. Without it, `stop()` ends the
  chain after any jump.
* Before the first jump the player may `abort()` (decline to move).
* `undo()` reverts the last jump of the chain in progress (a single level).
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from src.colorjump.board import Board
from src.colorjump.jumps import (
    Jump,
    execute_jump,
    has_any_continuation,
    undo_jump,
    validate_jump,
)
from src.colorjump.pieces import PieceColor
from src.colorjump.scoring import Player, PlayerState
from src.colorjump.square import Direction, Square
from src.core.exceptions import (
    ChainInProgressError,
    GameStateError,
    NoMoveFromHereError,
    NoPieceHereError,
)

logger = logging.getLogger(__name__)


class ChainState(Enum):
    SELECTING_START = auto()
    JUMPING = auto()
    DONE = auto()
    ABORTED = auto()


@dataclass
class ChainStep:
    """A committed jump + what is needed to take it back"""

    jump: Jump
    captured: PieceColor
    sets_completed: int
    player_before: PlayerState


class ChainController:
    def __init__(
        self, board: Board, player: Player, forced_continuation: bool = True
    ) -> None:
        self.board = board
        self.player = player
        self.forced_continuation = forced_continuation
        self.state = ChainState.SELECTING_START
        self.position: Optional[Square] = None
        self.steps: list[ChainStep] = []
        self._undo_available = False

    @property
    def jumps(self) -> list[Jump]:
        return [step.jump for step in self.steps]

    @property
    def is_finished(self) -> bool:
        return self.state in (ChainState.DONE, ChainState.ABORTED)

    @property
    def can_undo(self) -> bool:
        return self.state == ChainState.JUMPING and self._undo_available

    def select_start(self, square: Square) -> None:
        """
        Pick the piece that will jump.
        ---

        Allowed as long as no jump has been made yet (so a player can change their mind about the piece).
        """
        if self.steps or self.state not in (
            ChainState.SELECTING_START,
            ChainState.JUMPING,
        ):
            raise GameStateError(
                f"Cannot select a new piece now. chain state: {self.state.name}"
            )

        if self.board.is_empty(square):
            raise NoPieceHereError(f"There is no piece on ({square.x}, {square.y}).")

        if not has_any_continuation(self.board, square):
            raise NoMoveFromHereError(
                f"The piece on ({square.x}, {square.y}) cannot jump anywhere."
            )

        self.position = square
        self._change_state(ChainState.JUMPING)

    def jump(self, direction: Direction) -> ChainStep:
        """
        Jump with the selected piece.
        ---

        1. validate (InvalidJumpError leaves the chain untouched, ask for another direction)
        2. move the piece and capture
        3. credit the capture to the player (may complete a set)
        4. check if the piece can continue: if not, the chain is done
        """
        if self.state != ChainState.JUMPING:
            raise GameStateError(f"Cannot jump now. chain state: {self.state.name}")

        # for the type checker: JUMPING always has a position
        assert self.position is not None

        jump = Jump.from_square(self.position, direction)
        captured = validate_jump(self.board, jump)

        player_before = self.player.save_state()
        execute_jump(self.board, jump)
        sets_completed = self.player.record_capture(captured)
        if sets_completed:
            logger.info(
                "%s completed %d set(s), score is now %d",
                self.player.name,
                sets_completed,
                self.player.score,
            )

        step = ChainStep(jump, captured, sets_completed, player_before)
        self.steps.append(step)
        self._undo_available = True
        self.position = jump.landing
        logger.debug(
            "%s jumped (%d, %d) %s capturing %s",
            self.player.name,
            jump.x,
            jump.y,
            direction.name,
            captured.name,
        )

        if not has_any_continuation(self.board, self.position):
            self._change_state(ChainState.DONE)
        return step

    def stop(self) -> None:
        """End the chain voluntarily. Only allowed without forced continuation, and after at least one jump."""
        if self.state != ChainState.JUMPING or not self.steps:
            raise GameStateError(
                "Cannot stop a chain that has not started. "
                f"chain state: {self.state.name}"
            )
        if self.forced_continuation:
            raise ChainInProgressError(
                "The piece can still jump: the chain must be continued."
            )
        self._change_state(ChainState.DONE)

    def abort(self) -> None:
        """Decline to move this turn. Only possible before the first jump."""
        if self.steps or self.is_finished:
            raise GameStateError(
                f"Cannot decline the move after jumping. chain state: {self.state.name}"
            )
        self.position = None
        self._change_state(ChainState.ABORTED)

    def undo(self) -> ChainStep:
        """Take back the last jump (board and player counters). Only one level deep."""
        if not self.can_undo:
            raise GameStateError("Nothing to undo.")

        step = self.steps.pop()
        undo_jump(self.board, step.jump, step.captured)
        self.player.restore_state(step.player_before)
        self.position = step.jump.source
        self._undo_available = False
        return step

    def _change_state(self, new_state: ChainState) -> None:
        self.state = new_state
