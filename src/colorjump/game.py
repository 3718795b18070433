"""
The Game class is the entrypoint into the domain layer for the service layer.
It owns the board, the two players and the replay log, and drives the turns: whose turn it is, the chain in progress,
the computer's moves, and when the game is over.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Self

from src.colorjump.ai import AISearch, build_weight_matrix
from src.colorjump.board import Board
from src.colorjump.chain import ChainController, ChainState, ChainStep
from src.colorjump.jumps import any_move_available
from src.colorjump.replay import MoveRecord, ReplayLog
from src.colorjump.scoring import Player
from src.colorjump.square import Direction, Square
from src.core.config import GameConfig
from src.core.exceptions import GameStateError
from src.core.models import GameSnapshot, PlayerSnapshot
from src.core.shared_types import PlayerKind, Status

logger = logging.getLogger(__name__)

PASSES_TO_END_GAME = 2


@dataclass
class TurnResult:
    """What happened after a single action of the turn player"""

    player_id: int
    step: Optional[ChainStep] = None
    committed: list[MoveRecord] = field(default_factory=list)
    turn_over: bool = False
    declined: bool = False


class Game:
    def __init__(
        self,
        board: Board,
        current: Player,
        opponent: Player,
        log: ReplayLog,
        config: Optional[GameConfig] = None,
        ai: Optional[AISearch] = None,
    ) -> None:
        self.board = board
        self.current = current
        self.opponent = opponent
        self.log = log
        self.config = config or GameConfig(board_size=board.size)
        self.ai = ai or AISearch()
        self.status = Status.IN_PROGRESS
        self.consecutive_passes = 0
        self.chain = self._new_chain()
        self._update_game_status()

    @classmethod
    def new_game(
        cls,
        players: list[tuple[str, PlayerKind]],
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        ai: Optional[AISearch] = None,
    ) -> Self:
        """Fresh random board, player 1 moves first."""
        if len(players) != 2:
            raise GameStateError(f"A game needs exactly 2 players, got {len(players)}.")
        config = config or GameConfig()
        board = Board.create(config.board_size, rng)
        first, second = (
            Player(player_id, kind, name)
            for player_id, (name, kind) in enumerate(players, start=1)
        )
        log = ReplayLog.start(board, [first, second])
        logger.info(
            "New %dx%d game: %s vs %s", board.size, board.size, first.name, second.name
        )
        return cls(board, first, second, log, config, ai)

    @classmethod
    def from_log(
        cls,
        log: ReplayLog,
        config: Optional[GameConfig] = None,
        ai: Optional[AISearch] = None,
    ) -> Self:
        """
        Continue a game from its replay log.
        ---

        NOTE: declined turns are not logged, so the player to move is the opponent of whoever made the last move
        (player 1 if nothing was played yet).
        For the same reason a game that ended on two passes in a row comes back IN_PROGRESS (both players can
        still jump). Only a game that ended because no move was left is FINISHED again after resuming.
        """
        result = log.replay()
        last = result.last_player_id
        current_id = 1 if last is None else (2 if last == 1 else 1)
        opponent_id = 2 if current_id == 1 else 1
        config = config or GameConfig(board_size=result.board.size)
        if config.board_size != result.board.size:
            config = config.model_copy(update={"board_size": result.board.size})
        return cls(
            result.board,
            result.players[current_id],
            result.players[opponent_id],
            log,
            config,
            ai,
        )

    # --- QUERIES ---
    @property
    def players(self) -> list[Player]:
        return sorted([self.current, self.opponent], key=lambda player: player.id)

    @property
    def winner(self) -> Optional[Player]:
        """Highest score once the game is over. None while playing or on a tie."""
        if self.status != Status.FINISHED:
            return None
        if self.current.score == self.opponent.score:
            return None
        return max(self.current, self.opponent, key=lambda player: player.score)

    def to_snapshot(self) -> GameSnapshot:
        position = self.chain.position
        winner = self.winner
        return GameSnapshot(
            board_rows=self.board.to_rows(),
            players=[
                PlayerSnapshot(
                    id=player.id,
                    kind=player.kind.name.lower(),
                    name=player.name,
                    score=player.score,
                    piece_counts={
                        color.value: count
                        for color, count in player.piece_counts.items()
                    },
                )
                for player in self.players
            ],
            current_player_id=self.current.id,
            chain_position=(position.x, position.y) if position else None,
            status=str(self.status),
            winner=winner.name if winner else None,
        )

    # --- HUMAN TURN ---
    def select_start(self, square: Square) -> None:
        self._assert_human_turn()
        self.chain.select_start(square)

    def jump(self, direction: Direction) -> TurnResult:
        """One jump of the chain in progress. InvalidJumpError is passed on unchanged: simply try another direction."""
        self._assert_human_turn()
        step = self.chain.jump(direction)
        if self.chain.is_finished:
            return self._finish_turn(step)
        return TurnResult(self.current.id, step=step)

    def stop(self) -> TurnResult:
        """End the chain early (only without forced continuation)"""
        self._assert_human_turn()
        self.chain.stop()
        return self._finish_turn()

    def undo(self) -> ChainStep:
        self._assert_human_turn()
        return self.chain.undo()

    def decline(self) -> TurnResult:
        """The turn player does not want to (or cannot) move. Two passes in a row end the game."""
        self._assert_human_turn()
        self.chain.abort()
        return self._finish_turn()

    # --- COMPUTER TURN ---
    def play_computer_turn(self) -> TurnResult:
        """
        Let the search pick the chain, then play it through the chain controller like any other chain.
        ---

        After every jump the next direction comes from the search again: either continuing on the computer's own
        weight matrix (the planned chain), or on a freshly built one (config.ai_replan_each_step).
        """
        self._assert_in_progress()
        if not self.current.is_computer:
            raise GameStateError(f"{self.current.name} is not a computer player.")
        if self.chain.state != ChainState.SELECTING_START:
            raise GameStateError("The computer's turn is already under way.")

        result = self.ai.choose_chain_start(self.board, self.current, self.opponent)
        if result is None:
            logger.warning("%s cannot move", self.current.name)
            self.chain.abort()
            return self._finish_turn()

        self.chain.select_start(result.start)
        matrix = result.matrix
        direction = result.direction
        while True:
            step = self.chain.jump(direction)
            if self.chain.is_finished:
                return self._finish_turn(step)

            if self.config.ai_replan_each_step:
                matrix = build_weight_matrix(self.board, self.current, self.opponent)
            else:
                self.ai.simulate(matrix, step.jump.source, step.jump.direction)

            # for the type checker: a chain still in progress has a position, and a direction to continue in
            assert self.chain.position is not None
            next_direction = self.ai.next_direction(
                self.board, matrix, self.chain.position
            )
            assert next_direction is not None
            direction = next_direction

    # --- PRIVATE HELPERS ---
    def _new_chain(self) -> ChainController:
        return ChainController(
            self.board, self.current, self.config.forced_continuation
        )

    def _finish_turn(self, step: Optional[ChainStep] = None) -> TurnResult:
        """
        The chain is over (done or declined)
        ----

        1. hand the jumps to the replay log
        2. pass the turn to the opponent
        3. check if the game has ended
        """
        player = self.current
        declined = self.chain.state == ChainState.ABORTED
        committed: list[MoveRecord] = []
        if declined:
            self.consecutive_passes += 1
            logger.warning("%s passes", player.name)
        else:
            self.consecutive_passes = 0
            committed = self.log.append_chain(player.id, self.chain.jumps)
            logger.info(
                "%s made a chain of %d jump(s), score %d",
                player.name,
                len(committed),
                player.score,
            )

        self._switch_turn()
        self._update_game_status()
        return TurnResult(
            player.id, step=step, committed=committed, turn_over=True, declined=declined
        )

    def _switch_turn(self) -> None:
        self.current, self.opponent = self.opponent, self.current
        self.chain = self._new_chain()

    def _update_game_status(self) -> None:
        if self.status == Status.FINISHED:
            return
        no_moves = not any_move_available(self.board, self.config.scan_all_directions)
        if no_moves or self.consecutive_passes >= PASSES_TO_END_GAME:
            self.status = Status.FINISHED
            winner = self.winner
            logger.info(
                "Game over. %s",
                f"{winner.name} wins with {winner.score}" if winner else "It's a tie",
            )

    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _assert_human_turn(self) -> None:
        """Human input only drives the chain of a human player, computer chains come from the search"""
        self._assert_in_progress()
        if self.current.is_computer:
            raise GameStateError(
                f"It is the turn of {self.current.name} (computer), "
                "play_computer_turn() moves it."
            )
