"""Orchestration of the input layer (requests) to the game logic and the replay log store (and the reverse direction)."""

import logging
import random
from typing import Optional

from src.api.models import JumpRequest, NewGameRequest, SelectStartRequest
from src.colorjump.game import Game, TurnResult
from src.colorjump.replay import ReplayLog
from src.colorjump.square import Square
from src.core.config import GameConfig
from src.core.exceptions import GameStateError, LogStoreError
from src.core.models import GameSnapshot
from src.storage.file_store import FileLogStore
from src.storage.repository import LogStore

logger = logging.getLogger(__name__)


class GameService:
    """Orchestration of layers for a single game session."""

    def __init__(
        self, store: Optional[LogStore] = None, config: Optional[GameConfig] = None
    ) -> None:
        """Without a store, the replay log is the file at config.log_path"""
        self.config = config or GameConfig()
        self.store = store or FileLogStore(self.config.log_path)
        self.game: Optional[Game] = None

    # -- Session logic ---
    def new_game(self, request: NewGameRequest) -> GameSnapshot:
        """Create a new game and start a new replay log with its starting board + players."""
        config = self.config
        if request.board_size is not None:
            config = config.model_copy(update={"board_size": request.board_size})
        rng = random.Random(request.seed) if request.seed is not None else None

        game = Game.new_game(
            players=[(player.name, player.kind) for player in request.players],
            config=config,
            rng=rng,
        )
        self.store.create(game.log.header_lines())
        self.game = game
        return game.to_snapshot()

    def resume_game(self) -> GameSnapshot:
        """Rebuild the game from the stored replay log (CorruptLogError if it does not replay cleanly)."""
        if not self.store.exists():
            raise LogStoreError("There is no replay log to resume from.")
        log = ReplayLog.from_lines(self.store.read())
        self.game = Game.from_log(log, self.config)
        logger.info("Resumed game after %d recorded move(s)", len(log.moves))
        return self.game.to_snapshot()

    def replay_game(self) -> GameSnapshot:
        """Replay the stored log without touching the current session. Read-only view of the final position."""
        log = ReplayLog.from_lines(self.store.read())
        return Game.from_log(log, self.config).to_snapshot()

    def get_game_state(self) -> GameSnapshot:
        return self._require_game().to_snapshot()

    # -- Turn logic ---
    def select_start(self, request: SelectStartRequest) -> GameSnapshot:
        game = self._require_game()
        game.select_start(Square(request.x, request.y))
        return game.to_snapshot()

    def jump(self, request: JumpRequest) -> GameSnapshot:
        game = self._require_game()
        result = game.jump(request.direction)
        self._persist(result)
        return game.to_snapshot()

    def stop_chain(self) -> GameSnapshot:
        game = self._require_game()
        self._persist(game.stop())
        return game.to_snapshot()

    def undo(self) -> GameSnapshot:
        game = self._require_game()
        game.undo()
        return game.to_snapshot()

    def decline(self) -> GameSnapshot:
        game = self._require_game()
        game.decline()
        return game.to_snapshot()

    def computer_turn(self) -> GameSnapshot:
        game = self._require_game()
        self._persist(game.play_computer_turn())
        return game.to_snapshot()

    # -- Internal helpers --
    def _persist(self, result: TurnResult) -> None:
        """Committed chains go to the store before the next request can be handled."""
        if result.committed:
            self.store.append([record.to_line() for record in result.committed])

    def _require_game(self) -> Game:
        if self.game is None:
            raise GameStateError(
                "No game in progress. Start a new game or resume one first."
            )
        return self.game
