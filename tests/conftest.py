"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.colorjump.board import Board
from src.colorjump.scoring import Player
from src.core.shared_types import PlayerKind
from src.storage.file_store import FileLogStore


@pytest.fixture
def board_from_rows() -> Callable[[list[str]], Board]:
    """
    Call the inner function with the rows of the board. The number of rows is the board size, and shorter rows are
    padded with empty cells, so only the interesting part of a row needs to be written out.
    """

    def _create_board(rows: list[str]) -> Board:
        size = len(rows)
        return Board.from_rows([row.ljust(size) for row in rows])

    return _create_board


@pytest.fixture
def human() -> Player:
    return Player(1, PlayerKind.HUMAN, "Ensar")


@pytest.fixture
def computer() -> Player:
    return Player(2, PlayerKind.COMPUTER, "Computer")


@pytest.fixture
def file_store(tmp_path) -> FileLogStore:
    """Replay log in a temporary directory (removed by pytest afterwards)"""
    return FileLogStore(tmp_path / "logs" / "game.log")
