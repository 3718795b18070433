"""Unit tests for /src/colorjump/replay.py"""

import random
from typing import Callable

import pytest

from src.colorjump.board import Board
from src.colorjump.game import Game
from src.colorjump.jumps import Jump
from src.colorjump.pieces import PIECE_COLORS, PieceColor
from src.colorjump.replay import (
    BoardSnapshot,
    MoveRecord,
    PlayerDeclaration,
    ReplayLog,
    ReplayResult,
    parse_log,
)
from src.colorjump.scoring import Player
from src.colorjump.square import Direction, Square
from src.core.config import GameConfig
from src.core.exceptions import CorruptLogError
from src.core.shared_types import PlayerKind, Status

BoardFactory = Callable[[list[str]], Board]

EXAMPLE_LOG = [
    "size: 4",
    "board:",
    "ABCD",
    "EB A",
    "B  C",
    "DEAB",
    "player: id: 1, type: 0, name: Ensar",
    "player: id: 2, type: 1, name: Computer",
    "move: player: 1, x: 0, y: 1, direction: 3",
    "move: player: 2, x: 3, y: 1, direction: 2",
]


def replay_lines(lines: list[str]) -> ReplayResult:
    return ReplayLog.from_lines(lines).replay()


# A (0, 0) captures A, B, C, D, E in a single chain to the right
FULL_SET_ROW = "AA B C D E  "


def full_set_board() -> Board:
    return Board.from_rows([FULL_SET_ROW] + [" " * 12] * 11)


# -- RECORDS ---
def test_snapshot_lines() -> None:
    board = Board.from_rows(["ABCD", "EB A", "B  C", "DEAB"])
    assert BoardSnapshot.from_board(board).to_lines() == EXAMPLE_LOG[:6]


def test_player_declaration_line() -> None:
    declaration = PlayerDeclaration.from_player(Player(2, PlayerKind.COMPUTER, "Computer"))
    assert declaration.to_line() == "player: id: 2, type: 1, name: Computer"


def test_move_record_line() -> None:
    record = MoveRecord.from_jump(1, Jump(3, 1, Direction.LEFT))
    assert record.to_line() == "move: player: 1, x: 3, y: 1, direction: 2"
    assert record.to_jump() == Jump(3, 1, Direction.LEFT)


# -- PARSING ---
def test_parse_log() -> None:
    parsed = parse_log(EXAMPLE_LOG)

    assert parsed.snapshot == BoardSnapshot(4, ("ABCD", "EB A", "B  C", "DEAB"))
    assert parsed.players == [
        PlayerDeclaration(1, PlayerKind.HUMAN, "Ensar"),
        PlayerDeclaration(2, PlayerKind.COMPUTER, "Computer"),
    ]
    assert parsed.moves == [
        MoveRecord(1, 0, 1, Direction.RIGHT),
        MoveRecord(2, 3, 1, Direction.LEFT),
    ]


def test_log_lines_roundtrip() -> None:
    assert ReplayLog.from_lines(EXAMPLE_LOG).to_lines() == EXAMPLE_LOG


def test_parse_keeps_empty_rows_and_line_endings() -> None:
    """Lines as read from a file (with newlines), and a row that is completely empty"""
    lines = [
        "size: 4\n",
        "board:\n",
        "A   \n",
        "    \r\n",
        "    \n",
        "   B\n",
        "player: id: 1, type: 0, name: a\n",
        "player: id: 2, type: 0, name: b\n",
    ]
    parsed = parse_log(lines)
    assert parsed.snapshot.rows == ("A   ", "    ", "    ", "   B")


def test_parse_pads_stripped_rows() -> None:
    lines = EXAMPLE_LOG[:2] + ["A", "", "", "   B"] + EXAMPLE_LOG[6:8]
    parsed = parse_log(lines)
    assert parsed.snapshot.rows == ("A   ", "    ", "    ", "   B")


def test_parse_skips_blank_lines_between_records() -> None:
    lines = [""] + EXAMPLE_LOG[:7] + ["", "   "] + EXAMPLE_LOG[7:]
    assert len(parse_log(lines).moves) == 2


@pytest.mark.parametrize(
    "lines",
    [
        [],  # nothing at all
        ["board:"] + EXAMPLE_LOG[2:],  # no size
        ["size: 5", "board:", "ABCDE", "A   E", "A   E", "A   E", "ABCDE"] + EXAMPLE_LOG[6:8],  # odd size
        ["size: 4"] + EXAMPLE_LOG[2:],  # no board header
        EXAMPLE_LOG[:2] + ["ABCDE", "EB A", "B  C", "DEAB"] + EXAMPLE_LOG[6:],  # row too long
        EXAMPLE_LOG[:2] + ["ABCX", "EB A", "B  C", "DEAB"] + EXAMPLE_LOG[6:],  # unknown color
        EXAMPLE_LOG[:3],  # board cut off
        EXAMPLE_LOG[:7],  # one player only
        EXAMPLE_LOG[:6] + [EXAMPLE_LOG[6], EXAMPLE_LOG[6]],  # same player twice
        EXAMPLE_LOG[:6] + ["player: id: 3, type: 0, name: Third", EXAMPLE_LOG[7]],  # unknown player id
        EXAMPLE_LOG[:7] + [EXAMPLE_LOG[8], EXAMPLE_LOG[7]],  # move before all players are declared
        EXAMPLE_LOG + [EXAMPLE_LOG[7]],  # player declared after moves
        EXAMPLE_LOG + ["move: player: 3, x: 0, y: 0, direction: 1"],  # unknown player
        EXAMPLE_LOG + ["move: player: 1, x: 0, y: 0, direction: 4"],  # unknown direction
        EXAMPLE_LOG + ["player: id: 1, type: 0, name: two words"],  # name is not a token
        EXAMPLE_LOG + ["some garbage"],
    ],
)
def test_parse_corrupt_log(lines: list[str]) -> None:
    with pytest.raises(CorruptLogError):
        parse_log(lines)


# -- REPLAY ---
def test_replay_example_log() -> None:
    result = replay_lines(EXAMPLE_LOG)

    assert result.board.to_rows() == [
        "ABCD",
        " A  ",
        "B  C",
        "DEAB",
    ]
    assert result.last_player_id == 2


def test_replay_credits_captures_to_the_mover() -> None:
    result = replay_lines(EXAMPLE_LOG)
    assert result.players[1].piece_counts[PieceColor.B] == 1
    assert result.players[2].piece_counts[PieceColor.E] == 1
    assert sum(result.players[1].piece_counts.values()) == 1
    assert sum(result.players[2].piece_counts.values()) == 1


def test_replay_invalid_move_is_corrupt() -> None:
    lines = EXAMPLE_LOG[:8] + ["move: player: 1, x: 0, y: 0, direction: 0"]
    with pytest.raises(CorruptLogError):
        replay_lines(lines)


def test_replay_move_from_empty_cell_is_corrupt() -> None:
    lines = EXAMPLE_LOG[:8] + ["move: player: 1, x: 2, y: 1, direction: 1"]
    with pytest.raises(CorruptLogError):
        replay_lines(lines)


def test_replay_scores_after_all_moves() -> None:
    """A single chain capturing one piece of every color is worth exactly one point"""
    board = full_set_board()
    players = [Player(1, PlayerKind.HUMAN, "a"), Player(2, PlayerKind.HUMAN, "b")]
    log = ReplayLog.start(board, players)
    log.append_chain(1, [Jump(x, 0, Direction.RIGHT) for x in (0, 2, 4, 6, 8)])

    result = log.replay()

    assert result.players[1].score == 1
    assert all(result.players[1].piece_counts[color] == 0 for color in PIECE_COLORS)
    assert result.players[2].score == 0
    assert result.board.to_rows()[0] == "          A "


def test_replay_does_not_change_the_log() -> None:
    log = ReplayLog.from_lines(EXAMPLE_LOG)
    log.replay()
    log.replay()
    assert log.to_lines() == EXAMPLE_LOG


def test_append_chain_returns_new_records() -> None:
    board = full_set_board()
    log = ReplayLog.start(board, [Player(1, PlayerKind.HUMAN, "a"), Player(2, PlayerKind.HUMAN, "b")])

    records = log.append_chain(2, [Jump(0, 0, Direction.RIGHT), Jump(2, 0, Direction.RIGHT)])

    assert records == [
        MoveRecord(2, 0, 0, Direction.RIGHT),
        MoveRecord(2, 2, 0, Direction.RIGHT),
    ]
    assert log.moves == records
    assert log.to_lines()[-2:] == [record.to_line() for record in records]


def test_live_game_and_replay_match_on_full_set_chain() -> None:
    board = full_set_board()
    players = (Player(1, PlayerKind.HUMAN, "a"), Player(2, PlayerKind.HUMAN, "b"))
    game = Game(board, players[0], players[1], ReplayLog.start(board, players), GameConfig(board_size=12))

    game.select_start(Square(0, 0))
    for _ in range(5):
        game.jump(Direction.RIGHT)

    result = replay_lines(game.log.to_lines())
    assert result.board == game.board
    assert result.players[1].score == players[0].score == 1
    assert result.players[1].piece_counts == players[0].piece_counts


@pytest.mark.parametrize("seed", [1, 2, 3, 42])
def test_replay_reproduces_a_full_game(seed: int) -> None:
    """Computer vs computer on a random board: replaying the log gives the same board and the same scores"""
    config = GameConfig(board_size=6)
    game = Game.new_game(
        [("one", PlayerKind.COMPUTER), ("two", PlayerKind.COMPUTER)],
        config=config,
        rng=random.Random(seed),
    )
    while game.status == Status.IN_PROGRESS:
        game.play_computer_turn()

    result = replay_lines(game.log.to_lines())

    assert result.board == game.board
    for player in game.players:
        assert result.players[player.id].score == player.score
        assert result.players[player.id].piece_counts == player.piece_counts
