"""
Replay log: the text record of a game, and how to play it back.
----

A log is line based and append-only:

    size: 4
    board:
    ABCD
    E  A
    B  C
    DEAB
    player: id: 1, type: 0, name: Ensar
    player: id: 2, type: 1, name: Computer
    move: player: 1, x: 0, y: 1, direction: 3
    move: player: 1, x: 2, y: 1, direction: 1

* the board block has exactly `size` lines, a space is an empty cell (so never strip those lines!)
* player type: 0 = human, 1 = computer
* direction: 0 = up, 1 = down, 2 = left, 3 = right
* every jump gets its own move record: a chain shows up as consecutive moves of the same player

Replaying rebuilds the board from the snapshot and re-executes every move, validating each one against the board.
A move that does not fit means the log is corrupt: replay stops rather than continuing with a different game.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Self

from src.colorjump.board import Board
from src.colorjump.jumps import Jump, execute_jump, validate_jump
from src.colorjump.scoring import Player
from src.colorjump.square import Direction
from src.core.config import is_valid_board_size
from src.core.exceptions import CorruptLogError, InvalidBoardError, InvalidJumpError
from src.core.shared_types import PlayerKind

SIZE_PATTERN = re.compile(r"^size: (\d+)$")
BOARD_HEADER = "board:"
PLAYER_PATTERN = re.compile(r"^player: id: (\d+), type: ([01]), name: ([^\s,]+)$")
MOVE_PATTERN = re.compile(
    r"^move: player: (\d+), x: (-?\d+), y: (-?\d+), direction: ([0-3])$"
)
PLAYER_IDS = (1, 2)


# --- RECORDS ---
@dataclass(frozen=True)
class BoardSnapshot:
    size: int
    rows: tuple[str, ...]

    @classmethod
    def from_board(cls, board: Board) -> Self:
        return cls(board.size, tuple(board.to_rows()))

    def to_board(self) -> Board:
        return Board.from_rows(list(self.rows))

    def to_lines(self) -> list[str]:
        return [f"size: {self.size}", BOARD_HEADER, *self.rows]


@dataclass(frozen=True)
class PlayerDeclaration:
    id: int
    kind: PlayerKind
    name: str

    @classmethod
    def from_player(cls, player: Player) -> Self:
        return cls(player.id, player.kind, player.name)

    def to_player(self) -> Player:
        return Player(self.id, self.kind, self.name)

    def to_line(self) -> str:
        return f"player: id: {self.id}, type: {int(self.kind)}, name: {self.name}"


@dataclass(frozen=True)
class MoveRecord:
    player_id: int
    x: int
    y: int
    direction: Direction

    @classmethod
    def from_jump(cls, player_id: int, jump: Jump) -> Self:
        return cls(player_id, jump.x, jump.y, jump.direction)

    def to_jump(self) -> Jump:
        return Jump(self.x, self.y, self.direction)

    def to_line(self) -> str:
        return (
            f"move: player: {self.player_id}, x: {self.x}, y: {self.y}, "
            f"direction: {int(self.direction)}"
        )


# --- PARSING ---
@dataclass
class ParsedLog:
    snapshot: BoardSnapshot
    players: list[PlayerDeclaration]
    moves: list[MoveRecord]


def parse_log(lines: Iterable[str]) -> ParsedLog:
    """
    Read the records from the lines of a log.
    ---

    Expected order: the board snapshot, the two player declarations, then the moves.
    Raises CorruptLogError (with the line number) as soon as something does not fit.
    """
    numbered = [
        (number, line.rstrip("\r\n")) for number, line in enumerate(lines, start=1)
    ]
    position = _skip_blank(numbered, 0)
    snapshot, position = _parse_snapshot(numbered, position)

    players: list[PlayerDeclaration] = []
    moves: list[MoveRecord] = []
    for number, line in numbered[position:]:
        if not line.strip():
            continue

        player_match = PLAYER_PATTERN.match(line)
        if player_match:
            if moves:
                raise CorruptLogError(
                    f"Line {number}: player declared after the first move."
                )
            declaration = PlayerDeclaration(
                id=int(player_match.group(1)),
                kind=PlayerKind(int(player_match.group(2))),
                name=player_match.group(3),
            )
            if declaration.id not in PLAYER_IDS or declaration.id in {
                player.id for player in players
            }:
                raise CorruptLogError(
                    f"Line {number}: unexpected player id {declaration.id}."
                )
            players.append(declaration)
            continue

        move_match = MOVE_PATTERN.match(line)
        if move_match:
            if len(players) != len(PLAYER_IDS):
                raise CorruptLogError(
                    f"Line {number}: move recorded before both players were declared."
                )
            player_id, x, y, direction = (int(group) for group in move_match.groups())
            if player_id not in PLAYER_IDS:
                raise CorruptLogError(
                    f"Line {number}: move by unknown player {player_id}."
                )
            moves.append(MoveRecord(player_id, x, y, Direction(direction)))
            continue

        raise CorruptLogError(f"Line {number}: cannot interpret {line!r}.")

    if len(players) != len(PLAYER_IDS):
        raise CorruptLogError(
            f"Expected {len(PLAYER_IDS)} player declarations, found {len(players)}."
        )
    return ParsedLog(snapshot, players, moves)


def _skip_blank(numbered: list[tuple[int, str]], position: int) -> int:
    while position < len(numbered) and not numbered[position][1].strip():
        position += 1
    return position


def _parse_snapshot(
    numbered: list[tuple[int, str]], position: int
) -> tuple[BoardSnapshot, int]:
    """size line + board header + one line per row. Returns the snapshot and the position after it."""
    if position >= len(numbered):
        raise CorruptLogError("Log is empty: expected a board snapshot.")

    number, line = numbered[position]
    size_match = SIZE_PATTERN.match(line)
    if not size_match:
        raise CorruptLogError(f"Line {number}: expected 'size: <N>', got {line!r}.")
    size = int(size_match.group(1))
    if not is_valid_board_size(size):
        raise CorruptLogError(f"Line {number}: invalid board size {size}.")

    position += 1
    if position >= len(numbered) or numbered[position][1] != BOARD_HEADER:
        raise CorruptLogError(f"Line {number + 1}: expected '{BOARD_HEADER}'.")

    position += 1
    rows = numbered[position : position + size]
    if len(rows) != size:
        raise CorruptLogError(f"Board snapshot has fewer than {size} rows.")

    padded: list[str] = []
    for row_number, row in rows:
        # trailing spaces (empty cells on the right) may have been stripped by an editor
        if len(row) > size:
            raise CorruptLogError(
                f"Line {row_number}: row is longer than {size} cells."
            )
        padded.append(row.ljust(size))

    snapshot = BoardSnapshot(size, tuple(padded))
    try:
        snapshot.to_board()
    except InvalidBoardError as e:
        raise CorruptLogError(f"Board snapshot is not valid: {e}") from e
    return snapshot, position + size


# --- THE LOG ---
@dataclass
class ReplayResult:
    board: Board
    players: dict[int, Player]
    moves: list[MoveRecord]

    @property
    def last_player_id(self) -> int | None:
        return self.moves[-1].player_id if self.moves else None


@dataclass
class ReplayLog:
    """In-memory, append-only list of the records of one game"""

    snapshot: BoardSnapshot
    players: list[PlayerDeclaration]
    moves: list[MoveRecord] = field(default_factory=list)

    @classmethod
    def start(cls, board: Board, players: Iterable[Player]) -> Self:
        """Log for a new game: snapshot of the starting board + the player declarations"""
        return cls(
            BoardSnapshot.from_board(board),
            [PlayerDeclaration.from_player(player) for player in players],
        )

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> Self:
        parsed = parse_log(lines)
        return cls(parsed.snapshot, parsed.players, parsed.moves)

    def header_lines(self) -> list[str]:
        return self.snapshot.to_lines() + [player.to_line() for player in self.players]

    def to_lines(self) -> list[str]:
        return self.header_lines() + [move.to_line() for move in self.moves]

    def append_chain(self, player_id: int, jumps: list[Jump]) -> list[MoveRecord]:
        """Add the jumps of a finished chain. Returns the new records (so the caller can persist them)."""
        records = [MoveRecord.from_jump(player_id, jump) for jump in jumps]
        self.moves.extend(records)
        return records

    def replay(self) -> ReplayResult:
        """
        Play the game back from the snapshot
        ----

        1. rebuild board and players (counters at zero)
        2. for every move: validate against the current board (CorruptLogError if invalid), execute, credit the
           captured piece to the player who moved
        3. only then turn the collected pieces into points (once per player)
        """
        board = self.snapshot.to_board()
        players = {
            declaration.id: declaration.to_player() for declaration in self.players
        }

        for index, move in enumerate(self.moves):
            jump = move.to_jump()
            try:
                captured = validate_jump(board, jump)
            except InvalidJumpError as e:
                raise CorruptLogError(
                    f"Move #{index + 1} ({move.to_line()}) is not valid: {e}"
                ) from e
            execute_jump(board, jump)
            players[move.player_id].piece_counts[captured] += 1

        for player in players.values():
            player.complete_sets()

        return ReplayResult(board, players, list(self.moves))
