"""
Computer opponent
----

Greedy forward search over the chains the computer can make this turn. It does not look at the opponent's replies.

1. Every occupied cell gets a weight (how valuable is it to capture this piece?)
2. For every piece that can jump, a depth-first search finds the chain with the highest total captured weight.
   The search works on a private weight matrix: each jump is simulated on the matrix and undone again before trying
   the next direction.
3. The best start (first found in row-major order on ties) wins.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from src.colorjump.board import Board
from src.colorjump.jumps import legal_directions
from src.colorjump.scoring import Player
from src.colorjump.square import ALL_DIRECTIONS, Direction, Square

logger = logging.getLogger(__name__)

WeightMatrix = list[list[int]]  # matrix[y][x]


def piece_weight(count_player: int, count_opponent: int) -> int:
    """
    Weight of a single piece, given the capturing player's and the opponent's counts for its color.
    ---

    * base weight 1
    * x2 if the opponent is collecting this color (deny it to them)
    * x2 if the player has none of this color yet (start a new set)
    """
    weight = 1
    if count_opponent > 0:
        weight *= 2
    if count_player == 0:
        weight *= 2
    return weight


def build_weight_matrix(board: Board, player: Player, opponent: Player) -> WeightMatrix:
    """Empty cells weigh 0, occupied cells 1, 2 or 4 (see piece_weight())"""
    matrix: WeightMatrix = []
    for row in board.cells:
        matrix.append(
            [
                0
                if color.is_empty
                else piece_weight(
                    player.piece_counts[color], opponent.piece_counts[color]
                )
                for color in row
            ]
        )
    return matrix


@dataclass
class SearchResult:
    start: Square
    direction: Direction
    value: int
    nodes: int
    matrix: WeightMatrix = field(repr=False)


class AISearch:
    """Depth-first search with explicit undo over a weight matrix."""

    def __init__(self, directions: tuple[Direction, ...] = ALL_DIRECTIONS) -> None:
        # NOTE: the directions are tried in this order, and ties keep the earlier one
        self.directions = directions
        self.nodes = 0

    def choose_chain_start(
        self, board: Board, player: Player, opponent: Player
    ) -> Optional[SearchResult]:
        """
        Find the piece + first direction of the most valuable chain.
        ---

        Returns None when no piece can jump at all (the computer cannot move).
        """
        matrix = build_weight_matrix(board, player, opponent)
        self.nodes = 0
        best: Optional[SearchResult] = None
        for square in board.squares():
            if self._weight(matrix, square) == 0:
                continue
            value, direction = self.best_chain_value(matrix, square)
            if direction is None:
                continue
            # strictly greater: ties keep the first square found
            if best is None or value > best.value:
                best = SearchResult(square, direction, value, 0, matrix)

        if best is None or best.value == 0:
            logger.debug("No chain found after %d nodes", self.nodes)
            return None

        best.nodes = self.nodes
        logger.debug(
            "Best chain starts at (%d, %d) going %s, value %d (%d nodes)",
            best.start.x,
            best.start.y,
            best.direction.name,
            best.value,
            best.nodes,
        )
        return best

    def best_chain_value(
        self, matrix: WeightMatrix, square: Square
    ) -> tuple[int, Optional[Direction]]:
        """
        Highest total weight that can be captured by a chain starting at `square`, and the first direction of that chain.
        ---

        The matrix is mutated while searching, but restored to exactly its original contents before returning.
        Base case: the piece cannot jump --> (0, None)
        """
        self.nodes += 1
        best_value = 0
        best_direction: Optional[Direction] = None
        for direction in self.directions:
            if not self.is_legal(matrix, square, direction):
                continue

            captured, touched = self.simulate(matrix, square, direction)
            value, _ = self.best_chain_value(matrix, square.step(direction, 2))
            value += captured
            self.restore(matrix, touched)

            if best_direction is None or value > best_value:
                best_value = value
                best_direction = direction
        return best_value, best_direction

    def next_direction(
        self, board: Board, matrix: WeightMatrix, square: Square
    ) -> Optional[Direction]:
        """
        Direction for the next jump of a chain that is already under way.
        ---

        Normally the same as the search. If the search was restricted to fewer directions and finds nothing, the
        first legal direction on the real board is used (a chain that can continue must continue).
        """
        _, direction = self.best_chain_value(matrix, square)
        if direction is not None:
            return direction
        directions = legal_directions(board, square)
        return directions[0] if directions else None

    # --- SIMULATION ON THE WEIGHT MATRIX ---
    def is_legal(
        self, matrix: WeightMatrix, square: Square, direction: Direction
    ) -> bool:
        """Same rule as on the board: mid occupied (nonzero), landing empty (zero), everything in bounds"""
        size = len(matrix)
        mid = square.step(direction)
        landing = square.step(direction, 2)
        if not (mid.is_within_bounds(size) and landing.is_within_bounds(size)):
            return False
        return self._weight(matrix, mid) != 0 and self._weight(matrix, landing) == 0

    def simulate(
        self, matrix: WeightMatrix, square: Square, direction: Direction
    ) -> tuple[int, list[tuple[Square, int]]]:
        """Move the weight of the jumping piece, clear source + mid. Returns the captured weight and the touched cells."""
        mid = square.step(direction)
        landing = square.step(direction, 2)
        touched = [
            (cell, self._weight(matrix, cell)) for cell in (square, mid, landing)
        ]
        captured = self._weight(matrix, mid)
        matrix[landing.y][landing.x] = self._weight(matrix, square)
        matrix[mid.y][mid.x] = 0
        matrix[square.y][square.x] = 0
        return captured, touched

    def restore(self, matrix: WeightMatrix, touched: list[tuple[Square, int]]) -> None:
        # reversed, so the oldest saved value of a cell touched more than once wins
        for cell, weight in reversed(touched):
            matrix[cell.y][cell.x] = weight

    def _weight(self, matrix: WeightMatrix, square: Square) -> int:
        return matrix[square.y][square.x]
