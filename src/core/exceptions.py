"""
Exceptions shared by all layers.

Everything derives from GameError, so the service caller can catch a single type if it wants to.
"""


class GameError(Exception):
    """Base class for anything that goes wrong while playing (or replaying) a game."""


# --- BOARD ---
class InvalidSizeError(GameError):
    """Board size must be even and between 4 and 20 (inclusive)."""


class InvalidBoardError(GameError):
    """Board rows that do not describe a valid board (wrong length, unknown cell character)."""


class OutOfBoundsError(GameError):
    """Cell access outside of [0, size)."""


# --- JUMPS / CHAINS ---
class InvalidJumpError(GameError):
    """Jump leaves the board, has nothing to capture, or has no room to land. Recoverable: ask for another direction."""


class NoPieceHereError(GameError):
    """Chain start selected on an empty cell."""


class NoMoveFromHereError(GameError):
    """Chain start selected on a piece that cannot jump anywhere."""


class GameStateError(GameError):
    """The requested action does not fit the current state of the game / turn."""


class ChainInProgressError(GameStateError):
    """Tried to stop a chain that still has legal continuations (forced continuation)."""


# --- PERSISTENCE ---
class CorruptLogError(GameError):
    """A replay log record cannot be parsed or does not fit the state it is replayed onto. Fatal for the replay."""


class LogStoreError(GameError):
    """The log store could not be read."""


# --- BOUNDARY ---
class InvalidRequestError(GameError):
    """Request data that cannot be interpreted."""
