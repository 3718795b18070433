"""Protocol for the replay log store (implemented as a plain text file, tests use an in-memory list)"""

from typing import Protocol


class LogStore(Protocol):
    """Persistence layer for the replay log. Append-only: records are never changed or removed."""

    def exists(self) -> bool:
        """Is there a log to resume from?"""
        ...

    def create(self, lines: list[str]) -> None:
        """Start a new log with the header records (board snapshot + players). Replaces an existing log."""
        ...

    def append(self, lines: list[str]) -> None:
        """Add records at the end. Must be durable when this returns."""
        ...

    def read(self) -> list[str]:
        """All lines of the log, in the order they were written."""
        ...
