"""Implementation of LogStore using a flat text file"""

import logging
import os
from pathlib import Path

from src.core.exceptions import LogStoreError

logger = logging.getLogger(__name__)


class FileLogStore:
    """
    One record per line, UTF-8.
    ---

    The file is opened, written, flushed + fsync'ed and closed for every append: a committed chain is on disk before
    the next move gets requested.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def create(self, lines: list[str]) -> None:
        self._write(lines, mode="w")
        logger.info("Started replay log %s", self.path)

    def append(self, lines: list[str]) -> None:
        if not lines:
            return
        if not self.exists():
            raise LogStoreError(f"Cannot append to {self.path}: log was never created.")
        self._write(lines, mode="a")
        logger.debug("Appended %d record(s) to %s", len(lines), self.path)

    def read(self) -> list[str]:
        try:
            with self.path.open("r", encoding="utf-8", newline="") as log_file:
                # NOTE: only the line ending is removed, board rows can end in spaces
                return [line.rstrip("\r\n") for line in log_file]
        except OSError as e:
            raise LogStoreError(f"Cannot read replay log {self.path}: {e}") from e

    def _write(self, lines: list[str], mode: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open(mode, encoding="utf-8", newline="\n") as log_file:
            log_file.write("".join(f"{line}\n" for line in lines))
            log_file.flush()
            os.fsync(log_file.fileno())
