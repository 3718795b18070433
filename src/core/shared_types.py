"""
Type definitions used across layers
"""

from enum import IntEnum, StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


class PlayerKind(IntEnum):
    """NOTE: values are the ones written to the replay log (type: 0 / type: 1)"""

    HUMAN = 0
    COMPUTER = 1
