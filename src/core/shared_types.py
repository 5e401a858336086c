"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    PENDING = "pending"
    PLAYING = "playing"
    DONE = "done"


# Status only moves forward through this sequence.
STATUS_ORDER: tuple[Status, ...] = (Status.PENDING, Status.PLAYING, Status.DONE)
