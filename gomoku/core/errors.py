# gomoku/core/errors.py
from enum import StrEnum


class IllegalReason(StrEnum):
    DOUBLE_THREE = "DoubleThree"
    RECURSIVE_CAPTURE = "RecursiveCapture"


class GomokuError(Exception):
    """Base class for every error raised by the engine."""


class OutOfBounds(GomokuError):
    def __init__(self, coordinates):
        self.coordinates = coordinates
        super().__init__(f"Coordinates {coordinates} are outside the board")


class Occupied(GomokuError):
    def __init__(self, coordinates):
        self.coordinates = coordinates
        super().__init__(f"Cell {coordinates} is not empty")


class IllegalMove(GomokuError):
    def __init__(self, reason: IllegalReason, coordinates=None):
        self.reason = reason
        self.coordinates = coordinates
        where = f" at {coordinates}" if coordinates is not None else ""
        super().__init__(f"Illegal move{where}: {reason}")


class InternalInvariant(GomokuError):
    """Raised when the engine reaches a state that should not exist."""
