# gomoku/core/types.py
from enum import IntEnum
from typing import List, NamedTuple, Optional

from .constants import BOARD_SIZE


class Rock(IntEnum):
    EMPTY = 0
    BLACK = 1
    WHITE = 2

    def opponent(self) -> "Rock":
        return Rock.WHITE if self == Rock.BLACK else Rock.BLACK

    def __str__(self) -> str:
        return str(self.value)


class Player(IntEnum):
    """Side to move. Serialized as 0 (Black) and 1 (White)."""
    BLACK = 0
    WHITE = 1

    def opponent(self) -> "Player":
        return Player.WHITE if self == Player.BLACK else Player.BLACK

    @property
    def rock(self) -> Rock:
        return Rock.BLACK if self == Player.BLACK else Rock.WHITE


class PlayerRock(IntEnum):
    """A cell seen from one side: own rock, opponent rock or empty."""
    NONE = 0
    PLAYER = 1
    OPPONENT = 2


class Coordinates(NamedTuple):
    x: int
    y: int

    @property
    def index(self) -> int:
        return self.y * BOARD_SIZE + self.x

    @classmethod
    def from_index(cls, index: int) -> "Coordinates":
        return cls(index % BOARD_SIZE, index // BOARD_SIZE)

    def in_bounds(self) -> bool:
        return 0 <= self.x < BOARD_SIZE and 0 <= self.y < BOARD_SIZE

    def shift(self, direction, steps: int = 1) -> "Coordinates":
        return Coordinates(self.x + direction[0] * steps, self.y + direction[1] * steps)

    def __str__(self) -> str:
        return f"{self.x}x{self.y}"


class Move:
    """
    A rock placed by a player.
    `captures` is filled by Board.set_move with the coordinates it removed.
    """
    __slots__ = ("player", "coordinates", "captures")

    def __init__(self, player: Player, coordinates: Coordinates,
                 captures: Optional[List[Coordinates]] = None):
        self.player = Player(player)
        self.coordinates = Coordinates(*coordinates)
        self.captures: List[Coordinates] = captures if captures is not None else []

    @classmethod
    def at(cls, player: Player, x: int, y: int) -> "Move":
        return cls(player, Coordinates(x, y))

    @property
    def index(self) -> int:
        return self.coordinates.index

    def copy(self) -> "Move":
        return Move(self.player, self.coordinates, list(self.captures))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Move):
            return NotImplemented
        return self.player == other.player and self.coordinates == other.coordinates

    def __hash__(self) -> int:
        return hash((self.player, self.coordinates))

    def __repr__(self) -> str:
        return f"Move({self.player.name}, {self.coordinates.x}, {self.coordinates.y})"

    def __str__(self) -> str:
        return f"{self.player.name.lower()} {self.coordinates}"
