# gomoku/core/board.py
import random
from typing import Iterator, List, Optional, Set, Tuple

from .constants import (
    BOARD_PIECES,
    BOARD_SIZE,
    CENTER,
    DIRECTIONS,
    FIVE,
    WIN_CAPTURES,
    ZOBRIST_SEED,
)
from .errors import IllegalMove, IllegalReason, InternalInvariant, Occupied, OutOfBounds
from .geometry import AXES, window_cells
from .patterns import CAPTURE_PATTERN, LINE_RADIUS, Template
from .rules import (
    RuleSet,
    free_three_direct_count,
    free_three_secondary_count,
    illegal_reason,
    rock_is_under_capture,
)
from .types import Coordinates, Move, Player, PlayerRock, Rock

_EMPTY, _PLAYER, _OPPONENT = PlayerRock.NONE, PlayerRock.PLAYER, PlayerRock.OPPONENT


def _zobrist_keys() -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    rng = random.Random(ZOBRIST_SEED)
    black = tuple(rng.getrandbits(64) for _ in range(BOARD_PIECES))
    white = tuple(rng.getrandbits(64) for _ in range(BOARD_PIECES))
    return black, white


# Indexed by Rock value, EMPTY never hashes
_ZOBRIST = (None,) + _zobrist_keys()


class Side:
    __slots__ = ("rocks", "captures")

    def __init__(self, rocks: Optional[Set[int]] = None, captures: int = 0):
        self.rocks: Set[int] = rocks if rocks is not None else set()
        self.captures = captures  # Captured pairs

    def copy(self) -> "Side":
        return Side(set(self.rocks), self.captures)

    def __repr__(self) -> str:
        return f"Side(rocks={len(self.rocks)}, captures={self.captures})"


class Board:
    """
    19x19 grid indexed by y * 19 + x.
    Mutated in place by set_move / undo_move, `play` returns a new board.
    """

    def __init__(self):
        self.cells: List[Rock] = [Rock.EMPTY] * BOARD_PIECES
        self.black = Side()
        self.white = Side()
        self.all_rocks: Set[int] = set()
        self.history: List[Move] = []
        self.hash = 0

    # --- Access ---

    def side(self, player: Player) -> Side:
        return self.black if player == Player.BLACK else self.white

    def get(self, x: int, y: int) -> Rock:
        coordinates = Coordinates(x, y)
        if not coordinates.in_bounds():
            raise OutOfBounds(coordinates)
        return self.cells[coordinates.index]

    def key(self) -> Tuple[int, int, int]:
        return self.hash, self.black.captures, self.white.captures

    def player_rock(self, x: int, y: int, player: Player, edge: Optional[PlayerRock] = _OPPONENT):
        """The cell seen from `player`. Off-board cells read as `edge`."""
        if not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE):
            return edge
        rock = self.cells[y * BOARD_SIZE + x]
        if rock == Rock.EMPTY:
            return _EMPTY
        return _PLAYER if rock == player.rock else _OPPONENT

    def check_pattern(self, coordinates: Coordinates, direction: Tuple[int, int], template: Template,
                      player: Player, edge: Optional[PlayerRock] = _OPPONENT) -> bool:
        """
        Every (offset, expected) of the template matches the cell at
        coordinates + offset * direction.
        With edge=None an off-board cell never matches.
        """
        x, y = coordinates
        dx, dy = direction
        own = player.rock
        for offset, expected in template:
            cx = x + dx * offset
            cy = y + dy * offset
            if 0 <= cx < BOARD_SIZE and 0 <= cy < BOARD_SIZE:
                rock = self.cells[cy * BOARD_SIZE + cx]
                if rock == Rock.EMPTY:
                    found = _EMPTY
                elif rock == own:
                    found = _PLAYER
                else:
                    found = _OPPONENT
            elif edge is None:
                return False
            else:
                found = edge
            if found != expected:
                return False
        return True

    def line(self, coordinates: Coordinates, direction: Tuple[int, int], player: Player) -> tuple:
        """Cells from -LINE_RADIUS to +LINE_RADIUS along `direction`, anchor included."""
        x, y = coordinates
        dx, dy = direction
        own = player.rock
        cells = []
        for offset in range(-LINE_RADIUS, LINE_RADIUS + 1):
            cx = x + dx * offset
            cy = y + dy * offset
            if 0 <= cx < BOARD_SIZE and 0 <= cy < BOARD_SIZE:
                rock = self.cells[cy * BOARD_SIZE + cx]
                if rock == Rock.EMPTY:
                    cells.append(_EMPTY)
                else:
                    cells.append(_PLAYER if rock == own else _OPPONENT)
            else:
                cells.append(_OPPONENT)
        return tuple(cells)

    # --- Mutation ---

    def _put(self, index: int, player: Player):
        self.cells[index] = player.rock
        self.side(player).rocks.add(index)
        self.all_rocks.add(index)
        self.hash ^= _ZOBRIST[player.rock][index]

    def _remove(self, index: int, player: Player):
        self.cells[index] = Rock.EMPTY
        self.side(player).rocks.discard(index)
        self.all_rocks.discard(index)
        self.hash ^= _ZOBRIST[player.rock][index]

    def apply(self, rules: RuleSet, move: Move) -> List[Coordinates]:
        """Place the rock and resolve its captures, without any legality check."""
        player = move.player
        coordinates = move.coordinates
        move.captures = []
        self._put(coordinates.index, player)
        if rules.capture:
            opponent = player.opponent()
            for direction in DIRECTIONS:
                if self.check_pattern(coordinates, direction, CAPTURE_PATTERN, player, edge=None):
                    for step in (1, 2):
                        captured = coordinates.shift(direction, step)
                        self._remove(captured.index, opponent)
                        move.captures.append(captured)
                    self.side(player).captures += 1
        self.history.append(move)
        return move.captures

    def set_move(self, rules: RuleSet, move: Move) -> List[Coordinates]:
        """Validate then play `move`. Returns the coordinates of the captured rocks."""
        coordinates = move.coordinates
        if not coordinates.in_bounds():
            raise OutOfBounds(coordinates)
        if self.cells[coordinates.index] != Rock.EMPTY:
            raise Occupied(coordinates)
        reason = illegal_reason(rules, self, move)
        if reason is not None:
            raise IllegalMove(reason, coordinates)
        return self.apply(rules, move)

    def undo_move(self) -> Move:
        if not self.history:
            raise InternalInvariant("No move to undo")
        move = self.history.pop()
        player = move.player
        self._remove(move.index, player)
        if move.captures:
            opponent = player.opponent()
            for captured in move.captures:
                self._put(captured.index, opponent)
            self.side(player).captures -= len(move.captures) // 2
        return move

    def play(self, rules: RuleSet, move: Move) -> "Board":
        """Returns a NEW board with the move applied."""
        board = self.copy()
        board.set_move(rules, move.copy())
        return board

    def copy(self) -> "Board":
        board = Board.__new__(Board)
        board.cells = list(self.cells)
        board.black = self.black.copy()
        board.white = self.white.copy()
        board.all_rocks = set(self.all_rocks)
        board.history = [move.copy() for move in self.history]
        board.hash = self.hash
        return board

    # --- Legality ---

    def illegal_reason(self, rules: RuleSet, move: Move) -> Optional[IllegalReason]:
        if not move.coordinates.in_bounds() or self.cells[move.index] != Rock.EMPTY:
            return None
        return illegal_reason(rules, self, move)

    def is_move_legal(self, rules: RuleSet, move: Move) -> bool:
        if not move.coordinates.in_bounds() or self.cells[move.index] != Rock.EMPTY:
            return False
        return illegal_reason(rules, self, move) is None

    def move_create_free_three_direct_pattern(self, move: Move) -> int:
        return free_three_direct_count(self, move)

    def move_create_free_three_secondary_pattern(self, move: Move) -> int:
        return free_three_secondary_count(self, move)

    def open_intersections(self) -> List[int]:
        """Empty cells next to at least one rock, in index order."""
        found = set()
        cells = self.cells
        for index in self.all_rocks:
            x, y = index % BOARD_SIZE, index // BOARD_SIZE
            for dx, dy in DIRECTIONS:
                nx, ny = x + dx, y + dy
                if 0 <= nx < BOARD_SIZE and 0 <= ny < BOARD_SIZE:
                    neighbor = ny * BOARD_SIZE + nx
                    if cells[neighbor] == Rock.EMPTY:
                        found.add(neighbor)
        return sorted(found)

    def _candidates(self) -> List[int]:
        if not self.all_rocks:
            return [CENTER * BOARD_SIZE + CENTER]
        return self.open_intersections()

    def legal_moves(self, rules: RuleSet, player: Player) -> List[Move]:
        moves = []
        for index in self._candidates():
            move = Move(player, Coordinates.from_index(index))
            if illegal_reason(rules, self, move) is None:
                moves.append(move)
        return moves

    def player_can_play(self, rules: RuleSet, player: Player) -> bool:
        for index in self._candidates():
            if illegal_reason(rules, self, Move(player, Coordinates.from_index(index))) is None:
                return True
        return False

    # --- Terminal conditions ---

    def five_in_a_row_runs(self, player: Player) -> Iterator[Tuple[int, ...]]:
        """Every run of five consecutive rocks of `player`, as board indices."""
        rock = player.rock
        cells = self.cells
        for index in self.side(player).rocks:
            for axis in AXES:
                run = window_cells(axis, 0, FIVE - 1, index)
                if len(run) == FIVE and all(cells[i] == rock for i in run):
                    yield run

    def has_five_in_a_row(self, player: Player) -> bool:
        return next(self.five_in_a_row_runs(player), None) is not None

    def has_uncaptured_five_in_a_row(self, rules: RuleSet, player: Player) -> bool:
        if not rules.fives_can_be_broken:
            return self.has_five_in_a_row(player)
        for run in self.five_in_a_row_runs(player):
            if not any(rock_is_under_capture(self, Coordinates.from_index(i), player) for i in run):
                return True
        return False

    def is_winning(self, rules: RuleSet, player: Player) -> bool:
        if self.side(player).captures >= WIN_CAPTURES:
            return True
        return self.has_uncaptured_five_in_a_row(rules, player)

    # --- Serialization ---

    def __str__(self) -> str:
        rows = []
        for y in range(BOARD_SIZE):
            row = self.cells[y * BOARD_SIZE:(y + 1) * BOARD_SIZE]
            rows.append(" ".join(str(int(rock)) for rock in row))
        return "\n".join(rows)

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """Parse the output of str(board). History and captures start empty."""
        lines = [line.split() for line in text.strip().splitlines() if line.strip()]
        if len(lines) != BOARD_SIZE or any(len(line) != BOARD_SIZE for line in lines):
            raise ValueError(f"Expected {BOARD_SIZE} lines of {BOARD_SIZE} cells")
        board = cls()
        for y, line in enumerate(lines):
            for x, value in enumerate(line):
                rock = Rock(int(value))
                if rock != Rock.EMPTY:
                    player = Player.BLACK if rock == Rock.BLACK else Player.WHITE
                    board._put(y * BOARD_SIZE + x, player)
        return board
