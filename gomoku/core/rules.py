# gomoku/core/rules.py
"""
Rule options and the legality checks that depend on them.

The checks read the board through `check_pattern` only, so they stay
independent from how the board stores its rocks.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .constants import DIRECTIONS, OPPOSITE_DIRECTIONS
from .errors import IllegalReason
from .patterns import (
    FREE_THREE_DIRECT_CENTER_PATTERN,
    FREE_THREE_DIRECT_PATTERN,
    FREE_THREE_SECONDARY_PATTERNS,
    RECURSIVE_CAPTURE_PATTERN,
    UNDER_CAPTURE_PATTERNS,
)
from .types import Coordinates, Move, Player


class RuleSet(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    capture: bool = Field(default=True, alias="capture_enabled")
    game_ending_capture: bool = Field(default=True, alias="game_ending_capture_enabled")
    no_double_three: bool = Field(default=True, alias="no_double_three_enabled")

    def normalized(self) -> "RuleSet":
        """Game-ending capture has no meaning once captures are disabled."""
        if not self.capture and self.game_ending_capture:
            return self.model_copy(update={"game_ending_capture": False})
        return self

    @property
    def fives_can_be_broken(self) -> bool:
        """A five only wins once no capture can break it."""
        return self.capture and self.game_ending_capture


def free_three_direct_count(board, move: Move) -> int:
    coordinates, player = move.coordinates, move.player
    count = 0
    for direction in DIRECTIONS:
        if board.check_pattern(coordinates, direction, FREE_THREE_DIRECT_PATTERN, player):
            count += 1
    # The centered shape is symmetric, one direction per axis is enough
    for direction, _ in OPPOSITE_DIRECTIONS:
        if board.check_pattern(coordinates, direction, FREE_THREE_DIRECT_CENTER_PATTERN, player):
            count += 1
    return count


def free_three_secondary_count(board, move: Move) -> int:
    coordinates, player = move.coordinates, move.player
    count = 0
    for direction in DIRECTIONS:
        for template in FREE_THREE_SECONDARY_PATTERNS:
            if board.check_pattern(coordinates, direction, template, player):
                count += 1
    return count


def creates_recursive_capture(board, move: Move) -> bool:
    """
    True when the rock, already placed, completes a pair that sits between
    two opponent rocks. Only real rocks flank the pair here, the border
    does not.
    """
    for direction in DIRECTIONS:
        if board.check_pattern(move.coordinates, direction, RECURSIVE_CAPTURE_PATTERN,
                               move.player, edge=None):
            return True
    return False


def rock_is_under_capture(board, coordinates: Coordinates, player: Player) -> bool:
    """
    The rock and one of its neighbors could be taken by the opponent's next
    move. Captures need real rocks, a pair against the border is safe.
    """
    for direction in DIRECTIONS:
        for template in UNDER_CAPTURE_PATTERNS:
            if board.check_pattern(coordinates, direction, template, player, edge=None):
                return True
    return False


def illegal_reason(rules: RuleSet, board, move: Move) -> Optional[IllegalReason]:
    """
    Reason why `move` may not be played, or None when it is legal.
    Bounds and occupancy are checked by the caller.
    The move is simulated on `board` and removed before returning.
    """
    if not rules.capture and not rules.no_double_three:
        return None
    trial = Move(move.player, move.coordinates)
    board.apply(rules, trial)
    try:
        if rules.capture and creates_recursive_capture(board, trial):
            return IllegalReason.RECURSIVE_CAPTURE
        # A move that captures is allowed to create two free threes
        if rules.no_double_three and not trial.captures:
            created = free_three_direct_count(board, trial) + free_three_secondary_count(board, trial)
            if created >= 2:
                return IllegalReason.DOUBLE_THREE
        return None
    finally:
        board.undo_move()
