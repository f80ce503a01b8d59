# gomoku/core/patterns.py
"""
Static pattern catalog.

A template is a sequence of (offset, expected) pairs read along one
direction from an anchor rock, which is implicitly the player's own.
Expected values are written 0 (empty), 1 (player) and 2 (opponent) and
converted to PlayerRock once at import, so one catalog serves both sides.
Off-board cells read as an opponent rock.

Only one orientation of each shape is listed: the matcher tries all eight
directions, which covers the mirrored shape.
"""
from enum import IntEnum
from typing import Dict, List, Optional, Sequence, Tuple

from .types import PlayerRock

Template = Tuple[Tuple[int, PlayerRock], ...]

# Cells read on each side of the anchor when a line is extracted
LINE_RADIUS = 5


class Category(IntEnum):
    """Pattern categories, strongest first."""
    FIVE_IN_ROW = 0
    CAPTURED_FIVE_IN_ROW = 1
    KILLED_FIVE = 2
    OPEN_FOUR = 3
    KILLED_FOUR = 4
    DEAD_FOUR = 5
    KILLED_THREE = 6
    BLOCKED_CAPTURE = 7
    OPEN_THREE = 8
    CUT_THREE = 9
    DEAD_THREE = 10
    OPEN_TWO = 11
    DEAD_TWO = 12


def _template(raw: Sequence[Tuple[int, int]]) -> Template:
    return tuple((offset, PlayerRock(expected)) for offset, expected in raw)


# * Rule templates

# _ [1] 1 1 _  and  _ 1 [1] 1 _
FREE_THREE_DIRECT_PATTERN = _template([(-1, 0), (1, 1), (2, 1), (3, 0)])
FREE_THREE_DIRECT_CENTER_PATTERN = _template([(-2, 0), (-1, 1), (1, 1), (2, 0)])
# _ [1] _ 1 1 _  and  _ 1 [1] _ 1 _  and  _ [1] 1 _ 1 _
FREE_THREE_SECONDARY_PATTERNS = (
    _template([(-1, 0), (1, 0), (2, 1), (3, 1), (4, 0)]),
    _template([(-2, 0), (-1, 1), (1, 0), (2, 1), (3, 0)]),
    _template([(-1, 0), (1, 1), (2, 0), (3, 1), (4, 0)]),
)

# The anchor and its neighbor can be taken by the opponent in one move
UNDER_CAPTURE_PATTERNS = (
    _template([(-1, 0), (1, 1), (2, 2)]),
    _template([(-1, 2), (1, 1), (2, 0)]),
)

# 2 [1] 1 2: the anchor was placed between the opponent's flanking rocks
RECURSIVE_CAPTURE_PATTERN = _template([(-1, 2), (1, 1), (2, 2)])

# [1] 2 2 1
CAPTURE_PATTERN = _template([(1, 2), (2, 2), (3, 1)])


# * Heuristic catalog, priority-descending

_RAW_CATALOG = [
    # -- [1, 1, 1, 1, 1]
    ([(1, 1), (2, 1), (3, 1), (4, 1)], Category.FIVE_IN_ROW),
    ([(-1, 1), (1, 1), (2, 1), (3, 1)], Category.FIVE_IN_ROW),
    ([(-2, 1), (-1, 1), (1, 1), (2, 1)], Category.FIVE_IN_ROW),
    # -- [1, 2, 2, 2, 2]
    ([(1, 2), (2, 2), (3, 2), (4, 2)], Category.KILLED_FIVE),
    # -- [2, 1, 2, 2, 2]
    ([(-1, 2), (1, 2), (2, 2), (3, 2)], Category.KILLED_FIVE),
    # -- [2, 2, 1, 2, 2]
    ([(-2, 2), (-1, 2), (1, 2), (2, 2)], Category.KILLED_FIVE),
    # -- [0, 1, 1, 1, 1, 0]
    ([(-1, 0), (1, 1), (2, 1), (3, 1), (4, 0)], Category.OPEN_FOUR),
    ([(-2, 0), (-1, 1), (1, 1), (2, 1), (3, 0)], Category.OPEN_FOUR),
    # -- [1, 0, 1, 1, 1]
    ([(1, 0), (2, 1), (3, 1), (4, 1)], Category.OPEN_FOUR),
    ([(-2, 1), (-1, 0), (1, 1), (2, 1)], Category.OPEN_FOUR),
    ([(-3, 1), (-2, 0), (-1, 1), (1, 1)], Category.OPEN_FOUR),
    ([(-4, 1), (-3, 0), (-2, 1), (-1, 1)], Category.OPEN_FOUR),
    # -- [1, 1, 0, 1, 1]
    ([(1, 1), (2, 0), (3, 1), (4, 1)], Category.OPEN_FOUR),
    ([(-1, 1), (1, 0), (2, 1), (3, 1)], Category.OPEN_FOUR),
    # -- [1, 2, 2, 2]
    ([(1, 2), (2, 2), (3, 2)], Category.KILLED_FOUR),
    # -- [2, 1, 2, 2]
    ([(-1, 2), (1, 2), (2, 2)], Category.KILLED_FOUR),
    # -- [2, 2, 1, 2]
    ([(-2, 2), (-1, 2), (1, 2)], Category.KILLED_FOUR),
    # -- [1, 1, 1, 1] with at least one closed end
    ([(1, 1), (2, 1), (3, 1)], Category.DEAD_FOUR),
    ([(-1, 1), (1, 1), (2, 1)], Category.DEAD_FOUR),
    # -- [1, 2, 2, 0]
    ([(1, 2), (2, 2), (3, 0)], Category.KILLED_THREE),
    # -- [1, 1, 1, 2]
    ([(1, 1), (2, 1), (3, 2)], Category.BLOCKED_CAPTURE),
    # -- [0, 1, 1, 1, 0]
    ([(-1, 0), (1, 1), (2, 1), (3, 0)], Category.OPEN_THREE),
    ([(-2, 0), (-1, 1), (1, 1), (2, 0)], Category.OPEN_THREE),
    # -- [0, 1, 0, 1, 1, 0]
    ([(-1, 0), (1, 0), (2, 1), (3, 1), (4, 0)], Category.OPEN_THREE),
    ([(-3, 0), (-2, 1), (-1, 0), (1, 1), (2, 0)], Category.OPEN_THREE),
    ([(-4, 0), (-3, 1), (-2, 0), (-1, 1), (1, 0)], Category.OPEN_THREE),
    # -- [0, 2, 1, 2, 0]
    ([(-2, 0), (-1, 2), (1, 2), (2, 0)], Category.CUT_THREE),
    # -- [1, 1, 1] with at least one closed end
    ([(1, 1), (2, 1)], Category.DEAD_THREE),
    ([(-1, 1), (1, 1)], Category.DEAD_THREE),
    # -- [1, 0, 1, 1] with at least one closed end
    ([(1, 0), (2, 1), (3, 1)], Category.DEAD_THREE),
    ([(-2, 1), (-1, 0), (1, 1)], Category.DEAD_THREE),
    ([(-3, 1), (-2, 0), (-1, 1)], Category.DEAD_THREE),
    # -- [0, 1, 1, 0]
    ([(-1, 0), (1, 1), (2, 0)], Category.OPEN_TWO),
    # -- [0, 1, 0, 1, 0]
    ([(-1, 0), (1, 0), (2, 1), (3, 0)], Category.OPEN_TWO),
    # -- [0, 1, 0, 0, 1, 0]
    ([(-1, 0), (1, 0), (2, 0), (3, 1), (4, 0)], Category.OPEN_TWO),
    # -- [1, 1]
    ([(1, 1)], Category.DEAD_TWO),
    # -- [1, 0, 1]
    ([(1, 0), (2, 1)], Category.DEAD_TWO),
]

PATTERNS: Tuple[Tuple[Template, Category], ...] = tuple(
    (_template(raw), category) for raw, category in _RAW_CATALOG
)


def match_line(line: Sequence[PlayerRock], template: Template) -> bool:
    """`line` holds the cells from -LINE_RADIUS to +LINE_RADIUS around the anchor."""
    for offset, expected in template:
        if line[LINE_RADIUS + offset] != expected:
            return False
    return True


_first_match_cache: Dict[tuple, Optional[int]] = {}


def first_match(line: tuple) -> Optional[int]:
    """Index in PATTERNS of the strongest template matching the line, or None."""
    try:
        return _first_match_cache[line]
    except KeyError:
        pass
    found = None
    for i, (template, _) in enumerate(PATTERNS):
        if match_line(line, template):
            found = i
            break
    _first_match_cache[line] = found
    return found


def next_match(line: tuple, start: int) -> Optional[int]:
    """Like first_match, ignoring the templates before `start`."""
    for i in range(start, len(PATTERNS)):
        if match_line(line, PATTERNS[i][0]):
            return i
    return None


# Categories where the player blocks opponent rocks, the border never counts as one
KILLING_CATEGORIES = frozenset({
    Category.KILLED_FIVE,
    Category.KILLED_FOUR,
    Category.KILLED_THREE,
    Category.CUT_THREE,
})

# Move ordering priority, higher is searched first.
# Saving or ending the game comes before building shapes.
PRIORITY = {
    Category.FIVE_IN_ROW: 13,
    Category.KILLED_FIVE: 12,
    Category.OPEN_FOUR: 11,
    Category.KILLED_FOUR: 10,
    Category.KILLED_THREE: 9,
    Category.BLOCKED_CAPTURE: 8,
    Category.DEAD_FOUR: 7,
    Category.OPEN_THREE: 6,
    Category.CUT_THREE: 5,
    Category.CAPTURED_FIVE_IN_ROW: 4,
    Category.DEAD_THREE: 3,
    Category.OPEN_TWO: 2,
    Category.DEAD_TWO: 1,
}

_FIELDS = {
    Category.FIVE_IN_ROW: "five_in_row",
    Category.CAPTURED_FIVE_IN_ROW: "captured_five_in_row",
    Category.KILLED_FIVE: "killed_five",
    Category.OPEN_FOUR: "live_four",
    Category.KILLED_FOUR: "killed_four",
    Category.DEAD_FOUR: "dead_four",
    Category.KILLED_THREE: "killed_three",
    Category.BLOCKED_CAPTURE: "blocked_capture",
    Category.OPEN_THREE: "live_three",
    Category.CUT_THREE: "cut_three",
    Category.DEAD_THREE: "dead_three",
    Category.OPEN_TWO: "live_two",
    Category.DEAD_TWO: "dead_two",
}


class PatternCount:
    """Tally of each category, plus the captured pairs of the side."""
    __slots__ = tuple(_FIELDS.values()) + ("captures",)

    def __init__(self, **counts):
        for name in self.__slots__:
            setattr(self, name, counts.get(name, 0))

    @classmethod
    def from_patterns(cls, patterns: List[Category], captures: int = 0) -> "PatternCount":
        count = cls(captures=captures)
        for category in patterns:
            count.add(category)
        return count

    def add(self, category: Category, amount: int = 1):
        name = _FIELDS[category]
        setattr(self, name, getattr(self, name) + amount)

    def get(self, category: Category) -> int:
        return getattr(self, _FIELDS[category])

    def best_pattern(self) -> int:
        """Priority of the strongest category present, 0 when empty."""
        best = 0
        for category, priority in PRIORITY.items():
            if priority > best and self.get(category) > 0:
                best = priority
        return best

    def as_dict(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in self.__slots__}

    def __add__(self, other: "PatternCount") -> "PatternCount":
        return PatternCount(**{name: getattr(self, name) + getattr(other, name) for name in self.__slots__})

    def __sub__(self, other: "PatternCount") -> "PatternCount":
        return PatternCount(**{name: getattr(self, name) - getattr(other, name) for name in self.__slots__})

    def __eq__(self, other) -> bool:
        if not isinstance(other, PatternCount):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        present = ", ".join(f"{k}={v}" for k, v in self.as_dict().items() if v)
        return f"PatternCount({present})"
