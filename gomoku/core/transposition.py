# gomoku/core/transposition.py
from enum import IntEnum
from typing import Dict, List, NamedTuple, Optional, Tuple

from .patterns import PatternCount


class Bound(IntEnum):
    EXACT = 0
    LOWER = 1  # Failed high, the value is at least this
    UPPER = 2  # Failed low, the value is at most this


class Entry(NamedTuple):
    value: int
    flag: Bound
    movements: list  # Principal variation from the stored node


class TranspositionTable:
    """
    Search results keyed by (board key, side to move, depth), plus a cache
    of pattern tallies keyed by board key alone.
    """

    def __init__(self):
        self.table: Dict[tuple, Entry] = {}
        self.counts: Dict[tuple, Tuple[PatternCount, PatternCount]] = {}
        self.hits = 0
        self.count_hits = 0

    def get(self, key: tuple) -> Optional[Entry]:
        if key in self.table:
            self.hits += 1
            return self.table[key]
        return None

    def put(self, key: tuple, value: int, flag: Bound, movements: List):
        self.table[key] = Entry(value, flag, movements)

    def get_counts(self, key: tuple) -> Optional[Tuple[PatternCount, PatternCount]]:
        """(black, white) tallies of a position, if already counted."""
        if key in self.counts:
            self.count_hits += 1
            return self.counts[key]
        return None

    def put_counts(self, key: tuple, black: PatternCount, white: PatternCount):
        self.counts[key] = (black, white)

    def reset(self):
        self.table.clear()
        self.counts.clear()
        self.hits = 0
        self.count_hits = 0

    def __len__(self) -> int:
        return len(self.table)
