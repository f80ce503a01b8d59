# gomoku/core/geometry.py
"""
Precomputed axis tables.

Every axis (horizontal, vertical, diagonal \\, anti-diagonal /) is laid out
as the concatenation of its lines, so a line of the board becomes a
contiguous slice of the axis ordering:

- TRANSPOSE[axis][index] maps a board index (y * 19 + x) to its position
  in the axis ordering.
- TRANSPOSE_REV[axis][position] maps it back.
- window(axis, left, right, index) returns the (lo, hi) positions of the
  cells at most `left` steps before and `right` steps after `index` on
  its line, clipped to the line.

All tables are built once at import and never mutated.
"""
from typing import Dict, List, Tuple

from .constants import BOARD_SIZE, BOARD_PIECES

HORIZONTAL, VERTICAL, DIAGONAL, ANTI_DIAGONAL = range(4)
AXES = (HORIZONTAL, VERTICAL, DIAGONAL, ANTI_DIAGONAL)
# Forward unit vector of each axis, (dx, dy) with y growing downward
AXIS_DIRECTIONS = ((1, 0), (0, 1), (1, 1), (1, -1))

# Largest half-radius with a precomputed window table
MAX_HALF_WINDOW = 5


def _axis_lines(dx: int, dy: int) -> List[List[int]]:
    """Every line of the axis, each line ordered along (dx, dy)."""
    lines = []
    for y in range(BOARD_SIZE):
        for x in range(BOARD_SIZE):
            # Only start from cells with no predecessor on the line
            px, py = x - dx, y - dy
            if 0 <= px < BOARD_SIZE and 0 <= py < BOARD_SIZE:
                continue
            line = []
            cx, cy = x, y
            while 0 <= cx < BOARD_SIZE and 0 <= cy < BOARD_SIZE:
                line.append(cy * BOARD_SIZE + cx)
                cx += dx
                cy += dy
            lines.append(line)
    return lines


def _build_tables():
    transpose, transpose_rev, line_bounds = [], [], []
    for dx, dy in AXIS_DIRECTIONS:
        forward = [0] * BOARD_PIECES
        reverse = []
        bounds = [(0, 0)] * BOARD_PIECES
        for line in _axis_lines(dx, dy):
            start = len(reverse)
            end = start + len(line) - 1
            for index in line:
                forward[index] = len(reverse)
                bounds[len(reverse)] = (start, end)
                reverse.append(index)
        assert len(reverse) == BOARD_PIECES
        transpose.append(tuple(forward))
        transpose_rev.append(tuple(reverse))
        line_bounds.append(tuple(bounds))
    return tuple(transpose), tuple(transpose_rev), tuple(line_bounds)


TRANSPOSE, TRANSPOSE_REV, LINE_BOUNDS = _build_tables()


def _build_windows() -> Dict[Tuple[int, int], tuple]:
    windows = {}
    for left in range(MAX_HALF_WINDOW + 1):
        for right in range(MAX_HALF_WINDOW + 1):
            per_axis = []
            for axis in AXES:
                slices = []
                for index in range(BOARD_PIECES):
                    position = TRANSPOSE[axis][index]
                    start, end = LINE_BOUNDS[axis][position]
                    slices.append((max(position - left, start), min(position + right, end)))
                per_axis.append(tuple(slices))
            windows[(left, right)] = tuple(per_axis)
    return windows


WINDOWS = _build_windows()


def window(axis: int, left: int, right: int, index: int) -> Tuple[int, int]:
    """Axis-ordering endpoints (inclusive) of the window around `index`."""
    table = WINDOWS.get((left, right))
    if table is not None:
        return table[axis][index]
    position = TRANSPOSE[axis][index]
    start, end = LINE_BOUNDS[axis][position]
    return max(position - left, start), min(position + right, end)


def window_cells(axis: int, left: int, right: int, index: int) -> Tuple[int, ...]:
    """Board indices of the window around `index`, in axis order."""
    lo, hi = window(axis, left, right, index)
    return TRANSPOSE_REV[axis][lo:hi + 1]


def line_cells(axis: int, index: int) -> Tuple[int, ...]:
    """Board indices of the whole line of `axis` going through `index`."""
    start, end = LINE_BOUNDS[axis][TRANSPOSE[axis][index]]
    return TRANSPOSE_REV[axis][start:end + 1]
