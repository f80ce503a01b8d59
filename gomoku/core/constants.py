# gomoku/core/constants.py

# --- Board Dimensions ---
BOARD_SIZE = 19
BOARD_PIECES = BOARD_SIZE * BOARD_SIZE
CENTER = BOARD_SIZE // 2

# 8 unit directions, and the same directions paired by axis
DIRECTIONS = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
]
OPPOSITE_DIRECTIONS = [
    ((1, 0), (-1, 0)),    # horizontal
    ((0, 1), (0, -1)),    # vertical
    ((1, 1), (-1, -1)),   # diagonal \
    ((1, -1), (-1, 1)),   # anti-diagonal /
]

# --- Rules ---
WIN_CAPTURES = 5  # Captured pairs needed to win
FIVE = 5

# --- Scoring System ---
# A win saturates the evaluation, everything else stays far below it
WIN_SCORE = 10_000_000
MAX_SCORE = WIN_SCORE * 4
MIN_SCORE = -MAX_SCORE

# --- Search ---
# Medium difficulty depth, Easy and Hard are derived from it
DEPTH = 4

# Seed for the Zobrist keys so hashes are stable across runs
ZOBRIST_SEED = 0x5EED_F00D
