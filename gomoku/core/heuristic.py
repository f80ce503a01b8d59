# gomoku/core/heuristic.py
"""
Pattern tallies and the static evaluation built on them.

A rock contributes at most one category per direction: the first catalog
entry matching the line around it.
"""
from typing import Dict, Optional, Set, Tuple

from .constants import DIRECTIONS, OPPOSITE_DIRECTIONS, WIN_CAPTURES, WIN_SCORE
from .geometry import AXES, window_cells
from .patterns import KILLING_CATEGORIES, LINE_RADIUS, PATTERNS, Category, PatternCount, first_match, next_match
from .rules import RuleSet, rock_is_under_capture
from .types import Coordinates, Move, Player, PlayerRock

# Weight of each category when present at least once
PRESENCE_SCORES = (
    ("killed_five", 99_999),
    ("killed_four", 75_000),
    ("blocked_capture", 70_000),
    ("killed_three", 60_000),
    ("live_four", 50_000),
    ("cut_three", 25_000),
    ("captured_five_in_row", 20_000),
    ("live_three", 15_000),
)
DEAD_FOUR_SCORE = 50
LIVE_TWO_SCORE = 200


def patterns_score(count: PatternCount) -> int:
    score = 0
    if count.five_in_row > 0 or count.captures >= WIN_CAPTURES:
        score += WIN_SCORE
    for name, value in PRESENCE_SCORES:
        if getattr(count, name) > 0:
            score += value
    if count.dead_four > 0:
        score += DEAD_FOUR_SCORE * count.dead_four
    if count.live_two > 0:
        score += LIVE_TWO_SCORE
    return score


class Heuristic:
    def direction_category(self, rules: RuleSet, board, coordinates: Coordinates,
                           direction: Tuple[int, int], player: Player) -> Optional[Category]:
        """Category of the rock at `coordinates` along one direction, if any."""
        line = board.line(coordinates, direction, player)
        found = first_match(line)
        while found is not None:
            template, category = PATTERNS[found]
            if category not in KILLING_CATEGORIES \
                    or board.check_pattern(coordinates, direction, template, player, edge=None):
                break
            found = next_match(line, found + 1)
        if found is None:
            return None
        if category == Category.FIVE_IN_ROW and rules.fives_can_be_broken:
            five = [coordinates] + [coordinates.shift(direction, offset)
                                    for offset, expected in template if expected == PlayerRock.PLAYER]
            if any(rock_is_under_capture(board, rock, player) for rock in five):
                return Category.CAPTURED_FIVE_IN_ROW
        return category

    def count_movement_patterns(self, rules: RuleSet, board, move: Move) -> PatternCount:
        """Categories around a rock that was just placed on `board`."""
        count = PatternCount(captures=len(move.captures) // 2)
        for direction in DIRECTIONS:
            category = self.direction_category(rules, board, move.coordinates, direction, move.player)
            if category is not None:
                count.add(category)
        return count

    def count_board_patterns(self, rules: RuleSet, board, player: Player) -> PatternCount:
        count = PatternCount(captures=board.side(player).captures)
        for index in board.side(player).rocks:
            coordinates = Coordinates.from_index(index)
            for direction in DIRECTIONS:
                category = self.direction_category(rules, board, coordinates, direction, player)
                if category is not None:
                    count.add(category)
        return count

    def touched_pairs(self, move: Move) -> Set[Tuple[int, int]]:
        """(index, axis) of every cell whose line on `axis` reaches a cell the move changed."""
        pairs = set()
        for index in [move.index] + [captured.index for captured in move.captures]:
            for axis in AXES:
                for neighbor in window_cells(axis, LINE_RADIUS, LINE_RADIUS, index):
                    pairs.add((neighbor, axis))
        return pairs

    def count_pairs(self, rules: RuleSet, board, pairs: Set[Tuple[int, int]], player: Player) -> PatternCount:
        """Tally of `player`'s rocks among `pairs`, along the pair's axis only."""
        count = PatternCount()
        rocks = board.side(player).rocks
        for index, axis in pairs:
            if index not in rocks:
                continue
            coordinates = Coordinates.from_index(index)
            for direction in OPPOSITE_DIRECTIONS[axis]:
                category = self.direction_category(rules, board, coordinates, direction, player)
                if category is not None:
                    count.add(category)
        return count

    def needs_recount(self, rules: RuleSet, count: PatternCount) -> bool:
        """
        A standing five can change category through a rock off its own
        axis, which a local recount misses.
        """
        return rules.fives_can_be_broken and (count.five_in_row > 0 or count.captured_five_in_row > 0)

    def move_pattern_delta(self, rules: RuleSet, before, after, move: Move, player: Player) -> PatternCount:
        """
        Change of `player`'s board tally caused by `move`, recounting only
        the rocks within reach of the cells it changed.
        """
        if rules.fives_can_be_broken and before.has_five_in_a_row(player):
            return self.count_board_patterns(rules, after, player) - self.count_board_patterns(rules, before, player)
        pairs = self.touched_pairs(move)
        delta = self.count_pairs(rules, after, pairs, player) - self.count_pairs(rules, before, pairs, player)
        delta.captures = after.side(player).captures - before.side(player).captures
        return delta

    def side_scores(self, rules: RuleSet, board) -> Dict[Player, int]:
        return {
            player: patterns_score(self.count_board_patterns(rules, board, player))
            for player in (Player.BLACK, Player.WHITE)
        }

    def score(self, rules: RuleSet, board, player: Player) -> int:
        """Own patterns value minus the opponent's."""
        scores = self.side_scores(rules, board)
        return scores[player] - scores[player.opponent()]
