# gomoku/core/solver.py
import logging
from typing import List, Optional, Tuple

from .board import Board
from .constants import DEPTH, MAX_SCORE, MIN_SCORE, WIN_CAPTURES, WIN_SCORE
from .heuristic import Heuristic, patterns_score
from .patterns import PatternCount
from .rules import RuleSet
from .transposition import Bound, TranspositionTable
from .types import Move, Player

logger = logging.getLogger(__name__)


class Evaluation:
    """Score of a position for the side to move, and the expected line of play."""
    __slots__ = ("score", "movements")

    def __init__(self, score: int, movements: Optional[List[Move]] = None):
        self.score = score
        self.movements: List[Move] = movements if movements is not None else []

    @property
    def best_move(self) -> Optional[Move]:
        return self.movements[0] if self.movements else None

    @property
    def outcome(self) -> str:
        if self.score >= WIN_SCORE // 2:
            return "WIN"
        if self.score <= -(WIN_SCORE // 2):
            return "LOSS"
        return "UNDECIDED"

    def __repr__(self) -> str:
        return f"Evaluation(score={self.score}, best_move={self.best_move!r})"


class Solver:
    def __init__(self, rules: Optional[RuleSet] = None):
        self.rules = (rules or RuleSet()).normalized()
        self.tt = TranspositionTable()
        self.heuristic = Heuristic()
        self.nodes = 0

    def solve(self, board: Board, player: Player, depth: int = DEPTH) -> Evaluation:
        """
        Root Entry Point.
        Searches a private copy of `board`, the caller's board is left untouched.
        """
        self.nodes = 0
        self.tt.reset()

        work = board.copy()
        evaluation = self.negamax(work, depth, MIN_SCORE, MAX_SCORE, player, player)

        logger.debug(
            "Search depth=%d player=%s nodes=%d tt_hits=%d count_hits=%d best=%r score=%d",
            depth, player.name, self.nodes, self.tt.hits, self.tt.count_hits,
            evaluation.best_move, evaluation.score,
        )
        return evaluation

    # --- Static evaluation ---

    def side_counts(self, board: Board) -> Tuple[PatternCount, PatternCount]:
        """(black, white) tallies of `board`, counted in full when not cached."""
        key = board.key()
        if (cached := self.tt.get_counts(key)) is not None:
            return cached
        black = self.heuristic.count_board_patterns(self.rules, board, Player.BLACK)
        white = self.heuristic.count_board_patterns(self.rules, board, Player.WHITE)
        self.tt.put_counts(key, black, white)
        return black, white

    def child_counts(self, board: Board, move: Move,
                     parent: Tuple[PatternCount, PatternCount]) -> Tuple[PatternCount, PatternCount]:
        """
        Tallies once `move` is applied, derived from the parent's by
        recounting the lines it touched. The move must be on `board` and is
        taken back and replayed in place.
        """
        key = board.key()
        if (cached := self.tt.get_counts(key)) is not None:
            return cached
        sides = (Player.BLACK, Player.WHITE)
        pairs = self.heuristic.touched_pairs(move)
        after = {}
        for side, count in zip(sides, parent):
            if self.heuristic.needs_recount(self.rules, count):
                after[side] = self.heuristic.count_board_patterns(self.rules, board, side)
            else:
                after[side] = self.heuristic.count_pairs(self.rules, board, pairs, side)
        captures = {side: board.side(side).captures for side in sides}

        board.undo_move()
        counts = []
        for side, count in zip(sides, parent):
            if self.heuristic.needs_recount(self.rules, count):
                child = after[side]
            else:
                child = count + after[side] - self.heuristic.count_pairs(self.rules, board, pairs, side)
                child.captures = captures[side]
            counts.append(child)
        board.apply(self.rules, move)

        self.tt.put_counts(key, counts[0], counts[1])
        return counts[0], counts[1]

    def evaluate(self, board: Board, player: Player) -> int:
        black, white = self.side_counts(board)
        black_score, white_score = patterns_score(black), patterns_score(white)
        return black_score - white_score if player == Player.BLACK else white_score - black_score

    def game_over(self, board: Board) -> bool:
        """Either side wins. The tallies rule out most positions without a board scan."""
        for side, count in zip((Player.BLACK, Player.WHITE), self.side_counts(board)):
            if count.captures < WIN_CAPTURES and count.five_in_row == 0 and count.captured_five_in_row == 0:
                continue
            if board.is_winning(self.rules, side):
                return True
        return False

    # --- Search ---

    def sorted_moves(self, board: Board, player: Player) -> List[Move]:
        """Legal moves, strongest own pattern first, then best resulting score."""
        parent = self.side_counts(board)
        ranked = []
        for move in board.legal_moves(self.rules, player):
            board.apply(self.rules, move)
            strength = self.heuristic.count_movement_patterns(self.rules, board, move).best_pattern()
            self.child_counts(board, move, parent)
            score = self.evaluate(board, player)
            board.undo_move()
            ranked.append((strength, score, move))
        # Stable sort, ties keep board order
        ranked.sort(key=lambda item: (item[0], item[1]), reverse=True)
        return [move for _, _, move in ranked]

    def negamax(self, board: Board, depth: int, alpha: int, beta: int,
                player: Player, maximizer: Player) -> Evaluation:
        self.nodes += 1

        # 1. Leaf: depth exhausted or the game is over
        if depth == 0 or self.game_over(board):
            color = 1 if player == maximizer else -1
            return Evaluation(color * self.evaluate(board, maximizer))

        # 2. Transposition Table Cache
        key = (board.key(), player, depth)
        alpha_origin = alpha
        if (entry := self.tt.get(key)) is not None:
            if entry.flag == Bound.EXACT:
                return Evaluation(entry.value, list(entry.movements))
            if entry.flag == Bound.LOWER:
                alpha = max(alpha, entry.value)
            else:
                beta = min(beta, entry.value)
            if alpha >= beta:
                return Evaluation(entry.value, list(entry.movements))

        # 3. Recursive Search
        moves = self.sorted_moves(board, player)
        if not moves:
            # No legal move, the position is scored as it stands
            color = 1 if player == maximizer else -1
            return Evaluation(color * self.evaluate(board, maximizer))

        best = Evaluation(MIN_SCORE - 1)
        for move in moves:
            board.apply(self.rules, move)
            child = self.negamax(board, depth - 1, -beta, -alpha, player.opponent(), maximizer)
            board.undo_move()

            score = -child.score
            if score > best.score:
                best = Evaluation(score, [move.copy()] + child.movements)
            if score > alpha:
                alpha = score
            if alpha >= beta:
                break  # Beta Cutoff

        if best.score <= alpha_origin:
            flag = Bound.UPPER
        elif best.score >= beta:
            flag = Bound.LOWER
        else:
            flag = Bound.EXACT
        self.tt.put(key, best.score, flag, best.movements)
        return best
