# gomoku/core/api.py
"""Headless entry points used by the hosts (session, console, tests)."""
from typing import List, NamedTuple, Optional

from .board import Board
from .heuristic import Heuristic
from .rules import RuleSet
from .solver import Evaluation, Solver
from .types import Coordinates, Move, Player


class AppliedMove(NamedTuple):
    move: Move
    captures: List[Coordinates]


def new_board() -> Board:
    return Board()


def apply_move(board: Board, rules: RuleSet, move: Move) -> AppliedMove:
    """Plays `move` in place. Raises OutOfBounds, Occupied or IllegalMove."""
    captures = board.set_move(rules, move)
    return AppliedMove(move, list(captures))


def best_move(rules: RuleSet, board: Board, depth: int, player: Player,
              solver: Optional[Solver] = None) -> Evaluation:
    if depth < 1:
        raise ValueError(f"Search depth must be at least 1, got {depth}")
    solver = solver or Solver(rules)
    return solver.solve(board, player, depth)


def is_winning(board: Board, rules: RuleSet, player: Player) -> bool:
    return board.is_winning(rules, player)


def legal_moves(board: Board, rules: RuleSet, player: Player) -> List[Move]:
    return board.legal_moves(rules, player)


def score(board: Board, player: Player, rules: Optional[RuleSet] = None) -> int:
    return Heuristic().score(rules or RuleSet(), board, player)
