import logging
from typing import List, Optional

from gomoku.app.enums import Difficulty, GameStatus
from gomoku.app.preset_registry import PresetRegistry, registry
from gomoku.app.schemas import AppliedMoveRecord, EvaluationRecord, GameResponse
from gomoku.core.api import AppliedMove, apply_move, new_board
from gomoku.core.board import Board
from gomoku.core.constants import BOARD_SIZE
from gomoku.core.heuristic import Heuristic
from gomoku.core.rules import RuleSet
from gomoku.core.solver import Evaluation, Solver
from gomoku.core.types import Coordinates, Move, Player, Rock

# Logger setup
logger = logging.getLogger(__name__)

class Game:
    def __init__(self, rules: Optional[RuleSet] = None, difficulty: str = Difficulty.MEDIUM,
                 presets: Optional[PresetRegistry] = None):
        """
        Board uses (x, y) coordinates, (0, 0) is the TOP-LEFT corner.
        Black moves first. `rules` defaults to the preset's rules.
        """
        preset = (presets or registry).require(str(difficulty))
        self.rules = (rules or preset.rules).normalized()
        self.depth = preset.depth
        self.board: Board = new_board()
        self.current_player = Player.BLACK
        self.winner: Optional[Player] = None
        self.draw = False
        self.redo_stack: List[Move] = []
        self.last_evaluation: Optional[EvaluationRecord] = None
        self.solver = Solver(self.rules)
        self.heuristic = Heuristic()

    # --- State ---

    @property
    def status(self) -> GameStatus:
        if self.winner is not None:
            return GameStatus.COMPLETED
        if self.draw:
            return GameStatus.DRAW
        return GameStatus.IN_PROGRESS

    @property
    def history(self) -> List[Move]:
        return self.board.history

    def is_over(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS

    def is_draw(self) -> bool:
        return self.draw

    def get_valid_moves(self) -> List[Coordinates]:
        """Coordinates the current player may play, empty once the game is over."""
        if self.is_over():
            return []
        return [move.coordinates for move in self.board.legal_moves(self.rules, self.current_player)]

    def is_valid_move(self, x: int, y: int) -> bool:
        if self.is_over():
            return False
        return self.board.is_move_legal(self.rules, Move.at(self.current_player, x, y))

    # --- Moves ---

    def play(self, x: int, y: int) -> AppliedMove:
        """
        Plays the current player's rock at (x, y).
        Raises ValueError on a finished game, and the board errors
        (OutOfBounds, Occupied, IllegalMove) on a refused move.
        """
        if self.is_over():
            raise ValueError(f"Game is over ({self.status})")
        applied = self._apply(Move.at(self.current_player, x, y))
        self.redo_stack.clear()
        return applied

    def play_engine(self, depth: Optional[int] = None) -> Evaluation:
        """Lets the solver pick and play the current player's move."""
        if self.is_over():
            raise ValueError(f"Game is over ({self.status})")
        evaluation = self.recommend(depth)
        self.last_evaluation = EvaluationRecord.from_evaluation(evaluation, self.solver.nodes)
        if evaluation.best_move is None:
            logger.warning("Engine found no move for %s", self.current_player.name)
            return evaluation
        self._apply(evaluation.best_move.copy())
        self.redo_stack.clear()
        return evaluation

    def recommend(self, depth: Optional[int] = None) -> Evaluation:
        return self.solver.solve(self.board, self.current_player, depth or self.depth)

    def _apply(self, move: Move) -> AppliedMove:
        before = self.board.copy() if logger.isEnabledFor(logging.DEBUG) else None
        applied = apply_move(self.board, self.rules, move)
        logger.info("%s plays %s", move.player.name, move.coordinates)
        if before is not None:
            delta = self.heuristic.move_pattern_delta(self.rules, before, self.board, move, move.player)
            logger.debug("Pattern change for %s: %r", move.player.name, delta)
        if applied.captures:
            logger.info(
                "%s captured %s (%d pairs total)",
                move.player.name,
                ", ".join(str(c) for c in applied.captures),
                self.board.side(move.player).captures,
            )
        self._update_state(move.player)
        return applied

    def _update_state(self, mover: Player):
        # A capturable five does not win yet, it stays on the board until
        # it is broken or made safe
        for player in (mover, mover.opponent()):
            if self.board.is_winning(self.rules, player):
                self.winner = player
                logger.info("%s wins", player.name)
                return
        self.current_player = mover.opponent()
        if not self.board.player_can_play(self.rules, self.current_player):
            self.draw = True
            logger.info("Draw, %s has no legal move", self.current_player.name)

    def undo(self) -> Optional[Move]:
        if not self.board.history:
            return None
        move = self.board.undo_move()
        self.redo_stack.append(move)
        self.current_player = move.player
        self.winner = None
        self.draw = False
        return move

    def redo(self) -> Optional[Move]:
        if not self.redo_stack:
            return None
        move = self.redo_stack.pop()
        self._apply(Move(move.player, move.coordinates))
        return move

    # --- Formatting ---

    def get_visual_board(self) -> str:
        """Generates an ASCII grid with coordinates on both axes."""
        symbols = {Rock.EMPTY: ".", Rock.BLACK: "X", Rock.WHITE: "O"}
        header = "   " + " ".join(f"{x:>2}" for x in range(BOARD_SIZE))
        rows_str = []
        for y in range(BOARD_SIZE):
            row_cells = [symbols[self.board.cells[y * BOARD_SIZE + x]] for x in range(BOARD_SIZE)]
            rows_str.append(f"{y:>2} " + " ".join(f"{c:>2}" for c in row_cells))
        captures = f"Captures: X={self.board.black.captures} O={self.board.white.captures}"
        return header + "\n" + "\n".join(rows_str) + "\n" + captures

    def to_response(self) -> GameResponse:
        return GameResponse(
            status=self.status,
            current_player=int(self.current_player),
            winner=int(self.winner) if self.winner is not None else None,
            black_captures=self.board.black.captures,
            white_captures=self.board.white.captures,
            board=str(self.board),
            history=[AppliedMoveRecord.from_move(move) for move in self.board.history],
            last_evaluation=self.last_evaluation,
        )
