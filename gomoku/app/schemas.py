from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Tuple

from gomoku.core.constants import BOARD_SIZE
from gomoku.core.types import Move

class MoveRecord(BaseModel):
    # Allow extra fields so stored histories survive schema changes
    model_config = ConfigDict(extra='ignore')

    player: int = Field(ge=0, le=1)  # 0 = Black, 1 = White
    x: int = Field(ge=0, lt=BOARD_SIZE)
    y: int = Field(ge=0, lt=BOARD_SIZE)

    @classmethod
    def from_move(cls, move: Move) -> "MoveRecord":
        return cls(player=int(move.player), x=move.coordinates.x, y=move.coordinates.y)

    def to_move(self) -> Move:
        return Move.at(self.player, self.x, self.y)

class AppliedMoveRecord(BaseModel):
    model_config = ConfigDict(extra='ignore')

    move: MoveRecord
    captures: List[Tuple[int, int]] = []

    @classmethod
    def from_move(cls, move: Move) -> "AppliedMoveRecord":
        return cls(
            move=MoveRecord.from_move(move),
            captures=[(c.x, c.y) for c in move.captures],
        )

class EvaluationRecord(BaseModel):
    score: int
    best_move: Optional[MoveRecord] = None
    line: List[MoveRecord] = []
    outcome: str = "UNDECIDED"
    nodes_explored: int = 0

    @classmethod
    def from_evaluation(cls, evaluation, nodes_explored: int = 0) -> "EvaluationRecord":
        line = [MoveRecord.from_move(move) for move in evaluation.movements]
        return cls(
            score=evaluation.score,
            best_move=line[0] if line else None,
            line=line,
            outcome=evaluation.outcome,
            nodes_explored=nodes_explored,
        )

class GameResponse(BaseModel):
    status: str
    current_player: int
    winner: Optional[int] = None  # Ensure explicit default
    black_captures: int = 0
    white_captures: int = 0
    board: str
    history: List[AppliedMoveRecord]
    last_evaluation: Optional[EvaluationRecord] = None
