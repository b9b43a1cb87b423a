"""Value types shared by the engines and the game session."""

from dataclasses import dataclass, field, asdict
from typing import List, Optional, Protocol

import chess

STYLES = ("unknown", "aggressive", "defensive", "balanced")


class ChessEngine(Protocol):
    """Capability surface every engine offers to the game session."""

    def get_move(self, board: chess.Board) -> Optional[str]:
        ...

    def evaluate_board(self, board: chess.Board) -> float:
        ...


@dataclass(frozen=True)
class EngineConfig:
    temperature: float = 1.2
    risk_factor: float = 0.7


@dataclass(frozen=True)
class AssessmentEntry:
    skill_estimate: float
    style: str
    quality_score: float
    style_score: float


@dataclass
class OpponentProfile:
    """Running belief about the observed opponent, scoped to one game."""

    skill_estimate: float = 5.0
    style: str = "unknown"
    adaptive_factor: float = 0.8
    history: List[AssessmentEntry] = field(default_factory=list)


@dataclass(frozen=True)
class MoveRecord:
    san: str
    player: str  # "white" or "black"
    eval_score: float
    skill_level: Optional[float] = None
    time_taken: Optional[float] = None
    adaptive_skill: Optional[float] = None

    def to_dict(self) -> dict:
        return asdict(self)
