"""Core components: board wrapper, evaluation heuristics and the two engines."""

from .board import ChessBoard, GameStatus
from .adaptive import AdaptiveEngine
from .hyperbolic import HyperbolicEngine
from .types import ChessEngine, EngineConfig, MoveRecord, OpponentProfile
