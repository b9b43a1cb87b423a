"""Hyperbolic engine: a fixed, hyper-aggressive one-ply player.

It has no opponent model. Every legal move is tried once, the resulting
position is scored with a mobility/attack heavy evaluation, the score is bent
through a power transform and a little temperature noise picks among close
candidates.
"""

import logging
import math
import random
import time
from typing import Optional

import chess

from chessduel.config import CONFIG, HYPERBOLIC_MODEL_CHECKPOINT, PIECE_VALUES
from chessduel.core.evaluation import (
    calculate_position_complexity,
    captured_piece_type,
)
from chessduel.core.types import EngineConfig
from chessduel.core.utils import format_search_info

logger = logging.getLogger(__name__)

EVAL_EXPONENT = 1.2
SELECTION_EXPONENT = 1.3


def signed_power(x: float, exponent: float) -> float:
    return math.copysign(abs(x) ** exponent, x) if x else 0.0


class HyperbolicEngine:
    model_checkpoint = HYPERBOLIC_MODEL_CHECKPOINT
    style = "hyper-aggressive"

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        if config is None:
            config = EngineConfig(
                temperature=CONFIG.hyperbolic.temperature,
                risk_factor=CONFIG.hyperbolic.risk_factor,
            )
        self.config = config
        self.rng = rng or random.Random(seed)

    @property
    def temperature(self) -> float:
        return self.config.temperature

    @property
    def risk_factor(self) -> float:
        return self.config.risk_factor

    def evaluate_board(self, board: chess.Board) -> float:
        """Material + mobility per piece, bent by x^1.2, then the raw attack bonus.

        The attack bonus is summed for whichever side has moves and is not
        signed by colour.
        """
        evaluation = 0.0
        attack_bonus = 0.0

        moves_by_square = {}
        for m in board.legal_moves:
            moves_by_square.setdefault(m.from_square, []).append(m)

        for sq, piece in board.piece_map().items():
            moves = moves_by_square.get(sq, [])
            value = PIECE_VALUES[piece.piece_type]
            value += len(moves) * 0.05 * self.temperature

            attacked_value = 0.0
            for m in moves:
                victim = captured_piece_type(board, m)
                if victim is not None:
                    attacked_value += PIECE_VALUES[victim] * 0.1
            attack_bonus += attacked_value * self.risk_factor

            if piece.color == chess.WHITE:
                evaluation += value
            else:
                evaluation -= value

        return signed_power(evaluation, EVAL_EXPONENT) + attack_bonus

    def apply_hyperbolic_transform(self, score: float) -> float:
        return signed_power(score, SELECTION_EXPONENT)

    def get_move(self, board: chess.Board) -> Optional[str]:
        moves = list(board.legal_moves)
        if not moves:
            return None

        start = time.perf_counter()
        white_to_move = board.turn == chess.WHITE
        probe = board.copy()

        best_move = moves[0]
        best_score = -math.inf if white_to_move else math.inf

        for move in moves:
            probe.push(move)
            score = self.apply_hyperbolic_transform(self.evaluate_board(probe))
            probe.pop()
            score += (self.rng.random() - 0.5) * self.temperature

            if (white_to_move and score > best_score) or (not white_to_move and score < best_score):
                best_score = score
                best_move = move

        san = board.san(best_move)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                format_search_info(
                    1, best_score, len(moves), time.perf_counter() - start, san,
                    mate_threshold=math.inf, complexity=calculate_position_complexity(board),
                )
            )
        return san
