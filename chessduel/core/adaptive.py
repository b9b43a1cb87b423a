"""Adaptive engine: reads the opponent's skill and style, then plays minimax.

The engine keeps an `OpponentProfile` for the current game. Every observed
opponent move updates the profile by exponential smoothing; the profile in
turn picks the search depth, how many root moves are considered and whether
move lists are ordered or shuffled.

Skill bands roughly map to depth as

    skill 1-2  -> depth 1-2   (barely looks ahead)
    skill 5    -> depth 5     (default opening estimate)
    skill 10   -> depth 9

before the piece-count reduction in `get_move`.
"""

import logging
import math
import random
import time
from typing import Optional

import chess

from chessduel.config import (
    ADAPTIVE_MODEL_PATH,
    CONFIG,
    DEPTH_TABLE,
    MATE_SCORE,
    MATE_THRESHOLD,
    PIECE_VALUES,
    AdaptiveConfig,
)
from chessduel.core.evaluation import (
    assess_center_control,
    assess_piece_development,
    calculate_position_complexity,
    calculate_undefended_penalty,
    captured_piece_type,
    flipped_turn,
    order_moves,
)
from chessduel.core.types import AssessmentEntry, OpponentProfile
from chessduel.core.utils import format_search_info

logger = logging.getLogger(__name__)

INF = float("inf")


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


class AdaptiveEngine:
    model_path = ADAPTIVE_MODEL_PATH

    def __init__(
        self,
        config: Optional[AdaptiveConfig] = None,
        rng: Optional[random.Random] = None,
        profile: Optional[OpponentProfile] = None,
        seed: Optional[int] = None,
    ):
        self.cfg = config or CONFIG.adaptive
        self.rng = rng or random.Random(seed)
        self.profile = profile or self._new_profile()
        self.nodes = 0

    def _new_profile(self) -> OpponentProfile:
        return OpponentProfile(
            skill_estimate=self.cfg.initial_skill,
            adaptive_factor=self.cfg.adaptive_factor,
        )

    def reset(self):
        """Start a new game with a fresh opponent profile."""
        self.profile = self._new_profile()

    # -- telemetry --

    @property
    def skill_estimate(self) -> float:
        return self.profile.skill_estimate

    @property
    def style(self) -> str:
        return self.profile.style

    @property
    def history_length(self) -> int:
        return len(self.profile.history)

    # -------------------------
    # Opponent assessment
    # -------------------------
    def update_opponent_assessment(self, board: chess.Board, move_san: str, time_taken: float):
        """Fold one observed opponent move into the profile.

        `board` is the position *before* the move; it is not modified.
        """
        quality = self.analyze_move_quality(board, move_san)
        style_score = self.analyze_move_style(board, move_san)
        # negative clock readings count as an instant reply
        skill_adjustment = quality * (1.0 / (max(0.0, time_taken) + 0.5))

        p = self.profile
        target = clamp(skill_adjustment * 10, 1, 10)
        p.skill_estimate = clamp(
            (1 - p.adaptive_factor) * p.skill_estimate + p.adaptive_factor * target, 1, 10
        )
        p.style = self.classify_style(style_score)
        p.history.append(AssessmentEntry(p.skill_estimate, p.style, quality, style_score))

        logger.debug(
            "opponent %s: quality %.2f style %.2f (%s) -> skill %.2f",
            move_san, quality, style_score, p.style, p.skill_estimate,
        )

    def classify_style(self, style_score: float) -> str:
        if style_score > self.cfg.aggressive_threshold:
            return "aggressive"
        if style_score < self.cfg.defensive_threshold:
            return "defensive"
        return "balanced"

    @staticmethod
    def _parse(board: chess.Board, move_san: str) -> Optional[chess.Move]:
        try:
            move = board.parse_san(move_san)
        except ValueError:
            return None
        # parse_san maps "--" to the null move
        return move or None

    def analyze_move_quality(self, board: chess.Board, move_san: str) -> float:
        move = self._parse(board, move_san)
        if move is None:
            return 0.1

        after = board.copy()
        after.push(move)

        quality = 0.5
        if after.is_check():
            quality += 0.3
        if after.is_checkmate():
            return 1.0
        if board.is_capture(move):
            quality += 0.2

        quality += (assess_center_control(after) + assess_piece_development(after)) / 4
        quality -= calculate_undefended_penalty(after)
        return clamp(quality, 0.1, 1.0)

    def analyze_move_style(self, board: chess.Board, move_san: str) -> float:
        """Capture-vs-quiet balance of the mover's follow-ups, in [-1, 1]."""
        move = self._parse(board, move_san)
        if move is None:
            return 0.0

        after = board.copy(stack=False)
        after.push(move)
        mover = flipped_turn(after)

        attack = 0.0
        defense = 0.0
        for m in mover.legal_moves:
            if captured_piece_type(mover, m) is not None:
                attack += 1
            else:
                defense += 0.1

        if attack + defense == 0:
            return 0.0
        return (attack - defense) / max(1, attack + defense)

    # -------------------------
    # Skill & depth
    # -------------------------
    def get_skill_level(self) -> float:
        """Per-move playing strength: estimate plus jitter, +1 once warmed up."""
        skill = clamp(self.profile.skill_estimate + self.rng.random() * 1.5 - 0.5, 1, 10)
        if len(self.profile.history) > self.cfg.warmup_moves:
            skill = min(10, skill + 1)
        return skill

    def get_depth_for_opponent(self) -> int:
        # round half up, then clamp into the table
        skill = int(clamp(math.floor(self.profile.skill_estimate + 0.5), 1, 10))
        depth = DEPTH_TABLE[skill]

        # two independent rolls; both firing cancels out
        if self.rng.random() < self.cfg.depth_jitter_probability:
            depth += 1
        if self.rng.random() < self.cfg.depth_jitter_probability:
            depth -= 1
        return max(1, depth)

    # -------------------------
    # Evaluation
    # -------------------------
    def evaluate_board(self, board: chess.Board) -> float:
        """Material from white's point of view plus a style-countering term."""
        score = 0.0
        for piece in board.piece_map().values():
            value = PIECE_VALUES[piece.piece_type]
            score += value if piece.color == chess.WHITE else -value

        sign = 1 if board.turn == chess.BLACK else -1
        if self.profile.style == "aggressive":
            score += self.calculate_defense_bonus(board) * sign
        elif self.profile.style == "defensive":
            score += self.calculate_attack_bonus(board) * sign
        return score

    def calculate_defense_bonus(self, board: chess.Board) -> float:
        # every legal move belongs to one of the mover's pieces
        return board.legal_moves.count() * 0.05

    def calculate_attack_bonus(self, board: chess.Board) -> float:
        attacks = 0
        for m in board.generate_legal_captures():
            victim = board.piece_at(m.to_square)
            if victim and victim.color != board.turn:
                attacks += 1
        return attacks * 0.08

    # -------------------------
    # Minimax with alpha-beta
    # -------------------------
    def _leaf_value(self, board: chess.Board) -> float:
        """Mated leaves score +/-MATE_SCORE so the root mate cut-off can fire; others use evaluate_board."""
        if board.is_checkmate():
            return -MATE_SCORE if board.turn == chess.WHITE else MATE_SCORE
        return self.evaluate_board(board)

    def _node_moves(self, board: chess.Board, skill_level: float):
        moves = list(board.legal_moves)
        if skill_level < 5:
            if self.rng.random() < self.cfg.weak_shuffle_probability:
                self.rng.shuffle(moves)
            return moves
        return order_moves(board, moves)

    def minimax(
        self,
        board: chess.Board,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        skill_level: float,
    ) -> float:
        """Alpha-beta minimax; `board` is pushed and popped but left as found."""
        self.nodes += 1
        if depth <= 0 or board.is_game_over():
            return self._leaf_value(board)

        moves = self._node_moves(board, skill_level)

        if maximizing:
            max_eval = -INF
            for move in moves:
                board.push(move)
                ev = self.minimax(board, depth - 1, alpha, beta, False, skill_level)
                board.pop()
                max_eval = max(max_eval, ev)
                alpha = max(alpha, ev)
                if beta <= alpha:
                    break
            return max_eval

        min_eval = INF
        for move in moves:
            board.push(move)
            ev = self.minimax(board, depth - 1, alpha, beta, True, skill_level)
            board.pop()
            min_eval = min(min_eval, ev)
            beta = min(beta, ev)
            if beta <= alpha:
                break
        return min_eval

    def reduce_depth(self, board: chess.Board, depth: int) -> int:
        pieces = len(board.piece_map())
        if pieces > 20:
            return max(1, depth - 2)
        if pieces > 10:
            return max(1, depth - 1)
        return depth

    def candidate_moves(self, board: chess.Board, skill_level: float):
        """Root move list: random sample for weaker play, ordered from skill 5 up."""
        moves = list(board.legal_moves)
        if skill_level < 5:
            self.rng.shuffle(moves)
            moves = moves[: self.cfg.weak_sample_size]
        elif skill_level < 8:
            self.rng.shuffle(moves)
            moves = moves[: self.cfg.medium_sample_size]

        if skill_level >= 5:
            moves = order_moves(board, moves)
        return moves

    def get_move(self, board: chess.Board) -> Optional[str]:
        if not board.legal_moves:
            return None

        skill_level = self.get_skill_level()
        depth = self.reduce_depth(board, self.get_depth_for_opponent())
        return self.search(board, depth, skill_level)

    def search(self, board: chess.Board, depth: int, skill_level: float) -> Optional[str]:
        """Root search to `depth` plies with a fixed per-call skill level."""
        moves = self.candidate_moves(board, skill_level)
        if not moves:
            return None

        self.nodes = 0
        start = time.perf_counter()
        search_board = board.copy()
        white_to_move = board.turn == chess.WHITE

        best_move = moves[0]
        best_value = -INF if white_to_move else INF
        alpha = -INF
        beta = INF

        for move in moves:
            search_board.push(move)
            ev = self.minimax(search_board, depth - 1, alpha, beta, not white_to_move, skill_level)
            search_board.pop()

            if white_to_move:
                if ev > best_value:
                    best_value = ev
                    best_move = move
                alpha = max(alpha, ev)
            else:
                if ev < best_value:
                    best_value = ev
                    best_move = move
                beta = min(beta, ev)

            if (white_to_move and best_value >= MATE_THRESHOLD) or (
                not white_to_move and best_value <= -MATE_THRESHOLD
            ):
                break

        san = board.san(best_move)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                format_search_info(
                    depth, best_value, self.nodes, time.perf_counter() - start, san,
                    skill=skill_level, complexity=calculate_position_complexity(board),
                )
            )
        return san
