"""Game session: turn alternation, engine calls, timing and the move log.

The hosting front-end (CLI, REST API, a GUI) owns the loop and decides when to
call `play_human_move` / `play_engine_move`; the session keeps the position,
the engines and the append-only list of `MoveRecord`s for one game.
"""

import logging
import random
import time
from typing import List, Optional

import chess

from chessduel.config import CONFIG, SessionConfig
from chessduel.core.adaptive import AdaptiveEngine
from chessduel.core.board import ChessBoard, color_name
from chessduel.core.hyperbolic import HyperbolicEngine
from chessduel.core.types import ChessEngine, MoveRecord

logger = logging.getLogger(__name__)

MODES = ("human", "aivai")


class GameError(Exception):
    """Rejected input: illegal move, wrong turn or finished game."""


class GameSession:
    def __init__(self, mode: str = None, human_color: str = None, seed: Optional[int] = None,
                 config: Optional[SessionConfig] = None):
        cfg = config or CONFIG.session
        self.mode = mode or cfg.mode
        if self.mode not in MODES:
            raise ValueError(f"Unknown mode: {self.mode!r}")
        color = (human_color or cfg.human_color).lower()
        if color not in ("white", "black"):
            raise ValueError(f"Unknown colour: {color!r}")
        self.human_color = chess.WHITE if color == "white" else chess.BLACK
        self.seed = seed if seed is not None else cfg.seed

        self.board = ChessBoard()
        self.records: List[MoveRecord] = []
        self._new_engines()
        self._turn_started = time.monotonic()

    def _new_engines(self):
        # one generator per session so a seed replays the whole game
        master = random.Random(self.seed)
        self.adaptive = AdaptiveEngine(rng=random.Random(master.getrandbits(64)))
        self.hyperbolic = HyperbolicEngine(rng=random.Random(master.getrandbits(64))) if self.mode == "aivai" else None

    def reset(self):
        """Start a new game: fresh board, fresh engines and opponent profile."""
        self.board.reset()
        self.records.clear()
        self._new_engines()
        self._turn_started = time.monotonic()
        logger.info("new %s game", self.mode)

    # -------------------------
    # Turn bookkeeping
    # -------------------------
    @property
    def position(self) -> chess.Board:
        return self.board.board

    def is_over(self) -> bool:
        return self.board.is_game_over()

    def is_human_turn(self) -> bool:
        return self.mode == "human" and self.position.turn == self.human_color

    def engine_for_turn(self) -> ChessEngine:
        if self.mode == "aivai" and self.position.turn == chess.BLACK:
            return self.hyperbolic
        return self.adaptive

    def current_eval(self) -> float:
        return self.adaptive.evaluate_board(self.position)

    # -------------------------
    # Moves
    # -------------------------
    def play_human_move(self, text: str, time_taken: Optional[float] = None) -> MoveRecord:
        if self.is_over():
            raise GameError("Game is already over")
        if not self.is_human_turn():
            raise GameError("Not the human player's turn")
        move = self.board.parse_move(text)
        if move is None:
            raise GameError(f"Illegal move: {text}")

        if time_taken is None:
            time_taken = time.monotonic() - self._turn_started
        elif time_taken < 0:
            raise GameError(f"Think time cannot be negative: {time_taken}")

        before = self.position.copy()
        san = self.position.san(move)
        self.adaptive.update_opponent_assessment(before, san, time_taken)
        self.board.push(move)

        record = MoveRecord(
            san=san,
            player=color_name(before.turn),
            eval_score=self.current_eval(),
            skill_level=self.adaptive.skill_estimate,
            time_taken=time_taken,
        )
        return self._log(record)

    def play_engine_move(self) -> Optional[MoveRecord]:
        if self.is_over():
            raise GameError("Game is already over")
        if self.is_human_turn():
            raise GameError("Waiting for the human player's move")

        mover = self.position.turn
        engine = self.engine_for_turn()
        start = time.perf_counter()
        san = engine.get_move(self.position)
        time_taken = time.perf_counter() - start
        if san is None:
            return None

        self.board.push(self.position.parse_san(san))

        skill = self.adaptive.skill_estimate
        record = MoveRecord(
            san=san,
            player=color_name(mover),
            eval_score=self.current_eval(),
            skill_level=skill if self.mode == "human" else None,
            time_taken=time_taken,
            adaptive_skill=skill if self.mode == "aivai" else None,
        )
        return self._log(record)

    def play_until_over(self, max_half_moves: Optional[int] = None) -> List[MoveRecord]:
        """Let the engines play each other until the game ends or the limit is hit."""
        if self.mode != "aivai":
            raise GameError("play_until_over needs an AI vs AI session")
        played = []
        while not self.is_over():
            if max_half_moves is not None and len(played) >= max_half_moves:
                break
            record = self.play_engine_move()
            if record is None:
                break
            played.append(record)
        if self.is_over():
            logger.info("game over: %s", self.result_text())
        return played

    def _log(self, record: MoveRecord) -> MoveRecord:
        self.records.append(record)
        self._turn_started = time.monotonic()
        logger.info(
            "%d. %s %s eval %+.2f time %.3fs",
            len(self.records), record.player, record.san, record.eval_score, record.time_taken or 0.0,
        )
        return record

    # -------------------------
    # Status & telemetry
    # -------------------------
    def result_text(self) -> Optional[str]:
        status = self.board.status()
        if not status.over:
            return None
        if status.reason == "checkmate":
            if self.mode == "aivai":
                return "Adaptive AI wins!" if status.winner == "white" else "Hyperbolic AI wins!"
            return f"{status.winner.capitalize()} wins by checkmate!"
        # stalemate is reported as a draw, like every other non-mate ending
        return "Draw!"

    def telemetry(self) -> dict:
        data = {
            "skill_estimate": self.adaptive.skill_estimate,
            "style": self.adaptive.style,
            "history_length": self.adaptive.history_length,
            "eval": self.current_eval(),
            "adaptive_model": self.adaptive.model_path,
        }
        if self.hyperbolic is not None:
            data["hyperbolic_model"] = self.hyperbolic.model_checkpoint
            data["hyperbolic_style"] = self.hyperbolic.style
        return data
