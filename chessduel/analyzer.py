# chessduel/analyzer.py
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Sequence

from chessduel.core.types import MoveRecord


@dataclass
class GameSummary:
    total_moves: int = 0
    white_moves: int = 0
    black_moves: int = 0
    avg_white_time: float = 0.0
    avg_black_time: float = 0.0
    max_swing: float = 0.0
    avg_swing: float = 0.0
    eval_series: List[Dict[str, Any]] = field(default_factory=list)
    skill_series: List[Dict[str, Any]] = field(default_factory=list)
    time_series: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _avg_time(records: Sequence[MoveRecord]) -> float:
    if not records:
        return 0.0
    return sum(r.time_taken or 0.0 for r in records) / len(records)


def summarize(records: Sequence[MoveRecord]) -> GameSummary:
    """
    Summarize a game's move log for display.
    - eval_series: one point per half-move (1-based), with san and player.
    - skill_series: only records carrying a skill value (skill_level preferred
      over adaptive_skill), renumbered from 1.
    - time_series: only timed records, renumbered from 1.
    - swings: absolute eval change between consecutive records.
    """
    if not records:
        return GameSummary()

    white = [r for r in records if r.player == "white"]
    black = [r for r in records if r.player == "black"]

    swings = [abs(records[i].eval_score - records[i - 1].eval_score) for i in range(1, len(records))]

    eval_series = [
        {"move": i + 1, "eval": round(r.eval_score, 2), "player": r.player, "san": r.san}
        for i, r in enumerate(records)
    ]
    skilled = [r for r in records if r.skill_level is not None or r.adaptive_skill is not None]
    skill_series = [
        {"move": i + 1, "skill": round(r.skill_level if r.skill_level is not None else r.adaptive_skill, 1)}
        for i, r in enumerate(skilled)
    ]
    timed = [r for r in records if r.time_taken is not None]
    time_series = [
        {"move": i + 1, "time": round(r.time_taken, 3), "player": r.player}
        for i, r in enumerate(timed)
    ]

    return GameSummary(
        total_moves=len(records),
        white_moves=len(white),
        black_moves=len(black),
        avg_white_time=_avg_time(white),
        avg_black_time=_avg_time(black),
        max_swing=max(swings) if swings else 0.0,
        avg_swing=sum(swings) / len(swings) if swings else 0.0,
        eval_series=eval_series,
        skill_series=skill_series,
        time_series=time_series,
    )
