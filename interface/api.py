"""FastAPI REST interface for a single in-memory game session."""

import logging
import threading

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, field_validator
from typing import Optional

from chessduel.analyzer import summarize
from chessduel.config import CONFIG
from chessduel.session import GameError, GameSession

logging.basicConfig(level=CONFIG.log_level)
_log = logging.getLogger(__name__)

app = FastAPI(title="chessduel", version="0.1.0")

session = GameSession()
_session_lock = threading.Lock()


class NewGameRequest(BaseModel):
    mode: str = "human"
    human_color: str = "white"
    seed: Optional[int] = None

    @field_validator("mode")
    @classmethod
    def check_mode(cls, v: str) -> str:
        if v not in ("human", "aivai"):
            raise ValueError("mode must be 'human' or 'aivai'")
        return v

    @field_validator("human_color")
    @classmethod
    def check_color(cls, v: str) -> str:
        v = v.lower()
        if v not in ("white", "black"):
            raise ValueError("human_color must be 'white' or 'black'")
        return v


class MoveRequest(BaseModel):
    move: str  # SAN ("Nf3") or UCI ("g1f3")
    time_taken: Optional[float] = Field(default=None, ge=0)


def _game_state() -> dict:
    status = session.board.status()
    return {
        "fen": session.board.get_fen(),
        "mode": session.mode,
        "turn": session.board.turn,
        "legal_moves": session.board.get_legal_moves(),
        "moves": list(session.board.move_history),
        "is_game_over": status.over,
        "result": session.result_text(),
        "telemetry": session.telemetry(),
    }


@app.get("/game")
def get_game():
    with _session_lock:
        return _game_state()


@app.post("/game/new")
def new_game(req: NewGameRequest = NewGameRequest()):
    global session
    with _session_lock:
        session = GameSession(mode=req.mode, human_color=req.human_color, seed=req.seed)
        _log.info("started %s game (seed=%s)", req.mode, req.seed)
        return _game_state()


@app.post("/move")
def make_move(req: MoveRequest):
    with _session_lock:
        try:
            record = session.play_human_move(req.move, time_taken=req.time_taken)
        except GameError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"record": record.to_dict(), **_game_state()}


@app.post("/engine-move")
def engine_move():
    with _session_lock:
        try:
            record = session.play_engine_move()
        except GameError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"record": record.to_dict() if record else None, **_game_state()}


@app.get("/history")
def get_history():
    with _session_lock:
        return {"records": [r.to_dict() for r in session.records]}


@app.get("/analysis")
def get_analysis():
    with _session_lock:
        return summarize(session.records).to_dict()
