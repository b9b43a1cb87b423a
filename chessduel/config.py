# chessduel/config.py
from dataclasses import dataclass, field
from typing import Optional
import os
import tomllib  # python >=3.11

import chess

# Material in pawns; the king is never counted.
PIECE_VALUES = {
    chess.PAWN: 1,
    chess.KNIGHT: 3,
    chess.BISHOP: 3,
    chess.ROOK: 5,
    chess.QUEEN: 9,
    chess.KING: 0,
}

CENTER_SQUARES = (chess.E4, chess.D4, chess.E5, chess.D5)

# Rounded opponent skill -> base search depth
DEPTH_TABLE = {1: 1, 2: 2, 3: 3, 4: 4, 5: 5, 6: 6, 7: 6, 8: 7, 9: 8, 10: 9}

# Root search stops once a line scores at least this much for the mover
MATE_THRESHOLD = 100
MATE_SCORE = 1000

ADAPTIVE_MODEL_PATH = "hybrid_checkpoint.pth"
HYPERBOLIC_MODEL_CHECKPOINT = "HuggingFaceTB/SmolLM-360M"


@dataclass
class AdaptiveConfig:
    initial_skill: float = 5.0
    adaptive_factor: float = 0.8
    aggressive_threshold: float = 0.6
    defensive_threshold: float = -0.6
    depth_jitter_probability: float = 0.3
    weak_shuffle_probability: float = 0.3
    warmup_moves: int = 10
    weak_sample_size: int = 5
    medium_sample_size: int = 15


@dataclass
class HyperbolicConfig:
    temperature: float = 1.2
    risk_factor: float = 0.7


@dataclass
class SessionConfig:
    mode: str = "human"           # "human" or "aivai"
    human_color: str = "white"
    seed: Optional[int] = None    # None means nondeterministic engines


@dataclass
class Config:
    adaptive: AdaptiveConfig = field(default_factory=AdaptiveConfig)
    hyperbolic: HyperbolicConfig = field(default_factory=HyperbolicConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("adaptive", "hyperbolic", "session"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"]).upper()
        return cfg


# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("CHESSDUEL_CONFIG_TOML", "config.toml"))
# allow env override of the engine seed for reproducible games
try:
    override_seed = os.environ.get("CHESSDUEL_SEED")
    if override_seed:
        CONFIG.session.seed = int(override_seed)
except ValueError:
    pass
