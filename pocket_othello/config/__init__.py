"""TOML configuration for sessions, storage and logging"""
from __future__ import annotations

import logging
import os
import pathlib
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..engine.strength import MINIMUM_MOVE_TIME, clamp_level

DEFAULTS_PATH = pathlib.Path(__file__).resolve().parent / "defaults.toml"

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    players: int = 1
    level: int = 1
    min_move_time: float = MINIMUM_MOVE_TIME
    db_path: str = os.path.join("~", ".pocket_othello", "othello.sqlite")
    log_level: str = "INFO"
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "GameConfig":
        game = cfg.get("game", {}) or {}
        storage = cfg.get("storage", {}) or {}
        log_cfg = cfg.get("logging", {}) or {}
        out = cls()
        try:
            out.players = max(0, min(2, int(game.get("players", out.players))))
            out.level = clamp_level(game.get("level", out.level))
            ms = game.get("min_move_time_ms")
            if ms is not None:
                out.min_move_time = max(0.0, float(ms) / 1000.0)
            seed = game.get("seed")
            out.seed = int(seed) if seed is not None else None
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring bad [game] config values: %s", e)
        out.db_path = str(storage.get("path", out.db_path))
        out.log_level = str(log_cfg.get("level", out.log_level)).upper()
        return out

    @property
    def resolved_db_path(self) -> str:
        if self.db_path == ":memory:":
            return self.db_path
        return os.path.expanduser(self.db_path)

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)


def _parse_toml(path: pathlib.Path) -> Dict[str, Any]:
    # Parse TOML config; prefer stdlib tomllib (3.11+), else tomli
    try:
        import tomllib  # type: ignore[attr-defined]
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_config(path: Optional[pathlib.Path] = None) -> GameConfig:
    """Load the user config, falling back to packaged defaults.

    A missing or unreadable file is logged and replaced by the defaults.
    """
    target = path if path is not None else DEFAULTS_PATH
    try:
        data = _parse_toml(target)
    except FileNotFoundError:
        logger.info("No config at %s, using defaults", target)
        data = _parse_toml(DEFAULTS_PATH)
    except Exception as e:
        logger.warning("Could not parse config %s: %s", target, e)
        data = _parse_toml(DEFAULTS_PATH)
    return GameConfig.from_dict(data)
