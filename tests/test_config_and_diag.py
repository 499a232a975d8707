from __future__ import annotations

import logging

import orjson

from pocket_othello.config import DEFAULTS_PATH, GameConfig, load_config
from pocket_othello.tools.diag import ensure_config, ensure_database, log_event


def test_defaults_file_loads():
    cfg = load_config(DEFAULTS_PATH)
    assert (cfg.players, cfg.level) == (1, 1)
    assert cfg.min_move_time == 0.5
    assert cfg.seed is None
    assert cfg.logging_level == logging.INFO


def test_user_values_are_clamped(tmp_path):
    p = tmp_path / "config.toml"
    p.write_text(
        '[game]\nplayers = 5\nlevel = 9\nmin_move_time_ms = 0\nseed = 12\n'
        '[storage]\npath = ":memory:"\n[logging]\nlevel = "debug"\n',
        encoding="utf-8",
    )
    cfg = load_config(p)
    assert (cfg.players, cfg.level) == (2, 5)
    assert cfg.min_move_time == 0.0
    assert cfg.seed == 12
    assert cfg.resolved_db_path == ":memory:"
    assert cfg.logging_level == logging.DEBUG


def test_missing_or_broken_config_falls_back(tmp_path):
    assert load_config(tmp_path / "nope.toml") == load_config(DEFAULTS_PATH)
    bad = tmp_path / "bad.toml"
    bad.write_text("[game\nlevel = ", encoding="utf-8")
    assert load_config(bad) == load_config(DEFAULTS_PATH)


def test_bad_value_types_keep_defaults():
    cfg = GameConfig.from_dict({"game": {"level": "hard"}})
    assert cfg.level == 1


def test_ensure_config_and_database(tmp_path):
    cfg_path = tmp_path / "home" / "config.toml"
    assert ensure_config(cfg_path) is True
    assert ensure_config(cfg_path) is False
    assert cfg_path.read_text(encoding="utf-8") == DEFAULTS_PATH.read_text(encoding="utf-8")
    db_path = tmp_path / "home" / "othello.sqlite"
    assert ensure_database(db_path) is True
    assert ensure_database(db_path) is False


def test_log_event_emits_json(caplog):
    with caplog.at_level(logging.INFO, logger="event.session"):
        log_event("session", "game_over", black=40, white=24)
    payload = orjson.loads(caplog.records[-1].getMessage())
    assert payload["event"] == "game_over"
    assert payload["module"] == "session"
    assert payload["black"] == 40
