from __future__ import annotations

import logging
import os
import pathlib
import sqlite3
import sys
import time
from dataclasses import dataclass

import orjson

from ..config import DEFAULTS_PATH
from ..db.store import SCHEMA
from ..logging_setup import get_log_path, setup_logging

CONFIG_HOME = pathlib.Path(os.path.expanduser("~/.pocket_othello"))
CONFIG_PATH = CONFIG_HOME / "config.toml"
DB_PATH = CONFIG_HOME / "othello.sqlite"
CENTRAL_LOG_PATH = get_log_path()


@dataclass
class InitResult:
    config_created: bool
    db_created: bool


def ensure_config(config_path: pathlib.Path = CONFIG_PATH) -> bool:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    if not config_path.exists():
        config_path.write_text(DEFAULTS_PATH.read_text(encoding="utf-8"), encoding="utf-8")
        return True
    return False


def ensure_database(db_path: pathlib.Path = DB_PATH) -> bool:
    created = not db_path.exists()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    try:
        with conn:
            conn.executescript(SCHEMA)
    finally:
        conn.close()
    return created


def install_and_init(config_path: pathlib.Path = CONFIG_PATH, db_path: pathlib.Path = DB_PATH) -> InitResult:
    cfg_new = ensure_config(config_path)
    db_new = ensure_database(db_path)
    if cfg_new or db_new:
        logging.getLogger(__name__).info("Initialised configuration and database")
    return InitResult(cfg_new, db_new)


def log_event(module: str, event: str, **kwargs) -> None:
    """Structured event logging through the central logger.

    Emits a single JSON line via the Python logging system so it reaches the
    log file configured by logging_setup.setup_logging().
    """
    payload = {"ts": time.time(), "module": module, "event": event}
    payload.update(kwargs)
    try:
        line = orjson.dumps(payload).decode("utf-8")
    except TypeError:
        logging.getLogger("event").exception("failed to encode event: %s", {"module": module, "event": event})
        return
    logging.getLogger(f"event.{module}").info(line)


def main() -> None:
    import argparse
    import datetime as dt
    import zipfile

    parser = argparse.ArgumentParser(prog="pocket-othello-diag")
    parser.add_argument("--bundle", required=True, help="Path of the zip file to write")
    parser.add_argument("--log", default=str(CENTRAL_LOG_PATH), help="Log file to include")
    args = parser.parse_args()

    setup_logging(overwrite=False, level=logging.INFO)
    install_and_init()

    bundle_path = pathlib.Path(args.bundle)
    with zipfile.ZipFile(bundle_path, "w", compression=zipfile.ZIP_DEFLATED) as z:
        z.writestr("config.toml", CONFIG_PATH.read_text(encoding="utf-8"))
        if DB_PATH.exists():
            z.write(DB_PATH, arcname="othello.sqlite")
        log_path = pathlib.Path(args.log)
        if log_path.exists():
            z.write(log_path, arcname=log_path.name)
        z.writestr("env.txt", f"python={sys.version}\nplatform={sys.platform}\n")
        z.writestr("timestamp.txt", dt.datetime.now(dt.timezone.utc).isoformat())
    logging.getLogger(__name__).info("Diagnostics bundle written to %s", bundle_path)
