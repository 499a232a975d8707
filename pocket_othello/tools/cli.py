from __future__ import annotations

import argparse
import logging
import random
import sys

from ..config import load_config
from ..db.settings import Settings
from ..db.store import RecordStore
from ..engine.board import BLACK, WHITE
from ..game.session import GameSession
from ..logging_setup import setup_logging
from .diag import CONFIG_PATH, install_and_init


def main() -> None:
    """Run a headless computer-vs-computer session.

    With ``--time-limit`` an unfinished game is saved to the settings slot
    and can be picked up again with ``--resume``.
    """
    p = argparse.ArgumentParser(prog="pocket-othello")
    p.add_argument("--level", type=int, default=None, help="Override the configured level (1-5)")
    p.add_argument("--resume", action="store_true", help="Continue the saved game if there is one")
    p.add_argument("--time-limit", type=float, default=None, help="Seconds before the game is saved and stopped")
    args = p.parse_args()

    install_and_init()
    cfg = load_config(CONFIG_PATH)
    setup_logging(overwrite=True, level=cfg.logging_level)
    log = logging.getLogger(__name__)

    settings = Settings(RecordStore(cfg.resolved_db_path))
    rng = random.Random(cfg.seed) if cfg.seed is not None else random.Random()
    session = GameSession(settings=settings, rng=rng, min_move_time=cfg.min_move_time)

    level = args.level if args.level is not None else cfg.level
    resumed = False
    if args.resume:
        if settings.contains_saved_game and settings.players == 0:
            resumed = session.load_saved_game()
        elif settings.contains_saved_game:
            log.warning("Saved game has human players; starting a new computer game instead")
    if not resumed:
        session.start_new_game(players=0, level=level)

    if not session.wait_until_over(args.time_limit):
        session.stop_game(save=True)
        log.info("Time limit reached; game saved at black=%d white=%d",
                 session.board.black_score, session.board.white_score)
        sys.exit(0)

    names = {BLACK: "black", WHITE: "white"}
    log.info("Final score black=%d white=%d winner=%s",
             session.board.black_score, session.board.white_score, names.get(session.winner(), "draw"))
