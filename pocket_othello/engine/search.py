from __future__ import annotations

import logging
import random
import threading
import time
from dataclasses import dataclass
from typing import Optional

from .board import BoardEngine, CORNERS, HEIGHT, WIDTH, alternate_player

logger = logging.getLogger(__name__)

CORNER_BONUS = 10


@dataclass
class SearchMove:
    x: int
    y: int
    score: int


class CancelToken:
    """Advisory cancellation flag shared between a search and its owner."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds; True if cancelled meanwhile."""
        return self._event.wait(timeout)


class Searcher:
    """Plain minimax by full enumeration over a private copy of the board.

    Cells are visited row by row (y outer, x inner). Moves scoring the same
    maximum are sampled with a running reservoir counter, so the random
    source decides ties; pass a seeded ``random.Random`` for reproducible
    play.
    """

    def __init__(
        self,
        board: BoardEngine,
        rng: Optional[random.Random] = None,
        token: Optional[CancelToken] = None,
        corner_bonus: int = CORNER_BONUS,
    ) -> None:
        self.board = board
        self.rng = rng if rng is not None else random.Random()
        self.token = token if token is not None else CancelToken()
        self.corner_bonus = corner_bonus
        self.nodes = 0
        self.time_ms = 0

    def find_best_move(self, color: int, depth: int) -> Optional[SearchMove]:
        if self.token.cancelled:
            return None
        start = time.perf_counter()
        self.nodes = 0
        work = self.board.clone()
        if depth > work.free_slots:
            logger.warning(
                "search depth %d exceeds %d free history slots; clamping", depth, work.free_slots
            )
            depth = work.free_slots
        best = self._best_move(work, color, depth)
        self.time_ms = int((time.perf_counter() - start) * 1000)
        if self.token.cancelled:
            logger.debug("search cancelled after %d nodes", self.nodes)
            return None
        logger.debug(
            "search color=%d depth=%d best=%s nodes=%d time_ms=%d",
            color, depth, best, self.nodes, self.time_ms,
        )
        return best

    def _best_move(self, board: BoardEngine, color: int, depth: int) -> Optional[SearchMove]:
        best: Optional[SearchMove] = None
        ties = 0
        opp = alternate_player(color)
        for y in range(HEIGHT):
            for x in range(WIDTH):
                if self.token.cancelled:
                    return None
                flips = board.apply_move(x, y, color)
                if flips is None:
                    continue
                self.nodes += 1
                net = flips
                if depth > 1:
                    reply = self._best_move(board, opp, depth - 1)
                    if reply is not None:
                        net -= reply.score
                if (x, y) in CORNERS:
                    net += self.corner_bonus

                if best is None or net > best.score:
                    best = SearchMove(x, y, net)
                    ties = 0
                elif net == best.score:
                    ties += 1
                    if self.rng.random() < 1.0 / ties:
                        best = SearchMove(x, y, net)

                board.undo_move()
        return best
