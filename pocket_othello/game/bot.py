from __future__ import annotations

import logging
import random
import threading
import time
from typing import Callable, Optional

from ..engine.board import BoardEngine
from ..engine.search import CancelToken, Searcher
from ..engine.strength import MINIMUM_MOVE_TIME, clamp_level, depth_for_level

logger = logging.getLogger(__name__)

MoveCallback = Callable[[int, int], None]


class ComputerPlayer:
    """Computer opponent that searches on a background thread.

    ``start()`` snapshots the board in the calling thread, so the caller
    must own the turn at that moment. The found move is handed to
    ``on_move`` no sooner than ``min_move_time`` seconds after ``start()``
    and never after ``cancel()``. ``on_move`` may be attached after
    construction but must be set before the first ``start()``.
    """

    def __init__(
        self,
        board: BoardEngine,
        color: int,
        level: int,
        on_move: Optional[MoveCallback] = None,
        rng: Optional[random.Random] = None,
        min_move_time: float = MINIMUM_MOVE_TIME,
    ) -> None:
        self.board = board
        self.color = color
        self.level = clamp_level(level)
        self.depth = depth_for_level(self.level)
        self.on_move = on_move
        self.rng = rng if rng is not None else random.Random()
        self.min_move_time = min_move_time
        self.token = CancelToken()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def start(self) -> None:
        with self._lock:
            # A fresh token per turn; cancel() stays sticky for this turn only
            self.token = CancelToken()
            token = self.token
            deadline = time.monotonic() + self.min_move_time
            snapshot = self.board.clone()
            self._thread = threading.Thread(
                target=self._run,
                args=(snapshot, token, deadline),
                name=f"bot-{self.color}",
                daemon=True,
            )
            self._thread.start()

    def cancel(self) -> None:
        with self._lock:
            self.token.cancel()

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    def join(self, timeout: Optional[float] = None) -> None:
        t = self._thread
        if t is not None and t is not threading.current_thread():
            t.join(timeout)

    def _run(self, snapshot: BoardEngine, token: CancelToken, deadline: float) -> None:
        try:
            move = Searcher(snapshot, rng=self.rng, token=token).find_best_move(self.color, self.depth)
        except Exception:
            logger.exception("Search failed for color %d", self.color)
            return
        if move is None or token.cancelled:
            return
        remaining = deadline - time.monotonic()
        if remaining > 0 and token.wait(remaining):
            return
        if token.cancelled or self.on_move is None:
            return
        logger.debug("bot %d plays (%d, %d) score=%d", self.color, move.x, move.y, move.score)
        self.on_move(move.x, move.y)
