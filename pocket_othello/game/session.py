from __future__ import annotations

import functools
import logging
import random
import threading
from typing import Callable, Dict, Optional

from ..db.settings import Settings
from ..engine.board import BLACK, EMPTY, HEIGHT, WHITE, WIDTH, BoardEngine, alternate_player
from ..engine.strength import MINIMUM_MOVE_TIME, clamp_level
from ..tools.diag import log_event
from .bot import ComputerPlayer

logger = logging.getLogger(__name__)

IDLE = "idle"
PLAYING = "playing"
OVER = "over"

ChangeListener = Callable[["GameSession"], None]


class GameSession:
    """Headless turn controller for one board.

    ``players`` is the number of humans: 0 lets two bots play, 1 gives the
    human White against a Black bot, 2 disables bots. Every board mutation runs
    under ``self.lock``; bots search on their own snapshots and come back
    through the same lock to commit a move.
    """

    def __init__(
        self,
        board: Optional[BoardEngine] = None,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
        min_move_time: float = MINIMUM_MOVE_TIME,
        on_change: Optional[ChangeListener] = None,
    ) -> None:
        self.board = board if board is not None else BoardEngine()
        self.settings = settings if settings is not None else Settings(None)
        self.rng = rng if rng is not None else random.Random()
        self.min_move_time = min_move_time
        self.on_change = on_change
        self.lock = threading.RLock()
        self.players = max(0, min(2, self.settings.players))
        self.level = clamp_level(self.settings.level)
        self.current_player = EMPTY
        self.cursor_x = 0
        self.cursor_y = 0
        self.state = IDLE
        self.bots: Dict[int, Optional[ComputerPlayer]] = {BLACK: None, WHITE: None}
        self._over = threading.Event()

    # -- game lifecycle ----------------------------------------------------------

    def start_new_game(self, players: Optional[int] = None, level: Optional[int] = None) -> None:
        with self.lock:
            self._cancel_bots()
            if players is not None:
                self.players = max(0, min(2, players))
            if level is not None:
                self.level = clamp_level(level)
            self.cursor_x = 0
            self.cursor_y = 0
            self.settings.save_settings(self.players, self.level)
            self._initialize_bots()
            self.board.start_new_game()
            self._over.clear()
            # switch_player hands the first turn to White
            self.current_player = BLACK
            self.state = PLAYING
            logger.info("New game: players=%d level=%d", self.players, self.level)
            log_event("session", "new_game", players=self.players, level=self.level)
            self.switch_player()

    def load_saved_game(self) -> bool:
        with self.lock:
            if not self.settings.contains_saved_game:
                return False
            self._cancel_bots()
            self.cursor_x = self.settings.cursor_x % WIDTH
            self.cursor_y = self.settings.cursor_y % HEIGHT
            self.players = max(0, min(2, self.settings.players))
            self.level = clamp_level(self.settings.level)
            current = self.settings.current_player
            if current not in (BLACK, WHITE):
                current = BLACK
            self._initialize_bots()
            self.settings.load_saved_table(self.board)
            # The slot goes back to settings only once the game is resumed
            self.settings.save_settings(self.players, self.level)
            self._over.clear()
            self.current_player = alternate_player(current)
            self.state = PLAYING
            logger.info("Resumed saved game: players=%d level=%d to_move=%d", self.players, self.level, current)
            log_event("session", "resume", players=self.players, level=self.level, to_move=current)
            self.switch_player()
            return True

    def stop_game(self, save: bool) -> None:
        with self.lock:
            if self.state != PLAYING:
                return
            self._cancel_bots()
            if save:
                self.settings.save_game(
                    self.players, self.level, self.board, self.current_player, self.cursor_x, self.cursor_y
                )
                logger.info("Game saved at ply %d", self.board.ply)
            self.state = IDLE

    # -- turns -------------------------------------------------------------------

    def switch_player(self) -> None:
        with self.lock:
            if self.state != PLAYING:
                return
            self.current_player = alternate_player(self.current_player)
            if not self.board.can_move(self.current_player):
                logger.debug("Color %d has no move, passing", self.current_player)
                self.current_player = alternate_player(self.current_player)
                if not self.board.can_move(self.current_player):
                    self._game_over()
                    return
            self._notify()
            bot = self.bots.get(self.current_player)
            if bot is not None:
                bot.start()

    def put_piece(self, x: int, y: int) -> bool:
        """Human move for the side to move; False if not accepted."""
        with self.lock:
            if self.bots.get(self.current_player) is not None:
                return False
            return self._play(x, y)

    def play_at_cursor(self) -> bool:
        return self.put_piece(self.cursor_x, self.cursor_y)

    def move_cursor(self, dx: int, dy: int) -> None:
        with self.lock:
            self.cursor_x = (self.cursor_x + dx) % WIDTH
            self.cursor_y = (self.cursor_y + dy) % HEIGHT

    def _play(self, x: int, y: int) -> bool:
        if self.state != PLAYING:
            return False
        if self.board.apply_move(x, y, self.current_player) is None:
            return False
        self.switch_player()
        return True

    def _bot_move(self, bot: ComputerPlayer, x: int, y: int) -> None:
        with self.lock:
            if bot.cancelled or self.bots.get(self.current_player) is not bot:
                logger.debug("Discarding stale move (%d, %d) from bot %d", x, y, bot.color)
                return
            if not self._play(x, y):
                logger.warning("Bot %d produced a rejected move (%d, %d)", bot.color, x, y)

    def _game_over(self) -> None:
        self.state = OVER
        self.current_player = EMPTY
        black, white = self.board.black_score, self.board.white_score
        logger.info("Game over: black=%d white=%d", black, white)
        log_event("session", "game_over", black=black, white=white, winner=self.winner())
        self._notify()
        self._over.set()

    def winner(self) -> int:
        diff = self.board.black_score - self.board.white_score
        if diff > 0:
            return BLACK
        if diff < 0:
            return WHITE
        return EMPTY

    def wait_until_over(self, timeout: Optional[float] = None) -> bool:
        return self._over.wait(timeout)

    # -- bots --------------------------------------------------------------------

    def _initialize_bots(self) -> None:
        # Black is a bot unless both players are human; White only with no humans
        self.bots[WHITE] = self._make_bot(WHITE) if self.players < 1 else None
        self.bots[BLACK] = self._make_bot(BLACK) if self.players < 2 else None

    def _make_bot(self, color: int) -> ComputerPlayer:
        bot = ComputerPlayer(self.board, color, self.level, rng=self.rng, min_move_time=self.min_move_time)
        bot.on_move = functools.partial(self._bot_move, bot)
        return bot

    def _cancel_bots(self) -> None:
        for color, bot in self.bots.items():
            if bot is not None:
                bot.cancel()
            self.bots[color] = None

    def _notify(self) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change(self)
        except Exception:
            logger.exception("Change listener failed")
