from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from ..engine.board import BoardEngine
from .record import SaveRecord, decode_record, encode_full_save, encode_settings
from .store import RecordStore

logger = logging.getLogger(__name__)


class Settings:
    """Persistent player-count / level settings plus an optional saved game.

    Storage problems never reach the caller: the settings fall back to
    defaults held in memory and further writes are skipped.
    """

    def __init__(self, store: Optional[RecordStore] = None) -> None:
        self.store = store
        self.record = SaveRecord()
        if self.store is None:
            return
        try:
            data = self.store.read()
            if data is None:
                data = encode_settings(self.record.players, self.record.level)
                self.store.write(data)
            self.record = decode_record(data)
        except (sqlite3.Error, OSError) as e:
            logger.warning("Settings storage unavailable, using defaults: %s", e)
            self.store = None

    def _write(self, payload: bytes) -> None:
        if self.store is None:
            return
        try:
            self.store.write(payload)
        except (sqlite3.Error, OSError) as e:
            logger.warning("Failed to write settings record: %s", e)

    def save_settings(self, players: int, level: int) -> None:
        """Remember the game mode and level; drops any saved game."""
        self.record = SaveRecord(players=players, level=level)
        self._write(encode_settings(players, level))

    def save_game(
        self,
        players: int,
        level: int,
        board: BoardEngine,
        current_player: int,
        cursor_x: int,
        cursor_y: int,
    ) -> None:
        payload = encode_full_save(players, level, board, current_player, cursor_x, cursor_y)
        self.record = decode_record(payload)
        self._write(payload)

    @property
    def players(self) -> int:
        return self.record.players

    @property
    def level(self) -> int:
        return self.record.level

    @property
    def contains_saved_game(self) -> bool:
        return self.record.contains_saved_game

    @property
    def current_player(self) -> int:
        return self.record.current_player

    @property
    def cursor_x(self) -> int:
        return self.record.cursor_x

    @property
    def cursor_y(self) -> int:
        return self.record.cursor_y

    def load_saved_table(self, board: BoardEngine) -> None:
        self.record.load_board(board)
