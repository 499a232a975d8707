"""Byte layout of the persisted settings / saved-game record.

Settings only:  [SETTINGS_ONLY, players, level]
Full save:      [FULL_SAVE, players, level, current, cursor_x, cursor_y, 64 cells]

Cells are raw cell values in x-outer, y-inner order, exactly as
``BoardEngine.save_to_buffer`` writes them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..engine.board import CELLS, EMPTY, BoardEngine

# Signed -123 / -122 in the original single-byte encoding
IDENTIFIER_SETTINGS_ONLY = 0x85
IDENTIFIER_FULL_SAVE = 0x86

DEFAULT_PLAYERS = 1
DEFAULT_LEVEL = 1

IDENTIFIER_POS = 0
PLAYERS_POS = 1
LEVEL_POS = 2
CURRENT_PLAYER_POS = 3
CURSOR_X_POS = 4
CURSOR_Y_POS = 5
TABLE_POS = 6

SETTINGS_RECORD_SIZE = 3
FULL_SAVE_SIZE = TABLE_POS + CELLS


@dataclass
class SaveRecord:
    players: int = DEFAULT_PLAYERS
    level: int = DEFAULT_LEVEL
    current_player: int = EMPTY
    cursor_x: int = 0
    cursor_y: int = 0
    cells: Optional[bytes] = None

    @property
    def contains_saved_game(self) -> bool:
        return self.cells is not None

    def load_board(self, board: BoardEngine) -> None:
        # Short or missing cell data falls back to a new game inside the board
        board.load_from_buffer(self.cells or b"")


def encode_settings(players: int, level: int) -> bytes:
    return bytes((IDENTIFIER_SETTINGS_ONLY, players & 0xFF, level & 0xFF))


def encode_full_save(
    players: int,
    level: int,
    board: BoardEngine,
    current_player: int,
    cursor_x: int,
    cursor_y: int,
) -> bytes:
    header = bytes((
        IDENTIFIER_FULL_SAVE,
        players & 0xFF,
        level & 0xFF,
        current_player & 0xFF,
        cursor_x & 0xFF,
        cursor_y & 0xFF,
    ))
    return header + board.save_to_buffer()


def decode_record(data: Optional[bytes]) -> SaveRecord:
    """Parse a stored record; anything unrecognised yields the defaults."""
    if not data or len(data) < SETTINGS_RECORD_SIZE:
        return SaveRecord()
    ident = data[IDENTIFIER_POS]
    if ident == IDENTIFIER_SETTINGS_ONLY:
        return SaveRecord(players=data[PLAYERS_POS], level=data[LEVEL_POS])
    if ident != IDENTIFIER_FULL_SAVE:
        return SaveRecord()
    header = bytes(data[:TABLE_POS]).ljust(TABLE_POS, b"\x00")
    return SaveRecord(
        players=header[PLAYERS_POS],
        level=header[LEVEL_POS],
        current_player=header[CURRENT_PLAYER_POS],
        cursor_x=header[CURSOR_X_POS],
        cursor_y=header[CURSOR_Y_POS],
        cells=bytes(data[TABLE_POS:]),
    )
