from __future__ import annotations

import os
import pathlib
import sqlite3
from typing import Optional

DB_PATH = os.path.join(os.path.expanduser("~"), ".pocket_othello", "othello.sqlite")

SCHEMA = r"""
CREATE TABLE IF NOT EXISTS records (
  id INTEGER PRIMARY KEY,
  payload BLOB NOT NULL,
  updated_at TEXT DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now'))
);
"""

# The game keeps exactly one record: settings, optionally with a saved game
RECORD_ID = 1


class RecordStore:
    """Single-record sqlite store for the persisted state buffer.

    Bytes go in and come out verbatim; the layout belongs to ``db.record``.
    sqlite errors propagate to the caller.
    """

    def __init__(self, path: str = DB_PATH) -> None:
        self.path = path
        self._conn: Optional[sqlite3.Connection] = None

    def get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            if self.path != ":memory:":
                pathlib.Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.path, check_same_thread=False)
            self._conn.executescript(SCHEMA)
        return self._conn

    def read(self) -> Optional[bytes]:
        c = self.get_conn()
        row = c.execute("SELECT payload FROM records WHERE id=?", (RECORD_ID,)).fetchone()
        return bytes(row[0]) if row else None

    def write(self, payload: bytes) -> None:
        c = self.get_conn()
        with c:
            c.execute(
                "INSERT OR REPLACE INTO records(id,payload) VALUES(?,?)",
                (RECORD_ID, sqlite3.Binary(payload)),
            )

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
