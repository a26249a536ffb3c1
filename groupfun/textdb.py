"""Small read-only text tables: temple fortunes and daily diary lines."""

from __future__ import annotations

import random
import sqlite3
from pathlib import Path


class _TextTable:
    _table = ""

    def __init__(self, path: str | Path):
        self._conn = sqlite3.connect(str(path))
        with self._conn:
            self._conn.execute(
                f"CREATE TABLE IF NOT EXISTS {self._table} (id INTEGER PRIMARY KEY, text TEXT)"
            )

    def __enter__(self):
        return self

    def __exit__(self, *exc: object) -> None:
        self._conn.close()


class KujiDB(_TextTable):
    """Explanations of the numbered fortune slips."""

    _table = "kuji"

    def __init__(self, path: str | Path):
        super().__init__(path)

    def get(self, number: int) -> str:
        """Explanation of a slip; raises LookupError if there is none."""
        row = self._conn.execute("SELECT text FROM kuji WHERE id = ?", (number,)).fetchone()
        if row is None:
            raise LookupError(f"no fortune slip numbered {number}")
        return row[0]


class TiangouDB(_TextTable):
    """Diary lines picked at random."""

    _table = "tiangou"

    def __init__(self, path: str | Path):
        super().__init__(path)

    def count(self) -> int:
        """Number of lines."""
        (n,) = self._conn.execute("SELECT COUNT(*) FROM tiangou").fetchone()
        return n

    def pick(self, rng: random.Random) -> str:
        """A random line; raises LookupError when the table is empty."""
        n = self.count()
        if n == 0:
            raise LookupError("no diary lines")
        (text,) = self._conn.execute(
            "SELECT text FROM tiangou ORDER BY id LIMIT 1 OFFSET ?", (rng.randrange(n),)
        ).fetchone()
        return text