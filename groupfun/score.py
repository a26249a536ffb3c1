"""Daily sign-in with levels, backed by a small SQLite database."""

from __future__ import annotations

import datetime as dt
import random
import sqlite3
from dataclasses import dataclass
from pathlib import Path

SCORE_MAX = 1200
SIGN_IN_MAX = 1
RANK_THRESHOLDS = (0, 10, 20, 50, 100, 200, 350, 550, 750, 1000, 1200)
BACKGROUND_URL = "https://img.moehu.org/pic.php?id=pc"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS score (
    uid INTEGER PRIMARY KEY,
    score INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS sign_in (
    uid INTEGER PRIMARY KEY,
    count INTEGER NOT NULL DEFAULT 0,
    updated_at TEXT
);
"""


class ScoreDB:
    """Scores and sign-in counts per user."""

    def __init__(self, path: str | Path):
        self._conn = sqlite3.connect(str(path))
        with self._conn:
            self._conn.executescript(_SCHEMA)

    def __enter__(self) -> ScoreDB:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the database."""
        self._conn.close()

    def get_score(self, uid: int) -> int:
        """The user's score; a record with score 0 is created if missing."""
        with self._conn:
            self._conn.execute("INSERT OR IGNORE INTO score (uid, score) VALUES (?, 0)", (uid,))
            row = self._conn.execute("SELECT score FROM score WHERE uid = ?", (uid,)).fetchone()
        return row[0]

    def set_score(self, uid: int, score: int) -> None:
        """Insert or update the user's score."""
        with self._conn:
            self._conn.execute(
                "INSERT INTO score (uid, score) VALUES (?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET score = excluded.score",
                (uid, score),
            )

    def get_sign_in(self, uid: int) -> tuple[int, dt.datetime | None]:
        """Sign-in count and time of last update; a record is created if missing."""
        with self._conn:
            self._conn.execute(
                "INSERT OR IGNORE INTO sign_in (uid, count, updated_at) VALUES (?, 0, NULL)", (uid,)
            )
            count, updated = self._conn.execute(
                "SELECT count, updated_at FROM sign_in WHERE uid = ?", (uid,)
            ).fetchone()
        return count, dt.datetime.fromisoformat(updated) if updated else None

    def set_sign_in(self, uid: int, count: int, now: dt.datetime) -> None:
        """Insert or update the user's sign-in count, stamped with now."""
        with self._conn:
            self._conn.execute(
                "INSERT INTO sign_in (uid, count, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET count = excluded.count, "
                "updated_at = excluded.updated_at",
                (uid, count, now.isoformat()),
            )

    def top_scores(self, n: int) -> list[tuple[int, int]]:
        """The n highest (uid, score) pairs, highest first."""
        rows = self._conn.execute(
            "SELECT uid, score FROM score ORDER BY score DESC LIMIT ?", (n,)
        ).fetchall()
        return [(uid, score) for uid, score in rows]


@dataclass(frozen=True)
class SignInResult:
    """Outcome of one sign-in attempt."""

    already_signed: bool
    level: int
    rank: int
    coins: int = 0
    capped: bool = False

    @property
    def next_rank_score(self) -> int:
        """Score needed for the next rank."""
        return next_rank_score(self.rank)


def get_rank(count: int) -> int:
    """Rank reached by a score; -1 when it is above every threshold."""
    for rank, threshold in enumerate(RANK_THRESHOLDS):
        if count == threshold:
            return rank
        if count < threshold:
            return rank - 1
    return -1


def get_hour_word(hour: int) -> str:
    """Greeting for an hour of the day."""
    if 6 <= hour < 12:
        return "早上好"
    if 12 <= hour < 14:
        return "中午好"
    if 14 <= hour < 19:
        return "下午好"
    if 19 <= hour < 24:
        return "晚上好"
    if 0 <= hour < 6:
        return "凌晨好"
    return ""


def next_rank_score(rank: int) -> int:
    """Threshold of the rank after the given one."""
    if rank < len(RANK_THRESHOLDS) - 1:
        return RANK_THRESHOLDS[rank + 1]
    return SCORE_MAX


def sign_in(db: ScoreDB, uid: int, now: dt.datetime, rng: random.Random) -> SignInResult:
    """Sign a user in for the day, raising their level and awarding coins."""
    today = now.date()
    count, updated = db.get_sign_in(uid)
    same_day = updated is not None and updated.date() == today
    if count >= SIGN_IN_MAX and same_day:
        level = db.get_score(uid)
        return SignInResult(already_signed=True, level=level, rank=get_rank(level))
    if not same_day:
        db.set_sign_in(uid, 0, now)
    db.set_sign_in(uid, count + 1, now)
    level = db.get_score(uid) + 1
    capped = level > SCORE_MAX
    if capped:
        level = SCORE_MAX
    db.set_score(uid, level)
    rank = get_rank(level)
    coins = 1 + rng.randrange(10) + rank * 5
    return SignInResult(already_signed=False, level=level, rank=rank, coins=coins, capped=capped)