"""Favorability between group members, and the gift that changes it."""

from __future__ import annotations

import random

from groupfun.marriage import Registry

FAVOR_MIN = 0
FAVOR_MAX = 100
GIFT_PRICE_CAP = 100

_SCHEMA = """
CREATE TABLE IF NOT EXISTS favorability (
    low INTEGER NOT NULL,
    high INTEGER NOT NULL,
    favor INTEGER NOT NULL DEFAULT 0,
    PRIMARY KEY (low, high)
);
"""


def _pair(uid: int, target: int) -> tuple[int, int]:
    return (uid, target) if uid <= target else (target, uid)


class FavorBook:
    """Mutual favorability of pairs of users, kept in the registry's database.

    Favorability is shared by both members of a pair and stays between 0 and 100.
    """

    def __init__(self, registry: Registry):
        self._lock = registry._lock
        self._conn = registry._conn
        with self._lock, self._conn:
            self._conn.executescript(_SCHEMA)

    def get(self, uid: int, target: int) -> int:
        """Favorability between two users; 0 when none is recorded."""
        with self._lock:
            row = self._conn.execute(
                "SELECT favor FROM favorability WHERE low = ? AND high = ?", _pair(uid, target)
            ).fetchone()
        return row[0] if row is not None else 0

    def update(self, uid: int, target: int, score: int) -> int:
        """Add score (negative to lower it) and return the clamped new favorability."""
        with self._lock:
            favor = min(FAVOR_MAX, max(FAVOR_MIN, self.get(uid, target) + score))
            with self._conn:
                self._conn.execute(
                    "INSERT OR REPLACE INTO favorability (low, high, favor) VALUES (?, ?, ?)",
                    (*_pair(uid, target), favor),
                )
        return favor

    def ranking(self, uid: int) -> list[tuple[int, int]]:
        """Everyone with a recorded favorability towards uid as (other, favor), highest first."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT low, high, favor FROM favorability WHERE low = ? OR high = ? ORDER BY rowid",
                (uid, uid),
            ).fetchall()
        entries = [(high if low == uid else low, favor) for low, high, favor in rows]
        entries.sort(key=lambda entry: entry[1], reverse=True)
        return entries


def gift_favor(favor: int, wallet: int, rng: random.Random) -> tuple[int, int]:
    """Buy a gift: returns (coins spent, change in favorability).

    Raises ValueError when the wallet is empty.
    """
    if wallet < 1:
        raise ValueError("你钱包没钱啦！")
    cost = rng.randrange(min(wallet, GIFT_PRICE_CAP))
    if favor > 50:
        change = cost % 10  # the gift has grown boring
    else:
        change = 1 + (rng.randrange(cost) if cost > 0 else 0)
    if rng.randrange(2) == 0:
        change = -change
    return cost, change