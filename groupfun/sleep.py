"""Good-night and good-morning bookkeeping for group members."""

from __future__ import annotations

import datetime as dt
import sqlite3
from pathlib import Path

_SCHEMA = """
CREATE TABLE IF NOT EXISTS sleep_manage (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    group_id INTEGER NOT NULL,
    user_id INTEGER NOT NULL,
    sleep_time TEXT NOT NULL
);
"""


def _stamp(moment: dt.datetime) -> str:
    return moment.isoformat(sep=" ", timespec="microseconds")


def _night_start(now: dt.datetime) -> dt.datetime:
    """21:00 of the night that now belongs to, or the earliest time outside the night."""
    if now.hour >= 21:
        return now.replace(hour=21, minute=0, second=0)
    if now.hour <= 3:
        return (now - dt.timedelta(days=1)).replace(hour=21, minute=0, second=0)
    return dt.datetime.min


def _morning_start(now: dt.datetime) -> dt.datetime:
    return now.replace(hour=6, minute=0, second=0)


class SleepDB:
    """Last sleep or wake-up time of every user in every group.

    Times are naive local datetimes.
    """

    def __init__(self, path: str | Path):
        self._conn = sqlite3.connect(str(path))
        with self._conn:
            self._conn.executescript(_SCHEMA)

    def __enter__(self) -> SleepDB:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the database."""
        self._conn.close()

    def _touch(
        self, gid: int, uid: int, now: dt.datetime, since: dt.datetime
    ) -> tuple[int, dt.timedelta]:
        elapsed = dt.timedelta(0)
        with self._conn:
            row = self._conn.execute(
                "SELECT sleep_time FROM sleep_manage WHERE group_id = ? AND user_id = ? "
                "ORDER BY id LIMIT 1",
                (gid, uid),
            ).fetchone()
            if row is None:
                self._conn.execute(
                    "INSERT INTO sleep_manage (group_id, user_id, sleep_time) VALUES (?, ?, ?)",
                    (gid, uid, _stamp(now)),
                )
            else:
                elapsed = now - dt.datetime.fromisoformat(row[0])
                self._conn.execute(
                    "UPDATE sleep_manage SET sleep_time = ? WHERE group_id = ? AND user_id = ?",
                    (_stamp(now), gid, uid),
                )
            (position,) = self._conn.execute(
                "SELECT COUNT(*) FROM sleep_manage "
                "WHERE group_id = ? AND sleep_time <= ? AND sleep_time >= ?",
                (gid, _stamp(now), _stamp(since)),
            ).fetchone()
        return position, elapsed

    def sleep(self, gid: int, uid: int, now: dt.datetime) -> tuple[int, dt.timedelta]:
        """Record going to sleep; returns the place in tonight's order and the time awake."""
        return self._touch(gid, uid, now, _night_start(now))

    def get_up(self, gid: int, uid: int, now: dt.datetime) -> tuple[int, dt.timedelta]:
        """Record getting up; returns the place in this morning's order and the time slept."""
        return self._touch(gid, uid, now, _morning_start(now))


def time_duration(delta: dt.timedelta) -> tuple[int, int, int]:
    """Split a duration into whole hours, minutes and seconds, truncating toward zero."""
    micros = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
    sign = -1 if micros < 0 else 1
    total = abs(micros) // 1_000_000
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return sign * hours, sign * minutes, sign * seconds


def is_morning(hour: int) -> bool:
    """Good mornings count from 6 to 12 o'clock."""
    return 6 <= hour <= 12


def is_evening(hour: int) -> bool:
    """Good nights count from 21 o'clock to 3 in the morning."""
    return hour >= 21 or hour <= 3


def _greeting(head: str, span: str, tail: str, position: int, delta: dt.timedelta) -> str:
    hours, minutes, seconds = time_duration(delta)
    if (hours == 0 and minutes == 0 and seconds == 0) or hours >= 24:
        return f"{head}你是今天第{position}个{tail}的"
    return f"{head}你的{span}为{hours}时{minutes}分{seconds}秒,你是今天第{position}个{tail}的"


def good_morning_text(position: int, delta: dt.timedelta) -> str:
    """Reply to a good morning."""
    return _greeting("早安成功！", "睡眠时长", "起床", position, delta)


def good_night_text(position: int, delta: dt.timedelta) -> str:
    """Reply to a good night."""
    return _greeting("晚安成功！", "清醒时长", "睡觉", position, delta)