"""Daily one-to-one group marriages: registry, group settings and skill cooldowns."""

from __future__ import annotations

import datetime as dt
import sqlite3
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

DEFAULT_CD_HOURS = 12.0
MAX_NAME_WIDTH = 350
_ELLIPSIS = "......"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS updateinfo (
    gid INTEGER PRIMARY KEY,
    updatetime TEXT NOT NULL DEFAULT '',
    can_match INTEGER NOT NULL DEFAULT 1,
    can_ntr INTEGER NOT NULL DEFAULT 1,
    cd_time REAL NOT NULL DEFAULT 12
);
CREATE TABLE IF NOT EXISTS marriage (
    gid INTEGER NOT NULL,
    user INTEGER NOT NULL,
    target INTEGER NOT NULL,
    username TEXT NOT NULL,
    targetname TEXT NOT NULL,
    updatetime TEXT NOT NULL,
    PRIMARY KEY (gid, user)
);
CREATE TABLE IF NOT EXISTS cdsheet (
    gid INTEGER NOT NULL,
    uid INTEGER NOT NULL,
    mode TEXT NOT NULL,
    time INTEGER NOT NULL,
    PRIMARY KEY (gid, uid, mode)
);
"""


@dataclass
class GroupSettings:
    """Per-group switches and cooldown length."""

    gid: int
    updatetime: str = ""
    can_match: bool = True
    can_ntr: bool = True
    cd_hours: float = DEFAULT_CD_HOURS


@dataclass(frozen=True)
class Marriage:
    """One registered couple; a target or user of 0 marks a single noble."""

    user: int
    target: int
    username: str
    targetname: str
    updatetime: str

    @property
    def is_single_noble(self) -> bool:
        """True for the record of someone who stays single for the day."""
        return self.target == 0 or self.user == 0


def _format_clock(clock: dt.time | dt.datetime | str) -> str:
    if isinstance(clock, str):
        return clock
    return clock.strftime("%H:%M:%S")


class Registry:
    """The marriage office: all records live in one SQLite database."""

    def __init__(self, path: str | Path):
        self._lock = threading.RLock()
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        with self._conn:
            self._conn.executescript(_SCHEMA)

    def __enter__(self) -> Registry:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the database."""
        with self._lock:
            self._conn.close()

    def settings(self, gid: int) -> GroupSettings:
        """Settings of a group, or the defaults when none are stored."""
        with self._lock:
            row = self._conn.execute(
                "SELECT updatetime, can_match, can_ntr, cd_time FROM updateinfo WHERE gid = ?",
                (gid,),
            ).fetchone()
        if row is None:
            return GroupSettings(gid=gid)
        updatetime, can_match, can_ntr, cd_time = row
        return GroupSettings(
            gid=gid,
            updatetime=updatetime,
            can_match=bool(can_match),
            can_ntr=bool(can_ntr),
            cd_hours=float(cd_time),
        )

    def update_settings(self, settings: GroupSettings) -> None:
        """Store a group's settings."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO updateinfo (gid, updatetime, can_match, can_ntr, cd_time) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    settings.gid,
                    settings.updatetime,
                    int(settings.can_match),
                    int(settings.can_ntr),
                    float(settings.cd_hours),
                ),
            )

    def open_day(self, gid: int, today: dt.date) -> bool:
        """Start a new day for the group if needed; True when the roster was reset."""
        stamp = today.strftime("%Y/%m/%d")
        with self._lock:
            current = self.settings(gid)
            if current.updatetime == stamp:
                return False
            with self._conn:
                self._conn.execute("DELETE FROM marriage WHERE gid = ?", (gid,))
            current.updatetime = stamp
            self.update_settings(current)
            return True

    def lookup(self, gid: int, uid: int) -> Marriage | None:
        """The record in which the user is husband, else wife; None if unmarried."""
        query = (
            "SELECT user, target, username, targetname, updatetime FROM marriage "
            "WHERE gid = ? AND {} = ? LIMIT 1"
        )
        with self._lock:
            row = self._conn.execute(query.format("user"), (gid, uid)).fetchone()
            if row is None:
                row = self._conn.execute(query.format("target"), (gid, uid)).fetchone()
        return Marriage(*row) if row is not None else None

    def register(
        self,
        gid: int,
        uid: int,
        target: int,
        username: str,
        targetname: str,
        clock: dt.time | dt.datetime | str,
    ) -> Marriage:
        """Register a couple, replacing any record of the same husband."""
        record = Marriage(uid, target, username, targetname, _format_clock(clock))
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO marriage "
                "(gid, user, target, username, targetname, updatetime) VALUES (?, ?, ?, ?, ?, ?)",
                (gid, record.user, record.target, record.username, record.targetname, record.updatetime),
            )
        return record

    def roster(self, gid: int) -> list[tuple[str, str, str, str]]:
        """Couples of the group as (username, user, targetname, target) strings."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT username, user, targetname, target FROM marriage "
                "WHERE gid = ? AND target != 0 ORDER BY rowid",
                (gid,),
            ).fetchall()
        return [(username, str(user), targetname, str(target)) for username, user, targetname, target in rows]

    def clear(self, gid: int | None = None) -> None:
        """Reset one group's roster and cooldowns, or all groups' data when gid is None."""
        with self._lock, self._conn:
            if gid is None:
                for table in ("marriage", "cdsheet", "updateinfo"):
                    self._conn.execute(f"DELETE FROM {table}")
            else:
                self._conn.execute("DELETE FROM marriage WHERE gid = ?", (gid,))
                self._conn.execute("DELETE FROM cdsheet WHERE gid = ?", (gid,))

    def check_cd(self, gid: int, uid: int, mode: str, cd_hours: float, now: dt.datetime) -> bool:
        """True when the skill may be used; an expired cooldown is removed."""
        key = (gid, uid, mode)
        with self._lock:
            row = self._conn.execute(
                "SELECT time FROM cdsheet WHERE gid = ? AND uid = ? AND mode = ?", key
            ).fetchone()
            if row is None:
                return True
            elapsed_hours = (now.timestamp() - row[0]) / 3600
            if elapsed_hours > cd_hours:
                with self._conn:
                    self._conn.execute(
                        "DELETE FROM cdsheet WHERE gid = ? AND uid = ? AND mode = ?", key
                    )
                return True
            return False

    def record_cd(self, gid: int, uid: int, mode: str, now: dt.datetime) -> None:
        """Start the cooldown of a skill."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO cdsheet (gid, uid, mode, time) VALUES (?, ?, ?, ?)",
                (gid, uid, mode, int(now.timestamp())),
            )

    def divorce_wife(self, gid: int, wife: int) -> int:
        """Remove the record in which the given user is the wife; returns rows removed."""
        with self._lock, self._conn:
            cur = self._conn.execute("DELETE FROM marriage WHERE gid = ? AND target = ?", (gid, wife))
        return cur.rowcount

    def divorce_husband(self, gid: int, husband: int) -> int:
        """Remove the record in which the given user is the husband; returns rows removed."""
        with self._lock, self._conn:
            cur = self._conn.execute("DELETE FROM marriage WHERE gid = ? AND user = ?", (gid, husband))
        return cur.rowcount


def slice_name(name: str, measure: Callable[[str], float]) -> str:
    """Shorten a name whose drawn width exceeds 350, ending it with dots."""
    width = 0
    last_fitting = 0
    for i, ch in enumerate(name):
        width += int(measure(ch))
        if width > MAX_NAME_WIDTH:
            break
        last_fitting = i
    if width > MAX_NAME_WIDTH:
        return name[: max(last_fitting - 1, 0)] + _ELLIPSIS
    return name