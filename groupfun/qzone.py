"""Storage of the confession wall: posting cookies and submitted messages."""

from __future__ import annotations

import datetime as dt
import enum
import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

LOVE_TAG = "表白"
PAGE_SIZE = 5
FACE_URL = "http://q4.qlogo.cn/g?b=qq&nk={}&s=640"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS qzone_config (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    qq INTEGER NOT NULL UNIQUE,
    cookie TEXT
);
CREATE TABLE IF NOT EXISTS emotion (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    anonymous INTEGER NOT NULL DEFAULT 0,
    qq INTEGER NOT NULL,
    msg TEXT NOT NULL,
    status INTEGER NOT NULL,
    tag TEXT NOT NULL
);
"""


class Status(enum.IntEnum):
    """Review state of a submission."""

    WAIT = 1
    AGREE = 2
    DISAGREE = 3


_STATUS_TEXT = {Status.WAIT: "审核中", Status.AGREE: "同意", Status.DISAGREE: "拒绝"}


def _to_status(value: int) -> Status | int:
    try:
        return Status(value)
    except ValueError:
        return value


def _stamp(moment: dt.datetime) -> str:
    return moment.isoformat(sep=" ", timespec="microseconds")


@dataclass
class Emotion:
    """One submitted message."""

    qq: int
    msg: str
    status: Status | int = Status.WAIT
    tag: str = LOVE_TAG
    anonymous: bool = False
    id: int = 0
    created_at: dt.datetime = field(default_factory=dt.datetime.now)

    def text_brief(self) -> str:
        """Summary shown to reviewers."""
        text = (
            f"序号: {self.id}\nQQ: {self.qq}\n"
            f"创建时间: {self.created_at.strftime('%Y-%m-%d %H:%M:%S')}\n"
        )
        label = _STATUS_TEXT.get(_to_status(int(self.status)))
        if label is not None:
            text += f"状态: {label}\n"
        return text + ("匿名: 是" if self.anonymous else "匿名: 否")


class QzoneDB:
    """Cookies of logged-in accounts and the wall's submissions."""

    def __init__(self, path: str | Path):
        self._conn = sqlite3.connect(str(path))
        with self._conn:
            self._conn.executescript(_SCHEMA)

    def __enter__(self) -> QzoneDB:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the database."""
        self._conn.close()

    def insert_or_update(self, qq: int, cookie: str) -> None:
        """Store the login cookie of an account."""
        with self._conn:
            self._conn.execute(
                "INSERT INTO qzone_config (qq, cookie) VALUES (?, ?) "
                "ON CONFLICT(qq) DO UPDATE SET cookie = excluded.cookie",
                (qq, cookie),
            )

    def get_by_uin(self, qq: int) -> str:
        """Cookie of an account; raises LookupError if it never logged in."""
        row = self._conn.execute("SELECT cookie FROM qzone_config WHERE qq = ?", (qq,)).fetchone()
        if row is None:
            raise LookupError(f"account {qq} has not logged in")
        return row[0]

    def save_emotion(self, emotion: Emotion) -> int:
        """Store a submission and return its new id."""
        with self._conn:
            cur = self._conn.execute(
                "INSERT INTO emotion (created_at, updated_at, anonymous, qq, msg, status, tag) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    _stamp(emotion.created_at),
                    _stamp(emotion.created_at),
                    int(emotion.anonymous),
                    emotion.qq,
                    emotion.msg,
                    int(emotion.status),
                    emotion.tag,
                ),
            )
        return cur.lastrowid

    @staticmethod
    def _row(row: tuple) -> Emotion:
        id_, created_at, anonymous, qq, msg, status, tag = row
        return Emotion(
            qq=qq,
            msg=msg,
            status=_to_status(status),
            tag=tag,
            anonymous=bool(anonymous),
            id=id_,
            created_at=dt.datetime.fromisoformat(created_at),
        )

    _SELECT = "SELECT id, created_at, anonymous, qq, msg, status, tag FROM emotion"

    def get_emotions(self, ids: Iterable[int]) -> list[Emotion]:
        """Submissions with the given ids, in id order."""
        ids = list(ids)
        if not ids:
            return []
        marks = ",".join("?" * len(ids))
        rows = self._conn.execute(f"{self._SELECT} WHERE id IN ({marks}) ORDER BY id", ids).fetchall()
        return [self._row(row) for row in rows]

    def love_emotions(self, status: Status | int, page: int) -> list[Emotion]:
        """A page of wall submissions, newest first; status 0 means every status."""
        pattern = f"%{LOVE_TAG}%"
        if int(status) == 0:
            where, params = "tag LIKE ?", (pattern,)
        else:
            where, params = "status = ? AND tag LIKE ?", (int(status), pattern)
        rows = self._conn.execute(
            f"{self._SELECT} WHERE {where} ORDER BY created_at DESC, id DESC LIMIT ? OFFSET ?",
            (*params, PAGE_SIZE, page * PAGE_SIZE),
        ).fetchall()
        return [self._row(row) for row in rows]

    def update_status(self, ids: Iterable[int], status: Status | int) -> None:
        """Set the review state of the given submissions."""
        ids = list(ids)
        if not ids:
            return
        marks = ",".join("?" * len(ids))
        with self._conn:
            self._conn.execute(
                f"UPDATE emotion SET status = ?, updated_at = ? WHERE id IN ({marks})",
                (int(status), _stamp(dt.datetime.now()), *ids),
            )