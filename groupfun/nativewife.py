"""Per-group picture collection of 'wives' with a daily draw."""

from __future__ import annotations

import datetime as dt
import hashlib
import random
from pathlib import Path

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def group_folder_name(group_id: int) -> str:
    """The group id written in base 36, as used for folder names."""
    if group_id == 0:
        return "0"
    sign = "-" if group_id < 0 else ""
    n = abs(group_id)
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_DIGITS[rem])
    return sign + "".join(reversed(digits))


def extract_name(text: str, command: str) -> str:
    """Take the name following the last occurrence of command, without spaces or slashes."""
    compact = text.replace(" ", "")
    index = compact.rfind(command)
    if index < 0:
        return ""
    name = compact[index + len(command):]
    return name.replace("/", "").replace("\\", "")


def daily_seed(nickname: str, today: dt.date) -> int:
    """Signed 64-bit seed from the MD5 of the nickname and the date."""
    key = f"{nickname}{today.year}{today.month}{today.day}".encode()
    digest = hashlib.md5(key).digest()
    return int.from_bytes(digest[:8], "little", signed=True)


def _check_name(name: str) -> None:
    if not name or "/" in name or "\\" in name:
        raise ValueError(f"invalid wife name: {name!r}")


class WifeStore:
    """Wife pictures stored as files in one folder per group."""

    def __init__(self, base: str | Path):
        self.base = Path(base)

    def _folder(self, group_id: int) -> Path:
        return self.base / group_folder_name(group_id)

    def names(self, group_id: int) -> list[str]:
        """Sorted names of the group's wives; empty if there are none."""
        try:
            return sorted(entry.name for entry in self._folder(group_id).iterdir())
        except (FileNotFoundError, NotADirectoryError):
            return []

    def draw(self, group_id: int, nickname: str, today: dt.date) -> Path | None:
        """The wife of a user for the day, or None when the group has none."""
        names = self.names(group_id)
        if not names:
            return None
        if len(names) == 1:
            chosen = names[0]
        else:
            chosen = random.Random(daily_seed(nickname, today)).choice(names)
        return self._folder(group_id) / chosen

    def add(self, group_id: int, name: str, data: bytes) -> Path:
        """Store a picture under the given name."""
        _check_name(name)
        folder = self._folder(group_id)
        folder.mkdir(mode=0o755, parents=True, exist_ok=True)
        path = folder / name
        path.write_bytes(data)
        return path

    def remove(self, group_id: int, name: str) -> None:
        """Delete a wife; raises FileNotFoundError if there is no such one."""
        _check_name(name)
        (self._folder(group_id) / name).unlink()