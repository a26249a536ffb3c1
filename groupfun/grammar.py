"""Japanese grammar entries looked up by tag or keyword."""

from __future__ import annotations

import re
import sqlite3
from dataclasses import dataclass
from pathlib import Path

_WS = r"[\t\n\f\r ]"
_CHARS = "[0-9A-Za-zぁ-んァ-ヶ～]"
_BY_TAG = re.compile(rf"日语语法{_WS}?({_CHARS}{{1,6}})")
_BY_KEYWORD = re.compile(rf"搜索日语语法{_WS}?({_CHARS}{{1,25}})")

_COLUMNS = "id, tag, name, pronunciation, usage, meaning, explanation, example, grammar_url"
_SCHEMA = """
CREATE TABLE IF NOT EXISTS grammar (
    id INTEGER PRIMARY KEY,
    tag TEXT,
    name TEXT,
    pronunciation TEXT,
    usage TEXT,
    meaning TEXT,
    explanation TEXT,
    example TEXT,
    grammar_url TEXT
);
"""


@dataclass(frozen=True)
class Grammar:
    """One grammar point."""

    id: int = 0
    tag: str = ""
    name: str = ""
    pronunciation: str = ""
    usage: str = ""
    meaning: str = ""
    explanation: str = ""
    example: str = ""
    grammar_url: str = ""

    def describe(self) -> str:
        """Text shown to the user."""
        return (
            f"ID:\n{self.id}\n\n标签:\n{self.tag}\n\n语法名:\n{self.name}\n\n"
            f"发音:\n{self.pronunciation}\n\n用法:\n{self.usage}\n\n意思:\n{self.meaning}\n\n"
            f"解说:\n{self.explanation}\n\n示例:\n{self.example}"
        )


class GrammarDB:
    """Grammar points stored in an SQLite table."""

    def __init__(self, path: str | Path):
        self._conn = sqlite3.connect(str(path))
        with self._conn:
            self._conn.executescript(_SCHEMA)

    def __enter__(self) -> GrammarDB:
        return self

    def __exit__(self, *exc: object) -> None:
        self._conn.close()

    def count(self) -> int:
        """Number of grammar points."""
        (n,) = self._conn.execute("SELECT COUNT(*) FROM grammar").fetchone()
        return n

    def _random(self, where: str, params: tuple[str, ...]) -> Grammar | None:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM grammar WHERE {where} ORDER BY RANDOM() LIMIT 1", params
        ).fetchone()
        if row is None:
            return None
        return Grammar(*(value if value is not None else "" for value in row))

    def random_by_tag(self, tag: str) -> Grammar | None:
        """A random grammar point whose tag contains the text, or None."""
        return self._random("tag LIKE ?", (f"%{tag}%",))

    def random_by_keyword(self, keyword: str) -> Grammar | None:
        """A random grammar point whose name or pronunciation contains the text, or None."""
        pattern = f"%{keyword}%"
        return self._random("(name LIKE ? OR pronunciation LIKE ?)", (pattern, pattern))


def parse_grammar_command(text: str) -> tuple[str, str] | None:
    """Parse a lookup command into ("tag", text) or ("keyword", text); None otherwise."""
    match = _BY_TAG.fullmatch(text)
    if match:
        return "tag", match.group(1)
    match = _BY_KEYWORD.fullmatch(text)
    if match:
        return "keyword", match.group(1)
    return None