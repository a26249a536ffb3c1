"""Parsing of run-code commands and trimming of their output."""

from __future__ import annotations

import re
from dataclasses import dataclass

TRUNCATION_SUFFIX = "\n............\n............"
MAX_LINES = 30
MAX_CHARS = 1000

_COMMAND = re.compile(r">runcode(raw)?\s(.+?)\s([\s\S]+)")
_CQ_ESCAPES = (("&#91;", "["), ("&#93;", "]"), ("&amp;", "&"))


@dataclass(frozen=True)
class RuncodeRequest:
    """A parsed run-code command."""

    raw: bool
    language: str
    block: str

    @property
    def is_help(self) -> bool:
        """True when the user asked for the language template."""
        return self.block == "help"


def _unescape_cq(text: str) -> str:
    for escaped, plain in _CQ_ESCAPES:
        text = text.replace(escaped, plain)
    return text


def parse_command(text: str) -> RuncodeRequest | None:
    """Parse a command such as '>runcode python print(1)'; None if it is not one."""
    match = _COMMAND.fullmatch(text)
    if match is None:
        return None
    raw, language, block = match.groups()
    return RuncodeRequest(
        raw=raw is not None,
        language=language.lower(),
        block=_unescape_cq(block),
    )


def cut_too_long(text: str) -> str:
    """Cut output after 30 line breaks or 1000 characters."""
    lines = 0
    for i, ch in enumerate(text):
        if ch == "\r" and text[i + 1 : i + 2] == "\n":
            pass  # counted when the '\n' itself is reached
        elif ch in "\n\r":
            lines += 1
        if lines > MAX_LINES or i > MAX_CHARS:
            return text[: i - 1] + TRUNCATION_SUFFIX
    return text