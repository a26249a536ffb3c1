"""Wording of picture safety scores as short verdicts."""

from __future__ import annotations

from dataclasses import dataclass

HSO_IMAGE = "https://gchat.qpic.cn/gchatpic_new//--4234EDEC5F147A4C319A41149D7E0EA9/0"

_THRESHOLD = 0.3


@dataclass(frozen=True)
class Picture:
    """Classifier scores of one picture, each between 0 and 1."""

    drawings: float = 0.0
    hentai: float = 0.0
    neutral: float = 0.0
    porn: float = 0.0
    sexy: float = 0.0

    def _tags(self) -> list[str]:
        tags = []
        if self.hentai > _THRESHOLD:
            tags.append("hentai")
        if self.porn > _THRESHOLD:
            tags.append("porn")
        if self.sexy > _THRESHOLD:
            tags.append("hso")
        return tags


def judge(picture: Picture) -> str:
    """Verdict sent when a user asks for a score."""
    if picture.neutral > _THRESHOLD:
        return "普通哦"
    if picture.drawings > _THRESHOLD or picture.neutral < _THRESHOLD:
        kind = "二次元"
    else:
        kind = "三次元"
    return "".join([kind, *(" " + tag for tag in picture._tags())])


def autojudge(picture: Picture) -> str | None:
    """Verdict for automatic review, or None when nothing is worth saying."""
    if picture.neutral > _THRESHOLD:
        return None
    kind = "二次元" if picture.drawings > _THRESHOLD else "三次元"
    tags = picture._tags()
    if not tags:
        return None
    return "".join([kind, *(" " + tag for tag in tags)])