"""Dictionary replies: per-group mode and trigger probability, and reply templates."""

from __future__ import annotations

import enum
import json

import yaml

_MODE_BITS = 3
_PROBABILITY_SHIFT = 59


class Mode(enum.IntEnum):
    """Which reply dictionary a group uses."""

    KIMO = 0
    DERE = 1
    KAWA = 2

    @classmethod
    def parse(cls, name: str) -> Mode:
        """Mode named by a command word: kimo, 傲娇 or 可爱."""
        try:
            return _MODE_NAMES[name]
        except KeyError:
            raise ValueError(f"unknown dictionary: {name!r}") from None


_MODE_NAMES = {"kimo": Mode.KIMO, "傲娇": Mode.DERE, "可爱": Mode.KAWA}


def set_mode(data: int, mode: Mode) -> int:
    """Group data with the dictionary mode replaced."""
    return (data & ~_MODE_BITS) | int(mode)


def set_probability(data: int, digit: int) -> int:
    """Group data with the trigger probability 0.<digit> set; digit must be 1 to 8."""
    if digit <= 0 or digit >= 9:
        raise ValueError("概率越界")
    return (data & _MODE_BITS) | ((digit - 1) << _PROBABILITY_SHIFT)


def can_match(data: int, mode: Mode, roll: int) -> bool:
    """Whether a dictionary may answer, given a roll between 0 and 9."""
    return data & _MODE_BITS == int(mode) and roll <= data >> _PROBABILITY_SHIFT


def render_reply(template: str, name: str, me: str) -> list[str]:
    """Fill a reply template and split it into the messages to send."""
    text = template.replace("{name}", name).replace("{me}", me)
    return text.split("{segment}")


def _replies(raw: object, what: str) -> dict[str, list[str]]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"{what} must be a mapping of phrases to replies")
    return {str(key): [str(v) for v in (value or [])] for key, value in raw.items()}


def load_kimo(text: str) -> dict[str, list[str]]:
    """Parse the JSON dictionary of kimo replies."""
    return _replies(json.loads(text), "kimo dictionary")


def load_simai(text: str) -> dict[Mode, dict[str, list[str]]]:
    """Parse the YAML file holding the 傲娇 and 可爱 dictionaries."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError("simai dictionary must be a mapping")
    return {
        Mode.DERE: _replies(data.get("傲娇"), "傲娇 dictionary"),
        Mode.KAWA: _replies(data.get("可爱"), "可爱 dictionary"),
    }