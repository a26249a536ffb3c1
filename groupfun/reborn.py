"""Reincarnation simulator: weighted picks of birthplace and gender."""

from __future__ import annotations

import bisect
import itertools
import json
import random
from collections.abc import Iterable
from pathlib import Path
from typing import Any

_GENDERS = (("男孩子", 50707), ("女孩子", 48292), ("雌雄同体", 1001))


class WeightedChooser:
    """Picks items at random in proportion to integer weights."""

    def __init__(self, choices: Iterable[tuple[Any, int]]):
        ordered = sorted(choices, key=lambda c: c[1])
        if any(weight < 0 for _, weight in ordered):
            raise ValueError("weights must not be negative")
        self._items = [item for item, _ in ordered]
        self._totals = list(itertools.accumulate(int(w) for _, w in ordered))
        if not self._totals or self._totals[-1] < 1:
            raise ValueError("no choices with a weight of at least 1")

    def pick(self, rng: random.Random) -> Any:
        """Pick one item using the given random source."""
        r = rng.randrange(self._totals[-1]) + 1
        return self._items[bisect.bisect_left(self._totals, r)]


def load_rates(path: str | Path) -> list[tuple[str, float]]:
    """Read a JSON list of {"name", "weight"} records."""
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    return [(entry["name"], float(entry["weight"])) for entry in data]


def area_chooser(rates: Iterable[tuple[str, float]]) -> WeightedChooser:
    """Chooser over areas, weights scaled by 1e9 to integers."""
    return WeightedChooser((name, int(weight * 1e9)) for name, weight in rates)


def gender_chooser() -> WeightedChooser:
    """Chooser over the fixed gender distribution."""
    return WeightedChooser(_GENDERS)


def reborn(areas: WeightedChooser, rng: random.Random) -> str:
    """Roll one reincarnation and describe the outcome."""
    if rng.getrandbits(31) > 1 << 27:
        return f"投胎成功！\n您出生在 {areas.pick(rng)}, 是 {gender_chooser().pick(rng)}。"
    return "投胎失败！\n您没能活到出生，祝您下次好运！"