"""Tarot readings: single draws, multiple draws and card spreads."""

from __future__ import annotations

import json
import random
import re
from collections.abc import Mapping
from dataclasses import dataclass

BED = "https://gitcode.net/shudorcl/zbp-tarot/-/raw/master/"
MAJOR_COUNT = 22
MINOR_COUNT = 55
ALL_COUNT = MAJOR_COUNT + MINOR_COUNT
MAX_DRAW = 20
POSITIONS = ("『正位』", "『逆位』")
MINOR_LIST_TEXT = "[圣杯|星币|宝剑|权杖] [0-10|侍从|骑士|王后|国王]"

_REVERSE_DIR = "Reverse/"
_DRAW_COMMAND = re.compile(r"抽([0-9]{1,2}张)?((塔罗牌|大阿(尔)?卡纳)|小阿(尔)?卡纳)")


@dataclass(frozen=True)
class Card:
    """One tarot card with its meanings upright and reversed."""

    name: str
    description: str = ""
    reverse_description: str = ""
    img_url: str = ""


@dataclass(frozen=True)
class Formation:
    """A spread: how many cards it takes and what each position stands for."""

    cards_num: int
    is_cut: bool = False
    represent: tuple[tuple[str, ...], ...] = ()


@dataclass(frozen=True)
class Draw:
    """A card as it was drawn, upright or reversed."""

    card: Card
    reversed: bool
    label: str = ""

    @property
    def position(self) -> str:
        """『正位』 or 『逆位』."""
        return POSITIONS[int(self.reversed)]

    @property
    def description(self) -> str:
        """Meaning of the card in its drawn position."""
        return self.card.reverse_description if self.reversed else self.card.description

    @property
    def image_url(self) -> str:
        """Where the picture of the card in this position is found."""
        return BED + (_REVERSE_DIR if self.reversed else "") + self.card.img_url

    @property
    def image_name(self) -> str:
        """Cache name of the picture."""
        return ("Reverse" if self.reversed else "") + self.card.name


def _card_range(kind: str) -> tuple[int, int]:
    """First index and number of cards in the deck named by kind."""
    if "小" in kind:
        return MAJOR_COUNT, MINOR_COUNT
    if kind == "混合":
        return 0, ALL_COUNT
    return 0, MAJOR_COUNT


class TarotDeck:
    """Cards keyed by their index as a string, and the known spreads."""

    def __init__(self, cards: Mapping[str, Card], formations: Mapping[str, Formation]):
        self._cards = dict(cards)
        self._formations = dict(formations)
        self._by_name = {card.name: card for card in self._cards.values()}

    def _card(self, index: int) -> Card:
        try:
            return self._cards[str(index)]
        except KeyError:
            raise LookupError(f"no tarot card numbered {index}") from None

    def _draw_distinct(self, kind: str, count: int, rng: random.Random) -> list[tuple[Card, bool]]:
        start, length = _card_range(kind)
        if count > length:
            raise ValueError("抽取张数过多")
        seen: set[int] = set()
        drawn = []
        while len(drawn) < count:
            j = rng.randrange(length)
            if j in seen:
                continue
            seen.add(j)
            reversed_ = rng.randrange(2) == 1
            drawn.append((self._card(start + j), reversed_))
        return drawn

    def draw(self, kind: str, n: int, rng: random.Random) -> list[Draw]:
        """Draw n different cards from the deck named by kind."""
        if n <= 0:
            raise ValueError("张数必须为正")
        if n > MAX_DRAW:
            raise ValueError("抽取张数过多")
        return [Draw(card, reversed_) for card, reversed_ in self._draw_distinct(kind, n, rng)]

    def explain(self, name: str) -> Card | None:
        """The card with the given name, or None."""
        return self._by_name.get(name)

    def card_list_text(self) -> str:
        """Overview of card names shown when a name is not found."""
        major = [self._cards.get(str(i), Card("")).name for i in range(MAJOR_COUNT)]
        return (
            "塔罗牌列表\n大阿尔卡纳:\n"
            + " ".join(major[:7])
            + "\n"
            + " ".join(major[7:14])
            + "\n"
            + " ".join(major[14:22])
            + "\n小阿尔卡纳:\n"
            + MINOR_LIST_TEXT
        )

    def spread(self, kind: str, formation: str, rng: random.Random) -> list[Draw]:
        """Lay out the named spread; each draw carries its position's label."""
        try:
            layout = self._formations[formation]
        except KeyError:
            names = "\n".join(self._formations)
            raise LookupError(f"没有找到{formation}噢~\n现有牌阵列表: \n{names}") from None
        labels = layout.represent[0] if layout.represent else ()
        drawn = self._draw_distinct(kind, layout.cards_num, rng)
        return [
            Draw(card, reversed_, labels[i] if i < len(labels) else "")
            for i, (card, reversed_) in enumerate(drawn)
        ]


def load_deck(cards_json: str | bytes, formations_json: str | bytes) -> TarotDeck:
    """Build a deck from the JSON card list and the JSON spread list."""
    cards = {}
    for key, entry in json.loads(cards_json).items():
        info = entry.get("info") or {}
        cards[str(key)] = Card(
            name=entry["name"],
            description=info.get("description", ""),
            reverse_description=info.get("reverseDescription", ""),
            img_url=info.get("imgUrl", ""),
        )
    formations = {}
    for name, entry in json.loads(formations_json).items():
        formations[name] = Formation(
            cards_num=int(entry["cards_num"]),
            is_cut=bool(entry.get("is_cut", False)),
            represent=tuple(tuple(row) for row in entry.get("represent") or ()),
        )
    return TarotDeck(cards, formations)


def parse_draw_count(text: str) -> tuple[int, str] | None:
    """Parse a draw command into (count, deck kind); None if it is not one."""
    match = _DRAW_COMMAND.fullmatch(text)
    if match is None:
        return None
    count_text, kind = match.group(1), match.group(2)
    n = 1 if count_text is None else int(count_text[:-1])
    if n <= 0:
        raise ValueError("张数必须为正")
    if n > MAX_DRAW:
        raise ValueError("抽取张数过多")
    return n, kind