# groupfun

The game and bookkeeping logic behind a set of group-chat bot features, as a
plain Python library. You pass in the text of a message, user or group ids,
the current time and a `random.Random`. You get back plain values, or state
kept in small SQLite databases.

## Install

```
pip install .
pip install ".[test]"   # adds pytest for the test suite
```

The only third-party dependency is PyYAML. `groupfun.thesaurus` uses it to
read the YAML reply dictionary.

## Modules

| Module | What it provides |
| --- | --- |
| `groupfun.nsfw` | `Picture` holds classifier scores. `judge` returns a verdict. `autojudge` returns a verdict, or `None` when there is nothing to flag. |
| `groupfun.runcode` | `parse_command` turns `>runcode[raw] <language> <code>` into a `RuncodeRequest`. `cut_too_long` cuts output after 30 line breaks or 1000 characters. |
| `groupfun.reborn` | `WeightedChooser` makes weighted picks. `load_rates` reads a JSON list of `{"name", "weight"}`. Also `area_chooser`, `gender_chooser`, and `reborn`, which describes one roll. |
| `groupfun.nativewife` | `WifeStore` keeps pictures in one folder per group. Its `draw` gives a user the same pick all day (`daily_seed`). Also `extract_name` and `group_folder_name`. |
| `groupfun.score` | `ScoreDB` holds scores and sign-ins. `sign_in` returns a `SignInResult` with level, rank and coins. Also `get_rank`, `next_rank_score` and `get_hour_word`. |
| `groupfun.sleep` | `SleepDB.sleep` and `SleepDB.get_up` return a place in the order and the time elapsed. Also `time_duration`, `is_morning`, `is_evening`, `good_morning_text` and `good_night_text`. |
| `groupfun.thesaurus` | Packs a group's dictionary `Mode` and trigger probability into one integer (`set_mode`, `set_probability`, `can_match`). Also `render_reply`, `load_kimo` and `load_simai`. |
| `groupfun.grammar` | `GrammarDB` looks up a random `Grammar` by tag or keyword. `parse_grammar_command` recognises the lookup commands. |
| `groupfun.textdb` | `KujiDB.get` returns the explanation of a fortune slip. `TiangouDB.pick` returns a random diary line. |
| `groupfun.marriage` | `Registry` holds the daily marriages of a group, along with `GroupSettings`, skill cooldowns and divorces. `slice_name` shortens names that are too wide. |
| `groupfun.favor` | `FavorBook` tracks affection between two members, clamped to 0–100, and ranks it. `gift_favor` works out the cost and effect of a gift. |
| `groupfun.checks` | `check_single`, `check_mistress`, `check_divorce` and `check_matchmaker` raise `Rejected` with the reply text when a command is not allowed. |
| `groupfun.tarot` | `TarotDeck` handles draws, explanations, the card list and spreads. `load_deck` builds a deck from JSON. `parse_draw_count` parses draw commands. |
| `groupfun.qzone` | `QzoneDB` stores login cookies and confession-wall submissions (`Emotion`, `Status`), and returns them in pages of 5. |

## Examples

Draw tarot cards with a seeded generator:

```python
import random
from pathlib import Path
from groupfun.tarot import load_deck

deck = load_deck(
    Path("tarots.json").read_text(encoding="utf-8"),
    Path("formation.json").read_text(encoding="utf-8"),
)
for draw in deck.draw("塔罗牌", 3, random.Random(7)):
    print(draw.position, draw.card.name, draw.description)
```

Sign a user in:

```python
import random
from datetime import datetime
from groupfun.score import ScoreDB, sign_in

with ScoreDB("score.db") as db:
    result = sign_in(db, 12345, datetime.now(), random.Random())
    print(result.level, result.rank, result.coins)
```

Check whether a member may propose today:

```python
from datetime import datetime
from groupfun.marriage import Registry
from groupfun.checks import check_single, Rejected

now = datetime.now()
with Registry("registry.db") as registry:
    try:
        check_single(registry, gid=1, uid=2, fiancee=3, today=now.date(), now=now)
    except Rejected as rejection:
        print(rejection.reason)
```

Turn classifier scores into a verdict:

```python
from groupfun.nsfw import Picture, judge

print(judge(Picture(drawings=0.8, hentai=0.5)))  # 二次元 hentai
```

## What this package does not do

This is logic only. It does not connect to a chat service, listen for
messages or send replies. It does not draw images or charts, download pictures
or audio, or call any web service such as a code runner, an image classifier
or a translation service. It has no command-line program. The data files it
reads (tarot cards, spreads, reply dictionaries, area weights, the grammar,
fortune and diary tables) are not included. You supply them.

## Tests

```
pytest
```