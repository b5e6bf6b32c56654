from __future__ import annotations

import random
import re
from typing import Sequence

KEYSTROKE_MESSAGE = "You are probably hitting random keys :D"

KEYSTROKE_MIN_LEN = 5
KEYSTROKE_MAX_LEN = 20

_WHITESPACE_RE = re.compile(r"\s")


def looks_like_random_keys(human_input: str) -> bool:
    """A single 5-20 character token with no match is most likely keyboard mashing."""
    return (
        KEYSTROKE_MIN_LEN <= len(human_input) <= KEYSTROKE_MAX_LEN
        and not _WHITESPACE_RE.search(human_input)
    )


def fallback_text(human_input: str, pool: Sequence[str], rng: random.Random) -> str:
    if looks_like_random_keys(human_input):
        return KEYSTROKE_MESSAGE
    return rng.choice(pool)
