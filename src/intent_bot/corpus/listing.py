from __future__ import annotations

import random
import re
from typing import Iterable

MIN_LISTED_LENGTH = 15

_INTERROGATIVE_RE = re.compile(
    r"^(can|are|may|how|what|when|who|do|where|your|from|is|will|why)\b", re.I
)


def punctuate(question: str) -> str:
    text = re.sub(r"[?.!]+$", "", question.strip())
    text = text[:1].upper() + text[1:]
    if _INTERROGATIVE_RE.match(text):
        return f"{text}?"
    return f"{text}."


def human_questions(corpus: Iterable[str], rng: random.Random | None = None) -> list[str]:
    """Listable questions: long enough, capitalized, punctuated and shuffled."""
    out = [punctuate(q) for q in corpus if len(q.strip()) >= MIN_LISTED_LENGTH]
    (rng or random).shuffle(out)
    return out
