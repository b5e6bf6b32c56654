from __future__ import annotations

from typing import Iterable

from rapidfuzz import fuzz

from .types import MatchResult


def similarity(a: str, b: str) -> float:
    """Normalized Indel similarity in [0, 1]; 1.0 only for identical strings."""
    return fuzz.ratio(a, b) / 100.0


def best_match(text: str, candidates: Iterable[str]) -> MatchResult:
    """
    Score ``text`` against every candidate and keep the highest.

    Ties keep the earliest candidate. An empty candidate set is a caller
    error and raises ValueError.
    """
    best: MatchResult | None = None
    for candidate in candidates:
        score = similarity(text, candidate)
        if best is None or score > best.score:
            best = MatchResult(best_template=candidate, score=score)
    if best is None:
        raise ValueError("best_match() needs at least one candidate")
    return best
