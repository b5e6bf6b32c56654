from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


class Intent(str, Enum):
    UNIT_CONVERTER = "unit_converter"
    WIKIPEDIA = "wikipedia"
    SUPPORT = "support"
    DOMAIN_CHAT = "domain_chat"
    GENERAL_CHAT = "general_chat"
    FALLBACK = "fallback"  # action only, never a classification


@dataclass(frozen=True)
class IntentRule:
    intent: Intent
    pattern: re.Pattern[str]

    def search(self, text: str) -> re.Match[str] | None:
        return self.pattern.search(text)


@dataclass(frozen=True)
class Classification:
    intent: Intent
    match: re.Match[str] | None = None


@dataclass(frozen=True)
class MatchResult:
    best_template: str
    score: float  # 0..1


@dataclass
class Reply:
    response_text: str
    query: str
    rating: float = 0.0
    action: str = Intent.GENERAL_CHAT.value
    is_fallback: bool = False
    similar_question: str | None = None
    slots: dict[str, str] = field(default_factory=dict)
