from __future__ import annotations

import re

from .types import Classification, Intent, IntentRule

DEFAULT_QUERY = "Hello"

_WHITESPACE_RE = re.compile(r"\s+")
_TRAILING_PUNCT_RE = re.compile(r"[?.!]+$")

# Evaluated top to bottom; the first rule that matches decides the intent.
INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(
        Intent.UNIT_CONVERTER,
        re.compile(r"(convert|change|in).{1,2}(\d{1,8})", re.I),
    ),
    IntentRule(
        Intent.WIKIPEDIA,
        re.compile(r"(search for|tell me about|what is|who is)(?!.you) (.{1,30})", re.I),
    ),
    IntentRule(
        Intent.SUPPORT,
        re.compile(
            r"(invented|programmer|teacher|create|maker|who made|creator"
            r"|developer|bug|email|report|problems)",
            re.I,
        ),
    ),
    IntentRule(Intent.DOMAIN_CHAT, re.compile(r"(explain)", re.I)),
)

# "fine"/"good" are answers to "how are you", not names
NAME_INTRO_RE = re.compile(r"(?:my name is|i'm|i am) (?!fine|good)(.{1,30})", re.I)


def normalize_query(raw: str | None) -> str:
    """Collapse whitespace and trim; empty input becomes a greeting."""
    text = _WHITESPACE_RE.sub(" ", raw or "").strip()
    return text or DEFAULT_QUERY


def to_human_input(query: str) -> str:
    """Matching form of a normalized query: no trailing ?/./!, lower-cased."""
    return _TRAILING_PUNCT_RE.sub("", query).lower()


def classify(human_input: str, rules: tuple[IntentRule, ...] = INTENT_RULES) -> Classification:
    for rule in rules:
        match = rule.search(human_input)
        if match:
            return Classification(intent=rule.intent, match=match)
    return Classification(intent=Intent.GENERAL_CHAT)


def rule_topic(classification: Classification) -> str | None:
    """Topic phrase captured by the encyclopedia rule, if that rule fired."""
    if classification.intent is not Intent.WIKIPEDIA or classification.match is None:
        return None
    topic = classification.match.group(2).strip()
    return topic or None


def extract_name(query: str) -> str | None:
    """Name from a self-introduction ("my name is X", "I'm X", "I am X")."""
    match = NAME_INTRO_RE.search(_TRAILING_PUNCT_RE.sub("", query))
    if not match:
        return None
    name = match.group(1).strip()
    return name or None
