"""Per-intent response synthesis."""

from __future__ import annotations

import random
import re
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from intent_bot.corpus.loader import IntentBank
from intent_bot.errors import ConversionError, SummaryLookupError, SummaryNotFound
from intent_bot.intent.rules import extract_name, rule_topic
from intent_bot.intent.slots import extract_values
from intent_bot.intent.types import Classification, Intent, MatchResult
from intent_bot.logging import get_logger
from intent_bot.services.units import UnitConverter
from intent_bot.services.wikipedia import SummaryLookup

logger = get_logger(__name__)

UNITS_MISSING_MESSAGE = "One or more units are missing."


@dataclass
class Synthesis:
    """Outcome of one synthesis path; ``text`` None means "use the fallback"."""

    text: Optional[str]
    rating: float = 0.0
    is_fallback: bool = False
    slots: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Turn:
    query: str
    human_input: str
    classification: Classification
    match: MatchResult


def capital_case(text: str) -> str:
    """Title-case each word: "albert einstein" becomes "Albert Einstein"."""
    words = [w for w in re.split(r"[^0-9A-Za-z\u00c0-\uffff]+", text) if w]
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


def not_found_message(topic: str) -> str:
    return f'Sorry, I can\'t find any article related to "{topic}".'


def lookup_failed_message(topic: str) -> str:
    return f'Sorry, we can\'t find any article related to "{topic}".'


class ResponseSynthesizer:
    def __init__(
        self,
        bank: IntentBank,
        units: UnitConverter,
        lookup: SummaryLookup,
        rng: random.Random,
        standard_rating: float = 0.6,
    ):
        self.bank = bank
        self.units = units
        self.lookup = lookup
        self.rng = rng
        self.standard_rating = standard_rating
        self._handlers: dict[Intent, Callable[[Turn], Awaitable[Synthesis]]] = {
            Intent.UNIT_CONVERTER: self._unit_converter,
            Intent.WIKIPEDIA: self._wikipedia,
            Intent.SUPPORT: self._answer_pool,
            Intent.DOMAIN_CHAT: self._answer_pool,
            Intent.GENERAL_CHAT: self._general_chat,
        }

    async def synthesize(self, turn: Turn) -> Synthesis:
        handler = self._handlers[turn.classification.intent]
        return await handler(turn)

    async def _unit_converter(self, turn: Turn) -> Synthesis:
        slots = extract_values(turn.human_input, turn.match.best_template) or {}
        try:
            conversion = self.units.convert(
                slots.get("amount"), slots.get("unitFrom"), slots.get("unitTo")
            )
            text = conversion.message()
        except ConversionError as e:
            logger.info(f"Unit conversion failed for {turn.human_input!r}: {e}")
            text = UNITS_MISSING_MESSAGE
        return Synthesis(text=text, rating=1.0, slots=slots)

    async def _wikipedia(self, turn: Turn) -> Synthesis:
        slots = extract_values(turn.human_input, turn.match.best_template) or {}
        raw_topic = slots.get("topic") or rule_topic(turn.classification) or ""
        topic = capital_case(raw_topic)
        slots["topic"] = topic

        try:
            if not topic:
                raise SummaryNotFound(raw_topic)
            text = await self.lookup.summary(topic)
        except SummaryNotFound:
            return Synthesis(
                text=not_found_message(topic),
                rating=turn.match.score,
                is_fallback=True,
                slots=slots,
            )
        except SummaryLookupError as e:
            logger.warning(f"Encyclopedia lookup for {topic!r} failed: {e}")
            return Synthesis(
                text=lookup_failed_message(topic),
                rating=turn.match.score,
                is_fallback=True,
                slots=slots,
            )
        return Synthesis(text=text, rating=turn.match.score, slots=slots)

    async def _answer_pool(self, turn: Turn) -> Synthesis:
        if turn.match.score <= self.standard_rating:
            return Synthesis(text=None, rating=turn.match.score)
        chat = self.bank.chat(turn.classification.intent)
        answers = chat.answers_for(turn.match.best_template)
        if not answers:
            return Synthesis(text=None, rating=turn.match.score)
        return Synthesis(text=self.rng.choice(answers), rating=turn.match.score)


    async def _general_chat(self, turn: Turn) -> Synthesis:
        name = extract_name(turn.query)
        if name:
            return Synthesis(
                text=f"I'm glad to know, {name}.", rating=1.0, slots={"name": name}
            )
        return await self._answer_pool(turn)
