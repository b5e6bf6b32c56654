"""End-to-end question pipeline: normalize, classify, match, synthesize, fall back."""

from __future__ import annotations

import random
from typing import Optional

from intent_bot.config import Settings
from intent_bot.corpus.listing import human_questions
from intent_bot.corpus.loader import IntentBank
from intent_bot.engine.fallback import fallback_text
from intent_bot.engine.synthesizer import ResponseSynthesizer, Turn
from intent_bot.intent.matcher import best_match
from intent_bot.intent.rules import classify, normalize_query, to_human_input
from intent_bot.intent.types import Intent, Reply
from intent_bot.logging import get_logger
from intent_bot.services.units import UnitConverter
from intent_bot.services.wikipedia import SummaryLookup, WikipediaClient

logger = get_logger(__name__)


def fill_placeholders(text: str, settings: Settings) -> str:
    return (
        text.replace("[BOT_NAME]", settings.BOT_NAME)
        .replace("[DEVELOPER_NAME]", settings.DEVELOPER_NAME)
        .replace("[DEVELOPER_EMAIL]", settings.DEVELOPER_EMAIL)
        .replace("[BUG_URL]", settings.BUG_REPORT_URL)
    )


class Responder:
    """Answers one query at a time; holds only read-only state."""

    def __init__(
        self,
        bank: IntentBank,
        settings: Settings,
        units: Optional[UnitConverter] = None,
        lookup: Optional[SummaryLookup] = None,
        rng: Optional[random.Random] = None,
    ):
        self.bank = bank
        self.settings = settings
        self.rng = rng or random.Random()
        self.synthesizer = ResponseSynthesizer(
            bank=bank,
            units=units or UnitConverter(),
            lookup=lookup or WikipediaClient(),
            rng=self.rng,
            standard_rating=settings.STANDARD_RATING,
        )

    async def answer(self, raw_query: Optional[str]) -> Reply:
        query = normalize_query(raw_query)
        human_input = to_human_input(query)

        classification = classify(human_input)
        intent = classification.intent
        match = best_match(human_input, self.bank.candidates(intent))
        logger.debug(
            f"{human_input!r} -> {intent.value} "
            f"(best={match.best_template!r}, score={match.score:.3f})"
        )

        synthesis = await self.synthesizer.synthesize(
            Turn(
                query=query,
                human_input=human_input,
                classification=classification,
                match=match,
            )
        )

        reply = Reply(
            response_text="",
            query=query,
            rating=synthesis.rating,
            action=intent.value,
            is_fallback=synthesis.is_fallback,
            similar_question=match.best_template,
            slots=synthesis.slots,
        )
        if synthesis.text is None:
            reply.response_text = fallback_text(human_input, self.bank.fallback, self.rng)
            reply.action = Intent.FALLBACK.value
            reply.is_fallback = True
            reply.rating = 0.0
        else:
            reply.response_text = synthesis.text

        # Encyclopedia text is third-party content and is returned verbatim
        if intent is not Intent.WIKIPEDIA:
            reply.response_text = fill_placeholders(reply.response_text, self.settings)
        return reply

    def welcome(self) -> str:
        return fill_placeholders(self.rng.choice(self.bank.welcome), self.settings)

    def all_questions(self) -> list[str]:
        return human_questions(self.bank.corpus, self.rng)
