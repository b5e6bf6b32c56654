"""Load the intent data files into an immutable IntentBank."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Union

import orjson

from intent_bot.errors import CorpusError
from intent_bot.intent.types import Intent
from intent_bot.logging import get_logger

logger = get_logger(__name__)

MAIN_CHAT_FILE = "main_chat.json"
DOMAIN_CHAT_FILE = "domain_chat.json"
SUPPORT_FILE = "support.json"
WIKIPEDIA_FILE = "wikipedia.json"
UNIT_CONVERTER_FILE = "unit_converter.json"
WELCOME_FILE = "welcome.json"
FALLBACK_FILE = "fallback.json"


@dataclass(frozen=True)
class ChatEntry:
    questions: tuple[str, ...]
    answers: tuple[str, ...]


@dataclass(frozen=True)
class ChatIntent:
    """Candidate questions of one chat intent plus their answer pools."""

    entries: tuple[ChatEntry, ...]
    questions: tuple[str, ...]
    answer_pools: Mapping[str, tuple[str, ...]]

    @classmethod
    def from_entries(cls, name: str, entries: Iterable[ChatEntry]) -> "ChatIntent":
        entries = tuple(entries)
        pools: dict[str, tuple[str, ...]] = {}
        questions: list[str] = []
        for entry in entries:
            for question in entry.questions:
                if question in pools:
                    raise CorpusError(
                        f"{name}: question {question!r} belongs to more than one entry"
                    )
                pools[question] = entry.answers
                questions.append(question)
        if not questions:
            raise CorpusError(f"{name}: no questions defined")
        return cls(
            entries=entries,
            questions=tuple(questions),
            answer_pools=MappingProxyType(pools),
        )

    def answers_for(self, question: str) -> tuple[str, ...]:
        return self.answer_pools.get(question, ())


@dataclass(frozen=True)
class IntentBank:
    """Everything the responder needs, loaded once at startup."""

    main_chat: ChatIntent
    domain_chat: ChatIntent
    support: ChatIntent
    wikipedia: tuple[str, ...]
    unit_converter: tuple[str, ...]
    welcome: tuple[str, ...]
    fallback: tuple[str, ...]
    corpus: tuple[str, ...]

    def candidates(self, intent: Intent) -> tuple[str, ...]:
        if intent is Intent.UNIT_CONVERTER:
            return self.unit_converter
        if intent is Intent.WIKIPEDIA:
            return self.wikipedia
        return self.chat(intent).questions

    def chat(self, intent: Intent) -> ChatIntent:
        if intent is Intent.SUPPORT:
            return self.support
        if intent is Intent.DOMAIN_CHAT:
            return self.domain_chat
        if intent is Intent.GENERAL_CHAT:
            return self.main_chat
        raise KeyError(f"{intent.value} has no answer pools")


def _read_json(path: Path) -> Any:
    try:
        return orjson.loads(path.read_bytes())
    except FileNotFoundError as e:
        raise CorpusError(f"Intent file not found: {path}") from e
    except orjson.JSONDecodeError as e:
        raise CorpusError(f"Malformed JSON in {path}: {e}") from e
    except OSError as e:
        raise CorpusError(f"Cannot read {path}: {e}") from e


def _string_list(value: Any, where: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise CorpusError(f"{where}: expected a list of strings")
    return tuple(value)


def _non_empty_pool(value: Any, where: str) -> tuple[str, ...]:
    pool = tuple(v for v in _string_list(value, where) if v.strip())
    if not pool:
        raise CorpusError(f"{where}: pool is empty")
    return pool


def _chat_entries(data: Any, name: str) -> list[ChatEntry]:
    if not isinstance(data, list):
        raise CorpusError(f"{name}: expected a list of entries")
    entries: list[ChatEntry] = []
    for idx, raw in enumerate(data):
        where = f"{name}[{idx}]"
        if not isinstance(raw, dict):
            raise CorpusError(f"{where}: expected an object")
        questions = tuple(
            q for q in _string_list(raw.get("questions"), f"{where}.questions") if q.strip()
        )
        answers = _non_empty_pool(raw.get("answers"), f"{where}.answers")
        entries.append(ChatEntry(questions=questions, answers=answers))
    return entries


def build_corpus(*sources: Iterable[str]) -> tuple[str, ...]:
    """Merge question sources, drop blanks and exact duplicates (first one wins)."""
    seen: set[str] = set()
    out: list[str] = []
    for source in sources:
        for question in source:
            if not question or not question.strip():
                continue
            if question in seen:
                continue
            seen.add(question)
            out.append(question)
    return tuple(out)


def load_intent_bank(intents_dir: Optional[Union[str, Path]] = None) -> IntentBank:
    """
    Read every intent file under ``intents_dir`` and validate it.

    Args:
        intents_dir: Directory holding the JSON files; defaults to
            ``settings.INTENTS_DIR``

    Returns:
        The immutable IntentBank

    Raises:
        CorpusError: if any file is missing, malformed or has an empty pool
    """
    if intents_dir is None:
        from intent_bot.config import settings

        intents_dir = settings.INTENTS_DIR
    base = Path(intents_dir)

    main_chat = ChatIntent.from_entries(
        MAIN_CHAT_FILE, _chat_entries(_read_json(base / MAIN_CHAT_FILE), MAIN_CHAT_FILE)
    )
    domain_chat = ChatIntent.from_entries(
        DOMAIN_CHAT_FILE,
        _chat_entries(_read_json(base / DOMAIN_CHAT_FILE), DOMAIN_CHAT_FILE),
    )
    support = ChatIntent.from_entries(
        SUPPORT_FILE, _chat_entries(_read_json(base / SUPPORT_FILE), SUPPORT_FILE)
    )
    wikipedia = _non_empty_pool(_read_json(base / WIKIPEDIA_FILE), WIKIPEDIA_FILE)
    unit_converter = _non_empty_pool(
        _read_json(base / UNIT_CONVERTER_FILE), UNIT_CONVERTER_FILE
    )
    welcome = _non_empty_pool(_read_json(base / WELCOME_FILE), WELCOME_FILE)
    fallback = _non_empty_pool(_read_json(base / FALLBACK_FILE), FALLBACK_FILE)

    corpus = build_corpus(
        wikipedia,
        unit_converter,
        support.questions,
        main_chat.questions,
        domain_chat.questions,
    )

    logger.info(
        f"Loaded intent bank from {base}: {len(corpus)} unique questions "
        f"(main={len(main_chat.questions)}, domain={len(domain_chat.questions)}, "
        f"support={len(support.questions)}, wikipedia={len(wikipedia)}, "
        f"units={len(unit_converter)})"
    )

    return IntentBank(
        main_chat=main_chat,
        domain_chat=domain_chat,
        support=support,
        wikipedia=wikipedia,
        unit_converter=unit_converter,
        welcome=welcome,
        fallback=fallback,
        corpus=corpus,
    )
