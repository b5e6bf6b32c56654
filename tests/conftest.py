"""Pytest configuration file."""

import random
from pathlib import Path

import orjson
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from intent_bot.api.app import create_app
from intent_bot.config import Settings
from intent_bot.corpus.loader import IntentBank, load_intent_bank
from intent_bot.errors import SummaryLookupError, SummaryNotFound
from intent_bot.services.units import UnitConverter

INTENT_FILES = {
    "main_chat.json": [
        {"questions": ["hi", "hello"], "answers": ["Hello from [BOT_NAME]!"]},
        {"questions": ["how are you"], "answers": ["Great, thanks."]},
    ],
    "domain_chat.json": [
        {
            "questions": ["explain circuit breaker"],
            "answers": ["A breaker interrupts fault current."],
        },
        {"questions": ["explain busbar"], "answers": ["A busbar distributes power."]},
    ],
    "support.json": [
        {
            "questions": ["who made you", "who is your developer"],
            "answers": ["[DEVELOPER_NAME] made me."],
        },
        {
            "questions": ["how can i report a bug"],
            "answers": ["Report it at [BUG_URL]."],
        },
    ],
    "wikipedia.json": ["what is {topic}", "who is {topic}", "tell me about {topic}"],
    "unit_converter.json": ["convert {amount} {unitFrom} to {unitTo}"],
    "welcome.json": ["Welcome to [BOT_NAME]!"],
    "fallback.json": ["Sorry, I didn't get that."],
}


class FakeLookup:
    """In-memory stand-in for the encyclopedia client."""

    def __init__(self, summaries=None, error=None):
        self.summaries = summaries or {}
        self.error = error
        self.calls: list[str] = []

    async def summary(self, topic: str) -> str:
        self.calls.append(topic)
        if self.error is not None:
            raise self.error
        if topic not in self.summaries:
            raise SummaryNotFound(topic)
        return self.summaries[topic]


def write_intents(directory: Path, files=None) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name, data in (files or INTENT_FILES).items():
        (directory / name).write_bytes(orjson.dumps(data))
    return directory


@pytest.fixture
def intents_dir(tmp_path: Path) -> Path:
    return write_intents(tmp_path / "intents")


@pytest.fixture
def bank(intents_dir: Path) -> IntentBank:
    return load_intent_bank(intents_dir)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        BOT_NAME="TestBot",
        DEVELOPER_NAME="Ada",
        DEVELOPER_EMAIL="ada@example.com",
        BUG_REPORT_URL="https://bugs.example.com/issues",
        STATIC_DIR=str(tmp_path / "public"),
    )


@pytest.fixture(scope="session")
def units() -> UnitConverter:
    return UnitConverter()


@pytest.fixture
def lookup() -> FakeLookup:
    return FakeLookup(
        summaries={
            "Photosynthesis": "Photosynthesis is how plants turn light into [BOT_NAME] energy.",
        }
    )


@pytest.fixture
def failing_lookup() -> FakeLookup:
    return FakeLookup(error=SummaryLookupError("connection reset"))


@pytest.fixture
def app(settings: Settings, bank: IntentBank, lookup: FakeLookup, units: UnitConverter) -> FastAPI:
    """Create a test FastAPI application."""
    return create_app(
        settings=settings,
        bank=bank,
        lookup=lookup,
        units=units,
        rng=random.Random(7),
    )


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app)
