"""FastAPI application factory."""

import random
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from intent_bot.api.middleware import AccessLogMiddleware
from intent_bot.api.routes import PrettyJSONResponse, router
from intent_bot.config import VERSION, Settings
from intent_bot.config import settings as default_settings
from intent_bot.corpus.loader import IntentBank, load_intent_bank
from intent_bot.engine.responder import Responder
from intent_bot.logging import get_logger
from intent_bot.services.units import UnitConverter
from intent_bot.services.wikipedia import SummaryLookup

logger = get_logger(__name__)

NOT_FOUND_TEXT = "Page Not Found!"


def _configure_not_found(app: FastAPI, static_dir: Path) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def not_found_page(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code != 404:
            return await http_exception_handler(request, exc)
        page = static_dir / "404.html"
        try:
            return HTMLResponse(page.read_text(encoding="utf-8"), status_code=404)
        except OSError as e:
            logger.debug(f"No 404 page at {page}: {e}")
            return PlainTextResponse(NOT_FOUND_TEXT, status_code=404)


def create_app(
    settings: Optional[Settings] = None,
    bank: Optional[IntentBank] = None,
    lookup: Optional[SummaryLookup] = None,
    units: Optional[UnitConverter] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The intent bank is loaded here so a broken data file stops the process
    before it starts serving.

    Args:
        settings: Configuration; defaults to the environment-driven singleton
        bank: Pre-loaded intent data; loaded from settings.INTENTS_DIR if None
        lookup: Encyclopedia summary collaborator (Wikipedia REST by default)
        units: Unit converter (pint registry by default)
        rng: Randomness for answer, welcome and listing selection

    Returns:
        Configured FastAPI application
    """
    settings = settings or default_settings
    bank = bank or load_intent_bank(settings.INTENTS_DIR)

    app = FastAPI(
        title=settings.BOT_NAME,
        description="Conversational API: regex intent routing with fuzzy question matching",
        version=VERSION,
        default_response_class=PrettyJSONResponse,
    )
    app.state.settings = settings
    app.state.responder = Responder(
        bank=bank,
        settings=settings,
        units=units,
        lookup=lookup,
        rng=rng,
    )

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    static_dir = Path(settings.STATIC_DIR)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.info(f"Static directory {static_dir} not found; serving API only")
    _configure_not_found(app, static_dir)

    return app
