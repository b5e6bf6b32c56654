"""HTTP routes for the question API."""

from typing import Any, Optional

import orjson
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from intent_bot.api.decoding import raw_query_param
from intent_bot.config import VERSION
from intent_bot.engine.responder import Responder
from intent_bot.errors import DecodingError
from intent_bot.logging import get_logger

logger = get_logger(__name__)

GENERIC_ERROR = {"error": "Internal Server Error!", "code": 500}


class PrettyJSONResponse(JSONResponse):
    """orjson-encoded, indented JSON."""

    def render(self, content: Any) -> bytes:
        return orjson.dumps(content, option=orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS)


class QuestionResponse(BaseModel):
    """Response model for the question endpoint."""

    responseText: str
    query: str
    rating: float
    action: str
    isFallback: bool
    similarQuestion: Optional[str] = None


class WelcomeResponse(BaseModel):
    responseText: str


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    version: str
    components: dict[str, str]


router = APIRouter()


def _responder(request: Request) -> Responder:
    return request.app.state.responder


def _error(message: str) -> PrettyJSONResponse:
    return PrettyJSONResponse(status_code=500, content={"error": message, "code": 500})


@router.get("/api/question", response_model=QuestionResponse)
async def answer_question(request: Request) -> Any:
    try:
        raw = raw_query_param(request.scope.get("query_string", b""), "q")
        reply = await _responder(request).answer(raw)
    except DecodingError as e:
        logger.warning(f"Rejected query string {request.url.query!r}: {e}")
        return _error(str(e))
    except Exception:
        logger.exception("Error answering question")
        return PrettyJSONResponse(status_code=500, content=GENERIC_ERROR)

    return QuestionResponse(
        responseText=reply.response_text,
        query=reply.query,
        rating=reply.rating,
        action=reply.action,
        isFallback=reply.is_fallback,
        similarQuestion=reply.similar_question,
    )


@router.get("/api/welcome", response_model=WelcomeResponse)
async def welcome(request: Request) -> WelcomeResponse:
    return WelcomeResponse(responseText=_responder(request).welcome())


@router.get("/api/allQuestions", response_model=list[str])
async def all_questions(request: Request) -> Any:
    try:
        return _responder(request).all_questions()
    except Exception:
        logger.exception("Error listing questions")
        return PrettyJSONResponse(status_code=500, content=GENERIC_ERROR)


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    responder: Optional[Responder] = getattr(request.app.state, "responder", None)
    components = {
        "responder": "ready" if responder is not None else "not_initialized",
        "questions": str(len(responder.bank.corpus)) if responder is not None else "0",
    }
    return HealthResponse(
        status="healthy" if responder is not None else "unhealthy",
        version=VERSION,
        components=components,
    )
