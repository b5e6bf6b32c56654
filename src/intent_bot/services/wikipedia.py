"""Encyclopedia summary lookup against the Wikipedia REST API."""

from __future__ import annotations

from typing import Optional, Protocol
from urllib.parse import quote

import httpx

from intent_bot.config import VERSION, settings
from intent_bot.errors import SummaryLookupError, SummaryNotFound
from intent_bot.logging import get_logger

logger = get_logger(__name__)


class SummaryLookup(Protocol):
    async def summary(self, topic: str) -> str: ...


class WikipediaClient:
    """
    Fetches the plain-text extract of a page summary.

    ``summary`` returns the extract text, raises SummaryNotFound when the page
    does not exist or has no extract, and SummaryLookupError on any transport
    or protocol failure.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.WIKIPEDIA_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.WIKIPEDIA_TIMEOUT
        self._transport = transport

    def summary_url(self, topic: str) -> str:
        title = quote(topic.strip().replace(" ", "_"), safe="")
        return f"{self.base_url}/page/summary/{title}"

    async def summary(self, topic: str) -> str:
        url = self.summary_url(topic)
        headers = {
            "Accept": "application/json",
            "User-Agent": f"{settings.BOT_NAME}/{VERSION}",
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                resp = await client.get(url, headers=headers)
        except httpx.HTTPError as e:
            logger.warning(f"Summary lookup for {topic!r} failed: {e}")
            raise SummaryLookupError(str(e)) from e

        if resp.status_code == 404:
            raise SummaryNotFound(topic)
        try:
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPStatusError, ValueError) as e:
            logger.warning(f"Summary lookup for {topic!r} returned bad response: {e}")
            raise SummaryLookupError(str(e)) from e

        extract = (data or {}).get("extract") if isinstance(data, dict) else None
        if not extract or not str(extract).strip():
            raise SummaryNotFound(topic)
        return str(extract)
