"""Serper (Google Search) client returning ordered context snippets."""

import logging
from typing import Optional

import httpx

from models import ContextSnippet

logger = logging.getLogger(__name__)


class SearchError(Exception):
    """Raised when the search provider call fails."""


class SearchClient:
    """Async client for the Serper search API."""

    def __init__(
        self,
        api_key: str,
        url: str = "https://google.serper.dev/search",
        result_count: int = 10,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key
        self.url = url
        self.result_count = result_count
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout)

    async def search(self, query: str) -> list[ContextSnippet]:
        """Return the provider's organic results for *query*, in provider order."""
        try:
            response = await self.http_client.post(
                self.url,
                headers={"X-API-KEY": self.api_key, "Content-Type": "application/json"},
                json={"q": query, "num": self.result_count},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Search API returned %s: %s", exc.response.status_code, exc.response.text)
            raise SearchError(f"Search API returned {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.error("Search API request failed: %s", exc)
            raise SearchError("Could not reach search API.") from exc

        organic = response.json().get("organic") or []
        return [
            ContextSnippet(
                # Serper sends null as well as omitting keys
                title=item.get("title") or "",
                url=item.get("link") or "",
                snippet=item.get("snippet") or "",
            )
            for item in organic
        ]

    async def aclose(self) -> None:
        await self.http_client.aclose()
