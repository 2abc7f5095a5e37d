from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import httpx
from pydantic import ValidationError

from .base import ExtractResult, SearchResult
from .schema import TavilyExtractResponse, TavilySearchResponse
from ..errors import ProviderError
from ..utils.http import build_async_client
from ..utils.logging import get_logger
from ..utils.normalize import parse_date_to_iso


logger = get_logger("defi-news.tavily")


class TavilyProvider:
    """Tavily REST client implementing both the search and the extraction provider."""

    name = "tavily"
    base_url = "https://api.tavily.com"

    def __init__(
        self,
        api_key: str,
        *,
        base_url: Optional[str] = None,
        timeout_seconds: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ValueError("TavilyProvider requires api_key")
        self.api_key = api_key
        self.base_url = (base_url or self.base_url).rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def search(
        self,
        query: str,
        *,
        search_depth: str,
        max_results: int,
        include_domains: Sequence[str],
        time_range: Optional[str] = None,
        topic: Optional[str] = None,
        include_raw_content: bool = False,
    ) -> List[SearchResult]:
        payload: Dict[str, Any] = {
            "query": query,
            "search_depth": search_depth,
            "max_results": max(1, max_results),
            "include_domains": list(include_domains),
            "include_raw_content": include_raw_content,
        }
        if topic:
            payload["topic"] = topic
        if time_range:
            payload["time_range"] = time_range

        data = await self._post("/search", payload)
        try:
            parsed = TavilySearchResponse.model_validate(data)
        except ValidationError as e:
            raise ProviderError(f"Unexpected Tavily search response: {e}") from e

        results: List[SearchResult] = []
        for it in parsed.results:
            if not it.url or not it.title:
                continue
            results.append(
                {
                    "title": it.title,
                    "url": it.url,
                    "content": it.content or it.raw_content or "",
                    "snippet": it.snippet,
                    "published_date": parse_date_to_iso(it.published_date) or it.published_date,
                    "score": it.score,
                }
            )
        return results

    async def extract(self, urls: Sequence[str]) -> List[ExtractResult]:
        data = await self._post("/extract", {"urls": list(urls)})
        try:
            parsed = TavilyExtractResponse.model_validate(data)
        except ValidationError as e:
            raise ProviderError(f"Unexpected Tavily extract response: {e}") from e

        for failed in parsed.failed_results:
            logger.warning(f"Extraction failed for {failed.url}: {failed.error}")

        return [
            {
                "url": it.url or "",
                "title": it.title or "",
                "content": it.raw_content or it.content or "",
                "published_date": parse_date_to_iso(it.published_date) or it.published_date,
            }
            for it in parsed.results
        ]

    async def _post(self, path: str, payload: Dict[str, Any]) -> Any:
        async with build_async_client(self.api_key, self.timeout_seconds, self._transport) as client:
            try:
                resp = await client.post(f"{self.base_url}{path}", json=payload)
            except httpx.HTTPError as e:
                raise ProviderError(f"Tavily request to {path} failed: {e}") from e

        if resp.status_code != 200:
            raise ProviderError(f"Tavily {path} returned HTTP {resp.status_code}: {resp.text[:200]}")
        try:
            return resp.json()
        except ValueError as e:
            raise ProviderError(f"Tavily {path} returned invalid JSON") from e
