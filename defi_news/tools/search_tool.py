from __future__ import annotations

import time
from typing import Callable, List, Sequence

from .base import BaseTool
from .schema import NewsItem, SearchRequest, SearchResponse
from ..core.article import summarize
from ..core.dedup import DeduplicationGate
from ..core.ingestion import store_new_results
from ..errors import InputValidationError, ProviderError
from ..models import Article
from ..providers.base import SearchProvider, SearchResult
from ..providers.enums import Origin
from ..storage.article_store import ArticleStore
from ..utils.logging import get_logger
from ..utils.normalize import extract_domain, timestamp_to_iso

logger = get_logger("defi-news.search")


def article_to_item(article: Article) -> NewsItem:
    return NewsItem(
        title=article.title,
        url=article.url,
        content=article.summary,
        published_date=article.published_date,
        source=article.source,
    )


def result_to_item(result: SearchResult, now: float) -> NewsItem:
    return NewsItem(
        title=result.get("title", ""),
        url=result.get("url", ""),
        content=summarize(result),
        published_date=result.get("published_date") or timestamp_to_iso(now),
        source=extract_domain(result.get("url", "")),
    )


class FallbackSearchTool(BaseTool):
    """Serve a query from the cache when it has enough matches, otherwise ask the live provider."""

    def __init__(
        self,
        store: ArticleStore,
        gate: DeduplicationGate,
        provider: SearchProvider,
        include_domains: Sequence[str],
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.gate = gate
        self.provider = provider
        self.include_domains = list(include_domains)
        self.clock = clock

    async def execute(self, request: SearchRequest) -> SearchResponse:
        query = request.query.strip()
        if not query:
            raise InputValidationError("Query is required")

        logger.info(f"Handling targeted search: {query}")
        cached = await self.store.search(query)
        if len(cached) >= request.max_results:
            logger.info(f"Found {len(cached)} results in cache for query: {query}")
            return SearchResponse(
                origin=Origin.cache,
                query=query,
                results=[article_to_item(a) for a in cached[:request.max_results]],
            )

        logger.info(f"Not enough results in cache ({len(cached)}), falling back to live search for query: {query}")
        try:
            results = await self.provider.search(
                query,
                search_depth=request.search_depth.value,
                max_results=request.max_results,
                include_domains=self.include_domains,
                include_raw_content=False,
            )
        except Exception as e:
            raise ProviderError(f"Search failed: {e}") from e

        stored, skipped = await store_new_results(results, self.gate, self.store, self.clock)
        logger.info(f"Live search returned {len(results)} results ({len(stored)} cached, {skipped} duplicates)")

        now = self.clock()
        return SearchResponse(
            origin=Origin.live,
            query=query,
            results=[result_to_item(r, now) for r in results],
        )
