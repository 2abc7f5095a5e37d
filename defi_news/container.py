from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from .config import Settings
from .core.dedup import DeduplicationGate
from .core.ingestion import IngestionScheduler
from .providers.base import ExtractProvider, SearchProvider
from .providers.tavily import TavilyProvider
from .storage.article_store import ArticleStore
from .storage.backend import KeyValueBackend
from .storage.memory import MemoryBackend
from .storage.redis_backend import RedisBackend
from .tools.extract_tool import ContentExtractTool
from .tools.latest_news_tool import LatestNewsTool
from .tools.search_tool import FallbackSearchTool
from .utils.logging import get_logger
from .utils.normalize import domain_filters

logger = get_logger("defi-news.container")


@dataclass
class NewsServices:
    """Every long-lived component, built once at process start."""

    settings: Settings
    backend: KeyValueBackend
    store: ArticleStore
    gate: DeduplicationGate
    scheduler: IngestionScheduler
    search_tool: FallbackSearchTool
    extract_tool: ContentExtractTool
    latest_news_tool: LatestNewsTool

    async def close(self) -> None:
        await self.scheduler.stop()
        await self.backend.close()


def build_backend(settings: Settings, clock: Callable[[], float] = time.time) -> KeyValueBackend:
    if settings.STORE_BACKEND == "memory":
        return MemoryBackend(clock=clock)
    return RedisBackend.from_settings(
        settings.REDIS_HOST,
        settings.REDIS_PORT,
        db=settings.REDIS_DB,
        password=settings.REDIS_PASSWORD,
    )


def build_services(
    settings: Settings,
    *,
    backend: Optional[KeyValueBackend] = None,
    search_provider: Optional[SearchProvider] = None,
    extract_provider: Optional[ExtractProvider] = None,
    clock: Callable[[], float] = time.time,
) -> NewsServices:
    backend = backend or build_backend(settings, clock)
    if search_provider is None or extract_provider is None:
        tavily = TavilyProvider(
            settings.TAVILY_API_KEY,
            base_url=settings.TAVILY_BASE_URL,
            timeout_seconds=settings.TIMEOUT_SECONDS,
        )
        search_provider = search_provider or tavily
        extract_provider = extract_provider or tavily

    store = ArticleStore(
        backend,
        ttl_seconds=settings.news_cache_ttl_seconds,
        max_index_size=settings.NEWS_INDEX_MAX_SIZE,
        key_prefix=settings.REDIS_KEY_PREFIX,
    )
    gate = DeduplicationGate(store)
    include_domains = domain_filters(settings.TARGET_WEBSITES)

    scheduler = IngestionScheduler(
        store,
        gate,
        search_provider,
        settings.FETCH_QUERIES,
        include_domains,
        max_results=settings.FETCH_MAX_RESULTS,
        search_depth=settings.FETCH_SEARCH_DEPTH,
        time_range=settings.FETCH_TIME_RANGE,
        interval_seconds=settings.fetch_interval_seconds,
        initial_delay_seconds=settings.INITIAL_FETCH_DELAY_SECONDS,
        clock=clock,
    )

    logger.info(
        f"Services ready: backend={settings.STORE_BACKEND} ttl={settings.NEWS_CACHE_TTL_DAYS}d "
        f"index_max={settings.NEWS_INDEX_MAX_SIZE} queries={len(settings.FETCH_QUERIES)}"
    )
    return NewsServices(
        settings=settings,
        backend=backend,
        store=store,
        gate=gate,
        scheduler=scheduler,
        search_tool=FallbackSearchTool(store, gate, search_provider, include_domains, clock),
        extract_tool=ContentExtractTool(extract_provider),
        latest_news_tool=LatestNewsTool(store),
    )
