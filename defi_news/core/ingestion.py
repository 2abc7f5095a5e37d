"""
Ingestion scheduler

Sweeps a fixed query set against the live search provider, drops titles the
dedup gate already knows and writes the rest through the article store.
Only one sweep runs at a time; a trigger that arrives mid-sweep is dropped.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from .article import build_article
from .dedup import DeduplicationGate
from ..models import Article
from ..providers.base import SearchProvider, SearchResult
from ..storage.article_store import ArticleStore
from ..utils.logging import get_logger

logger = get_logger("defi-news.ingestion")


class SweepState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass
class SweepReport:
    started_at: int
    previous_fetch_time: int
    queries: int = 0
    stored: int = 0
    skipped: int = 0
    failed_queries: List[str] = field(default_factory=list)
    finished_at: Optional[int] = None


async def store_new_results(
    results: Sequence[SearchResult],
    gate: DeduplicationGate,
    store: ArticleStore,
    clock: Callable[[], float] = time.time,
) -> Tuple[List[Article], int]:
    """Persist results whose title is not already stored. Returns (stored, skipped count)."""
    stored: List[Article] = []
    skipped = 0
    for result in results:
        title = result.get("title", "")
        if await gate.is_duplicate(title):
            logger.debug(f"Article already exists: {title}")
            skipped += 1
            continue
        article = build_article(result, clock)
        await store.put(article)
        logger.debug(f"Stored article: {article.title}")
        stored.append(article)
    return stored, skipped


class IngestionScheduler:
    def __init__(
        self,
        store: ArticleStore,
        gate: DeduplicationGate,
        provider: SearchProvider,
        queries: Sequence[str],
        include_domains: Sequence[str],
        *,
        max_results: int = 10,
        search_depth: str = "advanced",
        time_range: Optional[str] = "week",
        interval_seconds: float = 3 * 60 * 60,
        initial_delay_seconds: float = 5,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.gate = gate
        self.provider = provider
        self.queries = list(queries)
        self.include_domains = list(include_domains)
        self.max_results = max_results
        self.search_depth = search_depth
        self.time_range = time_range
        self.interval_seconds = interval_seconds
        self.initial_delay_seconds = initial_delay_seconds
        self.clock = clock

        self._sweep_lock = asyncio.Lock()
        self._task: Optional[asyncio.Task] = None
        self.last_report: Optional[SweepReport] = None

    @property
    def state(self) -> SweepState:
        return SweepState.RUNNING if self._sweep_lock.locked() else SweepState.IDLE

    @property
    def is_started(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_sweep(self) -> Optional[SweepReport]:
        """Run one sweep. Returns None without doing anything if a sweep is already running."""
        if self._sweep_lock.locked():
            logger.info("News fetch already in progress, skipping...")
            return None

        async with self._sweep_lock:
            logger.info("Fetching latest DeFi news...")
            previous = await self.store.last_fetch_time()
            started_at = int(self.clock())
            # marks the start, so a sweep that dies midway is not retried before the next interval
            await self.store.record_fetch_time(started_at)
            logger.info(f"Previous fetch at {previous}, sweep started at {started_at}")

            report = SweepReport(started_at=started_at, previous_fetch_time=previous)
            for query in self.queries:
                report.queries += 1
                try:
                    stored, skipped = await self._process_query(query)
                except Exception as e:
                    logger.error(f"Error processing query \"{query}\": {e}")
                    report.failed_queries.append(query)
                    continue
                report.stored += stored
                report.skipped += skipped

            report.finished_at = int(self.clock())
            self.last_report = report
            logger.info(
                f"Finished fetching latest DeFi news: stored={report.stored} "
                f"skipped={report.skipped} failed={len(report.failed_queries)}"
            )
            return report

    async def _process_query(self, query: str) -> Tuple[int, int]:
        logger.info(f"Processing query: {query}")
        results = await self.provider.search(
            query,
            search_depth=self.search_depth,
            max_results=self.max_results,
            include_domains=self.include_domains,
            time_range=self.time_range,
            topic="news",
            include_raw_content=True,
        )
        stored, skipped = await store_new_results(results, self.gate, self.store, self.clock)
        return len(stored), skipped

    def start(self) -> None:
        """Start the periodic sweep loop on the running event loop."""
        if self.is_started:
            return
        self._task = asyncio.create_task(self._run_periodically(), name="defi-news-ingestion")
        logger.info(
            f"News fetcher service initialized (every {self.interval_seconds:.0f}s, "
            f"first sweep in {self.initial_delay_seconds:.0f}s)"
        )

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("News fetcher service stopped")

    async def _run_periodically(self) -> None:
        await asyncio.sleep(self.initial_delay_seconds)
        while True:
            logger.info("Running scheduled news fetch...")
            try:
                await self.run_sweep()
            except Exception as e:
                logger.error(f"Scheduled news fetch failed: {e}")
            await asyncio.sleep(self.interval_seconds)
