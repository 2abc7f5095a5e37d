from __future__ import annotations

import asyncio
from typing import Dict, List, Optional, Sequence

import pytest

from defi_news.core.dedup import DeduplicationGate
from defi_news.models import Article
from defi_news.providers.base import ExtractResult, SearchResult
from defi_news.storage.article_store import ArticleStore
from defi_news.storage.memory import MemoryBackend


class ManualClock:
    def __init__(self, now: float = 1_700_000_000):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSearchProvider:
    name = "fake"

    def __init__(
        self,
        results: Optional[Dict[str, List[SearchResult]]] = None,
        default: Optional[List[SearchResult]] = None,
        failing: Sequence[str] = (),
    ):
        self.results = results or {}
        self.default = default or []
        self.failing = set(failing)
        self.calls: List[dict] = []
        self.gate: Optional[asyncio.Event] = None
        self.entered: Optional[asyncio.Event] = None

    async def search(self, query, *, search_depth, max_results, include_domains,
                     time_range=None, topic=None, include_raw_content=False):
        self.calls.append(
            {
                "query": query,
                "search_depth": search_depth,
                "max_results": max_results,
                "include_domains": list(include_domains),
                "time_range": time_range,
                "topic": topic,
                "include_raw_content": include_raw_content,
            }
        )
        if self.entered is not None:
            self.entered.set()
        if self.gate is not None:
            await self.gate.wait()
        if query in self.failing:
            raise RuntimeError(f"provider exploded on {query}")
        return list(self.results.get(query, self.default))


class FakeExtractProvider:
    name = "fake"

    def __init__(self, results: Optional[List[ExtractResult]] = None, error: Optional[Exception] = None):
        self.results = results or []
        self.error = error
        self.calls: List[List[str]] = []

    async def extract(self, urls):
        self.calls.append(list(urls))
        if self.error is not None:
            raise self.error
        return list(self.results)


def make_result(title: str, url: str = "", content: str = "body", **extra) -> SearchResult:
    result: SearchResult = {
        "title": title,
        "url": url or f"https://www.coindesk.com/{title.lower().replace(' ', '-')}",
        "content": content,
    }
    result.update(extra)  # type: ignore[typeddict-item]
    return result


def make_article(article_id: str, timestamp: int, title: str = "", **extra) -> Article:
    fields = {
        "id": article_id,
        "title": title or f"Article {article_id}",
        "url": f"https://www.theblock.co/{article_id}",
        "content": "content",
        "summary": "summary",
        "published_date": "2025-01-01T00:00:00+00:00",
        "source": "www.theblock.co",
        "timestamp": timestamp,
    }
    fields.update(extra)
    return Article(**fields)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def backend(clock) -> MemoryBackend:
    return MemoryBackend(clock=clock)


@pytest.fixture
def store(backend) -> ArticleStore:
    return ArticleStore(backend, ttl_seconds=7 * 24 * 60 * 60, max_index_size=1000)


@pytest.fixture
def gate(store) -> DeduplicationGate:
    return DeduplicationGate(store)
