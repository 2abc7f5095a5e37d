"""
Article store

Articles live under ``<prefix><id>`` with a per-item expiry; a sorted set
``<prefix>index`` maps ingestion timestamps to ids and is capped at
``max_index_size`` entries. Trimming the index never deletes the article
itself, so an evicted article may linger until its own TTL elapses.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import ValidationError

from .backend import KeyValueBackend
from ..errors import StoreError
from ..models import Article
from ..utils.logging import get_logger

logger = get_logger("defi-news.store")

DEFAULT_TTL_SECONDS = 7 * 24 * 60 * 60
DEFAULT_MAX_INDEX_SIZE = 1000


class ArticleStore:
    def __init__(
        self,
        backend: KeyValueBackend,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        max_index_size: int = DEFAULT_MAX_INDEX_SIZE,
        key_prefix: str = "defi_news:",
    ):
        if max_index_size < 1:
            raise ValueError("max_index_size must be positive")
        self.backend = backend
        self.ttl_seconds = ttl_seconds
        self.max_index_size = max_index_size
        self.key_prefix = key_prefix
        self.index_key = f"{key_prefix}index"
        self.last_fetch_key = f"{key_prefix}last_fetch"

    def _article_key(self, article_id: str) -> str:
        return f"{self.key_prefix}{article_id}"

    async def put(self, article: Article) -> None:
        """Store an article with expiry, index it and trim the index to capacity."""
        await self.backend.set(self._article_key(article.id), article.model_dump_json(by_alias=True), ttl_seconds=self.ttl_seconds)
        await self.backend.zadd(self.index_key, article.timestamp, article.id)
        # keep only the most recent max_index_size ids
        await self.backend.zremrangebyrank(self.index_key, 0, -(self.max_index_size + 1))

    async def get(self, article_id: str) -> Optional[Article]:
        raw = await self.backend.get(self._article_key(article_id))
        if raw is None:
            return None
        try:
            return Article.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Corrupt article payload for {article_id}: {e}")
            raise StoreError(f"Corrupt article payload for {article_id}") from e

    async def list(self, limit: int = 20, offset: int = 0) -> List[Article]:
        """Newest first. Index entries whose article already expired are skipped."""
        if limit <= 0:
            return []
        ids = await self.backend.zrevrange(self.index_key, offset, offset + limit - 1)
        return await self._resolve(ids)

    async def live_articles(self) -> List[Article]:
        ids = await self.backend.zrevrange(self.index_key, 0, -1)
        return await self._resolve(ids)

    async def search(self, query: str, limit: Optional[int] = None) -> List[Article]:
        """Case-insensitive substring match on title, content and summary, newest first."""
        needle = query.lower()
        matches = [
            article
            for article in await self.live_articles()
            if needle in article.title.lower()
            or needle in article.content.lower()
            or needle in article.summary.lower()
        ]
        return matches if limit is None else matches[:limit]

    async def count(self) -> int:
        return await self.backend.zcard(self.index_key)

    async def record_fetch_time(self, ts: int) -> None:
        await self.backend.set(self.last_fetch_key, str(int(ts)))

    async def last_fetch_time(self) -> int:
        raw = await self.backend.get(self.last_fetch_key)
        if not raw:
            return 0
        try:
            return int(raw)
        except ValueError as e:
            raise StoreError(f"Corrupt last fetch marker: {raw!r}") from e

    async def _resolve(self, ids: List[str]) -> List[Article]:
        """Fetch indexed articles in one round trip, skipping expired and undecodable entries."""
        if not ids:
            return []
        payloads = await self.backend.mget([self._article_key(article_id) for article_id in ids])
        articles: List[Article] = []
        for article_id, raw in zip(ids, payloads):
            if raw is None:
                continue
            try:
                articles.append(Article.model_validate_json(raw))
            except ValidationError as e:
                logger.warning(f"Skipping undecodable article {article_id}: {e}")
        return articles
