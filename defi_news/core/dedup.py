from __future__ import annotations

from ..storage.article_store import ArticleStore


class DeduplicationGate:
    """Title-based duplicate check against every live article in the store.

    Only exact case-insensitive equality counts; whitespace and punctuation
    differences are not normalized away.
    """

    def __init__(self, store: ArticleStore):
        self.store = store

    async def is_duplicate(self, title: str) -> bool:
        wanted = title.lower()
        return any(article.title.lower() == wanted for article in await self.store.live_articles())
