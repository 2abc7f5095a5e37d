from __future__ import annotations

from .base import BaseTool
from .schema import LatestNewsResponse
from .search_tool import article_to_item
from ..errors import InputValidationError
from ..storage.article_store import ArticleStore
from ..utils.logging import get_logger

logger = get_logger("defi-news.latest")

MAX_LIMIT = 50


class LatestNewsTool(BaseTool):
    def __init__(self, store: ArticleStore) -> None:
        self.store = store

    async def execute(self, limit: int = 10) -> LatestNewsResponse:
        if limit < 1 or limit > MAX_LIMIT:
            raise InputValidationError(f"limit must be between 1 and {MAX_LIMIT}")

        logger.info(f"Handling get latest news, limit: {limit}")
        articles = await self.store.list(limit)
        return LatestNewsResponse(
            count=len(articles),
            results=[article_to_item(a) for a in articles],
        )
