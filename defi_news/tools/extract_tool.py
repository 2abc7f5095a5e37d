from __future__ import annotations

from .base import BaseTool
from .schema import ExtractResponse
from ..errors import InputValidationError, ProviderError
from ..providers.base import ExtractProvider
from ..utils.logging import get_logger

logger = get_logger("defi-news.extract")


class ContentExtractTool(BaseTool):
    """Full-page content for one URL, straight from the provider. Nothing is cached."""

    def __init__(self, provider: ExtractProvider) -> None:
        self.provider = provider

    async def execute(self, url: str) -> ExtractResponse:
        url = (url or "").strip()
        if not url:
            raise InputValidationError("URL is required")

        logger.info(f"Handling get full content: {url}")
        try:
            results = await self.provider.extract([url])
        except Exception as e:
            raise ProviderError(f"Content extraction failed: {e}") from e

        if not results:
            raise ProviderError("No content found for the provided URL")

        first = results[0]
        return ExtractResponse(
            url=url,
            title=first.get("title", ""),
            content=first.get("content", ""),
            published_date=first.get("published_date"),
        )
