from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from .container import NewsServices
from .errors import NewsServiceError
from .tools.schema import SearchRequest, TriggerFetchResponse
from .utils.logging import get_logger

logger = get_logger("defi-news.mcp")

SERVER_NAME = "defi-news-mcp-server"
SERVER_VERSION = "1.0.0"


async def trigger_fetch(services: NewsServices) -> TriggerFetchResponse:
    """Run a sweep now; an already running sweep makes this a no-op."""
    report = await services.scheduler.run_sweep()
    if report is None:
        return TriggerFetchResponse(success=True, message="News fetch already in progress, trigger ignored")
    return TriggerFetchResponse(
        success=True,
        message="News fetch triggered successfully",
        stored=report.stored,
        skipped=report.skipped,
        failed_queries=report.failed_queries,
        started_at=report.started_at,
        finished_at=report.finished_at,
    )


def create_mcp(services: NewsServices) -> FastMCP:
    """Build the MCP server with every tool bound to the given services."""
    mcp = FastMCP(
        name=SERVER_NAME,
        version=SERVER_VERSION,
        instructions="""
Provides DeFi and crypto news from a curated set of news sites.
Recent articles are cached; searches fall back to a live web search when the cache
does not have enough matches.
""",
    )

    @mcp.tool(
        name="search_with_fallback_targetted_websites",
        description="Search for information from targeted DeFi news websites with fallback to general search when needed",
    )
    async def search_with_fallback(
        query: Annotated[str, Field(description="The search query for DeFi-related information")],
        max_results: Annotated[int, Field(ge=1, le=20, description="Maximum number of results to return")] = 5,
        search_depth: Annotated[
            Literal["basic", "advanced"], Field(description="The depth of the search (basic or advanced)")
        ] = "basic",
    ) -> dict:
        try:
            request = SearchRequest(query=query, max_results=max_results, search_depth=search_depth)
            response = await services.search_tool.execute(request)
        except NewsServiceError as e:
            logger.error(f"Tool search_with_fallback_targetted_websites error: {e.message}")
            raise ToolError(f"Error: {e.message}") from e
        return response.model_dump(mode="json")

    @mcp.tool(name="get_full_content", description="Get the full content of a web page from a URL")
    async def get_full_content(
        url: Annotated[str, Field(description="The URL of the web page to extract content from")],
    ) -> dict:
        try:
            response = await services.extract_tool.execute(url)
        except NewsServiceError as e:
            logger.error(f"Tool get_full_content error: {e.message}")
            raise ToolError(f"Error: {e.message}") from e
        return response.model_dump(mode="json")

    @mcp.tool(name="get_latest_defi_news", description="Get the latest DeFi news from the cache")
    async def get_latest_defi_news(
        limit: Annotated[int, Field(ge=1, le=50, description="Maximum number of news articles to return")] = 10,
    ) -> dict:
        try:
            response = await services.latest_news_tool.execute(limit)
        except NewsServiceError as e:
            logger.error(f"Tool get_latest_defi_news error: {e.message}")
            raise ToolError(f"Error: {e.message}") from e
        return response.model_dump(mode="json")

    @mcp.tool(name="trigger_news_fetch", description="Fetch the latest DeFi news into the cache right now")
    async def trigger_news_fetch() -> dict:
        try:
            response = await trigger_fetch(services)
        except NewsServiceError as e:
            logger.error(f"Tool trigger_news_fetch error: {e.message}")
            raise ToolError(f"Error: {e.message}") from e
        return response.model_dump(mode="json")

    return mcp


async def describe_tools(mcp: FastMCP) -> List[Dict[str, Any]]:
    tools = await mcp.get_tools()
    return [
        {"name": tool.name, "description": tool.description, "inputSchema": tool.parameters}
        for tool in tools.values()
    ]
