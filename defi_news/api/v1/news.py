from fastapi import APIRouter, Depends, Query, Request

from defi_news.api.schema import ErrorResponse, ExtractRequest, ToolsResponse
from defi_news.container import NewsServices
from defi_news.mcp_server import describe_tools, trigger_fetch
from defi_news.tools.schema import (
    ExtractResponse,
    LatestNewsResponse,
    SearchRequest,
    SearchResponse,
    TriggerFetchResponse,
)

router = APIRouter(
    tags=["news"],
    responses={
        400: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)


def get_services(request: Request) -> NewsServices:
    return request.app.state.services


@router.get("/tools", response_model=ToolsResponse)
async def list_tools(request: Request) -> ToolsResponse:
    return ToolsResponse(tools=await describe_tools(request.app.state.mcp))


@router.post("/search", response_model=SearchResponse)
async def search(request: SearchRequest, services: NewsServices = Depends(get_services)) -> SearchResponse:
    return await services.search_tool.execute(request)


@router.post("/extract", response_model=ExtractResponse)
async def extract(request: ExtractRequest, services: NewsServices = Depends(get_services)) -> ExtractResponse:
    return await services.extract_tool.execute(request.url)


@router.get("/news", response_model=LatestNewsResponse)
async def latest_news(
    limit: int = Query(10, ge=1, le=50),
    services: NewsServices = Depends(get_services),
) -> LatestNewsResponse:
    return await services.latest_news_tool.execute(limit)


@router.post("/trigger-fetch", response_model=TriggerFetchResponse)
async def trigger(services: NewsServices = Depends(get_services)) -> TriggerFetchResponse:
    return await trigger_fetch(services)
