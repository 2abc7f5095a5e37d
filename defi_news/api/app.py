from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from defi_news.api.router import api_router
from defi_news.api.schema import HealthResponse
from defi_news.container import NewsServices
from defi_news.errors import NewsServiceError, StoreError
from defi_news.mcp_server import SERVER_NAME, SERVER_VERSION, create_mcp
from defi_news.utils.logging import get_logger

logger = get_logger("defi-news.api")


def create_app(services: NewsServices, start_scheduler: bool = True) -> FastAPI:
    mcp = create_mcp(services)
    mcp_app = mcp.http_app(path="/mcp")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with mcp_app.lifespan(app):
            if start_scheduler:
                services.scheduler.start()
            try:
                yield
            finally:
                await services.close()

    app = FastAPI(title="DeFi News MCP Server", version=SERVER_VERSION, lifespan=lifespan)
    app.state.services = services
    app.state.mcp = mcp

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "mcp-session-id", "mcp-protocol-version"],
        expose_headers=["mcp-session-id"],
    )

    @app.exception_handler(NewsServiceError)
    async def handle_service_error(request: Request, exc: NewsServiceError) -> JSONResponse:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        try:
            indexed = await services.store.count()
        except StoreError:
            indexed = None
        return HealthResponse(
            status="ok" if indexed is not None else "degraded",
            service=SERVER_NAME,
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=SERVER_VERSION,
            sweep_state=services.scheduler.state.value,
            indexed_articles=indexed,
        )

    app.include_router(api_router, prefix="/api")
    app.mount("/", mcp_app)
    return app
