from pydantic import BaseModel
from typing import Any, Dict, List


class ExtractRequest(BaseModel):
    url: str


class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: str
    version: str
    sweep_state: str
    indexed_articles: int | None = None


class ToolsResponse(BaseModel):
    tools: List[Dict[str, Any]]


class ErrorResponse(BaseModel):
    error: str
