from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field

from ..providers.enums import Origin, SearchDepth


class SearchRequest(BaseModel):
    query: str
    max_results: int = Field(5, ge=1, le=20)
    search_depth: SearchDepth = SearchDepth.basic


class NewsItem(BaseModel):
    title: str
    url: str
    content: str
    published_date: str
    source: str


class SearchResponse(BaseModel):
    origin: Origin
    query: str
    results: List[NewsItem]


class ExtractResponse(BaseModel):
    url: str
    title: str
    content: str
    published_date: Optional[str] = None


class LatestNewsResponse(BaseModel):
    count: int
    results: List[NewsItem]


class TriggerFetchResponse(BaseModel):
    success: bool
    message: str
    stored: int = 0
    skipped: int = 0
    failed_queries: List[str] = Field(default_factory=list)
    started_at: Optional[int] = None
    finished_at: Optional[int] = None
