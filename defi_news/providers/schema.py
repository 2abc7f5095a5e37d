from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class TavilySearchItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    url: Optional[str] = None
    content: Optional[str] = None
    raw_content: Optional[str] = None
    snippet: Optional[str] = None
    published_date: Optional[str] = None
    score: Optional[float] = None


class TavilySearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    query: Optional[str] = None
    results: List[TavilySearchItem] = Field(default_factory=list)
    response_time: Optional[float] = None


class TavilyExtractItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: Optional[str] = None
    title: Optional[str] = None
    raw_content: Optional[str] = None
    content: Optional[str] = None
    published_date: Optional[str] = None


class TavilyFailedItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: Optional[str] = None
    error: Optional[str] = None


class TavilyExtractResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    results: List[TavilyExtractItem] = Field(default_factory=list)
    failed_results: List[TavilyFailedItem] = Field(default_factory=list)
