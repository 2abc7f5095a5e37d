from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Article(BaseModel):
    """A cached news article. Created once at ingestion and never updated in place.

    Stored as JSON under the camelCase ``publishedDate`` key of the
    ``defi_news:`` Redis layout.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    url: str
    content: str = ""
    summary: str = ""
    published_date: str = Field(alias="publishedDate")
    source: str = ""
    score: float = Field(0.5, ge=0.0, le=1.0)
    timestamp: int  # ingestion unix time, drives ordering and expiry accounting
