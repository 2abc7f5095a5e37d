from __future__ import annotations

import time
import uuid
from typing import Callable

from ..models import Article
from ..providers.base import SearchResult
from ..utils.normalize import extract_domain, timestamp_to_iso

SUMMARY_LENGTH = 300
DEFAULT_SCORE = 0.5


def summarize(result: SearchResult) -> str:
    snippet = result.get("snippet")
    if snippet:
        return snippet
    return (result.get("content") or "")[:SUMMARY_LENGTH] + "..."


def build_article(result: SearchResult, clock: Callable[[], float] = time.time) -> Article:
    """Turn a provider search result into a new Article with a fresh id."""
    now = clock()
    score = result.get("score")
    return Article(
        id=str(uuid.uuid4()),
        title=result.get("title", ""),
        url=result.get("url", ""),
        content=result.get("content") or "",
        summary=summarize(result),
        published_date=result.get("published_date") or timestamp_to_iso(now),
        source=extract_domain(result.get("url", "")),
        score=DEFAULT_SCORE if score is None else min(max(score, 0.0), 1.0),
        timestamp=int(now),
    )
