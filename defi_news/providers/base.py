from __future__ import annotations

from typing import Protocol, List, Optional, Sequence, TypedDict


class SearchResult(TypedDict, total=False):
    title: str
    url: str
    content: str
    snippet: Optional[str]
    published_date: Optional[str]
    score: Optional[float]


class ExtractResult(TypedDict, total=False):
    url: str
    title: str
    content: str
    published_date: Optional[str]


class SearchProvider(Protocol):
    name: str

    async def search(
        self,
        query: str,
        *,
        search_depth: str,
        max_results: int,
        include_domains: Sequence[str],
        time_range: Optional[str] = None,
        topic: Optional[str] = None,
        include_raw_content: bool = False,
    ) -> List[SearchResult]: ...


class ExtractProvider(Protocol):
    name: str

    async def extract(self, urls: Sequence[str]) -> List[ExtractResult]: ...
