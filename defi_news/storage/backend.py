from __future__ import annotations

from typing import List, Optional, Protocol


class KeyValueBackend(Protocol):
    """
    Minimal key-value surface the article store needs.

    Rank arguments follow Redis sorted-set semantics: ranks are 0-based and
    inclusive, negative ranks count from the end (-1 is the last element).
    Members with equal scores are ordered by member.
    """

    async def get(self, key: str) -> Optional[str]: ...

    async def mget(self, keys: List[str]) -> List[Optional[str]]: ...

    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None: ...

    async def zadd(self, name: str, score: float, member: str) -> None: ...

    async def zremrangebyrank(self, name: str, start: int, stop: int) -> int: ...

    async def zrevrange(self, name: str, start: int, stop: int) -> List[str]: ...

    async def zcard(self, name: str) -> int: ...

    async def close(self) -> None: ...


def rank_slice(items: list, start: int, stop: int) -> list:
    """Apply an inclusive, Redis-style rank range to an already ordered list."""
    n = len(items)
    if start < 0:
        start = max(start + n, 0)
    if stop < 0:
        stop += n
    if start >= n or start > stop:
        return []
    return items[start:min(stop, n - 1) + 1]
