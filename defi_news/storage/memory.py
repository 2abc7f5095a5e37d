"""
In-process backend.

Keeps values and sorted sets in dicts; expiry is checked lazily on read
against an injectable clock, so TTL behaviour can be driven without sleeping.
"""

from __future__ import annotations

import time
from typing import Callable, Dict, List, Optional, Tuple

from .backend import rank_slice
from ..utils.logging import get_logger

logger = get_logger("defi-news.memory")


class MemoryBackend:
    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock
        self._values: Dict[str, Tuple[str, Optional[float]]] = {}
        self._zsets: Dict[str, Dict[str, float]] = {}
        logger.info("In-memory store backend initialized")

    async def get(self, key: str) -> Optional[str]:
        entry = self._values.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self.clock() >= expires_at:
            del self._values[key]
            return None
        return value

    async def mget(self, keys: List[str]) -> List[Optional[str]]:
        return [await self.get(key) for key in keys]

    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        expires_at = self.clock() + ttl_seconds if ttl_seconds else None
        self._values[key] = (value, expires_at)

    async def zadd(self, name: str, score: float, member: str) -> None:
        self._zsets.setdefault(name, {})[member] = score

    async def zremrangebyrank(self, name: str, start: int, stop: int) -> int:
        zset = self._zsets.get(name)
        if not zset:
            return 0
        doomed = rank_slice(self._ordered(zset), start, stop)
        for member in doomed:
            del zset[member]
        return len(doomed)

    async def zrevrange(self, name: str, start: int, stop: int) -> List[str]:
        zset = self._zsets.get(name)
        if not zset:
            return []
        return rank_slice(self._ordered(zset)[::-1], start, stop)

    async def zcard(self, name: str) -> int:
        return len(self._zsets.get(name, {}))

    async def close(self) -> None:
        return None

    @staticmethod
    def _ordered(zset: Dict[str, float]) -> List[str]:
        return [member for member, _ in sorted(zset.items(), key=lambda kv: (kv[1], kv[0]))]
