from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from ..errors import StoreError
from ..utils.logging import get_logger

logger = get_logger("defi-news.redis")


@contextmanager
def _translate_errors(operation: str, key: str) -> Iterator[None]:
    try:
        yield
    except RedisError as e:
        logger.error(f"Redis {operation} failed for {key}: {e}")
        raise StoreError(f"Redis {operation} failed: {e}") from e


class RedisBackend:
    """Redis-backed key-value store (plain keys with EX expiry plus sorted sets)."""

    def __init__(self, client: "aioredis.Redis"):
        self.client = client

    @classmethod
    def from_settings(
        cls,
        host: str,
        port: int,
        db: int = 0,
        password: Optional[str] = None,
    ) -> "RedisBackend":
        client = aioredis.Redis(host=host, port=port, db=db, password=password, decode_responses=True)
        logger.info(f"Redis backend configured: {host}:{port}/{db}")
        return cls(client)

    async def get(self, key: str) -> Optional[str]:
        with _translate_errors("GET", key):
            return await self.client.get(key)

    async def mget(self, keys: List[str]) -> List[Optional[str]]:
        if not keys:
            return []
        with _translate_errors("MGET", keys[0]):
            return list(await self.client.mget(keys))

    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        with _translate_errors("SET", key):
            await self.client.set(key, value, ex=ttl_seconds or None)

    async def zadd(self, name: str, score: float, member: str) -> None:
        with _translate_errors("ZADD", name):
            await self.client.zadd(name, {member: score})

    async def zremrangebyrank(self, name: str, start: int, stop: int) -> int:
        with _translate_errors("ZREMRANGEBYRANK", name):
            return await self.client.zremrangebyrank(name, start, stop)

    async def zrevrange(self, name: str, start: int, stop: int) -> List[str]:
        with _translate_errors("ZREVRANGE", name):
            return list(await self.client.zrevrange(name, start, stop))

    async def zcard(self, name: str) -> int:
        with _translate_errors("ZCARD", name):
            return await self.client.zcard(name)

    async def close(self) -> None:
        await self.client.aclose()
