"""Tests for the article store over the in-memory and Redis backends."""

from __future__ import annotations

import asyncio
import json

import fakeredis
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from defi_news.core.dedup import DeduplicationGate
from defi_news.errors import StoreError
from defi_news.storage.article_store import ArticleStore
from defi_news.storage.memory import MemoryBackend
from defi_news.storage.redis_backend import RedisBackend

from conftest import make_article


def test_list_returns_newest_first(store):
    async def scenario():
        for ts in (100, 200, 300):
            await store.put(make_article(f"a{ts}", ts))
        return await store.list(2)

    listed = asyncio.run(scenario())

    assert [a.timestamp for a in listed] == [300, 200]


def test_list_orders_by_timestamp_not_insertion_order(store):
    async def scenario():
        for ts in (500, 100, 400, 200, 300):
            await store.put(make_article(f"a{ts}", ts))
        return await store.list(10), await store.list(2, offset=2)

    everything, page = asyncio.run(scenario())

    assert [a.timestamp for a in everything] == [500, 400, 300, 200, 100]
    assert [a.timestamp for a in page] == [300, 200]


def test_index_is_capped_and_oldest_entries_dropped(store):
    async def scenario():
        for i in range(1010):
            await store.put(make_article(f"a{i}", 1000 + i))
        return await store.list(2000), await store.count()

    listed, count = asyncio.run(scenario())

    assert count == 1000
    assert len(listed) == 1000
    ids = {a.id for a in listed}
    assert all(f"a{i}" not in ids for i in range(10))
    assert "a1009" in ids and "a10" in ids


def test_evicted_index_entry_keeps_article_until_ttl(clock):
    store = ArticleStore(MemoryBackend(clock=clock), ttl_seconds=60, max_index_size=2)

    async def scenario():
        for ts in (1, 2, 3):
            await store.put(make_article(f"a{ts}", ts))
        orphan = await store.get("a1")
        listed = await store.list(10)
        clock.advance(60)
        return orphan, listed, await store.get("a1")

    orphan, listed, expired = asyncio.run(scenario())

    assert orphan is not None
    assert [a.id for a in listed] == ["a3", "a2"]
    assert expired is None


def test_get_respects_ttl(clock):
    store = ArticleStore(MemoryBackend(clock=clock), ttl_seconds=60)

    async def scenario():
        await store.put(make_article("a1", int(clock())))
        clock.advance(59)
        before = await store.get("a1")
        clock.advance(1)
        after = await store.get("a1")
        return before, after

    before, after = asyncio.run(scenario())

    assert before is not None and before.id == "a1"
    assert after is None


def test_expired_articles_are_skipped_in_listing(clock):
    store = ArticleStore(MemoryBackend(clock=clock), ttl_seconds=100)

    async def scenario():
        await store.put(make_article("old", 1))
        clock.advance(50)
        await store.put(make_article("new", 2))
        clock.advance(60)
        return await store.list(10), await store.count()

    listed, count = asyncio.run(scenario())

    assert [a.id for a in listed] == ["new"]
    assert count == 2


def test_get_missing_article_returns_none(store):
    assert asyncio.run(store.get("nope")) is None


def test_search_matches_title_content_and_summary(store):
    async def scenario():
        await store.put(make_article("t", 1, title="Uniswap V4 launches"))
        await store.put(make_article("c", 2, content="the UNISWAP team said"))
        await store.put(make_article("s", 3, summary="recap of uniswap governance"))
        await store.put(make_article("x", 4, title="Aave news"))
        return await store.search("Uniswap"), await store.search("uniswap", limit=1)

    everything, limited = asyncio.run(scenario())

    assert [a.id for a in everything] == ["s", "c", "t"]
    assert [a.id for a in limited] == ["s"]


def test_last_fetch_time_defaults_to_zero(store):
    async def scenario():
        initial = await store.last_fetch_time()
        await store.record_fetch_time(1234)
        return initial, await store.last_fetch_time()

    assert asyncio.run(scenario()) == (0, 1234)


def test_redis_backend_round_trip():
    async def scenario():
        client = fakeredis.FakeAsyncRedis(decode_responses=True)
        store = ArticleStore(RedisBackend(client), ttl_seconds=3600, max_index_size=2)
        for ts in (100, 200, 300):
            await store.put(make_article(f"a{ts}", ts))
        listed = await store.list(5)
        ttl = await client.ttl("defi_news:a300")
        index_size = await client.zcard("defi_news:index")
        await store.record_fetch_time(42)
        marker = await store.last_fetch_time()
        return listed, ttl, index_size, marker

    listed, ttl, index_size, marker = asyncio.run(scenario())

    assert [a.timestamp for a in listed] == [300, 200]
    assert 0 < ttl <= 3600
    assert index_size == 2
    assert marker == 42


class BrokenRedis:
    async def get(self, key):
        raise RedisConnectionError("connection refused")

    async def set(self, key, value, ex=None):
        raise RedisConnectionError("connection refused")


def test_redis_failures_surface_as_store_error():
    store = ArticleStore(RedisBackend(BrokenRedis()))

    with pytest.raises(StoreError, match="connection refused"):
        asyncio.run(store.get("a1"))
    with pytest.raises(StoreError):
        asyncio.run(store.put(make_article("a1", 1)))


def test_redis_scan_beyond_connection_pool_size():
    async def scenario():
        client = fakeredis.FakeAsyncRedis(decode_responses=True)
        store = ArticleStore(RedisBackend(client), ttl_seconds=3600)
        gate = DeduplicationGate(store)
        for i in range(300):
            await store.put(make_article(f"a{i}", 1000 + i))
        return (
            await store.live_articles(),
            await store.search("article a2"),
            await gate.is_duplicate("ARTICLE A150"),
        )

    articles, matches, duplicate = asyncio.run(scenario())

    assert len(articles) == 300
    assert articles[0].id == "a299"
    assert len(matches) == 111  # a2, a20-a29, a200-a299
    assert duplicate is True


def test_redis_index_capped_at_capacity():
    async def scenario():
        client = fakeredis.FakeAsyncRedis(decode_responses=True)
        store = ArticleStore(RedisBackend(client), ttl_seconds=3600, max_index_size=1000)
        gate = DeduplicationGate(store)
        for i in range(1005):
            await store.put(make_article(f"a{i}", 1000 + i))
        return (
            await store.list(2000),
            await store.search("article"),
            await gate.is_duplicate("Article a1004"),
            await gate.is_duplicate("Article a0"),
        )

    listed, matches, newest_dup, evicted_dup = asyncio.run(scenario())

    assert len(listed) == 1000
    assert {f"a{i}" for i in range(5)}.isdisjoint(a.id for a in listed)
    assert len(matches) == 1000
    assert newest_dup is True
    assert evicted_dup is False


def test_articles_are_stored_with_camelcase_published_date(store, backend):
    async def scenario():
        await store.put(make_article("a1", 1))
        return await backend.get("defi_news:a1")

    payload = json.loads(asyncio.run(scenario()))

    assert payload["publishedDate"] == "2025-01-01T00:00:00+00:00"
    assert "published_date" not in payload


def test_camelcase_payload_written_elsewhere_is_readable(store, backend):
    legacy = {
        "id": "old",
        "title": "Legacy headline",
        "url": "https://www.coindesk.com/old",
        "content": "c",
        "summary": "s",
        "publishedDate": "2024-12-31T00:00:00.000Z",
        "source": "www.coindesk.com",
        "score": 0.7,
        "timestamp": 5,
    }

    async def scenario():
        await backend.set("defi_news:old", json.dumps(legacy), ttl_seconds=60)
        await backend.zadd("defi_news:index", 5, "old")
        return await store.get("old")

    article = asyncio.run(scenario())

    assert article.published_date == "2024-12-31T00:00:00.000Z"
    assert article.score == 0.7


def test_undecodable_entry_is_skipped_by_scans(store, backend, gate):
    async def scenario():
        await store.put(make_article("a1", 1, title="Good one"))
        await store.put(make_article("a2", 2, title="Good two"))
        await backend.set("defi_news:bad", '{"id": "bad", "title": "broken"}', ttl_seconds=60)
        await backend.zadd("defi_news:index", 3, "bad")
        return (
            await store.live_articles(),
            await store.search("good"),
            await gate.is_duplicate("good one"),
        )

    articles, matches, duplicate = asyncio.run(scenario())

    assert [a.id for a in articles] == ["a2", "a1"]
    assert len(matches) == 2
    assert duplicate is True
    with pytest.raises(StoreError, match="Corrupt article payload for bad"):
        asyncio.run(store.get("bad"))
