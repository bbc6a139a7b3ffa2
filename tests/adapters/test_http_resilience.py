from __future__ import annotations

import asyncio

import httpx
import pytest
from hishel import AsyncSqliteStorage, FilterPolicy

from trackpulse.adapters.http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    ResilientClient,
    _build_cache_policy,  # type: ignore[reportPrivateUsage]
    _build_cache_storage,  # type: ignore[reportPrivateUsage]
)
from tests.helpers.http import make_client_factory


def test_resilient_client_sends_through_rate_limiter() -> None:
    config = ResilienceConfig(
        name="limited",
        base_url="https://api.test/v1",
        ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
        cache=None,
    )
    factory = make_client_factory(
        lambda request: httpx.Response(200, json={"path": request.url.path})
    )

    async def run() -> list[httpx.Response]:
        async with factory(config) as client:
            return [await client.get("/ping"), await client.put("/pong", json={})]

    first, second = asyncio.run(run())

    assert first.json() == {"path": "/v1/ping"}
    assert second.json() == {"path": "/v1/pong"}


def test_cache_storage_is_optional() -> None:
    assert _build_cache_storage(None) is None
    assert _build_cache_storage(CacheConfig(enabled=False)) is None


def test_memory_cache_uses_sqlite_storage() -> None:
    storage = _build_cache_storage(CacheConfig(backend="memory", default_ttl_seconds=60.0))

    assert isinstance(storage, AsyncSqliteStorage)


def test_unknown_cache_backend_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported cache backend"):
        _build_cache_storage(CacheConfig(backend="redis"))  # type: ignore[arg-type]


def test_header_less_responses_are_cached_by_default() -> None:
    assert isinstance(_build_cache_policy(CacheConfig()), FilterPolicy)
    assert _build_cache_policy(CacheConfig(honor_cache_headers=True)) is None
    assert _build_cache_policy(None) is None


def test_injected_transport_sits_under_default_headers() -> None:
    config = ResilienceConfig(
        name="headers",
        base_url="https://api.test/v1",
        cache=None,
        default_headers={"key": "secret"},
    )
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    async def run() -> httpx.Response:
        async with ResilientClient(config, transport=httpx.MockTransport(handler)) as client:
            return await client.get("/ping")

    response = asyncio.run(run())

    assert response.status_code == 204
    assert [str(request.url) for request in seen] == ["https://api.test/v1/ping"]
    assert seen[0].headers["key"] == "secret"
