"""Rendered-view cache backed by Redis, keyed by logical page path."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeVar

import redis.asyncio as redis

from src.config import settings
from src.modules.views.constants import CACHE_PREFIX

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ViewInvalidator(Protocol):
    """Marks the cached representation of a page stale."""

    async def invalidate(self, path: str) -> int: ...


class ViewCache:
    """Redis-backed cache of view payloads.

    A view lives under ``view:{path}``; parameterised renderings of the same
    page (search terms, page numbers) live under ``view:{path}:{variant}``.
    Invalidating a path drops the page and every variant of it.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        self._redis = redis_client

    async def _get_redis(self) -> redis.Redis:
        if self._redis is None:
            self._redis = redis.from_url(settings.redis_url, decode_responses=True)
        return self._redis

    def _make_key(self, path: str, variant: str | None = None) -> str:
        if variant is None:
            return f"{CACHE_PREFIX}:{path}"
        return f"{CACHE_PREFIX}:{path}:{variant}"

    async def get(self, path: str, variant: str | None = None) -> Any | None:
        client = await self._get_redis()
        raw = await client.get(self._make_key(path, variant))
        if raw is None:
            return None
        return json.loads(raw)

    async def set(
        self,
        path: str,
        value: Any,
        variant: str | None = None,
        ttl: int | None = None,
    ) -> None:
        """Store a view payload with a TTL in seconds."""
        client = await self._get_redis()
        await client.set(
            self._make_key(path, variant),
            json.dumps(value, default=str),
            ex=ttl or settings.view_cache_ttl,
        )

    async def invalidate(self, path: str) -> int:
        """Drop the cached page at ``path`` and all of its variants.

        Returns the number of keys deleted.
        """
        client = await self._get_redis()
        keys = [self._make_key(path)]
        async for key in client.scan_iter(match=f"{self._make_key(path)}:*", count=100):
            keys.append(key)
        deleted = await client.delete(*keys)
        logger.debug("Invalidated view %s (%d keys)", path, deleted)
        return deleted

    async def get_or_set(
        self,
        path: str,
        factory: Callable[[], Awaitable[T]],
        variant: str | None = None,
        ttl: int | None = None,
    ) -> T:
        """Return the cached view if present, otherwise build, cache and return it.

        Args:
            path: Logical page path, e.g. ``/dashboard/invoices``.
            factory: Async callable producing a JSON-serialisable payload on miss.
            variant: Optional sub-key for parameterised renderings.
            ttl: Time-to-live in seconds; defaults to ``settings.view_cache_ttl``.
        """
        cached = await self.get(path, variant)
        if cached is not None:
            return cached
        value = await factory()
        await self.set(path, value, variant=variant, ttl=ttl)
        return value


view_cache = ViewCache()


def get_view_cache() -> ViewCache:
    """FastAPI dependency returning the process-wide view cache."""
    return view_cache
