# -*- coding: utf-8 -*-
"""
backend/app/shared/redis/client.py

Canonical async Redis client singleton.
Used by RateLimitService (admission control on order endpoints).

Features:
- Lazy connection initialization (no blocking in import)
- Single shared client across all consumers
- Best-effort: returns None if Redis not available
- Safe singleton via asyncio.Lock

Autor: HelldiversBoost
Fecha: 2026-02-10
"""
from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from app.shared.config import get_settings

logger = logging.getLogger(__name__)


class RedisClientManager:
    """
    Manages a single shared async Redis client.

    Lazy initialization. If Redis is unavailable, returns None (fail-open).
    """

    _instance: Optional["RedisClientManager"] = None

    @classmethod
    def get_instance(cls) -> "RedisClientManager":
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    async def reset_instance_async(cls) -> None:
        """Reset singleton with proper async cleanup (tests)."""
        if cls._instance is not None:
            await cls._instance.close()
        cls._instance = None

    def __init__(self, redis_url: Optional[str] = None):
        self._redis_url = redis_url or get_settings().redis_url
        self._client: Optional[aioredis.Redis] = None
        self._connected: Optional[bool] = None  # None = not tried
        self._connect_lock: Optional[asyncio.Lock] = None

        if self._redis_url:
            logger.debug("RedisClientManager: configured (lazy connect) pid=%d", os.getpid())
        else:
            logger.debug("RedisClientManager: REDIS_URL not configured pid=%d", os.getpid())

    @property
    def is_configured(self) -> bool:
        return bool(self._redis_url)

    @property
    def is_connected(self) -> bool:
        return self._connected is True

    async def get_client(self) -> Optional[aioredis.Redis]:
        """
        Get the async Redis client (lazy connect).

        Returns:
            Redis client or None if not configured / connection failed.
        """
        if self._connected is not None:
            return self._client if self._connected else None

        if not self.is_configured:
            self._connected = False
            return None

        if self._connect_lock is None:
            self._connect_lock = asyncio.Lock()

        async with self._connect_lock:
            # Double-check after lock
            if self._connected is not None:
                return self._client if self._connected else None

            client = aioredis.from_url(
                self._redis_url,
                decode_responses=True,
                socket_connect_timeout=2,
                socket_timeout=2,
            )
            try:
                await client.ping()
            except (RedisError, OSError) as e:
                logger.warning("RedisClientManager: connection failed: %s", e)
                await client.aclose()
                self._connected = False
                return None

            self._client = client
            self._connected = True
            logger.info("RedisClientManager: connected pid=%d", os.getpid())
            return self._client

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._client is not None:
            try:
                await self._client.aclose()
            except (RedisError, OSError) as e:
                logger.warning("RedisClientManager: close error: %s", e)
            finally:
                self._client = None
                self._connected = None


async def get_async_redis_client() -> Optional[aioredis.Redis]:
    """Get the canonical async Redis client (None if not available)."""
    return await RedisClientManager.get_instance().get_client()


async def close_async_redis_client() -> None:
    """Close the Redis client connection."""
    await RedisClientManager.get_instance().close()


__all__ = [
    "get_async_redis_client",
    "close_async_redis_client",
    "RedisClientManager",
]
