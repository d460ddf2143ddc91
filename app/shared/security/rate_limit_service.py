# -*- coding: utf-8 -*-
"""
backend/app/shared/security/rate_limit_service.py

Rate limiting service backed by the shared Redis client.
Counters live in Redis (INCR + TTL) so the limit holds across
restarts and across every API instance.

Author: HelldiversBoost
Updated: 2026-02-10
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from redis.exceptions import RedisError

from app.shared.config import get_settings
from app.shared.redis.client import get_async_redis_client

logger = logging.getLogger(__name__)

ClientGetter = Callable[[], Awaitable[Optional[Any]]]


@dataclass
class RateLimitResult:
    """Result of a rate limit check."""
    allowed: bool
    remaining: int
    retry_after: int  # seconds until limit resets
    current_count: int
    limit: int


class RateLimitService:
    """
    Call-frequency admission control on a shared counter store.

    Key naming convention:
    - rl:orders:create:ip:{ip}
    - rl:orders:lookup:ip:{ip}
    """

    _instance: Optional["RateLimitService"] = None

    DEFAULT_LIMITS = {
        "orders:create:ip": {"limit": 10, "window": 60},
        "orders:lookup:ip": {"limit": 60, "window": 60},
    }

    @classmethod
    def get_instance(cls) -> "RateLimitService":
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton (for testing)."""
        cls._instance = None

    def __init__(
        self,
        client_getter: ClientGetter = get_async_redis_client,
        enabled: Optional[bool] = None,
    ):
        self._client_getter = client_getter
        self._enabled = get_settings().rate_limit_enabled if enabled is None else enabled

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @staticmethod
    def build_key(endpoint: str, key_type: str, identifier: str) -> str:
        """Build standardized rate limit key."""
        normalized = identifier.lower().strip() if identifier else "unknown"
        return f"rl:{endpoint}:{key_type}:{normalized}"

    async def check_and_consume(
        self,
        endpoint: str,
        key_type: str,
        identifier: str,
        limit: Optional[int] = None,
        window_sec: Optional[int] = None,
    ) -> RateLimitResult:
        """
        Check rate limit and consume one request if allowed.

        Args:
            endpoint: Endpoint identifier (e.g., "orders:create")
            key_type: Key type ("ip")
            identifier: The actual identifier (IP address)
            limit: Max requests in window (uses default if None)
            window_sec: Window duration in seconds (uses default if None)
        """
        defaults = self.DEFAULT_LIMITS.get(f"{endpoint}:{key_type}", {"limit": 10, "window": 60})
        actual_limit = limit if limit is not None else defaults["limit"]
        actual_window = window_sec if window_sec is not None else defaults["window"]

        if not self._enabled:
            return _allow(actual_limit)

        client = await self._client_getter()
        if client is None:
            # Sin store compartido no hay contador confiable: fail-open
            logger.debug("RateLimitService: Redis unavailable, allowing request")
            return _allow(actual_limit)

        key = self.build_key(endpoint, key_type, identifier)
        try:
            pipe = client.pipeline()
            pipe.incr(key)
            pipe.ttl(key)
            results = await pipe.execute()

            current_count = int(results[0])
            ttl = int(results[1])

            # -1 = key without expiry, -2 = missing key
            if ttl < 0:
                await client.expire(key, actual_window)
                ttl = actual_window
        except (RedisError, OSError) as e:
            logger.error("Redis rate limit check failed, falling back to allow: %s", e)
            return _allow(actual_limit)

        allowed = current_count <= actual_limit
        if not allowed:
            logger.warning(
                "Rate limit exceeded: key=%s count=%d limit=%d",
                key, current_count, actual_limit,
            )

        return RateLimitResult(
            allowed=allowed,
            remaining=max(0, actual_limit - current_count),
            retry_after=ttl if not allowed else 0,
            current_count=current_count,
            limit=actual_limit,
        )


def _allow(limit: int) -> RateLimitResult:
    return RateLimitResult(
        allowed=True,
        remaining=limit,
        retry_after=0,
        current_count=0,
        limit=limit,
    )


def get_rate_limiter() -> RateLimitService:
    """Get the singleton rate limit service."""
    return RateLimitService.get_instance()


__all__ = ["RateLimitService", "RateLimitResult", "get_rate_limiter"]
