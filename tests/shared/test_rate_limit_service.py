# -*- coding: utf-8 -*-
"""
backend/tests/shared/test_rate_limit_service.py

Tests de RateLimitService con un Redis falso (INCR + TTL en pipeline).

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from typing import Dict

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.shared.security.rate_limit_service import RateLimitService


class FakeRedis:
    def __init__(self) -> None:
        self.counts: Dict[str, int] = {}
        self.ttls: Dict[str, int] = {}
        self._ops = []

    def pipeline(self):
        self._ops = []
        return self

    def incr(self, key):
        self._ops.append(("incr", key))
        return self

    def ttl(self, key):
        self._ops.append(("ttl", key))
        return self

    async def execute(self):
        results = []
        for op, key in self._ops:
            if op == "incr":
                self.counts[key] = self.counts.get(key, 0) + 1
                results.append(self.counts[key])
            else:
                results.append(self.ttls.get(key, -1))
        return results

    async def expire(self, key, seconds):
        self.ttls[key] = seconds
        return True


class BrokenRedis(FakeRedis):
    async def execute(self):
        raise RedisConnectionError("connection refused")


def _service(client, enabled=True) -> RateLimitService:
    async def _getter():
        return client

    return RateLimitService(client_getter=_getter, enabled=enabled)


@pytest.mark.asyncio
async def test_allows_until_limit_then_blocks():
    redis = FakeRedis()
    service = _service(redis)

    first = await service.check_and_consume("orders:create", "ip", "203.0.113.9", limit=2, window_sec=60)
    second = await service.check_and_consume("orders:create", "ip", "203.0.113.9", limit=2, window_sec=60)
    third = await service.check_and_consume("orders:create", "ip", "203.0.113.9", limit=2, window_sec=60)

    assert first.allowed and second.allowed
    assert third.allowed is False
    assert third.retry_after == 60
    assert redis.ttls["rl:orders:create:ip:203.0.113.9"] == 60


@pytest.mark.asyncio
async def test_keys_are_per_identifier():
    service = _service(FakeRedis())

    await service.check_and_consume("orders:create", "ip", "10.0.0.1", limit=1)
    other = await service.check_and_consume("orders:create", "ip", "10.0.0.2", limit=1)

    assert other.allowed is True


@pytest.mark.asyncio
async def test_fail_open_without_redis():
    result = await _service(None).check_and_consume("orders:create", "ip", "10.0.0.1", limit=1)
    assert result.allowed is True


@pytest.mark.asyncio
async def test_fail_open_on_redis_error():
    result = await _service(BrokenRedis()).check_and_consume("orders:create", "ip", "10.0.0.1", limit=1)
    assert result.allowed is True


@pytest.mark.asyncio
async def test_disabled_service_always_allows():
    redis = FakeRedis()
    result = await _service(redis, enabled=False).check_and_consume("orders:create", "ip", "10.0.0.1", limit=0)
    assert result.allowed is True
    assert redis.counts == {}


def test_build_key_normalizes_identifier():
    assert RateLimitService.build_key("orders:lookup", "ip", " ABC ") == "rl:orders:lookup:ip:abc"
    assert RateLimitService.build_key("orders:lookup", "ip", "") == "rl:orders:lookup:ip:unknown"

# Fin del archivo backend/tests/shared/test_rate_limit_service.py
