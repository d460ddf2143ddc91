# -*- coding: utf-8 -*-
"""
backend/app/shared/security/rate_limit_dep.py

FastAPI dependencies for rate limiting.
Provides configurable rate limiting per endpoint.

Author: HelldiversBoost
Updated: 2026-02-10
"""
# Note: NOT using 'from __future__ import annotations' to ensure FastAPI
# can properly resolve Request type annotation for dependency injection

import logging
from typing import Optional

from fastapi import Request, HTTPException, status
from fastapi.responses import JSONResponse

from app.shared.security.rate_limit_service import get_rate_limiter, RateLimitResult
from app.shared.http_utils.request_meta import get_client_ip

logger = logging.getLogger(__name__)


class RateLimitExceeded(HTTPException):
    """Exception raised when rate limit is exceeded."""

    def __init__(self, retry_after: int, detail: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=detail or "Too many requests. Please try again later.",
            headers={"Retry-After": str(retry_after)},
        )
        self.retry_after = retry_after


def rate_limit_response(retry_after: int, message: Optional[str] = None) -> JSONResponse:
    """Create a standardized 429 response with explicit UTF-8 charset."""
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "error": message or "Too many requests. Please try again later.",
            "retry_after": retry_after,
            "code": "RATE_LIMIT_EXCEEDED",
        },
        headers={"Retry-After": str(retry_after)},
        media_type="application/json; charset=utf-8",
    )


class RateLimitDep:
    """
    FastAPI dependency for rate limiting.

    Usage:
        @router.post("/verify-and-create")
        async def verify_and_create(
            request: Request,
            _: RateLimitResult = Depends(RateLimitDep(endpoint="orders:create")),
        ):
            ...
    """

    def __init__(
        self,
        endpoint: str,
        key_type: str = "ip",
        limit: Optional[int] = None,
        window_sec: Optional[int] = None,
    ):
        self.endpoint = endpoint
        self.key_type = key_type
        self.limit = limit
        self.window_sec = window_sec

    async def __call__(self, request: Request) -> RateLimitResult:
        """Execute rate limit check."""
        identifier = get_client_ip(request)

        result = await get_rate_limiter().check_and_consume(
            endpoint=self.endpoint,
            key_type=self.key_type,
            identifier=identifier,
            limit=self.limit,
            window_sec=self.window_sec,
        )

        if not result.allowed:
            logger.warning(
                "Rate limit exceeded: endpoint=%s identifier=%s count=%d limit=%d",
                self.endpoint,
                _mask_ip(identifier),
                result.current_count,
                result.limit,
            )
            raise RateLimitExceeded(
                retry_after=result.retry_after,
                detail=f"Too many requests. Please try again in {result.retry_after} seconds.",
            )

        return result


def _mask_ip(identifier: str) -> str:
    """Mask IP for logging (privacy)."""
    if not identifier or identifier == "unknown":
        return identifier
    parts = identifier.split(".")
    if len(parts) == 4:
        return f"{parts[0]}.{parts[1]}.***.***"
    return f"{identifier[:8]}***" if len(identifier) > 8 else "***"


__all__ = [
    "RateLimitDep",
    "RateLimitExceeded",
    "rate_limit_response",
]
