# -*- coding: utf-8 -*-
"""
backend/app/shared/security/__init__.py

Admission control (rate limiting) utilities.
"""

from .rate_limit_service import RateLimitService, RateLimitResult, get_rate_limiter
from .rate_limit_dep import RateLimitDep, RateLimitExceeded, rate_limit_response

__all__ = [
    "RateLimitService",
    "RateLimitResult",
    "get_rate_limiter",
    "RateLimitDep",
    "RateLimitExceeded",
    "rate_limit_response",
]
