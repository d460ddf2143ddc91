# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/schemas/__init__.py

Esquemas Pydantic del módulo de órdenes.
"""

from .order_request_schemas import (
    DISCORD_TAG_RE,
    OrderItemIn,
    OrderDataIn,
    VerifyAndCreateRequest,
    CreditsOnlyRequest,
)
from .order_response_schemas import OrderCreatedResponse, OrderSummaryResponse

__all__ = [
    "DISCORD_TAG_RE",
    "OrderItemIn",
    "OrderDataIn",
    "VerifyAndCreateRequest",
    "CreditsOnlyRequest",
    "OrderCreatedResponse",
    "OrderSummaryResponse",
]
