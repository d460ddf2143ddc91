# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/enums/__init__.py

Enums del módulo de órdenes.
"""

from .order_enums import (
    OrderStatus,
    TERMINAL_ORDER_STATUSES,
    OrderPaymentStatus,
    OrderType,
    ItemType,
)
from .catalog_enums import (
    ProductType,
    ProductStatus,
    ProductVisibility,
    DiscountType,
    CodeKind,
)
from .payment_enums import PaymentIntentStatus, LedgerEntryType

__all__ = [
    "OrderStatus",
    "TERMINAL_ORDER_STATUSES",
    "OrderPaymentStatus",
    "OrderType",
    "ItemType",
    "ProductType",
    "ProductStatus",
    "ProductVisibility",
    "DiscountType",
    "CodeKind",
    "PaymentIntentStatus",
    "LedgerEntryType",
]
