# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/enums/order_enums.py

Enums del ciclo de vida de una orden.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from enum import StrEnum


class OrderStatus(StrEnum):
    """Estado operativo de la orden."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_ORDER_STATUSES


TERMINAL_ORDER_STATUSES = frozenset(
    {OrderStatus.COMPLETED, OrderStatus.CANCELLED, OrderStatus.FAILED}
)


class OrderPaymentStatus(StrEnum):
    """Estado del cobro asociado a la orden (vista desde la orden)."""

    PENDING = "pending"
    PROCESSING = "processing"
    REQUIRES_ACTION = "requires_action"
    PAID = "paid"
    FAILED = "failed"
    CANCELLED = "cancelled"


class OrderType(StrEnum):
    """Variante de la orden, calculada una vez a partir de sus líneas."""

    STANDARD = "standard"
    BUNDLE = "bundle"
    CUSTOM = "custom"
    MIXED = "mixed"


class ItemType(StrEnum):
    """Tipo de línea solicitada por el cliente."""

    SERVICE = "service"
    BUNDLE = "bundle"
    CUSTOM = "custom"


__all__ = [
    "OrderStatus",
    "TERMINAL_ORDER_STATUSES",
    "OrderPaymentStatus",
    "OrderType",
    "ItemType",
]

# Fin del archivo backend/app/modules/orders/enums/order_enums.py
