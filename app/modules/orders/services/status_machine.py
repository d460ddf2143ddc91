# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/status_machine.py

Máquina de estados de Order.status y bitácora status_history.

Reglas:
- Los estados terminales (completed, cancelled, failed) nunca se mueven.
- Re-aplicar el estado actual es un no-op (webhooks reentregados).
- status_history es append-only y no repite una entrada idéntica consecutiva.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, List, Optional

from app.modules.orders.enums import OrderStatus
from app.modules.orders.models.order_models import Order

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({
        OrderStatus.CONFIRMED,
        OrderStatus.PROCESSING,
        OrderStatus.FAILED,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.PROCESSING: frozenset({
        OrderStatus.CONFIRMED,
        OrderStatus.PENDING,
        OrderStatus.IN_PROGRESS,
        OrderStatus.FAILED,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.CONFIRMED: frozenset({
        OrderStatus.PENDING,
        OrderStatus.PROCESSING,
        OrderStatus.IN_PROGRESS,
        OrderStatus.FAILED,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.IN_PROGRESS: frozenset({
        OrderStatus.COMPLETED,
        OrderStatus.FAILED,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.FAILED: frozenset(),
}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def history_entry(
    status: OrderStatus,
    description: str,
    at: Optional[datetime] = None,
) -> Dict[str, Any]:
    return {
        "status": status.value,
        "timestamp": (at or datetime.now(timezone.utc)).isoformat(),
        "description": description,
    }


def append_status_history(
    history: Optional[List[Dict[str, Any]]],
    status: OrderStatus,
    description: str,
    at: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """
    Retorna una NUEVA lista con la entrada agregada, salvo que la última
    entrada tenga el mismo status y descripción.
    """
    entries = list(history or [])
    if entries:
        last = entries[-1]
        if last.get("status") == status.value and last.get("description") == description:
            return entries
    entries.append(history_entry(status, description, at))
    return entries


def apply_status(order: Order, target: OrderStatus, description: str) -> bool:
    """
    Aplica la transición sobre la orden (sin commit).

    Returns:
        True si el estado cambió; False si era no-op o transición no permitida.
    """
    current = OrderStatus(order.status)
    if current == target:
        return False

    if not can_transition(current, target):
        logger.warning(
            "Order status transition skipped: order=%s intent=%s %s -> %s",
            order.id,
            order.payment_intent_id,
            current.value,
            target.value,
        )
        return False

    now = datetime.now(timezone.utc)
    order.status = target.value
    order.status_history = append_status_history(order.status_history, target, description, now)
    if target == OrderStatus.CONFIRMED and order.confirmed_at is None:
        order.confirmed_at = now
    return True


__all__ = [
    "ALLOWED_TRANSITIONS",
    "can_transition",
    "history_entry",
    "append_status_history",
    "apply_status",
]

# Fin del archivo backend/app/modules/orders/services/status_machine.py
