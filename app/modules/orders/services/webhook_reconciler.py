# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/webhook_reconciler.py

Reconciliador de eventos de Stripe (payment_intent.*) contra las órdenes.

Eventos:
- payment_intent.succeeded       -> confirmed + payment_status=paid; sin
                                    orden se registra un gap de reconciliación
- payment_intent.payment_failed  -> failed + payment_status=failed
- payment_intent.processing      -> processing + payment_status=processing
- payment_intent.requires_action -> pending + payment_status=requires_action
- payment_intent.canceled        -> cancelled

Cada handler fija estados (set, no incrementos), así que reaplicar un
evento reentregado no cambia nada. Qué transición procede lo decide
ALLOWED_TRANSITIONS; las órdenes en estado terminal no se mueven nunca.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.orders.enums import OrderPaymentStatus, OrderStatus
from app.modules.orders.errors import OrderStorageError
from app.modules.orders.models.order_models import Order
from app.modules.orders.repositories.order_repository import OrderRepository
from app.modules.orders.services.status_machine import apply_status, can_transition

logger = logging.getLogger(__name__)

EVENT_SUCCEEDED = "payment_intent.succeeded"
EVENT_FAILED = "payment_intent.payment_failed"
EVENT_PROCESSING = "payment_intent.processing"
EVENT_REQUIRES_ACTION = "payment_intent.requires_action"
EVENT_CANCELED = "payment_intent.canceled"


@dataclass(frozen=True)
class _EventRule:
    target: OrderStatus
    payment_status: Optional[OrderPaymentStatus]
    description: str
    # Solo mueve órdenes cuyo estado actual esté en este conjunto (None = cualquiera)
    from_statuses: Optional[frozenset] = None


EVENT_RULES: Dict[str, _EventRule] = {
    EVENT_SUCCEEDED: _EventRule(
        target=OrderStatus.CONFIRMED,
        payment_status=OrderPaymentStatus.PAID,
        description="Payment succeeded",
        from_statuses=frozenset({OrderStatus.PENDING, OrderStatus.PROCESSING}),
    ),
    EVENT_FAILED: _EventRule(
        target=OrderStatus.FAILED,
        payment_status=OrderPaymentStatus.FAILED,
        description="Payment failed",
    ),
    EVENT_PROCESSING: _EventRule(
        target=OrderStatus.PROCESSING,
        payment_status=OrderPaymentStatus.PROCESSING,
        description="Payment processing",
    ),
    EVENT_REQUIRES_ACTION: _EventRule(
        target=OrderStatus.PENDING,
        payment_status=OrderPaymentStatus.REQUIRES_ACTION,
        description="Payment requires customer action",
    ),
    EVENT_CANCELED: _EventRule(
        target=OrderStatus.CANCELLED,
        payment_status=OrderPaymentStatus.CANCELLED,
        description="Payment canceled",
    ),
}

HANDLED_EVENT_TYPES = frozenset(EVENT_RULES)


@dataclass(frozen=True)
class ReconcileResult:
    event_id: Optional[str]
    event_type: str
    handled: bool
    orders_matched: int = 0
    orders_updated: int = 0
    reconciliation_gap: bool = False


def _payment_intent(event: Dict[str, Any]) -> Dict[str, Any]:
    data = event.get("data") or {}
    obj = data.get("object") if isinstance(data, dict) else None
    return obj if isinstance(obj, dict) else {}


class WebhookReconciler:
    """Aplica eventos verificados del procesador sobre las órdenes."""

    def __init__(self, order_repo: Optional[OrderRepository] = None):
        self.order_repo = order_repo or OrderRepository()

    async def handle_event(self, session: AsyncSession, event: Dict[str, Any]) -> ReconcileResult:
        """
        Raises:
            OrderStorageError: si la actualización falla (el procesador reintentará)
        """
        event_id = event.get("id")
        event_type = str(event.get("type") or "")

        rule = EVENT_RULES.get(event_type)
        if rule is None:
            logger.info("Unhandled Stripe event type: type=%s id=%s", event_type, event_id)
            return ReconcileResult(event_id=event_id, event_type=event_type, handled=False)

        intent = _payment_intent(event)
        intent_id = intent.get("id")
        if not intent_id:
            logger.warning("Stripe event without payment intent id: type=%s id=%s", event_type, event_id)
            return ReconcileResult(event_id=event_id, event_type=event_type, handled=False)

        try:
            orders = await self.order_repo.list_by_payment_intent_id(session, intent_id)

            if not orders:
                return self._no_orders(event_id, event_type, intent)

            updated = sum(1 for order in orders if self._apply_rule(order, rule, event_type))
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(
                "Webhook order update failed: type=%s intent=%s error=%s",
                event_type,
                intent_id,
                e,
            )
            raise OrderStorageError("Failed to update order status") from e

        logger.info(
            "Webhook reconciled: type=%s intent=%s matched=%d updated=%d",
            event_type,
            intent_id,
            len(orders),
            updated,
        )
        return ReconcileResult(
            event_id=event_id,
            event_type=event_type,
            handled=True,
            orders_matched=len(orders),
            orders_updated=updated,
        )

    def _no_orders(self, event_id: Optional[str], event_type: str, intent: Dict[str, Any]) -> ReconcileResult:
        if event_type == EVENT_SUCCEEDED:
            logger.error(
                "Reconciliation gap: payment succeeded without order: intent=%s amount=%s "
                "currency=%s email=%s metadata=%s",
                intent.get("id"),
                intent.get("amount_received") or intent.get("amount"),
                intent.get("currency"),
                intent.get("receipt_email"),
                intent.get("metadata") or {},
            )
            return ReconcileResult(
                event_id=event_id,
                event_type=event_type,
                handled=True,
                reconciliation_gap=True,
            )

        logger.info("No orders for payment intent: type=%s intent=%s", event_type, intent.get("id"))
        return ReconcileResult(event_id=event_id, event_type=event_type, handled=True)

    def _apply_rule(self, order: Order, rule: _EventRule, event_type: str) -> bool:
        current = OrderStatus(order.status)

        if current.is_terminal:
            if current != rule.target:
                logger.warning(
                    "Event ignored for terminal order (manual review): type=%s order=%s status=%s",
                    event_type,
                    order.order_number,
                    current.value,
                )
            return False

        if rule.from_statuses is not None and current not in rule.from_statuses:
            return self._set_payment_status(order, rule)

        if current != rule.target and not can_transition(current, rule.target):
            logger.warning(
                "Event transition not allowed: type=%s order=%s %s -> %s",
                event_type,
                order.order_number,
                current.value,
                rule.target.value,
            )
            return False

        changed = self._set_payment_status(order, rule)
        return apply_status(order, rule.target, rule.description) or changed

    @staticmethod
    def _set_payment_status(order: Order, rule: _EventRule) -> bool:
        if rule.payment_status is None or order.payment_status == rule.payment_status.value:
            return False
        order.payment_status = rule.payment_status.value
        return True


__all__ = [
    "EVENT_SUCCEEDED",
    "EVENT_FAILED",
    "EVENT_PROCESSING",
    "EVENT_REQUIRES_ACTION",
    "EVENT_CANCELED",
    "EVENT_RULES",
    "HANDLED_EVENT_TYPES",
    "ReconcileResult",
    "WebhookReconciler",
]

# Fin del archivo backend/app/modules/orders/services/webhook_reconciler.py
