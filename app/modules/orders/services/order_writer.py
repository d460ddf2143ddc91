# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/order_writer.py

Escritor idempotente de órdenes.

Garantías:
- A lo más una orden por payment_intent_id. La garantía real es el UNIQUE
  de la tabla; el pre-check solo evita trabajo. Si el INSERT pierde la
  carrera (IntegrityError) se hace rollback, se relee la orden ganadora y
  se devuelve como duplicate=True.
- El débito de créditos es un UPDATE condicional dentro de la misma
  transacción que el INSERT (sin read-modify-write).
- Órdenes pagadas con tarjeta: si el débito no aplica, la orden se
  conserva (el pago ya fue capturado) y el fallo queda en logs y metadata.
- Órdenes solo-créditos (strict_credits=True): si el débito no aplica se
  revierte todo con InsufficientCreditsError.
- La entrada del ledger se escribe después del commit de la orden, en una
  transacción propia; si falla solo se registra en logs.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.orders.enums import OrderPaymentStatus, OrderStatus, OrderType
from app.modules.orders.errors import InsufficientCreditsError, OrderStorageError
from app.modules.orders.models.order_models import Order
from app.modules.orders.repositories.ledger_repository import CreditLedgerRepository
from app.modules.orders.repositories.order_repository import OrderRepository
from app.modules.orders.repositories.profile_repository import ProfileRepository
from app.modules.orders.repositories.promo_repository import PromoCodeRepository
from app.modules.orders.services.discount_service import PriceBreakdown
from app.modules.orders.services.pricing_service import PricedLineItem
from app.modules.orders.services.status_machine import history_entry
from app.modules.orders.utils.money import ZERO

logger = logging.getLogger(__name__)


@dataclass
class OrderDraft:
    """Datos ya verificados con los que se materializa la orden."""

    payment_intent_id: str
    order_number: str
    customer_email: str
    customer_name: str
    order_type: OrderType
    items: Sequence[PricedLineItem]
    breakdown: PriceBreakdown
    user_id: Optional[str] = None
    currency: str = "USD"
    payment_method: Optional[str] = None
    customer_discord: Optional[str] = None
    notes: Optional[str] = None
    special_instructions: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    confirmation_note: str = "Payment verified, order confirmed"


@dataclass(frozen=True)
class WriteResult:
    order: Order
    duplicate: bool


class OrderWriter:
    """Materializa órdenes exactamente una vez por payment_intent_id."""

    def __init__(
        self,
        order_repo: Optional[OrderRepository] = None,
        profile_repo: Optional[ProfileRepository] = None,
        promo_repo: Optional[PromoCodeRepository] = None,
        ledger_repo: Optional[CreditLedgerRepository] = None,
    ):
        self.order_repo = order_repo or OrderRepository()
        self.profile_repo = profile_repo or ProfileRepository()
        self.promo_repo = promo_repo or PromoCodeRepository()
        self.ledger_repo = ledger_repo or CreditLedgerRepository()

    async def find_existing(self, session: AsyncSession, payment_intent_id: str) -> Optional[Order]:
        """Pre-check de idempotencia; un fallo de almacenamiento es fatal (500)."""
        try:
            return await self.order_repo.get_by_payment_intent_id(session, payment_intent_id)
        except SQLAlchemyError as e:
            logger.error(
                "Idempotency pre-check failed: intent=%s error=%s",
                payment_intent_id,
                e,
            )
            raise OrderStorageError("Failed to check for an existing order") from e

    def _build_order(self, draft: OrderDraft) -> Order:
        breakdown = draft.breakdown
        return Order(
            order_number=draft.order_number,
            user_id=draft.user_id,
            customer_email=draft.customer_email,
            customer_name=draft.customer_name,
            customer_discord=draft.customer_discord,
            order_type=draft.order_type.value,
            items=[line.to_snapshot() for line in draft.items],
            price_breakdown=breakdown.to_snapshot(),
            subtotal=breakdown.subtotal,
            discount_amount=breakdown.discount_amount,
            tax_amount=breakdown.tax_amount,
            credits_used=breakdown.credits_applied,
            total_amount=breakdown.total_amount,
            currency=draft.currency,
            status=OrderStatus.CONFIRMED.value,
            payment_status=OrderPaymentStatus.PAID.value,
            payment_intent_id=draft.payment_intent_id,
            payment_method=draft.payment_method,
            referral_code=breakdown.code.code if breakdown.code else None,
            notes=draft.notes,
            special_instructions=draft.special_instructions,
            status_history=[history_entry(OrderStatus.CONFIRMED, draft.confirmation_note)],
            order_metadata=dict(draft.metadata),
        )

    async def write(
        self,
        session: AsyncSession,
        draft: OrderDraft,
        *,
        strict_credits: bool = False,
    ) -> WriteResult:
        """
        Crea la orden o devuelve la existente.

        Raises:
            OrderStorageError: fallo de almacenamiento distinto de unicidad
            InsufficientCreditsError: solo con strict_credits=True
        """
        intent = draft.payment_intent_id

        existing = await self.find_existing(session, intent)
        if existing is not None:
            logger.info(
                "Idempotent replay: intent=%s order=%s",
                intent,
                existing.order_number,
            )
            return WriteResult(order=existing, duplicate=True)

        order = self._build_order(draft)
        credits = draft.breakdown.credits_applied
        credit_debited = False
        balance_after: Optional[Decimal] = None

        try:
            session.add(order)
            await session.flush()

            if credits > ZERO and draft.user_id:
                credit_debited = await self.profile_repo.debit_credits(session, draft.user_id, credits)
                if credit_debited:
                    balance_after = await self.profile_repo.get_credit_balance(session, draft.user_id)
                elif strict_credits:
                    available = await self.profile_repo.get_credit_balance(session, draft.user_id)
                    await session.rollback()
                    raise InsufficientCreditsError(requested=credits, available=available)
                else:
                    logger.error(
                        "Credit debit not applied, balance changed concurrently: "
                        "intent=%s user=%s amount=%s",
                        intent,
                        draft.user_id,
                        credits,
                    )
                    order.order_metadata = {**order.order_metadata, "creditDebitFailed": True}

            code = draft.breakdown.code
            if code is not None and code.promo_id:
                recorded = await self.promo_repo.increment_usage(session, code.promo_id)
                if not recorded:
                    logger.warning(
                        "Promo usage not recorded (limit reached concurrently): intent=%s code=%s",
                        intent,
                        code.code,
                    )
                    order.order_metadata = {**order.order_metadata, "promoUsageNotRecorded": True}

            await session.commit()

        except IntegrityError as e:
            await session.rollback()
            winner = await self.find_existing(session, intent)
            if winner is not None:
                logger.info(
                    "Idempotent replay (lost insert race): intent=%s order=%s",
                    intent,
                    winner.order_number,
                )
                return WriteResult(order=winner, duplicate=True)
            logger.error("Order insert violated a constraint: intent=%s error=%s", intent, e)
            raise OrderStorageError("Failed to create order") from e

        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(
                "Order insert failed, payment captured without order: intent=%s error=%s",
                intent,
                e,
            )
            raise OrderStorageError("Failed to create order") from e

        # La orden ya es durable; un rollback posterior no debe expirarla
        session.expunge(order)

        if credit_debited and draft.user_id:
            await self._record_ledger_entry(session, order, draft.user_id, credits, balance_after)

        logger.info(
            "Order created: order=%s intent=%s type=%s total=%s credits=%s",
            order.order_number,
            intent,
            order.order_type,
            order.total_amount,
            order.credits_used,
        )
        return WriteResult(order=order, duplicate=False)

    async def _record_ledger_entry(
        self,
        session: AsyncSession,
        order: Order,
        user_id: str,
        amount: Decimal,
        balance_after: Optional[Decimal],
    ) -> None:
        try:
            await self.ledger_repo.add_debit(
                session,
                user_id=user_id,
                order_id=order.id,
                amount=amount,
                balance_before=balance_after + amount if balance_after is not None else None,
                balance_after=balance_after,
                description=f"Credits used for order {order.order_number}",
            )
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(
                "Credit ledger entry not written: order=%s user=%s amount=%s error=%s",
                order.order_number,
                user_id,
                amount,
                e,
            )


__all__ = ["OrderDraft", "WriteResult", "OrderWriter"]

# Fin del archivo backend/app/modules/orders/services/order_writer.py
