# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/order_pipeline.py

Orquestador del pipeline de creación de órdenes.

Orden estricto por request:
    precios (catálogo) -> descuentos/créditos -> verificación del pago
    -> escritura idempotente

Antes de recalcular nada se consulta si ya existe una orden para el
PaymentIntent: un reintento del cliente después de que sus créditos o el
uso del código ya se consumieron debe devolver la orden original, no un
error de saldo.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_orders import OrdersSettings, get_orders_settings
from app.modules.orders.errors import OrderStorageError
from app.modules.orders.models.order_models import Order
from app.modules.orders.schemas.order_request_schemas import OrderDataIn
from app.modules.orders.services.discount_service import DiscountService, PriceBreakdown
from app.modules.orders.services.order_writer import OrderDraft, OrderWriter
from app.modules.orders.services.payment_verifier import PaymentVerifier
from app.modules.orders.services.pricing_service import PricingResult, PricingService
from app.modules.orders.utils.money import to_money
from app.modules.orders.utils.order_number import generate_order_number

logger = logging.getLogger(__name__)

CREDITS_INTENT_PREFIX = "credits_"


@dataclass(frozen=True)
class PipelineResult:
    order: Order
    duplicate: bool


class OrderPipeline:
    """Encadena PricingService, DiscountService, PaymentVerifier y OrderWriter."""

    def __init__(
        self,
        pricing: PricingService,
        discounts: DiscountService,
        verifier: PaymentVerifier,
        writer: OrderWriter,
        settings: Optional[OrdersSettings] = None,
    ):
        self.pricing = pricing
        self.discounts = discounts
        self.verifier = verifier
        self.writer = writer
        self.settings = settings or get_orders_settings()

    # ---------------------------------------------------------
    # Pago con procesador (verify-and-create / create-unified)
    # ---------------------------------------------------------
    async def verify_and_create(
        self,
        session: AsyncSession,
        payment_intent_id: str,
        order_data: OrderDataIn,
        *,
        source: str = "verify-and-create",
    ) -> PipelineResult:
        existing = await self.writer.find_existing(session, payment_intent_id)
        if existing is not None:
            logger.info(
                "Idempotent replay before pricing: intent=%s order=%s",
                payment_intent_id,
                existing.order_number,
            )
            return PipelineResult(order=existing, duplicate=True)

        pricing = await self.pricing.price_items(session, order_data.items)
        breakdown = await self.discounts.build_breakdown(
            session,
            pricing.subtotal,
            code=order_data.referral_code,
            user_id=order_data.user_id,
            requested_credits=order_data.credits_used,
        )
        self._log_client_discount_drift(payment_intent_id, order_data, breakdown)

        record = await self.verifier.verify(payment_intent_id, breakdown.total_amount)

        draft = self._draft(
            payment_intent_id,
            order_data,
            pricing,
            breakdown,
            source=source,
            payment_method=record.payment_method,
        )
        result = await self.writer.write(session, draft)
        return PipelineResult(order=result.order, duplicate=result.duplicate)

    # ---------------------------------------------------------
    # Pago completo con créditos
    # ---------------------------------------------------------
    async def create_credits_only(
        self,
        session: AsyncSession,
        order_data: OrderDataIn,
        idempotency_key: Optional[str] = None,
    ) -> PipelineResult:
        payment_intent_id = CREDITS_INTENT_PREFIX + (idempotency_key or uuid.uuid4().hex)

        existing = await self.writer.find_existing(session, payment_intent_id)
        if existing is not None:
            logger.info(
                "Idempotent replay (credits-only): key=%s order=%s",
                payment_intent_id,
                existing.order_number,
            )
            return PipelineResult(order=existing, duplicate=True)

        pricing = await self.pricing.price_items(session, order_data.items)
        breakdown = await self.discounts.build_breakdown(
            session,
            pricing.subtotal,
            code=order_data.referral_code,
            user_id=order_data.user_id,
            credits_only=True,
        )
        self._log_client_discount_drift(payment_intent_id, order_data, breakdown)

        if order_data.credits_used and abs(
            to_money(order_data.credits_used) - breakdown.credits_applied
        ) > self.settings.amount_tolerance:
            logger.info(
                "Client credits drift (credits-only): key=%s client=%s server=%s",
                payment_intent_id,
                order_data.credits_used,
                breakdown.credits_applied,
            )

        draft = self._draft(
            payment_intent_id,
            order_data,
            pricing,
            breakdown,
            source="create-credits-only",
            payment_method="credits",
        )
        draft.confirmation_note = "Order paid with account credits"
        result = await self.writer.write(session, draft, strict_credits=True)
        return PipelineResult(order=result.order, duplicate=result.duplicate)

    # ---------------------------------------------------------
    # Consulta
    # ---------------------------------------------------------
    async def get_by_payment_intent(
        self,
        session: AsyncSession,
        payment_intent_id: str,
    ) -> Optional[Order]:
        try:
            return await self.writer.order_repo.get_by_payment_intent_id(session, payment_intent_id)
        except SQLAlchemyError as e:
            logger.error("Order lookup failed: intent=%s error=%s", payment_intent_id, e)
            raise OrderStorageError("Failed to load order") from e

    # ---------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------
    def _draft(
        self,
        payment_intent_id: str,
        order_data: OrderDataIn,
        pricing: PricingResult,
        breakdown: PriceBreakdown,
        *,
        source: str,
        payment_method: Optional[str],
    ) -> OrderDraft:
        metadata: Dict[str, Any] = {"source": source}
        if order_data.ip_address:
            metadata["ipAddress"] = order_data.ip_address
        if breakdown.code is not None and breakdown.code.referrer_user_id:
            metadata["referrerUserId"] = breakdown.code.referrer_user_id

        return OrderDraft(
            payment_intent_id=payment_intent_id,
            order_number=generate_order_number(),
            customer_email=str(order_data.customer_email),
            customer_name=order_data.customer_name,
            order_type=pricing.order_type,
            items=pricing.items,
            breakdown=breakdown,
            user_id=order_data.user_id,
            currency=self.settings.currency,
            payment_method=payment_method,
            customer_discord=order_data.customer_discord,
            notes=order_data.order_notes,
            special_instructions=order_data.special_instructions,
            metadata=metadata,
        )

    def _log_client_discount_drift(
        self,
        reference: str,
        order_data: OrderDataIn,
        breakdown: PriceBreakdown,
    ) -> None:
        if order_data.referral_discount is None:
            return
        client = to_money(order_data.referral_discount)
        if abs(client - breakdown.discount_amount) > self.settings.amount_tolerance:
            logger.warning(
                "Client discount drift: ref=%s code=%s client=%s server=%s",
                reference,
                order_data.referral_code,
                client,
                breakdown.discount_amount,
            )


__all__ = ["PipelineResult", "OrderPipeline", "CREDITS_INTENT_PREFIX"]

# Fin del archivo backend/app/modules/orders/services/order_pipeline.py
