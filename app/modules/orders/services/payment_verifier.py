# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/payment_verifier.py

Verificador de pagos: confirma contra el procesador que el PaymentIntent
llegó a succeeded y que el monto capturado coincide con el total
calculado en servidor (tolerancia absoluta de un centavo).

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from app.shared.config.settings_orders import OrdersSettings, get_orders_settings
from app.modules.orders.enums import PaymentIntentStatus
from app.modules.orders.errors import (
    PaymentAmountMismatchError,
    PaymentNotCompletedError,
)
from app.modules.orders.providers.stripe_gateway import PaymentGateway, PaymentRecord
from app.modules.orders.utils.money import to_money

logger = logging.getLogger(__name__)


class PaymentVerifier:
    """Valida un PaymentIntent contra el total esperado."""

    def __init__(self, gateway: PaymentGateway, settings: Optional[OrdersSettings] = None):
        self.gateway = gateway
        self.settings = settings or get_orders_settings()

    async def verify(self, payment_intent_id: str, expected_total: Decimal) -> PaymentRecord:
        """
        Raises:
            PaymentLookupError: el procesador no respondió o no encontró el pago
            PaymentNotCompletedError: status != succeeded
            PaymentAmountMismatchError: monto o moneda no coinciden
        """
        record = await self.gateway.retrieve_payment(payment_intent_id)

        if record.status != PaymentIntentStatus.SUCCEEDED.value:
            logger.info(
                "Payment not completed: intent=%s status=%s",
                payment_intent_id,
                record.status,
            )
            raise PaymentNotCompletedError(record.status)

        expected = to_money(expected_total)
        captured = record.captured_amount
        difference = abs(captured - expected)

        if record.currency and record.currency.lower() != self.settings.currency.lower():
            logger.error(
                "Payment currency mismatch: intent=%s expected_currency=%s captured_currency=%s",
                payment_intent_id,
                self.settings.currency,
                record.currency,
            )
            raise PaymentAmountMismatchError(
                expected=expected,
                captured=captured,
                details=f"Payment currency {record.currency.upper()} does not match {self.settings.currency}",
            )

        if difference > self.settings.amount_tolerance:
            logger.error(
                "Payment amount mismatch: intent=%s expected=%s captured=%s difference=%s",
                payment_intent_id,
                expected,
                captured,
                difference,
            )
            raise PaymentAmountMismatchError(expected=expected, captured=captured)

        return record


__all__ = ["PaymentVerifier"]

# Fin del archivo backend/app/modules/orders/services/payment_verifier.py
