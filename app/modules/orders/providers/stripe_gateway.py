# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/providers/stripe_gateway.py

Integración con Stripe para el pipeline de órdenes.

- StripePaymentGateway: consulta de PaymentIntent (solo lectura), acotada
  por timeout y sin reintentos internos; el cliente reenvía si falla.
- StripeWebhookVerifier: verificación de firma del webhook antes de
  parsear el JSON.

El SDK de Stripe es síncrono: la consulta corre en el threadpool de
Starlette para no bloquear el event loop.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional, Protocol, Tuple

import stripe
from starlette.concurrency import run_in_threadpool

from app.shared.config.settings_orders import OrdersSettings
from app.modules.orders.errors import (
    PaymentConfigurationError,
    PaymentLookupError,
    WebhookConfigurationError,
    WebhookSignatureError,
)
from app.modules.orders.utils.money import cents_to_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentRecord:
    """Estado de un PaymentIntent tal como lo reporta el procesador."""

    payment_intent_id: str
    status: str
    amount_minor: int
    currency: str = "usd"
    payment_method_types: Tuple[str, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def captured_amount(self) -> Decimal:
        return cents_to_money(self.amount_minor)

    @property
    def payment_method(self) -> Optional[str]:
        return self.payment_method_types[0] if self.payment_method_types else None

    @classmethod
    def from_stripe(cls, intent: Any) -> "PaymentRecord":
        """Construye el registro desde un PaymentIntent (objeto Stripe o dict)."""
        def _get(key: str, default: Any = None) -> Any:
            try:
                value = intent[key]
            except (KeyError, TypeError):
                return default
            return default if value is None else value

        # amount_received es lo efectivamente capturado; amount si aún no existe
        amount_received = _get("amount_received")
        amount_minor = amount_received if amount_received else _get("amount", 0)

        return cls(
            payment_intent_id=str(_get("id", "")),
            status=str(_get("status", "")),
            amount_minor=int(amount_minor),
            currency=str(_get("currency", "usd")),
            payment_method_types=tuple(_get("payment_method_types", ()) or ()),
            metadata=dict(_get("metadata", {}) or {}),
        )


class PaymentGateway(Protocol):
    """Puerto de consulta de pagos (inyectable en tests)."""

    async def retrieve_payment(self, payment_intent_id: str) -> PaymentRecord: ...


class StripePaymentGateway:
    """Consulta de PaymentIntents contra la API de Stripe."""

    def __init__(self, secret_key: Optional[str], timeout_seconds: float = 10.0):
        self._secret_key = secret_key
        self._timeout = timeout_seconds

    @classmethod
    def from_settings(cls, settings: OrdersSettings) -> "StripePaymentGateway":
        if not settings.stripe_secret_key:
            logger.warning("STRIPE_SECRET_KEY not configured")
        return cls(settings.stripe_secret_key, settings.stripe_timeout_seconds)

    @property
    def is_configured(self) -> bool:
        return bool(self._secret_key)

    async def retrieve_payment(self, payment_intent_id: str) -> PaymentRecord:
        if not self.is_configured:
            raise PaymentConfigurationError("STRIPE_SECRET_KEY is not configured")

        try:
            intent = await asyncio.wait_for(
                run_in_threadpool(
                    stripe.PaymentIntent.retrieve,
                    payment_intent_id,
                    api_key=self._secret_key,
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(
                "Stripe lookup timed out: intent=%s timeout=%.1fs",
                payment_intent_id,
                self._timeout,
            )
            raise PaymentLookupError("Payment processor did not respond in time") from e
        except stripe.StripeError as e:
            logger.warning(
                "Stripe lookup failed: intent=%s error=%s",
                payment_intent_id,
                getattr(e, "user_message", None) or str(e),
            )
            raise PaymentLookupError(f"Unable to retrieve payment {payment_intent_id}") from e

        return PaymentRecord.from_stripe(intent)


def construct_webhook_event(
    payload: bytes, signature: str, secret: str, tolerance: int = 300
) -> Any:
    """Valida Stripe-Signature sobre el payload crudo (lanza errores de stripe)."""
    return stripe.Webhook.construct_event(payload, signature, secret, tolerance=tolerance)


class StripeWebhookVerifier:
    """Verificación de firma Stripe-Signature."""

    def __init__(self, webhook_secret: Optional[str], tolerance_seconds: int = 300):
        self._secret = webhook_secret
        self._tolerance = tolerance_seconds

    @classmethod
    def from_settings(cls, settings: OrdersSettings) -> "StripeWebhookVerifier":
        return cls(settings.stripe_webhook_secret, settings.stripe_webhook_tolerance_seconds)

    def verify(self, payload: bytes, signature: str) -> Dict[str, Any]:
        """
        Verifica la firma y retorna el evento como dict.

        Raises:
            WebhookConfigurationError: si no hay webhook secret configurado
            WebhookSignatureError: firma inválida o payload no es JSON
        """
        if not self._secret:
            raise WebhookConfigurationError("STRIPE_WEBHOOK_SECRET not configured")

        try:
            construct_webhook_event(payload, signature, self._secret, self._tolerance)
        except stripe.SignatureVerificationError as e:
            raise WebhookSignatureError(str(e)) from e
        except ValueError as e:
            raise WebhookSignatureError(f"Invalid payload: {e}") from e

        # La firma ya se validó sobre los bytes crudos; ahora sí se parsea
        try:
            event = json.loads(payload)
        except ValueError as e:
            raise WebhookSignatureError(f"Invalid payload: {e}") from e
        if not isinstance(event, dict):
            raise WebhookSignatureError("Invalid payload: event must be a JSON object")
        return event


__all__ = [
    "PaymentRecord",
    "PaymentGateway",
    "StripePaymentGateway",
    "StripeWebhookVerifier",
    "construct_webhook_event",
]

# Fin del archivo backend/app/modules/orders/providers/stripe_gateway.py
