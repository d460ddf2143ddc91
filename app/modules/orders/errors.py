# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/errors.py

Errores de dominio del pipeline de verificación y creación de órdenes.

Objetivo:
- Definir excepciones semánticas que los servicios lanzan sin acoplarse
  a FastAPI.
- Cada clase declara su status HTTP y un `code` estable; el handler de
  rutas las traduce a {error, details, code, timestamp}.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional


class OrderPipelineError(Exception):
    """
    Error base del pipeline de órdenes.
    """

    status_code: int = 400
    code: str = "ORDER_ERROR"
    error: str = "Order could not be processed"

    def __init__(self, details: Optional[str] = None) -> None:
        self.details = details or self.error
        super().__init__(self.details)


class OrderValidationError(OrderPipelineError):
    """Request con forma o datos inválidos."""

    code = "VALIDATION_ERROR"
    error = "Invalid order data"


class InvalidLineItemError(OrderPipelineError):
    """
    Uno o más items no existen en el catálogo o no se pueden comprar.
    """

    code = "INVALID_LINE_ITEM"
    error = "Invalid line items"

    def __init__(self, item_ids: Iterable[str], details: Optional[str] = None) -> None:
        self.item_ids = list(item_ids)
        super().__init__(
            details or f"Invalid or unavailable items: {', '.join(self.item_ids)}"
        )


class InvalidPromoCodeError(OrderPipelineError):
    """Código promocional/referido inexistente, expirado o agotado."""

    code = "INVALID_PROMO_CODE"
    error = "Invalid promo code"


class InsufficientCreditsError(OrderPipelineError):
    """
    Los créditos solicitados superan lo aplicable (saldo o total de la orden).
    """

    code = "INSUFFICIENT_CREDITS"
    error = "Insufficient credits"

    def __init__(
        self,
        requested: Decimal,
        available: Decimal,
        details: Optional[str] = None,
    ) -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            details or f"Requested {requested} credits but only {available} can be applied"
        )


class PaymentLookupError(OrderPipelineError):
    """No se pudo consultar el pago en el procesador (red, timeout, no encontrado)."""

    code = "PAYMENT_LOOKUP_FAILED"
    error = "Payment verification failed"


class PaymentNotCompletedError(OrderPipelineError):
    """El PaymentIntent no está en estado succeeded."""

    code = "PAYMENT_NOT_COMPLETED"
    error = "Payment not completed"

    def __init__(self, status: str, details: Optional[str] = None) -> None:
        self.status = status
        super().__init__(details or f"Payment status is '{status}'")


class PaymentAmountMismatchError(OrderPipelineError):
    """El monto capturado no coincide con el total calculado en servidor."""

    code = "PAYMENT_AMOUNT_MISMATCH"
    error = "Payment amount mismatch"

    def __init__(
        self,
        expected: Decimal,
        captured: Decimal,
        details: Optional[str] = None,
    ) -> None:
        self.expected = expected
        self.captured = captured
        super().__init__(
            details or f"Expected {expected} but payment captured {captured}"
        )


class PaymentConfigurationError(OrderPipelineError):
    """El procesador de pagos no está configurado en este entorno."""

    status_code = 500
    code = "PAYMENT_NOT_CONFIGURED"
    error = "Payment processor not configured"


class OrderStorageError(OrderPipelineError):
    """
    Fallo de almacenamiento (no de unicidad) al consultar o insertar la orden.
    """

    status_code = 500
    code = "STORAGE_ERROR"
    error = "Failed to create order"


class CatalogUnavailableError(OrderPipelineError):
    """El catálogo no respondió a tiempo; se rechaza la orden (fail-closed)."""

    status_code = 500
    code = "CATALOG_UNAVAILABLE"
    error = "Catalog unavailable"


class WebhookConfigurationError(Exception):
    """STRIPE_WEBHOOK_SECRET no configurado."""


class WebhookSignatureError(Exception):
    """Firma inválida o payload ilegible."""


__all__ = [
    "OrderPipelineError",
    "OrderValidationError",
    "InvalidLineItemError",
    "InvalidPromoCodeError",
    "InsufficientCreditsError",
    "PaymentLookupError",
    "PaymentNotCompletedError",
    "PaymentAmountMismatchError",
    "PaymentConfigurationError",
    "OrderStorageError",
    "CatalogUnavailableError",
    "WebhookConfigurationError",
    "WebhookSignatureError",
]

# Fin del archivo backend/app/modules/orders/errors.py
