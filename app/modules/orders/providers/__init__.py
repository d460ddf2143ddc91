# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/providers/__init__.py

Proveedores externos del módulo de órdenes (Stripe).
"""

from .stripe_gateway import (
    PaymentRecord,
    PaymentGateway,
    StripePaymentGateway,
    StripeWebhookVerifier,
    construct_webhook_event,
)

__all__ = [
    "PaymentRecord",
    "PaymentGateway",
    "StripePaymentGateway",
    "StripeWebhookVerifier",
    "construct_webhook_event",
]
