# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/dependencies.py

Dependencias FastAPI del módulo de órdenes.

Los clientes externos (Stripe, email) se construyen desde settings y se
inyectan; los tests los reemplazan con app.dependency_overrides.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

from fastapi import Depends

from app.shared.config import get_settings, get_orders_settings
from app.shared.integrations.email_sender import EmailSender, IEmailSender
from app.modules.orders.providers.stripe_gateway import (
    PaymentGateway,
    StripePaymentGateway,
    StripeWebhookVerifier,
)
from app.modules.orders.services import (
    DiscountService,
    OrderNotifier,
    OrderPipeline,
    OrderWriter,
    PaymentVerifier,
    PricingService,
    WebhookReconciler,
)


def get_payment_gateway() -> PaymentGateway:
    return StripePaymentGateway.from_settings(get_orders_settings())


def get_webhook_verifier() -> StripeWebhookVerifier:
    return StripeWebhookVerifier.from_settings(get_orders_settings())


def get_email_sender() -> IEmailSender:
    return EmailSender.from_settings(get_settings())


def get_order_notifier(
    email_sender: IEmailSender = Depends(get_email_sender),
) -> OrderNotifier:
    return OrderNotifier(email_sender, get_orders_settings())


def get_order_pipeline(
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> OrderPipeline:
    settings = get_orders_settings()
    return OrderPipeline(
        pricing=PricingService(settings=settings),
        discounts=DiscountService(settings=settings),
        verifier=PaymentVerifier(gateway, settings),
        writer=OrderWriter(),
        settings=settings,
    )


def get_webhook_reconciler() -> WebhookReconciler:
    return WebhookReconciler()


__all__ = [
    "get_payment_gateway",
    "get_webhook_verifier",
    "get_email_sender",
    "get_order_notifier",
    "get_order_pipeline",
    "get_webhook_reconciler",
]

# Fin del archivo backend/app/modules/orders/dependencies.py
