# -*- coding: utf-8 -*-
"""
backend/tests/modules/orders/test_webhook_routes.py

Suite: Webhook Stripe
Ruta objetivo:
  - POST /api/stripe/webhook
Propósito:
  - Verificación de firma real (stripe.Webhook.construct_event) con un
    secreto de prueba
  - 400 sin header o con firma inválida, 500 sin secreto configurado,
    413 con body demasiado grande
  - Reconciliación idempotente ante reentregas

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from decimal import Decimal
from http import HTTPStatus

import pytest
from sqlalchemy import select

from app.shared.config import reset_orders_settings
from app.modules.orders.dependencies import get_webhook_reconciler, get_webhook_verifier
from app.modules.orders.errors import OrderStorageError
from app.modules.orders.models import Order
from app.modules.orders.providers.stripe_gateway import StripeWebhookVerifier
from app.modules.orders.utils.order_number import generate_order_number
from tests.helpers import sign_webhook, stripe_event

WEBHOOK_URL = "/api/stripe/webhook"


async def _pending_order(session_factory, intent: str) -> str:
    async with session_factory() as session:
        order = Order(
            order_number=generate_order_number(),
            customer_email="diver@example.com",
            customer_name="Helldiver One",
            items=[],
            price_breakdown={},
            subtotal=Decimal("100.00"),
            total_amount=Decimal("108.00"),
            status="pending",
            payment_status="pending",
            payment_intent_id=intent,
            status_history=[],
        )
        session.add(order)
        await session.commit()
        return order.id


async def _load(session_factory, order_id: str) -> Order:
    async with session_factory() as session:
        return (await session.execute(select(Order).where(Order.id == order_id))).scalar_one()


@pytest.mark.asyncio
async def test_missing_signature_header(async_client):
    r = await async_client.post(WEBHOOK_URL, content=stripe_event("payment_intent.succeeded", "pi_1"))

    assert r.status_code == HTTPStatus.BAD_REQUEST
    assert r.json()["code"] == "MISSING_SIGNATURE"


@pytest.mark.asyncio
async def test_invalid_signature(async_client):
    payload = stripe_event("payment_intent.succeeded", "pi_1")

    r = await async_client.post(
        WEBHOOK_URL,
        content=payload,
        headers={"Stripe-Signature": sign_webhook(payload, secret="whsec_wrong")},
    )

    assert r.status_code == HTTPStatus.BAD_REQUEST
    assert r.json()["code"] == "INVALID_SIGNATURE"


@pytest.mark.asyncio
async def test_webhook_secret_not_configured(app, async_client):
    app.dependency_overrides[get_webhook_verifier] = lambda: StripeWebhookVerifier(None)
    payload = stripe_event("payment_intent.succeeded", "pi_1")

    r = await async_client.post(WEBHOOK_URL, content=payload, headers={"Stripe-Signature": sign_webhook(payload)})

    assert r.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert r.json()["code"] == "WEBHOOK_NOT_CONFIGURED"


@pytest.mark.asyncio
async def test_oversized_body_is_rejected(async_client, monkeypatch):
    monkeypatch.setenv("WEBHOOK_MAX_BODY_BYTES", "64")
    reset_orders_settings()
    payload = stripe_event("payment_intent.succeeded", "pi_big", description="x" * 200)

    r = await async_client.post(WEBHOOK_URL, content=payload, headers={"Stripe-Signature": sign_webhook(payload)})

    assert r.status_code == HTTPStatus.REQUEST_ENTITY_TOO_LARGE
    assert r.json()["code"] == "PAYLOAD_TOO_LARGE"


@pytest.mark.asyncio
async def test_succeeded_event_confirms_order(async_client, session_factory):
    order_id = await _pending_order(session_factory, "pi_hook")
    payload = stripe_event("payment_intent.succeeded", "pi_hook", event_id="evt_hook_1")

    r = await async_client.post(WEBHOOK_URL, content=payload, headers={"Stripe-Signature": sign_webhook(payload)})

    assert r.status_code == HTTPStatus.OK, r.text
    body = r.json()
    assert body["received"] is True
    assert body["eventId"] == "evt_hook_1"
    assert body["eventType"] == "payment_intent.succeeded"
    assert isinstance(body["processingTime"], int)

    order = await _load(session_factory, order_id)
    assert order.status == "confirmed"
    assert order.payment_status == "paid"


@pytest.mark.asyncio
async def test_redelivery_does_not_duplicate_history(async_client, session_factory):
    order_id = await _pending_order(session_factory, "pi_again")
    payload = stripe_event("payment_intent.succeeded", "pi_again")
    headers = {"Stripe-Signature": sign_webhook(payload)}

    first = await async_client.post(WEBHOOK_URL, content=payload, headers=headers)
    history_after_first = (await _load(session_factory, order_id)).status_history
    second = await async_client.post(WEBHOOK_URL, content=payload, headers=headers)

    assert first.status_code == second.status_code == HTTPStatus.OK
    assert (await _load(session_factory, order_id)).status_history == history_after_first


@pytest.mark.asyncio
async def test_unhandled_event_is_acknowledged(async_client):
    payload = stripe_event("customer.created", "cus_1")

    r = await async_client.post(WEBHOOK_URL, content=payload, headers={"Stripe-Signature": sign_webhook(payload)})

    assert r.status_code == HTTPStatus.OK
    assert r.json()["eventType"] == "customer.created"


class _BrokenReconciler:
    async def handle_event(self, session, event):
        raise OrderStorageError("Failed to update order status")


@pytest.mark.asyncio
async def test_storage_failure_returns_500_for_retry(app, async_client):
    app.dependency_overrides[get_webhook_reconciler] = lambda: _BrokenReconciler()
    payload = stripe_event("payment_intent.succeeded", "pi_retry")

    r = await async_client.post(WEBHOOK_URL, content=payload, headers={"Stripe-Signature": sign_webhook(payload)})

    assert r.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert r.json()["code"] == "STORAGE_ERROR"

# Fin del archivo backend/tests/modules/orders/test_webhook_routes.py
