# -*- coding: utf-8 -*-
"""
backend/tests/modules/orders/test_order_pipeline.py

Tests del orquestador OrderPipeline (sin HTTP).

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.modules.orders.errors import InvalidLineItemError, PaymentAmountMismatchError
from app.modules.orders.models import Order
from app.modules.orders.repositories import ProfileRepository
from app.modules.orders.schemas.order_request_schemas import OrderDataIn
from app.modules.orders.services import (
    CREDITS_INTENT_PREFIX,
    DiscountService,
    OrderPipeline,
    OrderWriter,
    PaymentVerifier,
    PricingService,
)
from tests.helpers import FakePaymentGateway, order_data


def _pipeline(gateway: FakePaymentGateway) -> OrderPipeline:
    return OrderPipeline(
        pricing=PricingService(),
        discounts=DiscountService(),
        verifier=PaymentVerifier(gateway),
        writer=OrderWriter(),
    )


@pytest.mark.asyncio
async def test_verify_and_create_builds_order_from_catalog(db_session, catalog):
    gateway = FakePaymentGateway()
    gateway.add("pi_1", Decimal("108.00"))

    result = await _pipeline(gateway).verify_and_create(
        db_session, "pi_1", OrderDataIn.model_validate(order_data(ipAddress="203.0.113.9"))
    )

    order = result.order
    assert result.duplicate is False
    assert order.total_amount == Decimal("108.00")
    assert order.order_type == "standard"
    assert order.payment_method == "card"
    assert order.order_metadata["source"] == "verify-and-create"
    assert order.order_metadata["ipAddress"] == "203.0.113.9"


@pytest.mark.asyncio
async def test_replay_after_credits_spent_returns_original(db_session, catalog, profile):
    gateway = FakePaymentGateway()
    gateway.add("pi_credit", Decimal("98.00"))
    pipeline = _pipeline(gateway)
    data = OrderDataIn.model_validate(order_data(userId="user-1", creditsUsed=10))

    first = await pipeline.verify_and_create(db_session, "pi_credit", data)
    assert await ProfileRepository().get_credit_balance(db_session, "user-1") == Decimal("0.00")

    # El saldo ya no alcanza; el replay debe devolver la orden original
    second = await pipeline.verify_and_create(db_session, "pi_credit", data)

    assert second.duplicate is True
    assert second.order.id == first.order.id
    assert gateway.calls == ["pi_credit"]


@pytest.mark.asyncio
async def test_tampered_client_price_is_rejected(db_session, catalog):
    gateway = FakePaymentGateway()
    gateway.add("pi_cheap", Decimal("1.08"))
    data = OrderDataIn.model_validate(
        order_data(items=[{"id": "svc_level", "quantity": 1, "unitPrice": 1}])
    )

    with pytest.raises(PaymentAmountMismatchError):
        await _pipeline(gateway).verify_and_create(db_session, "pi_cheap", data)

    stmt = select(func.count()).select_from(Order).where(Order.payment_intent_id == "pi_cheap")
    assert (await db_session.execute(stmt)).scalar_one() == 0


@pytest.mark.asyncio
async def test_invalid_items_fail_before_payment_lookup(db_session, catalog):
    gateway = FakePaymentGateway()
    data = OrderDataIn.model_validate(order_data(items=[{"id": "ghost"}]))

    with pytest.raises(InvalidLineItemError):
        await _pipeline(gateway).verify_and_create(db_session, "pi_ghost", data)
    assert gateway.calls == []


@pytest.mark.asyncio
async def test_credits_only_order(db_session, catalog, rich_profile):
    pipeline = _pipeline(FakePaymentGateway())
    data = OrderDataIn.model_validate(order_data(userId="user-rich"))

    result = await pipeline.create_credits_only(db_session, data, idempotency_key="key-1")

    order = result.order
    assert order.payment_intent_id == CREDITS_INTENT_PREFIX + "key-1"
    assert order.payment_method == "credits"
    assert order.total_amount == Decimal("0.00")
    assert order.credits_used == Decimal("108.00")
    assert order.status_history[0]["description"] == "Order paid with account credits"
    assert await ProfileRepository().get_credit_balance(db_session, "user-rich") == Decimal("392.00")

    again = await pipeline.create_credits_only(db_session, data, idempotency_key="key-1")
    assert again.duplicate is True
    assert await ProfileRepository().get_credit_balance(db_session, "user-rich") == Decimal("392.00")


@pytest.mark.asyncio
async def test_credits_only_without_key_generates_intent(db_session, catalog, rich_profile):
    pipeline = _pipeline(FakePaymentGateway())
    data = OrderDataIn.model_validate(order_data(userId="user-rich"))

    result = await pipeline.create_credits_only(db_session, data)

    assert result.order.payment_intent_id.startswith(CREDITS_INTENT_PREFIX)
    assert len(result.order.payment_intent_id) > len(CREDITS_INTENT_PREFIX)


@pytest.mark.asyncio
async def test_get_by_payment_intent(db_session, catalog):
    gateway = FakePaymentGateway()
    gateway.add("pi_lookup", Decimal("108.00"))
    pipeline = _pipeline(gateway)
    created = await pipeline.verify_and_create(
        db_session, "pi_lookup", OrderDataIn.model_validate(order_data())
    )

    found = await pipeline.get_by_payment_intent(db_session, "pi_lookup")
    assert found.id == created.order.id
    assert await pipeline.get_by_payment_intent(db_session, "pi_unknown") is None

# Fin del archivo backend/tests/modules/orders/test_order_pipeline.py
