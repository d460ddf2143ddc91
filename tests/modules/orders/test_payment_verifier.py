# -*- coding: utf-8 -*-
"""
backend/tests/modules/orders/test_payment_verifier.py

Tests de PaymentVerifier contra un gateway falso.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from decimal import Decimal

import pytest

from app.modules.orders.errors import (
    PaymentAmountMismatchError,
    PaymentLookupError,
    PaymentNotCompletedError,
)
from app.modules.orders.services.payment_verifier import PaymentVerifier
from tests.helpers import FakePaymentGateway


@pytest.fixture
def gateway():
    return FakePaymentGateway()


@pytest.mark.asyncio
async def test_succeeded_payment_with_matching_amount(gateway):
    gateway.add("pi_ok", Decimal("108.00"))
    record = await PaymentVerifier(gateway).verify("pi_ok", Decimal("108.00"))
    assert record.captured_amount == Decimal("108.00")
    assert record.payment_method == "card"


@pytest.mark.asyncio
async def test_amount_within_one_cent_is_accepted(gateway):
    gateway.add("pi_cent", Decimal("108.01"))
    record = await PaymentVerifier(gateway).verify("pi_cent", Decimal("108.00"))
    assert record.payment_intent_id == "pi_cent"


@pytest.mark.asyncio
async def test_amount_mismatch(gateway):
    gateway.add("pi_low", Decimal("1.08"))
    with pytest.raises(PaymentAmountMismatchError) as exc_info:
        await PaymentVerifier(gateway).verify("pi_low", Decimal("108.00"))
    assert exc_info.value.expected == Decimal("108.00")
    assert exc_info.value.captured == Decimal("1.08")


@pytest.mark.asyncio
async def test_currency_mismatch(gateway):
    gateway.add("pi_eur", Decimal("108.00"), currency="eur")
    with pytest.raises(PaymentAmountMismatchError):
        await PaymentVerifier(gateway).verify("pi_eur", Decimal("108.00"))


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["requires_payment_method", "processing", "canceled"])
async def test_payment_not_completed(gateway, status):
    gateway.add("pi_pending", Decimal("108.00"), status=status)
    with pytest.raises(PaymentNotCompletedError) as exc_info:
        await PaymentVerifier(gateway).verify("pi_pending", Decimal("108.00"))
    assert exc_info.value.status == status


@pytest.mark.asyncio
async def test_lookup_error_propagates(gateway):
    with pytest.raises(PaymentLookupError):
        await PaymentVerifier(gateway).verify("pi_missing", Decimal("108.00"))

# Fin del archivo backend/tests/modules/orders/test_payment_verifier.py
