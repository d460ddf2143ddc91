# -*- coding: utf-8 -*-
"""
backend/tests/modules/orders/test_discount_service.py

Tests de DiscountService: códigos promo/referido, impuesto, créditos y
cargo mínimo.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.modules.orders.enums import CodeKind, DiscountType
from app.modules.orders.errors import (
    InsufficientCreditsError,
    InvalidPromoCodeError,
    OrderValidationError,
)
from app.modules.orders.models import PromoCode
from app.modules.orders.services.discount_service import DiscountService


@pytest.mark.asyncio
async def test_breakdown_without_code(db_session):
    b = await DiscountService().build_breakdown(db_session, Decimal("100.00"))
    assert b.discount_amount == Decimal("0.00")
    assert b.tax_amount == Decimal("8.00")
    assert b.total_amount == Decimal("108.00")
    assert b.minimum_charge_applied is False


@pytest.mark.asyncio
async def test_tax_is_applied_after_discount(db_session, promo_codes):
    b = await DiscountService().build_breakdown(db_session, Decimal("100"), code="LIMITED")
    assert b.discount_amount == Decimal("20.00")
    assert b.tax_amount == Decimal("6.40")
    assert b.total_amount == Decimal("86.40")
    assert b.code.kind == CodeKind.PROMO


@pytest.mark.asyncio
async def test_minimum_charge(db_session):
    b = await DiscountService().build_breakdown(db_session, Decimal("0.10"))
    assert b.tax_amount == Decimal("0.01")
    assert b.total_amount == Decimal("0.50")
    assert b.minimum_charge_applied is True
    assert b.to_snapshot()["minimumChargeApplied"] is True


@pytest.mark.asyncio
async def test_promo_lookup_is_case_insensitive(db_session, promo_codes):
    b = await DiscountService().build_breakdown(db_session, Decimal("100"), code="  save10 ")
    assert b.discount_amount == Decimal("10.00")
    assert b.code.code == "SAVE10"


@pytest.mark.asyncio
async def test_fixed_discount_capped_at_subtotal(db_session, promo_codes):
    b = await DiscountService().build_breakdown(db_session, Decimal("3.00"), code="FIVEOFF")
    assert b.discount_amount == Decimal("3.00")
    assert b.code.discount_type == DiscountType.FIXED_AMOUNT
    assert b.tax_amount == Decimal("0.00")
    assert b.total_amount == Decimal("0.50")


@pytest.mark.asyncio
@pytest.mark.parametrize("code", ["USEDUP", "OFF", "NOPE"])
async def test_unusable_codes_are_rejected(db_session, promo_codes, code):
    with pytest.raises(InvalidPromoCodeError):
        await DiscountService().build_breakdown(db_session, Decimal("100"), code=code)


@pytest.mark.asyncio
async def test_expired_code_is_rejected(db_session):
    db_session.add(
        PromoCode(
            code="OLD",
            discount_type="percentage",
            discount_value=Decimal("50"),
            expires_at=datetime.now(timezone.utc) - timedelta(days=1),
        )
    )
    await db_session.commit()

    with pytest.raises(InvalidPromoCodeError) as exc_info:
        await DiscountService().build_breakdown(db_session, Decimal("100"), code="OLD")
    assert "expired" in exc_info.value.details


@pytest.mark.asyncio
async def test_referral_code_discount(db_session, profile):
    b = await DiscountService().build_breakdown(
        db_session, Decimal("100"), code="diver1", user_id="someone-else"
    )
    assert b.discount_amount == Decimal("15.00")
    assert b.code.kind == CodeKind.REFERRAL
    assert b.code.referrer_user_id == "user-1"
    assert b.total_amount == Decimal("91.80")


@pytest.mark.asyncio
async def test_self_referral_is_rejected(db_session, profile):
    with pytest.raises(InvalidPromoCodeError):
        await DiscountService().build_breakdown(
            db_session, Decimal("100"), code="DIVER1", user_id="user-1"
        )


@pytest.mark.asyncio
async def test_credits_reduce_total(db_session, profile):
    b = await DiscountService().build_breakdown(
        db_session, Decimal("100"), user_id="user-1", requested_credits=Decimal("5")
    )
    assert b.credits_applied == Decimal("5.00")
    assert b.total_amount == Decimal("103.00")


@pytest.mark.asyncio
async def test_insufficient_credits(db_session, profile):
    with pytest.raises(InsufficientCreditsError) as exc_info:
        await DiscountService().build_breakdown(
            db_session, Decimal("100"), user_id="user-1", requested_credits=Decimal("50")
        )
    assert exc_info.value.requested == Decimal("50.00")
    assert exc_info.value.available == Decimal("10.00")


@pytest.mark.asyncio
async def test_credits_above_order_total_are_rejected(db_session, rich_profile):
    with pytest.raises(InsufficientCreditsError):
        await DiscountService().build_breakdown(
            db_session, Decimal("10"), user_id="user-rich", requested_credits=Decimal("20")
        )


@pytest.mark.asyncio
async def test_credits_require_user(db_session):
    with pytest.raises(OrderValidationError):
        await DiscountService().build_breakdown(
            db_session, Decimal("100"), requested_credits=Decimal("5")
        )


@pytest.mark.asyncio
async def test_credits_only_covers_full_total(db_session, rich_profile):
    b = await DiscountService().build_breakdown(
        db_session, Decimal("100"), user_id="user-rich", credits_only=True
    )
    assert b.credits_applied == Decimal("108.00")
    assert b.total_amount == Decimal("0")
    assert b.minimum_charge_applied is False


@pytest.mark.asyncio
async def test_credits_only_with_low_balance(db_session, profile):
    with pytest.raises(InsufficientCreditsError):
        await DiscountService().build_breakdown(
            db_session, Decimal("100"), user_id="user-1", credits_only=True
        )

# Fin del archivo backend/tests/modules/orders/test_discount_service.py
