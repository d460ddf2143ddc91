# -*- coding: utf-8 -*-
"""
backend/tests/modules/orders/test_notifications.py

OrderNotifier: el email es best-effort y nunca rompe la creación.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from decimal import Decimal

import pytest

from app.shared.config.settings_orders import OrdersSettings
from app.modules.orders.models import Order
from app.modules.orders.services.notifications import OrderNotifier
from tests.helpers import RecordingEmailSender


def _order() -> Order:
    return Order(
        order_number="ORD-1760000000000-ABC123",
        customer_email="diver@example.com",
        customer_name="Helldiver One",
        items=[{"id": "svc_level", "name": "Level Boost", "quantity": 1,
                "unitPrice": "100.00", "totalPrice": "100.00"}],
        total_amount=Decimal("98.00"),
        credits_used=Decimal("10.00"),
    )


@pytest.mark.asyncio
async def test_sends_confirmation_with_full_order_total():
    sender = RecordingEmailSender()

    await OrderNotifier(sender).notify_order_created(_order())

    assert len(sender.sent) == 1
    sent = sender.sent[0]
    assert sent["to_email"] == "diver@example.com"
    assert sent["total"] == Decimal("108.00")
    assert sent["items"][0] == {"name": "Level Boost", "quantity": 1, "price": "100.00", "total": "100.00"}


@pytest.mark.asyncio
async def test_email_failure_is_logged_not_raised(caplog):
    sender = RecordingEmailSender(fail=True)

    with caplog.at_level("WARNING"):
        await OrderNotifier(sender).notify_order_created(_order())

    assert "Order confirmation email failed" in caplog.text


@pytest.mark.asyncio
async def test_disabled_by_settings():
    sender = RecordingEmailSender()

    await OrderNotifier(sender, OrdersSettings(send_order_confirmation_email=False)).notify_order_created(_order())

    assert sender.sent == []

# Fin del archivo backend/tests/modules/orders/test_notifications.py
