# -*- coding: utf-8 -*-
"""
backend/tests/modules/orders/test_status_machine.py

Transiciones de estado de órdenes e historial sin duplicados.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

import pytest

from app.modules.orders.enums import OrderStatus
from app.modules.orders.models import Order
from app.modules.orders.services.status_machine import (
    append_status_history,
    apply_status,
    can_transition,
)


def _order(status: OrderStatus) -> Order:
    return Order(
        id="order-1",
        payment_intent_id="pi_1",
        status=status.value,
        status_history=[],
        confirmed_at=None,
    )


def test_pending_to_confirmed_sets_confirmed_at():
    order = _order(OrderStatus.PENDING)
    assert apply_status(order, OrderStatus.CONFIRMED, "Payment succeeded") is True
    assert order.status == "confirmed"
    assert order.confirmed_at is not None
    assert order.status_history[-1]["status"] == "confirmed"
    assert order.status_history[-1]["description"] == "Payment succeeded"


def test_same_status_is_noop():
    order = _order(OrderStatus.CONFIRMED)
    assert apply_status(order, OrderStatus.CONFIRMED, "again") is False
    assert order.status_history == []


@pytest.mark.parametrize("terminal", [OrderStatus.COMPLETED, OrderStatus.CANCELLED, OrderStatus.FAILED])
def test_terminal_states_have_no_exits(terminal):
    assert terminal.is_terminal
    for target in OrderStatus:
        assert can_transition(terminal, target) is False


def test_disallowed_transition_is_skipped():
    order = _order(OrderStatus.IN_PROGRESS)
    assert apply_status(order, OrderStatus.PENDING, "Payment requires customer action") is False
    assert order.status == "in_progress"


def test_history_does_not_repeat_last_entry():
    history = append_status_history([], OrderStatus.PROCESSING, "Payment processing")
    history = append_status_history(history, OrderStatus.PROCESSING, "Payment processing")
    assert len(history) == 1

    history = append_status_history(history, OrderStatus.CONFIRMED, "Payment succeeded")
    assert [h["status"] for h in history] == ["processing", "confirmed"]


def test_history_returns_new_list():
    original = []
    updated = append_status_history(original, OrderStatus.PENDING, "created")
    assert original == []
    assert len(updated) == 1

# Fin del archivo backend/tests/modules/orders/test_status_machine.py
