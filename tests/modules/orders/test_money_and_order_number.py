# -*- coding: utf-8 -*-
"""
backend/tests/modules/orders/test_money_and_order_number.py

Redondeo monetario y formato de número de orden.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from decimal import Decimal

from app.modules.orders.utils.money import cents_to_money, money_str, to_decimal, to_money
from app.modules.orders.utils.order_number import ORDER_NUMBER_RE, generate_order_number


def test_to_money_rounds_half_up():
    assert to_money(Decimal("0.125")) == Decimal("0.13")
    assert to_money(Decimal("6.4049")) == Decimal("6.40")
    assert to_money("86.395") == Decimal("86.40")


def test_to_decimal_avoids_float_artifacts():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(None) == Decimal("0.00")


def test_cents_to_money():
    assert cents_to_money(8640) == Decimal("86.40")
    assert cents_to_money(50) == Decimal("0.50")


def test_money_str_is_two_decimals():
    assert money_str(108) == "108.00"
    assert money_str(Decimal("3.7500")) == "3.75"


def test_order_number_format():
    number = generate_order_number(now_ms=1760000000000)
    assert number.startswith("ORD-1760000000000-")
    assert ORDER_NUMBER_RE.match(number)


def test_order_numbers_are_distinct():
    numbers = {generate_order_number() for _ in range(50)}
    assert len(numbers) == 50
    assert all(ORDER_NUMBER_RE.match(n) for n in numbers)

# Fin del archivo backend/tests/modules/orders/test_money_and_order_number.py
