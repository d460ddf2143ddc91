# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/utils/__init__.py
"""

from .money import CENT, ZERO, to_decimal, to_money, cents_to_money, money_str
from .order_number import generate_order_number, ORDER_NUMBER_RE

__all__ = [
    "CENT",
    "ZERO",
    "to_decimal",
    "to_money",
    "cents_to_money",
    "money_str",
    "generate_order_number",
    "ORDER_NUMBER_RE",
]
