# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/utils/money.py

Helpers monetarios: todo el pipeline trabaja con Decimal redondeado a
centavos (ROUND_HALF_UP), nunca con float.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Any

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: Any) -> Decimal:
    """Convierte int/float/str/Decimal a Decimal sin pasar por la representación binaria."""
    if isinstance(value, Decimal):
        return value
    if value is None:
        return ZERO
    return Decimal(str(value))


def to_money(value: Any) -> Decimal:
    """Redondea a centavos con ROUND_HALF_UP."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def cents_to_money(amount_minor: int) -> Decimal:
    """Convierte unidades menores (centavos) a dólares."""
    return (Decimal(int(amount_minor)) / Decimal(100)).quantize(CENT)


def money_str(value: Any) -> str:
    """Representación estable para snapshots JSON ("86.40")."""
    return str(to_money(value))


__all__ = ["CENT", "ZERO", "to_decimal", "to_money", "cents_to_money", "money_str"]

# Fin del archivo backend/app/modules/orders/utils/money.py
