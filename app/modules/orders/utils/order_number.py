# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/utils/order_number.py

Generación de números de orden legibles: ORD-<unix-ms>-<6 alfanuméricos>.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

import re
import secrets
import string
import time
from typing import Optional

_ALPHABET = string.ascii_uppercase + string.digits
_SUFFIX_LEN = 6

ORDER_NUMBER_RE = re.compile(r"^ORD-\d{13,}-[A-Z0-9]{6}$")


def generate_order_number(now_ms: Optional[int] = None) -> str:
    ts = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(_SUFFIX_LEN))
    return f"ORD-{ts}-{suffix}"


__all__ = ["generate_order_number", "ORDER_NUMBER_RE"]

# Fin del archivo backend/app/modules/orders/utils/order_number.py
