# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/_helpers.py

Defaults comunes de columnas (ids uuid4 en texto y timestamps UTC).
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def new_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)

# Fin del archivo backend/app/modules/orders/models/_helpers.py
