# -*- coding: utf-8 -*-
"""
backend/app/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

from .database import (
    engine,
    SessionLocal,
    get_async_session,
    check_database_health,
)
from .base import Base, NAMING_CONVENTION, MoneyType, JSONType

__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "NAMING_CONVENTION",
    "MoneyType",
    "JSONType",
    "get_async_session",
    "check_database_health",
]

# Fin del archivo backend/app/shared/database/__init__.py
