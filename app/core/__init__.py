# -*- coding: utf-8 -*-
"""
backend/app/core/__init__.py

Fachada unificada para componentes centrales del backend:
- Configuración (settings)
- Logging
- Motor de base de datos y sesiones

Esta capa envuelve la implementación existente en `app.shared.*` para
ofrecer puntos de entrada estables hacia el resto de los módulos.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from .settings import get_settings, get_orders_settings
from .logging import setup_logging
from .db import (
    engine,
    SessionLocal,
    Base,
    get_async_session,
    check_database_health,
)

__all__ = [
    "get_settings",
    "get_orders_settings",
    "setup_logging",
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "check_database_health",
]

# Fin del archivo backend/app/core/__init__.py
