# -*- coding: utf-8 -*-
"""
backend/app/core/db.py

Fachada para la capa de acceso a datos basada en SQLAlchemy async.
Envuelve el módulo `app.shared.database.database`.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from app.shared.database.database import (
    engine,
    SessionLocal,
    Base,
    get_async_session,
    check_database_health,
)


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "check_database_health",
]

# Fin del archivo backend/app/core/db.py
