# -*- coding: utf-8 -*-
"""
backend/app/routes/__init__.py

Ensamblador principal de ruteadores de la API.

Responsabilidades:
- Incluir el router de health (/health).
- Montar los routers de módulos bajo /api.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from fastapi import APIRouter

from app.modules.orders.routes import orders_router, webhook_router
from .health_routes import router as health_router

router = APIRouter()

# Health check sin prefijo adicional
router.include_router(health_router)

api = APIRouter(prefix="/api")
api.include_router(orders_router)
api.include_router(webhook_router)

router.include_router(api)

__all__ = ["router"]

# Fin del archivo backend/app/routes/__init__.py
