# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/routes/__init__.py

Routers del módulo de órdenes.
"""

from .order_routes import router as orders_router
from .webhook_routes import router as webhook_router
from .error_handlers import register_exception_handlers

__all__ = ["orders_router", "webhook_router", "register_exception_handlers"]
