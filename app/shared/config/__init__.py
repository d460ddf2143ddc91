# -*- coding: utf-8 -*-
"""
backend/app/shared/config/__init__.py

Punto único de acceso a la configuración:
    from app.shared.config import get_settings, get_orders_settings
"""

from .config_loader import get_settings
from .settings_base import BaseAppSettings
from .settings_orders import OrdersSettings, get_orders_settings, reset_orders_settings

__all__ = [
    "get_settings",
    "BaseAppSettings",
    "OrdersSettings",
    "get_orders_settings",
    "reset_orders_settings",
]
# Fin del archivo
