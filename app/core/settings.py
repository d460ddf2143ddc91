# -*- coding: utf-8 -*-
"""
backend/app/core/settings.py

Fachada de configuración.
Reexpone la carga de settings basada en Pydantic v2 definida en
`app.shared.config`.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from app.shared.config.config_loader import get_settings as _get_settings
from app.shared.config.settings_base import BaseAppSettings
from app.shared.config.settings_orders import get_orders_settings


def get_settings() -> BaseAppSettings:
    """
    Devuelve la configuración global de la aplicación (según PYTHON_ENV).
    """
    return _get_settings()


__all__ = ["get_settings", "get_orders_settings"]

# Fin del archivo backend/app/core/settings.py
