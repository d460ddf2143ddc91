# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/__init__.py

Exportación de utilidades comunes.
"""

from .base_models import UTF8SafeModel, EmailStr, Field
from .json_response import UTF8JSONResponse, json_response_utf8

__all__ = [
    "UTF8SafeModel",
    "EmailStr",
    "Field",
    "UTF8JSONResponse",
    "json_response_utf8",
]
