# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/base_models.py

Modelo base para esquemas Pydantic del backend de HelldiversBoost.

Incluye:
- Eliminación automática de espacios en campos de texto (`str_strip_whitespace = True`)
- Modo de atributos activado para construir respuestas desde ORM (`from_attributes = True`)
- `populate_by_name` para aceptar tanto el alias camelCase del frontend
  como el nombre snake_case del campo

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UTF8SafeModel(BaseModel):
    """Modelo base con configuración común para requests y responses."""
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


__all__ = ["UTF8SafeModel", "EmailStr", "Field"]
# Fin del archivo backend/app/shared/utils/base_models.py
