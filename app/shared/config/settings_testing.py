# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_testing.py

Overrides para entorno de PRUEBAS (test) usando Pydantic v2.
Busca ser determinista: logging moderado, SQLite async aislado,
email en consola y sin Redis (el rate limiter queda fail-open).

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from typing import Optional

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class EnvTestingSettings(BaseAppSettings):
    python_env: str = "test"

    log_level: str = "WARNING"
    log_format: str = "pretty"

    db_url: Optional[str] = "sqlite+aiosqlite:///:memory:"
    redis_url: Optional[str] = None
    email_mode: str = "console"

    model_config = SettingsConfigDict(
        env_file=".env.test",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["EnvTestingSettings"]
# Fin del archivo backend/app/shared/config/settings_testing.py
