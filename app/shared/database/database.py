# -*- coding: utf-8 -*-
"""
backend/app/shared/database/database.py

SQLAlchemy async (asyncpg en producción, aiosqlite en pruebas).

Provee:
- engine (create_async_engine)
- SessionLocal (async_sessionmaker)
- Base (DeclarativeBase con naming convention)
- Dependencia FastAPI: get_async_session
- check_database_health()

Notas:
- Timeouts a nivel de conexión/consulta para asyncpg (fail-closed ante
  una base de datos lenta).

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.shared.config import get_settings
from app.shared.database.base import Base  # reutilizamos la Base única

logger = logging.getLogger(__name__)

_settings = get_settings()
DATABASE_URL = _settings.database_url
IS_SQLITE = DATABASE_URL.startswith("sqlite")


def _build_engine_kwargs() -> dict:
    """Opciones del engine según el driver."""
    if IS_SQLITE:
        return {"echo": _settings.db_echo_sql}
    return {
        "poolclass": NullPool,
        "echo": _settings.db_echo_sql,
        "connect_args": {
            "timeout": _settings.db_command_timeout_s,          # timeout de conexión
            "command_timeout": _settings.db_command_timeout_s,  # timeout por consulta
            "server_settings": {"search_path": "public"},
        },
    }


engine = create_async_engine(DATABASE_URL, **_build_engine_kwargs())

logger.info(
    "[DB] engine ready driver=%s echo=%s",
    engine.dialect.driver,
    _settings.db_echo_sql,
)

SessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependencia FastAPI: una sesión por request, rollback ante error."""
    async with SessionLocal() as session:
        try:
            yield session
        except SQLAlchemyError:
            # Liberar cualquier transacción/lock antes de propagar
            await session.rollback()
            raise
        finally:
            if session.in_transaction():
                await session.rollback()


async def check_database_health(timeout_s: float = 3.0, sql: str = "SELECT 1") -> bool:
    """
    Verifica conectividad a la base de datos.

    Returns:
        True si la conexión es exitosa, False en caso contrario
    """
    try:
        async with asyncio.timeout(timeout_s):
            async with engine.connect() as conn:
                await conn.execute(text(sql))
        return True
    except (SQLAlchemyError, OSError, TimeoutError) as e:
        logger.warning("[DB] health check failed: %s", e)
        return False


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "check_database_health",
]
# Fin del archivo backend/app/shared/database/database.py
