# -*- coding: utf-8 -*-
"""
backend/app/shared/database/repository.py

Repositorio base para operaciones async con SQLAlchemy.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")  # modelo ORM


class BaseRepository(Generic[T]):
    """Repositorio asincrónico base; la sesión siempre llega como primer argumento."""

    def __init__(self, model: Type[T]):
        self.model = model

    async def get(self, session: AsyncSession, obj_id: Any) -> Optional[T]:
        return await session.get(self.model, obj_id)

    async def create(self, session: AsyncSession, **kwargs) -> T:
        obj = self.model(**kwargs)
        session.add(obj)
        await session.flush()
        return obj

# Fin del archivo backend/app/shared/database/repository.py
