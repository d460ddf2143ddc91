# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/repositories/promo_repository.py

Repositorio para la tabla promo_codes.

Responsabilidades:
- Búsqueda case-insensitive por código
- Incremento atómico de usos respetando max_uses

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from typing import Optional

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.orders.models.promo_models import PromoCode


class PromoCodeRepository(BaseRepository[PromoCode]):
    def __init__(self) -> None:
        super().__init__(PromoCode)

    async def get_by_code(self, session: AsyncSession, code: str) -> Optional[PromoCode]:
        stmt = select(PromoCode).where(func.upper(PromoCode.code) == code.strip().upper())
        result = await session.execute(stmt)
        return result.scalars().first()

    async def increment_usage(self, session: AsyncSession, promo_id: str) -> bool:
        """
        Incrementa current_uses solo si quedan usos disponibles.

        Returns:
            True si se registró el uso, False si el código ya estaba agotado.
        """
        stmt = (
            update(PromoCode)
            .where(
                PromoCode.id == promo_id,
                or_(
                    PromoCode.max_uses.is_(None),
                    PromoCode.current_uses < PromoCode.max_uses,
                ),
            )
            .values(current_uses=PromoCode.current_uses + 1)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount == 1

# Fin del archivo backend/app/modules/orders/repositories/promo_repository.py
