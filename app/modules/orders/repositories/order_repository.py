# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/repositories/order_repository.py

Repositorio para la tabla orders.

Responsabilidades:
- Búsqueda por payment_intent_id (idempotencia y webhooks)
- Búsqueda por order_number

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.orders.models.order_models import Order


class OrderRepository(BaseRepository[Order]):
    def __init__(self) -> None:
        super().__init__(Order)

    async def get_by_payment_intent_id(
        self,
        session: AsyncSession,
        payment_intent_id: str,
    ) -> Optional[Order]:
        """Obtiene la orden asociada a un PaymentIntent (a lo más una)."""
        stmt = select(Order).where(Order.payment_intent_id == payment_intent_id)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def list_by_payment_intent_id(
        self,
        session: AsyncSession,
        payment_intent_id: str,
    ) -> Sequence[Order]:
        """Variante para webhooks: bloquea las filas en PostgreSQL mientras se actualizan."""
        stmt = (
            select(Order)
            .where(Order.payment_intent_id == payment_intent_id)
            .with_for_update()
        )
        result = await session.execute(stmt)
        return result.scalars().all()

# Fin del archivo backend/app/modules/orders/repositories/order_repository.py
