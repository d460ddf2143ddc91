# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/repositories/profile_repository.py

Repositorio para la tabla profiles.

El saldo de créditos nunca se modifica con read-modify-write: el débito
es un UPDATE condicional (credit_balance >= monto) cuyo rowcount indica
si se aplicó.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.orders.models.profile_models import Profile


class ProfileRepository(BaseRepository[Profile]):
    def __init__(self) -> None:
        super().__init__(Profile)

    async def get_by_referral_code(self, session: AsyncSession, code: str) -> Optional[Profile]:
        stmt = select(Profile).where(func.upper(Profile.referral_code) == code.strip().upper())
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_credit_balance(self, session: AsyncSession, user_id: str) -> Decimal:
        """Saldo actual leído directamente de la tabla (0 si no hay perfil)."""
        stmt = select(Profile.credit_balance).where(Profile.user_id == user_id)
        balance = (await session.execute(stmt)).scalar_one_or_none()
        return Decimal(str(balance)) if balance is not None else Decimal("0")

    async def debit_credits(self, session: AsyncSession, user_id: str, amount: Decimal) -> bool:
        """
        Débito atómico con piso en cero.

        Returns:
            True si el saldo alcanzaba y se descontó; False si no se tocó ninguna fila.
        """
        stmt = (
            update(Profile)
            .where(
                Profile.user_id == user_id,
                Profile.credit_balance >= amount,
            )
            .values(credit_balance=Profile.credit_balance - amount)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount == 1

# Fin del archivo backend/app/modules/orders/repositories/profile_repository.py
