# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/repositories/ledger_repository.py

Repositorio para la tabla credit_ledger_entries.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from decimal import Decimal
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.orders.enums import LedgerEntryType
from app.modules.orders.models.ledger_models import CreditLedgerEntry


class CreditLedgerRepository(BaseRepository[CreditLedgerEntry]):
    def __init__(self) -> None:
        super().__init__(CreditLedgerEntry)

    async def add_debit(
        self,
        session: AsyncSession,
        *,
        user_id: str,
        order_id: str,
        amount: Decimal,
        balance_before: Optional[Decimal],
        balance_after: Optional[Decimal],
        description: str,
    ) -> CreditLedgerEntry:
        return await self.create(
            session,
            user_id=user_id,
            order_id=order_id,
            entry_type=LedgerEntryType.DEBIT.value,
            amount=amount,
            balance_before=balance_before,
            balance_after=balance_after,
            description=description,
        )

    async def list_by_user(
        self,
        session: AsyncSession,
        user_id: str,
    ) -> Sequence[CreditLedgerEntry]:
        stmt = (
            select(CreditLedgerEntry)
            .where(CreditLedgerEntry.user_id == user_id)
            .order_by(CreditLedgerEntry.created_at.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

# Fin del archivo backend/app/modules/orders/repositories/ledger_repository.py
