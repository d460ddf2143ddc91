# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/ledger_models.py

Modelo ORM para la tabla credit_ledger_entries (append-only).

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, String, Text, Index
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, MoneyType
from ._helpers import new_uuid, utcnow


class CreditLedgerEntry(Base):
    """Movimiento de créditos de un usuario (débito o abono)."""

    __tablename__ = "credit_ledger_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)

    user_id: Mapped[str] = mapped_column(String(36), nullable=False)

    order_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    entry_type: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        doc="debit | credit",
    )

    # Siempre positivo; el signo lo da entry_type
    amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    balance_before: Mapped[Optional[Decimal]] = mapped_column(MoneyType, nullable=True)
    balance_after: Mapped[Optional[Decimal]] = mapped_column(MoneyType, nullable=True)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        Index("ix_credit_ledger_entries_user_created", "user_id", "created_at"),
    )


__all__ = ["CreditLedgerEntry"]

# Fin del archivo backend/app/modules/orders/models/ledger_models.py
