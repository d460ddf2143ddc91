# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/profile_models.py

Modelo ORM para la tabla profiles (saldo de créditos y código de referido
del usuario). La identidad del usuario la gestiona el proveedor de auth;
aquí solo se guarda su user_id.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, String, Text, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, MoneyType
from ._helpers import utcnow


class Profile(Base):
    """Perfil del cliente con saldo de créditos."""

    __tablename__ = "profiles"

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)

    email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    credit_balance: Mapped[Decimal] = mapped_column(
        MoneyType,
        nullable=False,
        default=0,
        doc="Saldo de créditos en USD; solo se decrementa con UPDATE condicional.",
    )

    referral_code: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
        unique=True,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    __table_args__ = (
        CheckConstraint("credit_balance >= 0", name="credit_balance_non_negative"),
    )


__all__ = ["Profile"]

# Fin del archivo backend/app/modules/orders/models/profile_models.py
