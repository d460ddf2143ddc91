# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/promo_models.py

Modelo ORM para la tabla promo_codes.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, MoneyType
from ._helpers import new_uuid, utcnow


class PromoCode(Base):
    """Código promocional con tipo de descuento y límite de usos."""

    __tablename__ = "promo_codes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)

    code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)

    discount_type: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        doc="percentage | fixed_amount",
    )

    # Porcentaje (0-100) o monto fijo en USD según discount_type
    discount_value: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    max_uses: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    current_uses: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        CheckConstraint("discount_value >= 0", name="discount_value_non_negative"),
        CheckConstraint("current_uses >= 0", name="current_uses_non_negative"),
    )


__all__ = ["PromoCode"]

# Fin del archivo backend/app/modules/orders/models/promo_models.py
