# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/order_models.py

Modelo ORM para la tabla orders.

Notas:
- payment_intent_id es UNIQUE: es la clave de idempotencia real del
  pipeline; el pre-check en el writer solo es una optimización.
- items y price_breakdown son snapshots congelados al crear la orden.
- status_history es una lista append-only; se reasigna completa en cada
  cambio para que el ORM detecte la mutación del JSON.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, JSONType, MoneyType
from app.modules.orders.enums import OrderPaymentStatus, OrderStatus, OrderType
from ._helpers import new_uuid, utcnow


class Order(Base):
    """Orden creada a partir de un pago verificado (o pagada con créditos)."""

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)

    order_number: Mapped[str] = mapped_column(String(64), nullable=False)

    # Identidad del cliente: user_id si está autenticado, si no email + nombre
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)
    customer_email: Mapped[str] = mapped_column(Text, nullable=False)
    customer_name: Mapped[str] = mapped_column(Text, nullable=False)
    customer_discord: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    order_type: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=OrderType.STANDARD.value,
    )

    items: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSONType,
        nullable=False,
        doc="Snapshot de líneas con precio autoritativo al momento de la orden.",
    )

    price_breakdown: Mapped[Dict[str, Any]] = mapped_column(
        JSONType,
        nullable=False,
        doc="Snapshot de subtotal/descuento/impuesto/créditos/total.",
    )

    subtotal: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    discount_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False, default=0)
    tax_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False, default=0)
    credits_used: Mapped[Decimal] = mapped_column(MoneyType, nullable=False, default=0)
    total_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")

    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=OrderStatus.CONFIRMED.value,
        index=True,
    )

    payment_status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=OrderPaymentStatus.PAID.value,
    )

    # Avance del servicio; lo gestiona el panel de operaciones, no este pipeline
    fulfillment_status: Mapped[str] = mapped_column(String(32), nullable=False, default="pending")
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    payment_intent_id: Mapped[str] = mapped_column(String(255), nullable=False)
    payment_method: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    referral_code: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    special_instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status_history: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSONType,
        nullable=False,
        default=list,
    )

    # "metadata" está reservado por la API declarativa
    order_metadata: Mapped[Dict[str, Any]] = mapped_column(
        "metadata",
        JSONType,
        nullable=False,
        default=dict,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    confirmed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __table_args__ = (
        UniqueConstraint("payment_intent_id", name="uq_orders_payment_intent_id"),
        UniqueConstraint("order_number", name="uq_orders_order_number"),
        Index("ix_orders_customer_email", "customer_email"),
    )

    def __repr__(self) -> str:
        return (
            f"<Order id={self.id} number={self.order_number} "
            f"status={self.status} intent={self.payment_intent_id}>"
        )


__all__ = ["Order"]

# Fin del archivo backend/app/modules/orders/models/order_models.py
