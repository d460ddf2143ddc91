# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/catalog_models.py

Modelo ORM para la tabla catalog_products (servicios, bundles y items
personalizables). Fuente de verdad de precios del pipeline de órdenes.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, MoneyType
from app.modules.orders.enums import ProductStatus, ProductVisibility
from ._helpers import new_uuid, utcnow


class CatalogProduct(Base):
    """Producto del catálogo (service | bundle | custom_item)."""

    __tablename__ = "catalog_products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)

    name: Mapped[str] = mapped_column(Text, nullable=False)

    product_type: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        index=True,
        doc="service | bundle | custom_item",
    )

    base_price: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    sale_price: Mapped[Optional[Decimal]] = mapped_column(
        MoneyType,
        nullable=True,
        doc="Precio de oferta; si existe reemplaza a base_price.",
    )

    # Solo custom_item: precio por unidad adicional a base_price
    price_per_unit: Mapped[Optional[Decimal]] = mapped_column(MoneyType, nullable=True)

    minimum_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    maximum_quantity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=ProductStatus.ACTIVE.value,
    )

    visibility: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=ProductVisibility.PUBLIC.value,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        CheckConstraint("base_price >= 0", name="base_price_non_negative"),
        CheckConstraint("minimum_quantity >= 1", name="minimum_quantity_positive"),
    )

    def __repr__(self) -> str:
        return (
            f"<CatalogProduct id={self.id} type={self.product_type} "
            f"status={self.status} base_price={self.base_price}>"
        )


__all__ = ["CatalogProduct"]

# Fin del archivo backend/app/modules/orders/models/catalog_models.py
