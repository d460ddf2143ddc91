# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/schemas/order_response_schemas.py

Esquemas Pydantic de salida para los endpoints de órdenes.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import Field

from app.shared.utils.base_models import UTF8SafeModel


class OrderCreatedResponse(UTF8SafeModel):
    """Respuesta de creación (o replay idempotente) de una orden."""

    success: bool = True
    order_id: str = Field(serialization_alias="orderId")
    order_number: str = Field(serialization_alias="orderNumber")
    duplicate: bool = False
    order_type: Optional[str] = Field(default=None, serialization_alias="orderType")
    total_amount: Optional[Decimal] = Field(default=None, serialization_alias="totalAmount")
    credits_used: Optional[Decimal] = Field(default=None, serialization_alias="creditsUsed")
    payment_intent_id: Optional[str] = Field(default=None, serialization_alias="paymentIntentId")


class OrderSummaryResponse(UTF8SafeModel):
    """Resumen de orden para la página de confirmación."""

    order_id: str = Field(serialization_alias="orderId")
    order_number: str = Field(serialization_alias="orderNumber")
    status: str
    payment_status: str = Field(serialization_alias="paymentStatus")
    order_type: str = Field(serialization_alias="orderType")
    subtotal: Decimal
    discount_amount: Decimal = Field(serialization_alias="discountAmount")
    tax_amount: Decimal = Field(serialization_alias="taxAmount")
    credits_used: Decimal = Field(serialization_alias="creditsUsed")
    total_amount: Decimal = Field(serialization_alias="totalAmount")
    currency: str
    items: List[Dict[str, Any]]
    created_at: datetime = Field(serialization_alias="createdAt")


__all__ = ["OrderCreatedResponse", "OrderSummaryResponse"]

# Fin del archivo backend/app/modules/orders/schemas/order_response_schemas.py
