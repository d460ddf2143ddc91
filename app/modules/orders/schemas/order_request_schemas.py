# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/schemas/order_request_schemas.py

Esquemas Pydantic de entrada para los endpoints de órdenes.

Los nombres de campo del frontend llegan en camelCase; cada campo declara
su alias y `populate_by_name` permite construirlos también en snake_case
(tests y servicios internos).

Los precios que manda el cliente (unitPrice / totalPrice / referralDiscount)
solo sirven para display y para detectar drift; nunca se usan para calcular.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator, model_validator

from app.shared.utils.base_models import UTF8SafeModel, EmailStr
from app.modules.orders.enums import ItemType

DISCORD_TAG_RE = re.compile(r"^[a-zA-Z0-9._]{2,32}(#[0-9]{4})?$")


class OrderItemIn(UTF8SafeModel):
    """Línea solicitada: referencia al catálogo + cantidad."""

    id: str = Field(min_length=1, description="ID del producto en catalog_products.")
    item_type: Optional[ItemType] = Field(
        default=None,
        validation_alias=AliasChoices("itemType", "item_type", "product_type", "type"),
        description="service | bundle | custom; solo display, el tipo lo decide el catálogo.",
    )
    quantity: int = Field(default=1, gt=0)
    name: Optional[str] = Field(default=None, max_length=200)
    unit_price: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("unitPrice", "unit_price", "price"),
        description="Solo display; el precio autoritativo sale del catálogo.",
    )
    total_price: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("totalPrice", "total_price", "total"),
    )

    @field_validator("item_type", mode="before")
    @classmethod
    def _normalize_item_type(cls, v):
        if isinstance(v, str) and v.strip().lower() == "custom_item":
            return ItemType.CUSTOM.value
        return v


class OrderDataIn(UTF8SafeModel):
    """Datos de la orden enviados por el checkout."""

    customer_email: EmailStr = Field(alias="customerEmail")
    customer_name: str = Field(alias="customerName", min_length=1, max_length=200)
    items: List[OrderItemIn] = Field(min_length=1)

    user_id: Optional[str] = Field(default=None, alias="userId")
    referral_code: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("referralCode", "referral_code", "promoCode", "promo_code"),
        max_length=64,
    )
    referral_discount: Optional[Decimal] = Field(default=None, alias="referralDiscount")
    credits_used: Decimal = Field(default=Decimal("0"), alias="creditsUsed", ge=0)

    customer_discord: Optional[str] = Field(default=None, alias="customerDiscord")
    order_notes: Optional[str] = Field(default=None, alias="orderNotes", max_length=2000)
    special_instructions: Optional[str] = Field(
        default=None, alias="specialInstructions", max_length=2000
    )
    ip_address: Optional[str] = Field(default=None, alias="ipAddress", max_length=64)

    @field_validator("referral_code", "user_id", "customer_discord", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("customer_discord")
    @classmethod
    def _validate_discord(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not DISCORD_TAG_RE.match(v):
            raise ValueError("Invalid Discord username")
        return v


class VerifyAndCreateRequest(UTF8SafeModel):
    """Body de POST /api/orders/verify-and-create y /create-unified."""

    payment_intent_id: str = Field(alias="paymentIntentId", min_length=1, max_length=255)
    order_data: OrderDataIn = Field(alias="orderData")


class CreditsOnlyRequest(UTF8SafeModel):
    """Body de POST /api/orders/create-credits-only."""

    order_data: OrderDataIn = Field(alias="orderData")
    idempotency_key: Optional[str] = Field(
        default=None,
        alias="idempotencyKey",
        max_length=128,
        description="Clave opcional del cliente; reintentos con la misma clave no duplican la orden.",
    )

    @model_validator(mode="after")
    def _require_user(self) -> "CreditsOnlyRequest":
        if not self.order_data.user_id:
            raise ValueError("userId is required to pay with credits")
        return self


__all__ = [
    "DISCORD_TAG_RE",
    "OrderItemIn",
    "OrderDataIn",
    "VerifyAndCreateRequest",
    "CreditsOnlyRequest",
]

# Fin del archivo backend/app/modules/orders/schemas/order_request_schemas.py
