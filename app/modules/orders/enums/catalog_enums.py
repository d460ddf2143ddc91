# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/enums/catalog_enums.py

Enums del catálogo y de los códigos de descuento.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from enum import StrEnum


class ProductType(StrEnum):
    SERVICE = "service"
    BUNDLE = "bundle"
    CUSTOM_ITEM = "custom_item"


class ProductStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"


class ProductVisibility(StrEnum):
    PUBLIC = "public"
    PRIVATE = "private"


class DiscountType(StrEnum):
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"


class CodeKind(StrEnum):
    """Origen del código aplicado: tabla de promociones o código de referido."""

    PROMO = "promo"
    REFERRAL = "referral"


__all__ = [
    "ProductType",
    "ProductStatus",
    "ProductVisibility",
    "DiscountType",
    "CodeKind",
]

# Fin del archivo backend/app/modules/orders/enums/catalog_enums.py
