# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_orders.py

Configuración del pipeline de órdenes (precios, impuestos, créditos,
Stripe y webhooks) para HelldiversBoost.

Descripción:
    Centraliza las constantes monetarias del pipeline, las credenciales
    del procesador de pagos, timeouts de proveedores externos y límites
    de admisión de los endpoints de órdenes.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

import os
from decimal import Decimal
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OrdersSettings(BaseSettings):
    """Configuración del pipeline de verificación y creación de órdenes."""

    # =========================================================================
    # REGLAS MONETARIAS
    # =========================================================================

    tax_rate: Decimal = Field(
        default=Decimal("0.08"),
        description="Tasa fija de impuesto aplicada sobre (subtotal - descuento)"
    )

    minimum_charge: Decimal = Field(
        default=Decimal("0.50"),
        description="Cargo mínimo impuesto por el procesador de pagos (USD)"
    )

    amount_tolerance: Decimal = Field(
        default=Decimal("0.01"),
        description="Tolerancia absoluta entre el total calculado y el monto capturado"
    )

    credit_epsilon: Decimal = Field(
        default=Decimal("0.001"),
        description="Diferencia despreciable entre créditos solicitados y aplicables"
    )

    referral_discount_percent: Decimal = Field(
        default=Decimal("15"),
        description="Porcentaje fijo de descuento para códigos de referido"
    )

    currency: str = Field(
        default="USD",
        description="Moneda de las órdenes (ISO 4217)"
    )

    # =========================================================================
    # STRIPE
    # =========================================================================

    stripe_secret_key: Optional[str] = Field(
        default=None,
        description="Stripe secret key (sk_live_... o sk_test_...)"
    )

    stripe_webhook_secret: Optional[str] = Field(
        default=None,
        description="Stripe webhook signing secret (whsec_...)"
    )

    stripe_webhook_tolerance_seconds: int = Field(
        default=300,
        description="Tolerancia para validación de timestamp de webhooks Stripe (5 minutos)"
    )

    stripe_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout de la consulta del PaymentIntent (fail-closed)"
    )

    webhook_max_body_bytes: int = Field(
        default=1024 * 1024,
        description="Tamaño máximo aceptado del body de un webhook (1 MiB)"
    )

    @field_validator("stripe_secret_key", mode="before")
    @classmethod
    def _load_stripe_secret_key(cls, v: Optional[str]) -> Optional[str]:
        """Fallback a STRIPE_SECRET_KEY env var si no está en settings."""
        if v:
            return v
        return os.getenv("STRIPE_SECRET_KEY")

    @field_validator("stripe_webhook_secret", mode="before")
    @classmethod
    def _load_stripe_webhook_secret(cls, v: Optional[str]) -> Optional[str]:
        """Fallback a STRIPE_WEBHOOK_SECRET env var si no está en settings."""
        if v:
            return v
        return os.getenv("STRIPE_WEBHOOK_SECRET")

    # =========================================================================
    # CATÁLOGO
    # =========================================================================

    catalog_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout de las consultas de catálogo y códigos promocionales"
    )

    # =========================================================================
    # ADMISIÓN (RATE LIMIT)
    # =========================================================================

    order_rate_limit: int = Field(
        default=10,
        description="Máximo de solicitudes de creación de orden por IP en la ventana"
    )

    order_rate_window_seconds: int = Field(
        default=60,
        description="Ventana del rate limit de órdenes (segundos)"
    )

    # =========================================================================
    # NOTIFICACIONES
    # =========================================================================

    send_order_confirmation_email: bool = Field(
        default=True,
        description="Enviar email de confirmación al crear una orden"
    )

    brand_name: str = Field(
        default="HellDivers 2 Boosting",
        description="Nombre comercial mostrado en los correos"
    )

    support_email: str = Field(
        default="support@helldivers-boost.com",
        description="Correo de soporte mostrado en los correos"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton global
_orders_settings: Optional[OrdersSettings] = None


def get_orders_settings() -> OrdersSettings:
    """
    Obtiene la instancia global de configuración de órdenes.

    Returns:
        OrdersSettings: Configuración del pipeline
    """
    global _orders_settings
    if _orders_settings is None:
        _orders_settings = OrdersSettings()
    return _orders_settings


def reset_orders_settings() -> None:
    """Descarta el singleton (tests que cambian variables de entorno)."""
    global _orders_settings
    _orders_settings = None


__all__ = [
    "OrdersSettings",
    "get_orders_settings",
    "reset_orders_settings",
]
# Fin del archivo backend/app/shared/config/settings_orders.py
