# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/discount_service.py

Resolver de descuentos y créditos: convierte un subtotal autoritativo en
un PriceBreakdown (descuento, impuesto, créditos y total).

Algoritmo:
1. Código: primero tabla promo_codes (porcentaje o monto fijo acotado al
   subtotal); si no existe, código de referido de un perfil (porcentaje
   fijo). Un código desconocido, inactivo, expirado o agotado falla.
2. tax = max(0, (subtotal - descuento) × TAX_RATE)
3. créditos = min(solicitados, saldo, subtotal - descuento + tax); si eso
   queda por debajo de lo solicitado (más allá de un epsilon) falla con
   InsufficientCreditsError en lugar de aplicar menos.
4. total = max(MINIMUM_CHARGE, subtotal - descuento + tax - créditos)

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_orders import OrdersSettings, get_orders_settings
from app.modules.orders.enums import CodeKind, DiscountType
from app.modules.orders.errors import (
    CatalogUnavailableError,
    InsufficientCreditsError,
    InvalidPromoCodeError,
    OrderValidationError,
)
from app.modules.orders.repositories.profile_repository import ProfileRepository
from app.modules.orders.repositories.promo_repository import PromoCodeRepository
from app.modules.orders.utils.money import ZERO, money_str, to_decimal, to_money

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class ResolvedCode:
    """Código aplicado a la orden y el descuento que produce."""

    code: str
    kind: CodeKind
    discount_type: DiscountType
    discount_value: Decimal
    discount_amount: Decimal
    promo_id: Optional[str] = None
    referrer_user_id: Optional[str] = None


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    credits_applied: Decimal
    total_amount: Decimal
    minimum_charge_applied: bool = False
    code: Optional[ResolvedCode] = None

    @property
    def pre_credit_total(self) -> Decimal:
        return self.subtotal - self.discount_amount + self.tax_amount

    def to_snapshot(self) -> Dict[str, Any]:
        snapshot: Dict[str, Any] = {
            "subtotal": money_str(self.subtotal),
            "discountAmount": money_str(self.discount_amount),
            "taxAmount": money_str(self.tax_amount),
            "creditsApplied": money_str(self.credits_applied),
            "totalAmount": money_str(self.total_amount),
            "minimumChargeApplied": self.minimum_charge_applied,
        }
        if self.code is not None:
            snapshot["code"] = {
                "code": self.code.code,
                "kind": self.code.kind.value,
                "discountType": self.code.discount_type.value,
                "discountValue": str(self.code.discount_value),
            }
        return snapshot


def _as_aware(dt: datetime) -> datetime:
    # SQLite devuelve datetimes naive aunque la columna sea timezone=True
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


class DiscountService:
    """Resolver único de códigos (promo y referido), impuesto y créditos."""

    def __init__(
        self,
        promo_repo: Optional[PromoCodeRepository] = None,
        profile_repo: Optional[ProfileRepository] = None,
        settings: Optional[OrdersSettings] = None,
    ):
        self.promo_repo = promo_repo or PromoCodeRepository()
        self.profile_repo = profile_repo or ProfileRepository()
        self.settings = settings or get_orders_settings()

    # ---------------------------------------------------------
    # Códigos
    # ---------------------------------------------------------
    async def resolve_code(
        self,
        session: AsyncSession,
        code: str,
        subtotal: Decimal,
        user_id: Optional[str] = None,
    ) -> ResolvedCode:
        """
        Raises:
            InvalidPromoCodeError: código desconocido, inactivo, expirado,
                agotado o referido propio
        """
        normalized = code.strip()
        try:
            promo, referrer = await asyncio.wait_for(
                self._lookup_code(session, normalized),
                timeout=self.settings.catalog_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error("Promo code lookup timed out: code=%s", normalized)
            raise CatalogUnavailableError("Promo code lookup timed out") from e
        except SQLAlchemyError as e:
            logger.error("Promo code lookup failed: code=%s error=%s", normalized, e)
            raise CatalogUnavailableError("Promo code lookup failed") from e

        if promo is not None:
            if not promo.is_active:
                raise InvalidPromoCodeError(f"Promo code '{normalized}' is not active")
            if promo.expires_at is not None and _as_aware(promo.expires_at) <= datetime.now(timezone.utc):
                raise InvalidPromoCodeError(f"Promo code '{normalized}' has expired")
            if promo.max_uses is not None and promo.current_uses >= promo.max_uses:
                raise InvalidPromoCodeError(f"Promo code '{normalized}' has reached its usage limit")

            discount_type = DiscountType(promo.discount_type)
            value = to_decimal(promo.discount_value)
            if discount_type == DiscountType.PERCENTAGE:
                amount = subtotal * min(value, HUNDRED) / HUNDRED
            else:
                amount = min(value, subtotal)
            return ResolvedCode(
                code=promo.code,
                kind=CodeKind.PROMO,
                discount_type=discount_type,
                discount_value=value,
                discount_amount=self._clamp_discount(amount, subtotal),
                promo_id=promo.id,
            )

        if referrer is not None:
            if user_id and referrer.user_id == user_id:
                raise InvalidPromoCodeError("You cannot use your own referral code")
            percent = self.settings.referral_discount_percent
            return ResolvedCode(
                code=referrer.referral_code or normalized,
                kind=CodeKind.REFERRAL,
                discount_type=DiscountType.PERCENTAGE,
                discount_value=percent,
                discount_amount=self._clamp_discount(subtotal * percent / HUNDRED, subtotal),
                referrer_user_id=referrer.user_id,
            )

        raise InvalidPromoCodeError(f"Code '{normalized}' is not valid")

    async def _lookup_code(self, session: AsyncSession, code: str):
        promo = await self.promo_repo.get_by_code(session, code)
        if promo is not None:
            return promo, None
        return None, await self.profile_repo.get_by_referral_code(session, code)

    @staticmethod
    def _clamp_discount(amount: Decimal, subtotal: Decimal) -> Decimal:
        return to_money(min(max(amount, ZERO), subtotal))

    # ---------------------------------------------------------
    # Breakdown
    # ---------------------------------------------------------
    async def build_breakdown(
        self,
        session: AsyncSession,
        subtotal: Decimal,
        *,
        code: Optional[str] = None,
        user_id: Optional[str] = None,
        requested_credits: Decimal = ZERO,
        credits_only: bool = False,
    ) -> PriceBreakdown:
        """
        Construye el PriceBreakdown de una orden.

        Args:
            credits_only: la orden se paga completa con créditos; se ignora
                requested_credits, no aplica cargo mínimo y el total es 0.

        Raises:
            InvalidPromoCodeError, InsufficientCreditsError, OrderValidationError
        """
        subtotal = to_money(subtotal)

        resolved: Optional[ResolvedCode] = None
        if code and code.strip():
            resolved = await self.resolve_code(session, code, subtotal, user_id)
        discount = resolved.discount_amount if resolved else ZERO

        tax = to_money(max(ZERO, (subtotal - discount) * self.settings.tax_rate))
        pre_credit_total = to_money(subtotal - discount + tax)

        requested = pre_credit_total if credits_only else to_money(requested_credits)
        credits_applied = ZERO
        if requested > ZERO:
            if not user_id:
                raise OrderValidationError("userId is required to use credits")
            available = await self.profile_repo.get_credit_balance(session, user_id)
            credits_applied = to_money(min(requested, available, pre_credit_total))
            if requested - credits_applied > self.settings.credit_epsilon:
                logger.info(
                    "Insufficient credits: user=%s requested=%s available=%s order_total=%s",
                    user_id,
                    requested,
                    available,
                    pre_credit_total,
                )
                raise InsufficientCreditsError(requested=requested, available=available)

        if credits_only:
            total = ZERO
            minimum_applied = False
        else:
            remaining = to_money(pre_credit_total - credits_applied)
            minimum_applied = remaining < self.settings.minimum_charge
            total = to_money(self.settings.minimum_charge) if minimum_applied else remaining

        return PriceBreakdown(
            subtotal=subtotal,
            discount_amount=discount,
            tax_amount=tax,
            credits_applied=credits_applied,
            total_amount=total,
            minimum_charge_applied=minimum_applied,
            code=resolved,
        )


__all__ = ["ResolvedCode", "PriceBreakdown", "DiscountService"]

# Fin del archivo backend/app/modules/orders/services/discount_service.py
