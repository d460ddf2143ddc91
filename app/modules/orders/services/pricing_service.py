# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/pricing_service.py

Autoridad de precios: recalcula el subtotal de una orden a partir del
catálogo persistido. Nunca confía en los precios enviados por el cliente.

Reglas:
- Un id inexistente, inactivo, no público o con cantidad fuera de
  [minimum_quantity, maximum_quantity] invalida TODA la orden; todos los
  ids ofensores se reportan en un único InvalidLineItemError.
- service / bundle: sale_price si existe, si no base_price, por unidad.
- custom_item: base_price + price_per_unit × cantidad (total de línea).
- La consulta al catálogo está acotada por catalog_timeout_seconds
  (fail-closed con CatalogUnavailableError).

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_orders import OrdersSettings, get_orders_settings
from app.modules.orders.enums import (
    ItemType,
    OrderType,
    ProductStatus,
    ProductType,
    ProductVisibility,
)
from app.modules.orders.errors import CatalogUnavailableError, InvalidLineItemError
from app.modules.orders.models.catalog_models import CatalogProduct
from app.modules.orders.repositories.catalog_repository import CatalogRepository
from app.modules.orders.schemas.order_request_schemas import OrderItemIn
from app.modules.orders.utils.money import ZERO, money_str, to_decimal, to_money

logger = logging.getLogger(__name__)

_PRODUCT_TO_ITEM_TYPE = {
    ProductType.SERVICE.value: ItemType.SERVICE,
    ProductType.BUNDLE.value: ItemType.BUNDLE,
    ProductType.CUSTOM_ITEM.value: ItemType.CUSTOM,
}


@dataclass(frozen=True)
class PricedLineItem:
    """Línea con precio autoritativo del catálogo."""

    item_id: str
    item_type: ItemType
    name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal

    def to_snapshot(self) -> Dict[str, Any]:
        return {
            "id": self.item_id,
            "itemType": self.item_type.value,
            "name": self.name,
            "quantity": self.quantity,
            "unitPrice": money_str(self.unit_price),
            "totalPrice": money_str(self.line_total),
        }


@dataclass(frozen=True)
class PricingResult:
    items: Tuple[PricedLineItem, ...]
    subtotal: Decimal
    order_type: OrderType


def resolve_order_type(item_types: Sequence[ItemType]) -> OrderType:
    """Variante de la orden a partir de los tipos (autoritativos) de sus líneas."""
    kinds = set(item_types)
    if kinds == {ItemType.SERVICE}:
        return OrderType.STANDARD
    if kinds == {ItemType.BUNDLE}:
        return OrderType.BUNDLE
    if kinds == {ItemType.CUSTOM}:
        return OrderType.CUSTOM
    return OrderType.MIXED


def _invalid_reason(product: Optional[CatalogProduct], quantity: int) -> Optional[str]:
    if product is None:
        return "not_found"
    if product.status != ProductStatus.ACTIVE.value:
        return "inactive"
    if product.visibility != ProductVisibility.PUBLIC.value:
        return "not_public"
    if product.product_type not in _PRODUCT_TO_ITEM_TYPE:
        return "unknown_type"
    if quantity < (product.minimum_quantity or 1):
        return "below_minimum_quantity"
    if product.maximum_quantity is not None and quantity > product.maximum_quantity:
        return "above_maximum_quantity"
    return None


def price_line(product: CatalogProduct, quantity: int) -> Tuple[Decimal, Decimal]:
    """Retorna (precio unitario, total de línea) para un producto válido."""
    if product.product_type == ProductType.CUSTOM_ITEM.value:
        per_unit = to_decimal(product.price_per_unit) if product.price_per_unit is not None else ZERO
        line_total = to_money(to_decimal(product.base_price) + per_unit * quantity)
        return to_money(line_total / quantity), line_total

    unit = product.sale_price if product.sale_price is not None else product.base_price
    unit_price = to_money(unit)
    return unit_price, to_money(unit_price * quantity)


class PricingService:
    """Calcula el subtotal autoritativo de un conjunto de líneas."""

    def __init__(
        self,
        catalog_repo: Optional[CatalogRepository] = None,
        settings: Optional[OrdersSettings] = None,
    ):
        self.catalog_repo = catalog_repo or CatalogRepository()
        self.settings = settings or get_orders_settings()

    async def _load_products(
        self,
        session: AsyncSession,
        product_ids: List[str],
    ) -> Dict[str, CatalogProduct]:
        try:
            return await asyncio.wait_for(
                self.catalog_repo.get_many_by_ids(session, product_ids),
                timeout=self.settings.catalog_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(
                "Catalog lookup timed out: items=%d timeout=%.1fs",
                len(product_ids),
                self.settings.catalog_timeout_seconds,
            )
            raise CatalogUnavailableError("Catalog lookup timed out") from e
        except SQLAlchemyError as e:
            logger.error("Catalog lookup failed: %s", e)
            raise CatalogUnavailableError("Catalog lookup failed") from e

    async def price_items(
        self,
        session: AsyncSession,
        items: Sequence[OrderItemIn],
    ) -> PricingResult:
        """
        Valida y cotiza todas las líneas contra el catálogo.

        Raises:
            InvalidLineItemError: con todos los ids inválidos
            CatalogUnavailableError: timeout o error del catálogo
        """
        products = await self._load_products(session, [item.id for item in items])

        invalid: List[str] = []
        for item in items:
            reason = _invalid_reason(products.get(item.id), item.quantity)
            if reason is not None:
                logger.info("Rejected line item: id=%s reason=%s", item.id, reason)
                if item.id not in invalid:
                    invalid.append(item.id)
        if invalid:
            raise InvalidLineItemError(invalid)

        priced: List[PricedLineItem] = []
        for item in items:
            product = products[item.id]
            unit_price, line_total = price_line(product, item.quantity)
            item_type = _PRODUCT_TO_ITEM_TYPE[product.product_type]

            if item.unit_price is not None and to_money(item.unit_price) != unit_price:
                logger.warning(
                    "Client price drift: id=%s client_unit_price=%s catalog_unit_price=%s",
                    item.id,
                    item.unit_price,
                    unit_price,
                )

            if item.item_type is not None and item.item_type != item_type:
                logger.warning(
                    "Client item type drift: id=%s client_item_type=%s catalog_item_type=%s",
                    item.id,
                    item.item_type.value,
                    item_type.value,
                )

            priced.append(
                PricedLineItem(
                    item_id=product.id,
                    item_type=item_type,
                    name=product.name,
                    quantity=item.quantity,
                    unit_price=unit_price,
                    line_total=line_total,
                )
            )

        subtotal = to_money(sum((line.line_total for line in priced), ZERO))
        return PricingResult(
            items=tuple(priced),
            subtotal=subtotal,
            order_type=resolve_order_type([line.item_type for line in priced]),
        )


__all__ = [
    "PricedLineItem",
    "PricingResult",
    "PricingService",
    "resolve_order_type",
    "price_line",
]

# Fin del archivo backend/app/modules/orders/services/pricing_service.py
