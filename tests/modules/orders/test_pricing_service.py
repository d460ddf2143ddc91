# -*- coding: utf-8 -*-
"""
backend/tests/modules/orders/test_pricing_service.py

Tests de PricingService: el catálogo es la única fuente de precios.

Verifica:
- Precio de catálogo por encima del precio enviado por el cliente
- Tipo de línea del catálogo por encima del tipo enviado por el cliente
- sale_price sobre base_price
- Precio de custom_item (base + por unidad × cantidad)
- Todos los ids inválidos se reportan juntos
- Límites de cantidad y tipo de orden
- Timeout del catálogo (fail-closed)

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

import asyncio
from decimal import Decimal

import pytest

from app.shared.config.settings_orders import OrdersSettings
from app.modules.orders.enums import ItemType, OrderType
from app.modules.orders.errors import CatalogUnavailableError, InvalidLineItemError
from app.modules.orders.schemas.order_request_schemas import OrderItemIn
from app.modules.orders.services.pricing_service import PricingService, resolve_order_type


def _items(*raw):
    return [OrderItemIn.model_validate(item) for item in raw]


@pytest.mark.asyncio
async def test_catalog_price_overrides_client_price(db_session, catalog, caplog):
    service = PricingService()

    with caplog.at_level("WARNING"):
        result = await service.price_items(
            db_session, _items({"id": "svc_level", "quantity": 1, "unitPrice": 1})
        )

    assert result.subtotal == Decimal("100.00")
    line = result.items[0]
    assert line.unit_price == Decimal("100.00")
    assert line.to_snapshot()["unitPrice"] == "100.00"
    assert "Client price drift" in caplog.text


@pytest.mark.asyncio
async def test_catalog_item_type_overrides_client_type(db_session, catalog, caplog):
    with caplog.at_level("WARNING"):
        result = await PricingService().price_items(
            db_session, _items({"id": "svc_level", "itemType": "bundle", "quantity": 1})
        )

    line = result.items[0]
    assert line.item_type == ItemType.SERVICE
    assert result.order_type == OrderType.STANDARD
    assert "Client item type drift" in caplog.text
    assert "svc_level" in caplog.text


@pytest.mark.asyncio
async def test_missing_client_item_type_is_not_drift(db_session, catalog, caplog):
    with caplog.at_level("WARNING"):
        result = await PricingService().price_items(
            db_session, _items({"id": "bundle_max", "quantity": 1})
        )

    assert result.items[0].item_type == ItemType.BUNDLE
    assert "Client item type drift" not in caplog.text


@pytest.mark.asyncio
async def test_sale_price_takes_precedence(db_session, catalog):
    result = await PricingService().price_items(
        db_session, _items({"id": "svc_sale", "quantity": 2})
    )
    assert result.items[0].unit_price == Decimal("20.00")
    assert result.subtotal == Decimal("40.00")


@pytest.mark.asyncio
async def test_custom_item_price(db_session, catalog):
    result = await PricingService().price_items(
        db_session, _items({"id": "custom_samples", "itemType": "custom_item", "quantity": 4})
    )
    line = result.items[0]
    assert line.item_type == ItemType.CUSTOM
    assert line.line_total == Decimal("15.00")
    assert line.unit_price == Decimal("3.75")
    assert result.order_type == OrderType.CUSTOM


@pytest.mark.asyncio
async def test_all_invalid_items_reported_together(db_session, catalog):
    items = _items(
        {"id": "svc_level"},
        {"id": "does_not_exist"},
        {"id": "svc_inactive"},
        {"id": "svc_private"},
    )
    with pytest.raises(InvalidLineItemError) as exc_info:
        await PricingService().price_items(db_session, items)

    assert exc_info.value.item_ids == ["does_not_exist", "svc_inactive", "svc_private"]
    assert "does_not_exist" in exc_info.value.details


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [1, 11])
async def test_quantity_outside_limits_is_rejected(db_session, catalog, quantity):
    with pytest.raises(InvalidLineItemError) as exc_info:
        await PricingService().price_items(
            db_session, _items({"id": "custom_samples", "quantity": quantity})
        )
    assert exc_info.value.item_ids == ["custom_samples"]


@pytest.mark.asyncio
async def test_mixed_order_type(db_session, catalog):
    result = await PricingService().price_items(
        db_session, _items({"id": "svc_level"}, {"id": "bundle_max"})
    )
    assert result.order_type == OrderType.MIXED
    assert result.subtotal == Decimal("150.00")


def test_resolve_order_type():
    assert resolve_order_type([ItemType.SERVICE, ItemType.SERVICE]) == OrderType.STANDARD
    assert resolve_order_type([ItemType.BUNDLE]) == OrderType.BUNDLE
    assert resolve_order_type([ItemType.CUSTOM]) == OrderType.CUSTOM
    assert resolve_order_type([ItemType.BUNDLE, ItemType.CUSTOM]) == OrderType.MIXED


class _SlowCatalogRepo:
    async def get_many_by_ids(self, session, product_ids):
        await asyncio.sleep(1)
        return {}


@pytest.mark.asyncio
async def test_catalog_timeout_fails_closed(db_session):
    service = PricingService(
        catalog_repo=_SlowCatalogRepo(),
        settings=OrdersSettings(catalog_timeout_seconds=0.01),
    )
    with pytest.raises(CatalogUnavailableError):
        await service.price_items(db_session, _items({"id": "svc_level"}))

# Fin del archivo backend/tests/modules/orders/test_pricing_service.py
