# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/repositories/catalog_repository.py

Repositorio para la tabla catalog_products.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from typing import Dict, Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.orders.models.catalog_models import CatalogProduct


class CatalogRepository(BaseRepository[CatalogProduct]):
    def __init__(self) -> None:
        super().__init__(CatalogProduct)

    async def get_many_by_ids(
        self,
        session: AsyncSession,
        product_ids: Iterable[str],
    ) -> Dict[str, CatalogProduct]:
        """Obtiene productos por id en una sola consulta; retorna {id: producto}."""
        ids = sorted(set(product_ids))
        if not ids:
            return {}
        stmt = select(CatalogProduct).where(CatalogProduct.id.in_(ids))
        result = await session.execute(stmt)
        return {product.id: product for product in result.scalars().all()}

# Fin del archivo backend/app/modules/orders/repositories/catalog_repository.py
