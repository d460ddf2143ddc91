# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/repositories/__init__.py

Repositorios del módulo de órdenes.
"""

from .catalog_repository import CatalogRepository
from .promo_repository import PromoCodeRepository
from .profile_repository import ProfileRepository
from .order_repository import OrderRepository
from .ledger_repository import CreditLedgerRepository

__all__ = [
    "CatalogRepository",
    "PromoCodeRepository",
    "ProfileRepository",
    "OrderRepository",
    "CreditLedgerRepository",
]
