# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/__init__.py

Modelos ORM del módulo de órdenes. Importarlos aquí registra todas las
tablas en Base.metadata.
"""

from .catalog_models import CatalogProduct
from .promo_models import PromoCode
from .profile_models import Profile
from .order_models import Order
from .ledger_models import CreditLedgerEntry

__all__ = [
    "CatalogProduct",
    "PromoCode",
    "Profile",
    "Order",
    "CreditLedgerEntry",
]
