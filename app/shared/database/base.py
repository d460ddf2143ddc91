# -*- coding: utf-8 -*-
"""
backend/app/shared/database/base.py

Base declarativa y convención de nombres para modelos ORM.

Este módulo proporciona:
- Base: clase base declarativa de SQLAlchemy
- NAMING_CONVENTION: convención de nombres para constraints
- MoneyType / JSONType: tipos de columna portables (PostgreSQL y SQLite)

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

from sqlalchemy import JSON, MetaData, Numeric
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase

# ===== NAMING CONVENTION =====
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


# ===== BASE DECLARATIVA =====
class Base(DeclarativeBase):
    """
    Base declarativa para todos los modelos ORM.
    Incluye convención de nombres para constraints.
    """
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


# ===== TIPOS PORTABLES =====
# Montos en dólares con dos decimales; se leen como Decimal
MoneyType = Numeric(12, 2, asdecimal=True)

# JSONB en PostgreSQL, JSON genérico en SQLite (tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


__all__ = ["Base", "NAMING_CONVENTION", "MoneyType", "JSONType"]

# Fin del archivo backend/app/shared/database/base.py
