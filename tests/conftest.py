# -*- coding: utf-8 -*-
"""
backend/tests/conftest.py

Config global de tests para HelldiversBoost.

- Variables de entorno de prueba ANTES de importar la app (settings se
  cachean en el primer import).
- Base SQLite (aiosqlite) en archivo temporal por test; las tablas se
  crean desde Base.metadata.
- App FastAPI con dependencias sobreescritas: sesión de la BD de prueba,
  gateway de pagos falso, verificador de webhooks con secreto conocido y
  email sender que solo registra.
- Cliente httpx.AsyncClient con ASGITransport + asgi-lifespan.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

import os
from decimal import Decimal
from typing import AsyncIterator, Dict

# -----------------------------------------------------------------------------
# 0) Entorno de prueba (antes de cualquier import de app.*)
# -----------------------------------------------------------------------------
os.environ["PYTHON_ENV"] = "test"
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("EMAIL_MODE", "console")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.pop("REDIS_URL", None)
os.environ.pop("STRIPE_SECRET_KEY", None)
os.environ.pop("STRIPE_WEBHOOK_SECRET", None)

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.shared.config import reset_orders_settings
from app.shared.database.base import Base
from app.modules.orders import models  # noqa: F401  (registra tablas)
from app.modules.orders.enums import ProductType
from app.modules.orders.models import CatalogProduct, Profile, PromoCode
from app.modules.orders.providers.stripe_gateway import StripeWebhookVerifier
from tests.helpers import WEBHOOK_SECRET, FakePaymentGateway, RecordingEmailSender


# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _fresh_orders_settings():
    reset_orders_settings()
    yield
    reset_orders_settings()


# -----------------------------------------------------------------------------
# Base de datos
# -----------------------------------------------------------------------------
@pytest_asyncio.fixture
async def db_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(
        bind=db_engine,
        expire_on_commit=False,
        class_=AsyncSession,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


# -----------------------------------------------------------------------------
# Datos de catálogo
# -----------------------------------------------------------------------------
@pytest_asyncio.fixture
async def catalog(db_session) -> Dict[str, CatalogProduct]:
    """
    Catálogo base:
    - svc_level: service 100.00
    - svc_sale: service base 30.00 / sale 20.00
    - bundle_max: bundle 50.00
    - custom_samples: custom_item 5.00 + 2.50 × qty (min 2, max 10)
    - svc_inactive / svc_private: no comprables
    """
    products = [
        CatalogProduct(id="svc_level", name="Level Boost", product_type=ProductType.SERVICE.value,
                       base_price=Decimal("100.00")),
        CatalogProduct(id="svc_sale", name="Samples Farm", product_type=ProductType.SERVICE.value,
                       base_price=Decimal("30.00"), sale_price=Decimal("20.00")),
        CatalogProduct(id="bundle_max", name="Max Bundle", product_type=ProductType.BUNDLE.value,
                       base_price=Decimal("50.00")),
        CatalogProduct(id="custom_samples", name="Custom Samples", product_type=ProductType.CUSTOM_ITEM.value,
                       base_price=Decimal("5.00"), price_per_unit=Decimal("2.50"),
                       minimum_quantity=2, maximum_quantity=10),
        CatalogProduct(id="svc_inactive", name="Old Service", product_type=ProductType.SERVICE.value,
                       base_price=Decimal("10.00"), status="inactive"),
        CatalogProduct(id="svc_private", name="Private Service", product_type=ProductType.SERVICE.value,
                       base_price=Decimal("10.00"), visibility="private"),
    ]
    db_session.add_all(products)
    await db_session.commit()
    return {p.id: p for p in products}


@pytest_asyncio.fixture
async def profile(db_session) -> Profile:
    """Usuario con 10.00 de créditos y código de referido."""
    p = Profile(user_id="user-1", email="diver@example.com",
                credit_balance=Decimal("10.00"), referral_code="DIVER1")
    db_session.add(p)
    await db_session.commit()
    return p


@pytest_asyncio.fixture
async def rich_profile(db_session) -> Profile:
    p = Profile(user_id="user-rich", email="rich@example.com",
                credit_balance=Decimal("500.00"), referral_code="RICH01")
    db_session.add(p)
    await db_session.commit()
    return p


@pytest_asyncio.fixture
async def promo_codes(db_session) -> Dict[str, PromoCode]:
    codes = [
        PromoCode(code="SAVE10", discount_type="percentage", discount_value=Decimal("10")),
        PromoCode(code="FIVEOFF", discount_type="fixed_amount", discount_value=Decimal("5.00")),
        PromoCode(code="LIMITED", discount_type="percentage", discount_value=Decimal("20"),
                  max_uses=1, current_uses=0),
        PromoCode(code="USEDUP", discount_type="percentage", discount_value=Decimal("20"),
                  max_uses=3, current_uses=3),
        PromoCode(code="OFF", discount_type="percentage", discount_value=Decimal("20"), is_active=False),
    ]
    db_session.add_all(codes)
    await db_session.commit()
    return {c.code: c for c in codes}


# -----------------------------------------------------------------------------
# App y cliente HTTP
# -----------------------------------------------------------------------------
@pytest.fixture
def fake_gateway() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def app(session_factory, fake_gateway, email_sender):
    """App principal con dependencias de infraestructura sustituidas."""
    from app.main import app as fastapi_app
    from app.shared.database.database import get_async_session
    from app.modules.orders.dependencies import (
        get_email_sender,
        get_payment_gateway,
        get_webhook_verifier,
    )

    async def _session_override() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_async_session] = _session_override
    fastapi_app.dependency_overrides[get_payment_gateway] = lambda: fake_gateway
    fastapi_app.dependency_overrides[get_webhook_verifier] = lambda: StripeWebhookVerifier(WEBHOOK_SECRET, 300)
    fastapi_app.dependency_overrides[get_email_sender] = lambda: email_sender
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app) -> AsyncIterator[AsyncClient]:
    """
    Cliente HTTP asíncrono contra la app con ASGITransport y gestión de
    startup/shutdown mediante asgi-lifespan.
    """
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client

# Fin del archivo backend/tests/conftest.py
