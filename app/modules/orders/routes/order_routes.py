# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/routes/order_routes.py

Rutas de creación y consulta de órdenes.

Endpoints:
- POST /api/orders/verify-and-create
- POST /api/orders/create-unified
- POST /api/orders/create-credits-only
- GET  /api/orders/by-payment-intent/{payment_intent_id}

Una repetición con el mismo paymentIntentId responde 200 con
duplicate=true y la misma orden. El email de confirmación se envía como
tarea de fondo solo para órdenes nuevas.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""
# Note: NOT using 'from __future__ import annotations' so FastAPI can
# resolve dependency annotations at import time

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config import get_orders_settings
from app.shared.database.database import get_async_session
from app.shared.security.rate_limit_dep import RateLimitDep
from app.shared.security.rate_limit_service import RateLimitResult
from app.modules.orders.dependencies import get_order_notifier, get_order_pipeline
from app.modules.orders.models.order_models import Order
from app.modules.orders.schemas import (
    CreditsOnlyRequest,
    OrderCreatedResponse,
    OrderSummaryResponse,
    VerifyAndCreateRequest,
)
from app.modules.orders.services import OrderNotifier, OrderPipeline, PipelineResult

logger = logging.getLogger(__name__)

_orders_settings = get_orders_settings()

create_rate_limit = RateLimitDep(
    endpoint="orders:create",
    limit=_orders_settings.order_rate_limit,
    window_sec=_orders_settings.order_rate_window_seconds,
)
lookup_rate_limit = RateLimitDep(endpoint="orders:lookup")

router = APIRouter(
    prefix="/orders",
    tags=["orders"],
)


def _schedule_notification(
    background_tasks: BackgroundTasks,
    notifier: OrderNotifier,
    result: PipelineResult,
) -> None:
    if not result.duplicate:
        background_tasks.add_task(notifier.notify_order_created, result.order)


def _created_response(order: Order, duplicate: bool, *, extended: bool) -> OrderCreatedResponse:
    response = OrderCreatedResponse(
        order_id=order.id,
        order_number=order.order_number,
        duplicate=duplicate,
    )
    if extended:
        response.order_type = order.order_type
        response.total_amount = order.total_amount
        response.credits_used = order.credits_used
        response.payment_intent_id = order.payment_intent_id
    return response


@router.post(
    "/verify-and-create",
    response_model=OrderCreatedResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def verify_and_create(
    payload: VerifyAndCreateRequest,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_async_session),
    pipeline: OrderPipeline = Depends(get_order_pipeline),
    notifier: OrderNotifier = Depends(get_order_notifier),
    _rate: RateLimitResult = Depends(create_rate_limit),
) -> OrderCreatedResponse:
    """Verifica el pago contra el total recalculado y crea la orden una sola vez."""
    result = await pipeline.verify_and_create(
        session,
        payload.payment_intent_id,
        payload.order_data,
        source="verify-and-create",
    )
    _schedule_notification(background_tasks, notifier, result)
    return _created_response(result.order, result.duplicate, extended=False)


@router.post(
    "/create-unified",
    response_model=OrderCreatedResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def create_unified(
    payload: VerifyAndCreateRequest,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_async_session),
    pipeline: OrderPipeline = Depends(get_order_pipeline),
    notifier: OrderNotifier = Depends(get_order_notifier),
    _rate: RateLimitResult = Depends(create_rate_limit),
) -> OrderCreatedResponse:
    """Mismo pipeline que verify-and-create; acepta Discord/notas y responde con más detalle."""
    result = await pipeline.verify_and_create(
        session,
        payload.payment_intent_id,
        payload.order_data,
        source="create-unified",
    )
    _schedule_notification(background_tasks, notifier, result)
    return _created_response(result.order, result.duplicate, extended=True)


@router.post(
    "/create-credits-only",
    response_model=OrderCreatedResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def create_credits_only(
    payload: CreditsOnlyRequest,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_async_session),
    pipeline: OrderPipeline = Depends(get_order_pipeline),
    notifier: OrderNotifier = Depends(get_order_notifier),
    _rate: RateLimitResult = Depends(create_rate_limit),
) -> OrderCreatedResponse:
    """Crea una orden pagada por completo con el saldo de créditos del usuario."""
    result = await pipeline.create_credits_only(
        session,
        payload.order_data,
        idempotency_key=payload.idempotency_key,
    )
    _schedule_notification(background_tasks, notifier, result)
    return _created_response(result.order, result.duplicate, extended=True)


@router.get(
    "/by-payment-intent/{payment_intent_id}",
    response_model=OrderSummaryResponse,
)
async def get_order_by_payment_intent(
    payment_intent_id: str,
    session: AsyncSession = Depends(get_async_session),
    pipeline: OrderPipeline = Depends(get_order_pipeline),
    _rate: RateLimitResult = Depends(lookup_rate_limit),
) -> OrderSummaryResponse:
    order = await pipeline.get_by_payment_intent(session, payment_intent_id)
    if order is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found",
        )
    return OrderSummaryResponse(
        order_id=order.id,
        order_number=order.order_number,
        status=order.status,
        payment_status=order.payment_status,
        order_type=order.order_type,
        subtotal=order.subtotal,
        discount_amount=order.discount_amount,
        tax_amount=order.tax_amount,
        credits_used=order.credits_used,
        total_amount=order.total_amount,
        currency=order.currency,
        items=order.items,
        created_at=order.created_at,
    )


__all__ = ["router"]

# Fin del archivo backend/app/modules/orders/routes/order_routes.py
