# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/routes/webhook_routes.py

Webhook de Stripe para la reconciliación de órdenes.

Endpoint:
- POST /api/stripe/webhook

Flujo:
1. Body crudo (413 si excede webhook_max_body_bytes)
2. Header Stripe-Signature obligatorio (400)
3. Firma verificada ANTES de parsear el JSON (400 si es inválida,
   500 si no hay secret configurado)
4. Reconciliación; si la actualización falla se responde 500 para que
   Stripe reintente la entrega

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

import logging
import time
from typing import Any, Dict, Union

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config import get_orders_settings
from app.shared.database.database import get_async_session
from app.shared.utils.json_response import json_response_utf8
from app.modules.orders.dependencies import get_webhook_reconciler, get_webhook_verifier
from app.modules.orders.errors import (
    OrderStorageError,
    WebhookConfigurationError,
    WebhookSignatureError,
)
from app.modules.orders.providers.stripe_gateway import StripeWebhookVerifier
from app.modules.orders.routes.error_handlers import error_payload
from app.modules.orders.services import WebhookReconciler

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/stripe",
    tags=["orders:webhooks"],
)


def _too_large(limit: int) -> JSONResponse:
    return json_response_utf8(
        error_payload("Payload too large", f"Webhook body exceeds {limit} bytes", "PAYLOAD_TOO_LARGE"),
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    )


@router.post("/webhook", status_code=status.HTTP_200_OK, response_model=None)
async def stripe_webhook(
    request: Request,
    session: AsyncSession = Depends(get_async_session),
    verifier: StripeWebhookVerifier = Depends(get_webhook_verifier),
    reconciler: WebhookReconciler = Depends(get_webhook_reconciler),
) -> Union[Dict[str, Any], JSONResponse]:
    """
    Webhook de Stripe (payment_intent.*).

    Requiere header Stripe-Signature; los tipos de evento no manejados se
    confirman con 200.
    """
    started = time.perf_counter()
    max_bytes = get_orders_settings().webhook_max_body_bytes

    declared_length = request.headers.get("content-length")
    if declared_length and declared_length.isdigit() and int(declared_length) > max_bytes:
        logger.warning("Webhook rejected: declared body too large (%s bytes)", declared_length)
        return _too_large(max_bytes)

    raw_body = await request.body()
    if len(raw_body) > max_bytes:
        logger.warning("Webhook rejected: body too large (%d bytes)", len(raw_body))
        return _too_large(max_bytes)

    sig_header = request.headers.get("Stripe-Signature")
    if not sig_header:
        logger.warning("Webhook received without Stripe-Signature header")
        return json_response_utf8(
            error_payload("Missing signature", "Stripe-Signature header is required", "MISSING_SIGNATURE"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    try:
        event = verifier.verify(raw_body, sig_header)
    except WebhookConfigurationError as e:
        logger.error("Webhook configuration error: %s", e)
        return json_response_utf8(
            error_payload("Webhook not configured", str(e), "WEBHOOK_NOT_CONFIGURED"),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    except WebhookSignatureError as e:
        logger.warning("Invalid webhook signature: %s", e)
        return json_response_utf8(
            error_payload("Invalid signature", "Webhook signature verification failed", "INVALID_SIGNATURE"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    event_id = event.get("id")
    event_type = event.get("type")
    logger.info("Stripe webhook received: type=%s id=%s", event_type, event_id)

    try:
        await reconciler.handle_event(session, event)
    except OrderStorageError as e:
        logger.error(
            "Webhook processing failed, Stripe will retry: type=%s id=%s error=%s",
            event_type,
            event_id,
            e,
        )
        return json_response_utf8(
            error_payload("Webhook processing failed", e.details, e.code),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    processing_ms = int((time.perf_counter() - started) * 1000)
    logger.info("Stripe webhook processed: type=%s id=%s in %dms", event_type, event_id, processing_ms)
    return {
        "received": True,
        "eventId": event_id,
        "eventType": event_type,
        "processingTime": processing_ms,
    }


__all__ = ["router"]

# Fin del archivo backend/app/modules/orders/routes/webhook_routes.py
