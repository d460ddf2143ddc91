# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/routes/error_handlers.py

Traducción de errores de dominio a respuestas JSON estructuradas:

    {"error": ..., "details": ..., "code": ..., "timestamp": ...}

- OrderPipelineError -> su status_code (400 / 500)
- RequestValidationError en rutas de órdenes -> 400 VALIDATION_ERROR
  (el resto de la API conserva el 422 estándar de FastAPI)

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.shared.utils.json_response import json_response_utf8
from app.modules.orders.errors import OrderPipelineError

logger = logging.getLogger(__name__)

ORDER_PATH_PREFIX = "/api/orders"


def error_payload(error: str, details: Optional[str], code: str) -> Dict[str, Any]:
    return {
        "error": error,
        "details": details,
        "code": code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


async def order_pipeline_error_handler(request: Request, exc: OrderPipelineError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Order request failed: path=%s code=%s details=%s",
            request.url.path,
            exc.code,
            exc.details,
        )
    else:
        logger.info(
            "Order request rejected: path=%s code=%s details=%s",
            request.url.path,
            exc.code,
            exc.details,
        )
    return json_response_utf8(
        error_payload(exc.error, exc.details, exc.code),
        status_code=exc.status_code,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    if not request.url.path.startswith(ORDER_PATH_PREFIX):
        return await request_validation_exception_handler(request, exc)

    details = _format_validation_errors(exc)
    logger.info("Order request validation failed: path=%s details=%s", request.url.path, details)
    return json_response_utf8(
        error_payload("Invalid order data", details, "VALIDATION_ERROR"),
        status_code=400,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderPipelineError, order_pipeline_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)


__all__ = [
    "error_payload",
    "order_pipeline_error_handler",
    "validation_error_handler",
    "register_exception_handlers",
]

# Fin del archivo backend/app/modules/orders/routes/error_handlers.py
