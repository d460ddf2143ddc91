# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/exception_handler.py

Middleware ASGI para capturar excepciones no manejadas y responder JSON.

Garantiza que cualquier error 500 devuelva el mismo cuerpo estructurado
que el resto de la API ({error, details, code, timestamp}) en lugar de
text/plain, más un request_id para correlación de logs.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# Headers de request ID (Vercel, Railway, nginx)
REQUEST_ID_HEADERS = ["x-request-id", "x-vercel-id", "x-correlation-id"]


def get_request_id(request: Request) -> str:
    """Extrae request_id de headers o genera uno nuevo."""
    for header in REQUEST_ID_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return uuid.uuid4().hex[:16]


class JSONExceptionMiddleware(BaseHTTPMiddleware):
    """
    Middleware que captura excepciones no manejadas y devuelve JSON 500.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = get_request_id(request)
        request.state.request_id = request_id

        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "unhandled_exception request_id=%s method=%s path=%s error=%r",
                request_id,
                request.method,
                request.url.path,
                e,
            )
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal server error",
                    "details": "Unexpected error while processing the request",
                    "code": "INTERNAL_SERVER_ERROR",
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                    "request_id": request_id,
                },
                headers={"X-Request-ID": request_id},
            )


__all__ = ["JSONExceptionMiddleware", "get_request_id"]
