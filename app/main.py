# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada principal del backend de HelldiversBoost.

Ajustes clave:
- Uso de app.core.settings como fachada de configuración.
- Logging configurado una sola vez (json en producción).
- CORS desde settings (CORS_ORIGINS).
- JSONExceptionMiddleware: cualquier error no manejado responde JSON 500.
- Handlers de errores de dominio de órdenes y de rate limit.
- Cierre del cliente Redis en shutdown.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de cualquier import que lea settings
# En PROD: override=False para respetar variables del entorno (Railway, etc.)
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = os.getenv("PYTHON_ENV", "development").strip().strip('"').strip("'").lower()
load_dotenv(dotenv_path=_ENV_PATH, override=_PYTHON_ENV == "development")

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from app.core.settings import get_settings
from app.core.logging import setup_logging

_settings = get_settings()
setup_logging(level=_settings.log_level, fmt=_settings.log_format)
logger = logging.getLogger(__name__)

from app.shared.middleware import JSONExceptionMiddleware, RequestLoggingMiddleware
from app.shared.redis import close_async_redis_client
from app.shared.security.rate_limit_dep import RateLimitExceeded, rate_limit_response
from app.shared.utils.json_response import UTF8JSONResponse, json_response_utf8
from app.modules.orders.routes import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    logger.info(
        "Backend started: env=%s version=%s",
        _settings.python_env,
        _settings.app_version,
    )
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        await close_async_redis_client()
        logger.info("Backend stopped")


openapi_tags = [
    {"name": "orders", "description": "Verificación de pagos y creación de órdenes"},
    {"name": "orders:webhooks", "description": "Webhooks del procesador de pagos"},
]

app = FastAPI(
    title=_settings.app_name,
    description="API de órdenes y reconciliación de pagos de HelldiversBoost",
    version=_settings.app_version,
    lifespan=lifespan,
    openapi_tags=openapi_tags,
    default_response_class=UTF8JSONResponse,
)


def _configure_cors(app_instance: FastAPI) -> dict:
    """Configura CORS desde settings; '*' implica allow_credentials=False."""
    origins = _settings.get_cors_origins()
    is_wildcard_only = origins == ["*"]

    cors_config = {
        "allow_origins": origins,
        "allow_credentials": not is_wildcard_only,
        "allow_methods": ["*"] if is_wildcard_only else ["GET", "POST", "OPTIONS"],
        "allow_headers": ["*"],
        "expose_headers": ["Retry-After", "X-Request-ID"],
        "max_age": 600,
    }
    app_instance.add_middleware(CORSMiddleware, **cors_config)
    logger.info("CORS enabled: origins=%s credentials=%s", origins, cors_config["allow_credentials"])
    return cors_config


# El orden real de ejecución de middlewares es inverso al registro:
# CORS queda outermost, luego el manejo JSON de excepciones.
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(JSONExceptionMiddleware)
_cors_config = _configure_cors(app)

# ═══════════════════════════════════════════════════════════════════════════════
# EXCEPTION HANDLERS CON UTF-8
# ═══════════════════════════════════════════════════════════════════════════════
register_exception_handlers(app)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded):
    """429 JSON consistente con Retry-After."""
    return rate_limit_response(
        retry_after=exc.retry_after,
        message=str(exc.detail),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return json_response_utf8(
        content={"detail": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


# Incluye router maestro
from app.routes import router as main_router

app.include_router(main_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=_settings.app_host,
        port=_settings.app_port,
        reload=_settings.is_dev,
    )

# Fin del archivo backend/app/main.py
