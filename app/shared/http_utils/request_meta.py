# -*- coding: utf-8 -*-
"""
backend/app/shared/http_utils/request_meta.py

Helpers para extraer metadatos de request (IP, User-Agent) de manera segura
detrás de proxies (Vercel, Railway, nginx).

Usado por el rate limiter y por el registro de IP en las órdenes.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""
from __future__ import annotations

import os
from typing import Optional

from starlette.requests import Request


def _trust_proxy_headers() -> bool:
    """
    Confiar en X-Forwarded-For solo si TRUST_PROXY_HEADERS=true.
    Default: false.
    """
    return os.getenv("TRUST_PROXY_HEADERS", "false").lower() in ("true", "1", "yes")


def get_client_ip(request: Request) -> str:
    """
    Extrae la IP real del cliente.

    Con TRUST_PROXY_HEADERS=true se usa el primer valor de X-Forwarded-For
    (o X-Real-IP); en otro caso solo la IP directa del socket.

    Returns:
        IP del cliente, o "unknown" si no se puede determinar
    """
    if _trust_proxy_headers():
        xff = request.headers.get("x-forwarded-for")
        if xff:
            return xff.split(",")[0].strip()
        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    return "unknown"


def get_user_agent(request: Request) -> Optional[str]:
    """User-Agent del request, o None si no existe."""
    ua = request.headers.get("user-agent")
    return ua.strip() if ua else None


__all__ = [
    "get_client_ip",
    "get_user_agent",
]
