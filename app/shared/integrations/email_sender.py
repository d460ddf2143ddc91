# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/email_sender.py

Factory unificado para EmailSender.
Soporta dos modos:
- console: stub que solo loguea (desarrollo/tests)
- api: envío via API (MailerSend)

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)


class IEmailSender(Protocol):
    """Protocolo para implementaciones de email sender."""
    async def send_order_confirmation_email(
        self,
        to_email: str,
        customer_name: str,
        order_number: str,
        items: List[Dict[str, Any]],
        total: Decimal,
    ) -> None: ...


class StubEmailSender:
    """Implementación que no envía correos; solo hace logging (modo console)."""

    async def send_order_confirmation_email(
        self,
        to_email: str,
        customer_name: str,
        order_number: str,
        items: List[Dict[str, Any]],
        total: Decimal,
    ) -> None:
        logger.info(
            "[CONSOLE EMAIL] order confirmation -> %s | order=%s items=%d total=%s",
            to_email,
            order_number,
            len(items),
            total,
        )


class EmailSender:
    """
    Factory unificado para selección de email sender.

    Ejemplos de configuración:
    - Desarrollo: EMAIL_MODE=console
    - MailerSend: EMAIL_MODE=api + MAILERSEND_API_KEY + EMAIL_FROM
    """

    @staticmethod
    def from_settings(settings: BaseAppSettings) -> IEmailSender:
        """
        Crea el email sender apropiado según settings (fuente de verdad).

        Raises:
            ValueError: si email_mode=api pero faltan credenciales
        """
        mode = (settings.email_mode or "console").strip().lower()

        if mode == "api":
            from app.shared.integrations.mailersend_email_sender import MailerSendEmailSender
            logger.info("[EmailSender] using MailerSendEmailSender")
            return MailerSendEmailSender.from_settings(settings)

        logger.info("[EmailSender] using StubEmailSender (mode=%s)", mode)
        return StubEmailSender()


__all__ = ["IEmailSender", "StubEmailSender", "EmailSender"]
# Fin del archivo backend/app/shared/integrations/email_sender.py
