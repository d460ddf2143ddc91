# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/mailersend_email_sender.py

Implementación de envío de correos usando MailerSend API.

Autor: HelldiversBoost
Fecha: 2026-02-10

Notas:
- MailerSend responde 202 Accepted cuando acepta el mensaje.
- Cualquier otro status se convierte en RuntimeError; el llamador decide
  si el fallo es fatal (para órdenes nunca lo es).
"""

from __future__ import annotations

import html as html_lib
import logging
from decimal import Decimal
from typing import Any, Dict, List, Tuple, TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)

# MailerSend API endpoint
MAILERSEND_API_URL = "https://api.mailersend.com/v1/email"


def _money(value: Any) -> str:
    return f"${Decimal(str(value)).quantize(Decimal('0.01'))}"


class MailerSendEmailSender:
    """Envío de correos usando MailerSend API."""

    def __init__(
        self,
        api_key: str,
        from_email: str,
        from_name: str = "HellDivers 2 Boosting",
        timeout: int = 30,
        support_email: str = "",
    ):
        if not api_key:
            raise ValueError("MAILERSEND_API_KEY es requerido")
        if not from_email:
            raise ValueError("EMAIL_FROM es requerido")

        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.timeout = timeout
        self.support_email = support_email

    @classmethod
    def from_settings(cls, settings: BaseAppSettings) -> "MailerSendEmailSender":
        """
        Crea instancia desde settings (fuente de verdad).

        Raises:
            ValueError: si faltan credenciales requeridas
        """
        from app.shared.config.settings_orders import get_orders_settings

        api_key = ""
        if settings.mailersend_api_key:
            api_key = settings.mailersend_api_key.get_secret_value().strip()

        from_email = (settings.email_from or "").strip()
        from_name = (settings.email_from_name or "").strip() or get_orders_settings().brand_name
        timeout = settings.email_timeout_sec or 30

        if not api_key:
            raise ValueError("[MailerSend] MAILERSEND_API_KEY es requerido.")

        logger.info(
            "[MailerSend] config: from=%s (%s) timeout=%ss",
            from_email,
            from_name,
            timeout,
        )

        return cls(
            api_key=api_key,
            from_email=from_email,
            from_name=from_name,
            timeout=timeout,
            support_email=get_orders_settings().support_email,
        )

    def _build_order_confirmation_body(
        self,
        customer_name: str,
        order_number: str,
        items: List[Dict[str, Any]],
        total: Decimal,
    ) -> Tuple[str, str]:
        """Construye cuerpo (html, texto) para el email de confirmación."""
        name = customer_name or "Helldiver"
        lines = [
            f"- {item.get('name') or 'Item'} x{item.get('quantity', 1)}: {_money(item.get('total', 0))}"
            for item in items
        ]
        text = (
            f"Hi {name},\n\n"
            f"Thank you for your order {order_number}.\n\n"
            + "\n".join(lines)
            + f"\n\nTotal: {_money(total)}\n\n"
            f"Questions? Contact {self.support_email or self.from_email}.\n"
            f"{self.from_name}\n"
        )

        rows = "".join(
            "<tr><td>{}</td><td>{}</td><td>{}</td></tr>".format(
                html_lib.escape(str(item.get("name") or "Item")),
                int(item.get("quantity", 1)),
                _money(item.get("total", 0)),
            )
            for item in items
        )
        html = (
            f"<p>Hi {html_lib.escape(name)},</p>"
            f"<p>Thank you for your order <strong>{html_lib.escape(order_number)}</strong>.</p>"
            f"<table>{rows}</table>"
            f"<p><strong>Total: {_money(total)}</strong></p>"
            f"<p>{html_lib.escape(self.from_name)}</p>"
        )
        return html, text

    async def _send_email(
        self, to_email: str, subject: str, html_body: str, text_body: str
    ) -> str:
        """Envía email via MailerSend API. Retorna message_id."""
        payload = {
            "from": {
                "email": self.from_email,
                "name": self.from_name,
            },
            "to": [
                {"email": to_email}
            ],
            "subject": subject,
            "html": html_body,
            "text": text_body,
        }

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.info("[MailerSend] sending: to=%s subject=%s", to_email, subject)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    MAILERSEND_API_URL,
                    json=payload,
                    headers=headers,
                )
            except httpx.TimeoutException as e:
                logger.error("[MailerSend] timeout: to=%s error=%s", to_email, str(e))
                raise RuntimeError(f"MailerSend timeout: {e}") from e
            except httpx.RequestError as e:
                logger.error("[MailerSend] request error: to=%s error=%s", to_email, str(e))
                raise RuntimeError(f"MailerSend request error: {e}") from e

        if response.status_code == 202:
            message_id = response.headers.get("X-Message-Id", "accepted")
            logger.info("[MailerSend] sent ok: to=%s message_id=%s", to_email, message_id)
            return message_id

        error_body = response.text
        logger.error(
            "[MailerSend] send failed: to=%s status=%d body=%s",
            to_email,
            response.status_code,
            error_body[:500],
        )
        raise RuntimeError(
            f"MailerSend API error: {response.status_code} - {error_body[:200]}"
        )

    async def send_order_confirmation_email(
        self,
        to_email: str,
        customer_name: str,
        order_number: str,
        items: List[Dict[str, Any]],
        total: Decimal,
    ) -> None:
        """Envía email de confirmación de orden."""
        html, text = self._build_order_confirmation_body(
            customer_name, order_number, items, total
        )
        await self._send_email(
            to_email, f"Order Confirmation - {order_number}", html, text
        )


__all__ = ["MailerSendEmailSender", "MAILERSEND_API_URL"]
# Fin del archivo backend/app/shared/integrations/mailersend_email_sender.py
