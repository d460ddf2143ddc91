# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/notifications.py

Notificación de orden creada (email de confirmación).

Fire-and-forget: se ejecuta después del commit y cualquier fallo del
proveedor de email se registra como WARNING sin afectar la orden.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from __future__ import annotations

import logging
from typing import Optional

from app.shared.config.settings_orders import OrdersSettings, get_orders_settings
from app.shared.integrations.email_sender import IEmailSender
from app.modules.orders.models.order_models import Order
from app.modules.orders.utils.money import to_decimal

logger = logging.getLogger(__name__)


class OrderNotifier:
    def __init__(self, email_sender: IEmailSender, settings: Optional[OrdersSettings] = None):
        self.email_sender = email_sender
        self.settings = settings or get_orders_settings()

    async def notify_order_created(self, order: Order) -> None:
        if not self.settings.send_order_confirmation_email:
            return

        items = [
            {
                "name": item.get("name"),
                "quantity": item.get("quantity", 1),
                "price": item.get("unitPrice"),
                "total": item.get("totalPrice"),
            }
            for item in (order.items or [])
        ]
        # El cliente pagó total_amount más lo cubierto con créditos
        order_total = to_decimal(order.total_amount) + to_decimal(order.credits_used)

        try:
            await self.email_sender.send_order_confirmation_email(
                to_email=order.customer_email,
                customer_name=order.customer_name,
                order_number=order.order_number,
                items=items,
                total=order_total,
            )
        except Exception as e:
            logger.warning(
                "Order confirmation email failed: order=%s to=%s error=%s",
                order.order_number,
                order.customer_email,
                e,
            )


__all__ = ["OrderNotifier"]

# Fin del archivo backend/app/modules/orders/services/notifications.py
