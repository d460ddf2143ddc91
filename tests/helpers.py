# -*- coding: utf-8 -*-
"""
backend/tests/helpers.py

Fakes y builders compartidos por la suite de órdenes.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

import hashlib
import hmac
import json
import time
from decimal import Decimal
from typing import Any, Dict, List, Optional

from app.modules.orders.enums import PaymentIntentStatus
from app.modules.orders.errors import PaymentLookupError
from app.modules.orders.providers.stripe_gateway import PaymentRecord

WEBHOOK_SECRET = "whsec_test_secret"


class FakePaymentGateway:
    """Gateway en memoria: payment_intent_id -> PaymentRecord."""

    def __init__(self) -> None:
        self.records: Dict[str, PaymentRecord] = {}
        self.calls: List[str] = []

    def add(
        self,
        payment_intent_id: str,
        amount: Decimal,
        status: str = PaymentIntentStatus.SUCCEEDED.value,
        currency: str = "usd",
    ) -> PaymentRecord:
        record = PaymentRecord(
            payment_intent_id=payment_intent_id,
            status=status,
            amount_minor=int((Decimal(str(amount)) * 100).to_integral_value()),
            currency=currency,
            payment_method_types=("card",),
        )
        self.records[payment_intent_id] = record
        return record

    async def retrieve_payment(self, payment_intent_id: str) -> PaymentRecord:
        self.calls.append(payment_intent_id)
        if payment_intent_id not in self.records:
            raise PaymentLookupError(f"Unable to retrieve payment {payment_intent_id}")
        return self.records[payment_intent_id]


class RecordingEmailSender:
    def __init__(self, fail: bool = False) -> None:
        self.sent: List[Dict[str, Any]] = []
        self.fail = fail

    async def send_order_confirmation_email(self, to_email, customer_name, order_number, items, total):
        if self.fail:
            raise RuntimeError("MailerSend unavailable")
        self.sent.append(
            {
                "to_email": to_email,
                "customer_name": customer_name,
                "order_number": order_number,
                "items": items,
                "total": total,
            }
        )


def sign_webhook(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: Optional[int] = None) -> str:
    """Header Stripe-Signature (esquema v1) para un payload."""
    ts = timestamp if timestamp is not None else int(time.time())
    signed = f"{ts}.".encode("utf-8") + payload
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={ts},v1={digest}"


def stripe_event(event_type: str, payment_intent_id: str, event_id: str = "evt_test_1", **intent: Any) -> bytes:
    body = {
        "id": event_id,
        "object": "event",
        "type": event_type,
        "data": {"object": {"id": payment_intent_id, "object": "payment_intent", **intent}},
    }
    return json.dumps(body).encode("utf-8")


def order_data(**overrides: Any) -> Dict[str, Any]:
    """Payload orderData mínimo válido (una línea de svc_level)."""
    data: Dict[str, Any] = {
        "customerEmail": "diver@example.com",
        "customerName": "Helldiver One",
        "items": [{"id": "svc_level", "itemType": "service", "quantity": 1, "unitPrice": 100}],
    }
    data.update(overrides)
    return data

# Fin del archivo backend/tests/helpers.py
