# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/enums/payment_enums.py

Estados del PaymentIntent (propiedad del procesador) y tipos de movimiento
del ledger de créditos.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from enum import StrEnum


class PaymentIntentStatus(StrEnum):
    """Estados observables de un PaymentIntent de Stripe."""

    REQUIRES_PAYMENT_METHOD = "requires_payment_method"
    REQUIRES_CONFIRMATION = "requires_confirmation"
    REQUIRES_ACTION = "requires_action"
    REQUIRES_CAPTURE = "requires_capture"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"


class LedgerEntryType(StrEnum):
    DEBIT = "debit"
    CREDIT = "credit"


__all__ = ["PaymentIntentStatus", "LedgerEntryType"]

# Fin del archivo backend/app/modules/orders/enums/payment_enums.py
