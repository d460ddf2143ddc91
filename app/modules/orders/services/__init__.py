# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/__init__.py

Servicios del pipeline de órdenes.
"""

from .pricing_service import PricedLineItem, PricingResult, PricingService, resolve_order_type
from .discount_service import ResolvedCode, PriceBreakdown, DiscountService
from .payment_verifier import PaymentVerifier
from .order_writer import OrderDraft, WriteResult, OrderWriter
from .webhook_reconciler import ReconcileResult, WebhookReconciler, HANDLED_EVENT_TYPES
from .order_pipeline import CREDITS_INTENT_PREFIX, PipelineResult, OrderPipeline
from .notifications import OrderNotifier

__all__ = [
    "PricedLineItem",
    "PricingResult",
    "PricingService",
    "resolve_order_type",
    "ResolvedCode",
    "PriceBreakdown",
    "DiscountService",
    "PaymentVerifier",
    "OrderDraft",
    "WriteResult",
    "OrderWriter",
    "ReconcileResult",
    "WebhookReconciler",
    "HANDLED_EVENT_TYPES",
    "CREDITS_INTENT_PREFIX",
    "PipelineResult",
    "OrderPipeline",
    "OrderNotifier",
]
