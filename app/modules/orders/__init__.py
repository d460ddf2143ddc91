# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/__init__.py

Módulo de órdenes: verificación de pagos y reconciliación.

Componentes:
- services.pricing_service: autoridad de precios (catálogo)
- services.discount_service: códigos promo/referido, impuesto y créditos
- services.payment_verifier: verificación del PaymentIntent
- services.order_writer: escritura idempotente por payment_intent_id
- services.webhook_reconciler: eventos asíncronos de Stripe
- routes: endpoints HTTP /api/orders y /api/stripe/webhook

Autor: HelldiversBoost
Fecha: 2026-02-10
"""
