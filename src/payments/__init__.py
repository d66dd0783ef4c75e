"""Payments module for the registration payments service.

This module provides the paid-registration flow: starting hosted checkouts
and reconciling their completion webhooks against the profile store.

The module includes:
- PaymentServiceInterface: Abstract interface for the payment provider
- StripePaymentService: Stripe Checkout implementation of the interface
- pricing: Category, gala and ticket tier to amount resolution
- metadata: String codec for checkout session metadata
- CheckoutSessionService: Creates checkout sessions for registrants
- WebhookReconciler: Idempotently marks profiles paid from webhooks
"""
