from fastapi import Depends

from config.settings import BaseAppSettings, get_settings
from database import AsyncSessionLocal
from payments.checkout import CheckoutSessionService
from payments.interfaces import PaymentServiceInterface
from payments.pricing import PriceTable
from payments.reconciler import WebhookReconciler
from payments.stripe import StripePaymentService
from storages.interfaces import ProfileStoreInterface
from storages.profiles import SQLAlchemyProfileStore


def get_payment_service(
    settings: BaseAppSettings = Depends(get_settings)
) -> PaymentServiceInterface:
    """Get payment service instance with application settings.

    Creates and returns a Stripe payment service configured with the
    application's Stripe secret key, webhook signing secret and timeouts.

    Args:
        settings (BaseAppSettings): Application settings containing Stripe configuration.

    Returns:
        PaymentServiceInterface: Configured Stripe payment service instance.
    """
    return StripePaymentService(
        secret_key=settings.STRIPE_SECRET_KEY,
        webhook_secret=settings.STRIPE_WEBHOOK_SECRET,
        timeout=settings.PROVIDER_TIMEOUT_SECONDS,
        tolerance=settings.WEBHOOK_TOLERANCE_SECONDS
    )


def get_profile_store(
    settings: BaseAppSettings = Depends(get_settings)
) -> ProfileStoreInterface:
    """Get the profile store backed by the shared session factory.

    Args:
        settings (BaseAppSettings): Application settings containing store timeouts.

    Returns:
        ProfileStoreInterface: Configured profile store instance.
    """
    return SQLAlchemyProfileStore(
        session_factory=AsyncSessionLocal,
        timeout=settings.STORE_TIMEOUT_SECONDS
    )


def get_checkout_service(
    settings: BaseAppSettings = Depends(get_settings),
    payment_service: PaymentServiceInterface = Depends(get_payment_service)
) -> CheckoutSessionService:
    """Get the checkout session service.

    Args:
        settings (BaseAppSettings): Application settings containing pricing and redirect configuration.
        payment_service (PaymentServiceInterface): Payment provider.

    Returns:
        CheckoutSessionService: Checkout service wired to the payment provider.
    """
    return CheckoutSessionService(
        payment_service=payment_service,
        frontend_base_url=settings.FRONTEND_BASE_URL,
        currency=settings.CHECKOUT_CURRENCY,
        prices=PriceTable.from_settings(settings)
    )


def get_webhook_reconciler(
    payment_service: PaymentServiceInterface = Depends(get_payment_service),
    profile_store: ProfileStoreInterface = Depends(get_profile_store)
) -> WebhookReconciler:
    """Get the webhook reconciler.

    Args:
        payment_service (PaymentServiceInterface): Payment provider verifying deliveries.
        profile_store (ProfileStoreInterface): Store holding the category profiles.

    Returns:
        WebhookReconciler: Reconciler wired to its collaborators.
    """
    return WebhookReconciler(
        payment_service=payment_service,
        profile_store=profile_store
    )
