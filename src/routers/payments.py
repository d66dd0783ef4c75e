from fastapi import APIRouter, status, Depends, Request
from fastapi.responses import JSONResponse

from config.dependencies import (
    get_checkout_service,
    get_webhook_reconciler
)
from exceptions.payments import (
    PaymentProviderError,
    PaymentValidationError,
    WebhookAuthenticationError
)
from exceptions.storages import StoreError
from payments.checkout import CheckoutSessionService
from payments.reconciler import WebhookReconciler
from schemas.payments import (
    CheckoutSessionRequestSchema,
    CheckoutSessionResponseSchema,
    ErrorResponseSchema,
    WebhookResponseSchema
)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponseSchema(error=message).model_dump()
    )


@router.post(
    "/create-checkout-session",
    response_model=CheckoutSessionResponseSchema,
    status_code=status.HTTP_200_OK,
    summary="Create checkout session",
    description="Start a hosted Stripe checkout for a founder, exhibitor, "
                "pitching or visitor registration and return its URL.",
    responses={
        200: {
            "description": "Checkout session created",
            "content": {
                "application/json": {
                    "example": {
                        "url": "https://checkout.stripe.com/c/pay/cs_test_a1b2c3"
                    }
                }
            }
        },
        400: {
            "model": ErrorResponseSchema,
            "description": "User id or email missing, unknown category or malformed body",
            "content": {
                "application/json": {
                    "example": {
                        "error": "Missing data"
                    }
                }
            }
        },
        500: {
            "model": ErrorResponseSchema,
            "description": "Payment provider error",
            "content": {
                "application/json": {
                    "example": {
                        "error": "Failed to create checkout session: ..."
                    }
                }
            }
        }
    }
)
async def create_checkout_session(
    data: CheckoutSessionRequestSchema,
    checkout_service: CheckoutSessionService = Depends(get_checkout_service)
):
    """Create a hosted checkout session for a registrant.

    Args:
        data (CheckoutSessionRequestSchema): Registrant and category data.
        checkout_service (CheckoutSessionService): Checkout service dependency.

    Returns:
        CheckoutSessionResponseSchema: URL of the hosted checkout page.
    """
    try:
        url = await checkout_service.create_session(
            user_id=data.user_id,
            email=data.email,
            company_name=data.company_name,
            category=data.type,
            is_gala=data.is_gala,
            ticket_tier=data.ticket_type
        )
    except PaymentValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except PaymentProviderError as e:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    return CheckoutSessionResponseSchema(url=url)


@router.post(
    "/webhook",
    response_model=WebhookResponseSchema,
    status_code=status.HTTP_200_OK,
    summary="Handle Stripe webhook",
    description="Verify a Stripe webhook delivery and mark the registrant's "
                "profile as paid when a checkout session completes. "
                "Repeated deliveries are acknowledged without changes.",
    responses={
        200: {
            "description": "Webhook processed or ignored",
            "content": {
                "application/json": {
                    "example": {
                        "received": True
                    }
                }
            }
        },
        400: {
            "model": ErrorResponseSchema,
            "description": "Invalid signature or unmappable checkout session",
            "content": {
                "application/json": {
                    "example": {
                        "error": "Webhook Error: Invalid signature"
                    }
                }
            }
        },
        500: {
            "model": ErrorResponseSchema,
            "description": "Profile store error, Stripe will redeliver",
            "content": {
                "application/json": {
                    "example": {
                        "error": "Database Error"
                    }
                }
            }
        }
    }
)
async def handle_webhook(
    request: Request,
    reconciler: WebhookReconciler = Depends(get_webhook_reconciler)
):
    """Handle incoming webhooks from Stripe.

    The raw body is passed on untouched; signature verification fails on
    anything that has been parsed and re-serialized.

    Args:
        request (Request): The incoming webhook request.
        reconciler (WebhookReconciler): Webhook reconciler dependency.

    Returns:
        WebhookResponseSchema: Acknowledgement for Stripe.
    """
    payload = await request.body()
    signature = request.headers.get("stripe-signature", "")

    try:
        await reconciler.handle(payload, signature)
    except WebhookAuthenticationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, f"Webhook Error: {e}")
    except PaymentValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, f"Webhook Error: {e}")
    except StoreError:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database Error")

    return WebhookResponseSchema(received=True)
