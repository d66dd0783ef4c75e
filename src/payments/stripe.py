import asyncio
from decimal import Decimal
from typing import Dict, Any

import stripe

from exceptions.payments import (
    PaymentProviderError,
    WebhookAuthenticationError
)
from payments.interfaces import PaymentServiceInterface
from payments.pricing import to_minor_units


class StripePaymentService(PaymentServiceInterface):
    """Stripe payment service implementation.

    This class implements the PaymentServiceInterface using Stripe Checkout.
    Sessions are created with a single inline-priced line item, and webhook
    deliveries are verified against the endpoint signing secret before
    their content is used.
    """

    def __init__(
        self,
        secret_key: str,
        webhook_secret: str,
        timeout: float = 20.0,
        tolerance: int = 300
    ) -> None:
        """Initialize the Stripe payment service.

        Args:
            secret_key (str): Stripe secret key for API authentication.
            webhook_secret (str): Signing secret of the webhook endpoint.
            timeout (float): Seconds allowed for a session creation call.
            tolerance (int): Maximum age in seconds of a signed webhook.
        """
        self.secret_key = secret_key
        self.webhook_secret = webhook_secret
        self.timeout = timeout
        self.tolerance = tolerance
        stripe.api_key = secret_key

    async def create_checkout_session(
        self,
        amount: Decimal,
        currency: str,
        product_name: str,
        description: str,
        customer_email: str,
        client_reference_id: str,
        metadata: Dict[str, str],
        success_url: str,
        cancel_url: str
    ) -> Dict[str, Any]:
        """Create a Stripe checkout session for a registration payment.

        The Stripe client is blocking, so the request runs in a worker thread
        and is abandoned once the timeout expires.

        Returns:
            Dict[str, Any]: Checkout session data including id and url.

        Raises:
            PaymentProviderError: If checkout session creation fails or times out.
        """
        try:
            session = await asyncio.wait_for(
                asyncio.to_thread(
                    stripe.checkout.Session.create,
                    payment_method_types=["card"],
                    customer_email=customer_email,
                    client_reference_id=client_reference_id,
                    line_items=[
                        {
                            "price_data": {
                                "currency": currency,
                                "product_data": {
                                    "name": product_name,
                                    "description": description,
                                },
                                "unit_amount": to_minor_units(amount),
                            },
                            "quantity": 1,
                        }
                    ],
                    mode="payment",
                    success_url=success_url,
                    cancel_url=cancel_url,
                    metadata=metadata
                ),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            raise PaymentProviderError(
                f"Checkout session request timed out after {self.timeout} seconds"
            ) from e
        except stripe.StripeError as e:
            raise PaymentProviderError(
                f"Failed to create checkout session: {str(e)}"
            ) from e

        return {
            "id": session.id,
            "url": session.url
        }

    async def construct_event(
        self,
        payload: bytes,
        signature: str
    ) -> Dict[str, Any]:
        """Verify a Stripe webhook delivery and decode its event.

        The signature is checked against the raw body exactly as received;
        Stripe only parses the body once the signature has been accepted.

        Args:
            payload (bytes): Raw webhook payload from Stripe.
            signature (str): Value of the Stripe-Signature header.

        Returns:
            Dict[str, Any]: The decoded event as plain dicts.

        Raises:
            WebhookAuthenticationError: If the signature is invalid or the payload is malformed.
        """
        try:
            event = stripe.Webhook.construct_event(
                payload,
                signature,
                self.webhook_secret,
                self.tolerance
            )
        except stripe.SignatureVerificationError as e:
            raise WebhookAuthenticationError(
                f"Invalid signature: {str(e)}"
            ) from e
        except (ValueError, AttributeError) as e:
            # body is not JSON, or JSON that is not an object
            raise WebhookAuthenticationError(
                f"Invalid payload: {str(e)}"
            ) from e

        return event.to_dict()
