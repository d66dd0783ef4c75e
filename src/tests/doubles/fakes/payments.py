import json
from decimal import Decimal
from typing import Dict, Any, Optional
from uuid import uuid4

from exceptions.payments import PaymentError, WebhookAuthenticationError
from payments.interfaces import PaymentServiceInterface


class FakePaymentService(PaymentServiceInterface):
    """Fake payment service implementation for testing.

    This class provides a test-friendly implementation of the
    PaymentServiceInterface that records checkout sessions instead of
    calling Stripe, and accepts webhook deliveries signed with a single
    fixed signature value.
    """

    VALID_SIGNATURE = "t=1700000000,v1=fake-valid-signature"

    def __init__(self, error: Optional[PaymentError] = None):
        """Initialize the fake payment service.

        Args:
            error (Optional[PaymentError]): Raised by every session creation when set.
        """
        self.error = error
        self.sessions: list[Dict[str, Any]] = []
        self.constructed_events: list[Dict[str, Any]] = []

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
        """Record a fake checkout session.

        Returns:
            Dict[str, Any]: Fake session data including id and url.

        Raises:
            PaymentError: The configured error, if any.
        """
        if self.error is not None:
            raise self.error

        session_id = f"cs_test_{uuid4().hex[:16]}"
        self.sessions.append(
            {
                "id": session_id,
                "amount": amount,
                "currency": currency,
                "product_name": product_name,
                "description": description,
                "customer_email": customer_email,
                "client_reference_id": client_reference_id,
                "metadata": metadata,
                "success_url": success_url,
                "cancel_url": cancel_url,
            }
        )
        return {
            "id": session_id,
            "url": f"https://checkout.stripe.com/c/pay/{session_id}"
        }

    async def construct_event(
        self,
        payload: bytes,
        signature: str
    ) -> Dict[str, Any]:
        """Decode a fake webhook delivery.

        Raises:
            WebhookAuthenticationError: If the signature is not VALID_SIGNATURE.
        """
        if signature != self.VALID_SIGNATURE:
            raise WebhookAuthenticationError("Invalid signature")
        event = json.loads(payload)
        self.constructed_events.append(event)
        return event
