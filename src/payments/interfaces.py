from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, Any


class PaymentServiceInterface(ABC):
    """Abstract interface for the hosted-checkout payment provider.

    This interface defines the two provider operations the service relies
    on: creating a hosted checkout session and turning a signed webhook
    delivery into a trusted event.
    """

    @abstractmethod
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
        """Create a hosted checkout session for a single payment.

        Args:
            amount (Decimal): Amount in major currency units.
            currency (str): Payment currency code.
            product_name (str): Product name shown on the checkout page.
            description (str): Product description shown on the checkout page.
            customer_email (str): Email prefilled on the checkout page.
            client_reference_id (str): Correlation id echoed back in webhooks.
            metadata (Dict[str, str]): Flat string metadata echoed back in webhooks.
            success_url (str): Redirect target after a completed payment.
            cancel_url (str): Redirect target after an abandoned payment.

        Returns:
            Dict[str, Any]: Session data including id and url.

        Raises:
            PaymentProviderError: If the provider call fails or times out.
        """
        pass

    @abstractmethod
    async def construct_event(
        self,
        payload: bytes,
        signature: str
    ) -> Dict[str, Any]:
        """Verify a webhook delivery and decode its event.

        Args:
            payload (bytes): Raw, unmodified request body.
            signature (str): Signature header sent with the delivery.

        Returns:
            Dict[str, Any]: The decoded event.

        Raises:
            WebhookAuthenticationError: If the signature or payload is invalid.
        """
        pass
