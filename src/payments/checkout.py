from typing import Optional, Union

from loguru import logger

from database.models.profiles import RegistrationCategoryEnum, TicketTypeEnum
from exceptions.payments import PaymentProviderError, PaymentValidationError
from payments.interfaces import PaymentServiceInterface
from payments.metadata import (
    CheckoutMetadata,
    decode_category,
    decode_ticket_tier
)
from payments.pricing import DEFAULT_PRICES, PriceTable, resolve_offer


class CheckoutSessionService:
    """Starts hosted checkouts for registrants.

    Resolves the offer for the registrant's category, asks the payment
    provider for a checkout session carrying the registrant's id and
    category metadata, and hands back the provider's redirect URL. It never
    touches the profile store.
    """

    def __init__(
        self,
        payment_service: PaymentServiceInterface,
        frontend_base_url: str,
        currency: str = "usd",
        prices: PriceTable = DEFAULT_PRICES
    ) -> None:
        self._payment_service = payment_service
        self._frontend_base_url = frontend_base_url
        self._currency = currency
        self._prices = prices

    async def create_session(
        self,
        user_id: Optional[str],
        email: Optional[str],
        company_name: Optional[str] = None,
        category: Union[RegistrationCategoryEnum, str, None] = None,
        is_gala: bool = False,
        ticket_tier: Union[TicketTypeEnum, str, None] = None
    ) -> str:
        """Create a checkout session and return its URL.

        Args:
            user_id (Optional[str]): Registrant id, used as correlation id.
            email (Optional[str]): Registrant email.
            company_name (Optional[str]): Company or visitor name.
            category (Union[RegistrationCategoryEnum, str, None]): Category
                or its tag; defaults to founder.
            is_gala (bool): Founder gala dinner add-on.
            ticket_tier (Union[TicketTypeEnum, str, None]): Visitor ticket
                tier or its tag; an unknown tier falls back to standard.

        Returns:
            str: Hosted checkout URL.

        Raises:
            PaymentValidationError: If the user id or email is missing.
            UnknownCategoryError: If the category tag is not recognised.
            PaymentProviderError: If the provider call fails.
        """
        user_id = (user_id or "").strip()
        email = (email or "").strip()
        if not user_id or not email:
            raise PaymentValidationError("Missing data")

        if not isinstance(category, RegistrationCategoryEnum):
            category = decode_category(category)
        if not isinstance(ticket_tier, TicketTypeEnum):
            ticket_tier = decode_ticket_tier(ticket_tier)
        company_name = company_name or ""
        offer = resolve_offer(
            category,
            company_name,
            self._frontend_base_url,
            is_gala=is_gala,
            ticket_tier=ticket_tier,
            prices=self._prices
        )
        metadata = CheckoutMetadata(
            user_id=user_id,
            category=category,
            company_name=company_name,
            is_gala=is_gala,
            ticket_tier=ticket_tier
        )
        log = logger.bind(category=category.value, user_id=user_id)

        try:
            session = await self._payment_service.create_checkout_session(
                amount=offer.amount,
                currency=self._currency,
                product_name=offer.product_name,
                description=offer.description,
                customer_email=email,
                client_reference_id=user_id,
                metadata=metadata.encode(),
                success_url=offer.success_url,
                cancel_url=offer.cancel_url
            )
        except PaymentProviderError as e:
            log.error(f"Checkout session creation failed: {e}")
            raise

        url = session.get("url")
        if not url:
            log.error(f"Checkout session {session.get('id')} has no URL")
            raise PaymentProviderError("Checkout session has no URL")

        log.info(
            f"Checkout session {session.get('id')} created "
            f"for {offer.amount} {self._currency}"
        )
        return url
