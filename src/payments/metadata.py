"""String codec for checkout session metadata.

The payment provider stores metadata as flat string pairs. Every non-string
field written at checkout has an encode/decode pair here, and decoding
always falls back to an explicit default when a key is absent.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from loguru import logger

from database.models.profiles import RegistrationCategoryEnum, TicketTypeEnum
from exceptions.payments import PaymentValidationError, UnknownCategoryError

USER_ID_KEY = "user_id"
COMPANY_NAME_KEY = "company_name"
CATEGORY_KEY = "user_type"
GALA_KEY = "is_gala"
TICKET_TYPE_KEY = "ticket_type"

# Sessions created before the category key existed belong to founders.
DEFAULT_CATEGORY = RegistrationCategoryEnum.FOUNDER


def encode_gala_flag(is_gala: bool) -> str:
    return "true" if is_gala else "false"


def decode_gala_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "true"


def encode_ticket_tier(ticket_tier: Optional[TicketTypeEnum]) -> str:
    return ticket_tier.value if ticket_tier is not None else ""


def decode_ticket_tier(value: Optional[str]) -> Optional[TicketTypeEnum]:
    value = (value or "").strip().lower()
    if not value:
        return None
    try:
        return TicketTypeEnum(value)
    except ValueError:
        logger.warning(f"Ignoring unknown ticket type in metadata: {value!r}")
        return None


def encode_category(category: RegistrationCategoryEnum) -> str:
    return category.value


def decode_category(value: Optional[str]) -> RegistrationCategoryEnum:
    """Decode the category tag, defaulting to founder when it is absent.

    Raises:
        UnknownCategoryError: If the tag is present but not a known category.
    """
    value = (value or "").strip().lower()
    if not value:
        return DEFAULT_CATEGORY
    try:
        return RegistrationCategoryEnum(value)
    except ValueError:
        raise UnknownCategoryError(value) from None


@dataclass(frozen=True)
class CheckoutMetadata:
    """Registration data carried through a checkout session."""
    user_id: str
    category: RegistrationCategoryEnum = DEFAULT_CATEGORY
    company_name: str = ""
    is_gala: bool = False
    ticket_tier: Optional[TicketTypeEnum] = None

    def encode(self) -> dict[str, str]:
        return {
            USER_ID_KEY: self.user_id,
            COMPANY_NAME_KEY: self.company_name,
            CATEGORY_KEY: encode_category(self.category),
            GALA_KEY: encode_gala_flag(self.is_gala),
            TICKET_TYPE_KEY: encode_ticket_tier(self.ticket_tier),
        }

    @classmethod
    def decode(
        cls,
        metadata: Optional[Mapping[str, Any]],
        client_reference_id: Optional[str] = None
    ) -> "CheckoutMetadata":
        """Rebuild checkout metadata from a completed session.

        The provider's client reference id is the correlation id; the
        user_id metadata key is only consulted when it is missing.

        Args:
            metadata: Metadata echoed back by the provider (may be None).
            client_reference_id: Correlation id echoed back by the provider.

        Returns:
            CheckoutMetadata: Decoded metadata.

        Raises:
            PaymentValidationError: If no correlation id can be found.
            UnknownCategoryError: If the category tag is not recognised.
        """
        metadata = metadata or {}
        user_id = (
            client_reference_id or metadata.get(USER_ID_KEY) or ""
        ).strip()
        if not user_id:
            raise PaymentValidationError(
                "Checkout session carries no client reference id"
            )
        return cls(
            user_id=user_id,
            category=decode_category(metadata.get(CATEGORY_KEY)),
            company_name=metadata.get(COMPANY_NAME_KEY) or "",
            is_gala=decode_gala_flag(metadata.get(GALA_KEY)),
            ticket_tier=decode_ticket_tier(metadata.get(TICKET_TYPE_KEY)),
        )
