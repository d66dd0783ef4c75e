"""Checkout pricing for registrant categories.

Amounts come from a PriceTable so deployments can change them through
settings; the rule that picks an amount from the category, the gala flag
and the visitor ticket tier is fixed here.
"""
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional

from database.models.profiles import RegistrationCategoryEnum, TicketTypeEnum


@dataclass(frozen=True)
class PriceTable:
    """Per-category checkout amounts in major currency units."""
    founder: Decimal = Decimal("500.00")
    founder_gala_addon: Decimal = Decimal("500.00")
    exhibitor: Decimal = Decimal("2725.00")
    pitching: Decimal = Decimal("2500.00")
    visitor_standard: Decimal = Decimal("250.00")
    visitor_premium: Decimal = Decimal("500.00")

    @classmethod
    def from_settings(cls, settings) -> "PriceTable":
        """Build a price table from application settings.

        Args:
            settings (BaseAppSettings): Settings carrying the *_PRICE values.

        Returns:
            PriceTable: Price table for the deployment.
        """
        return cls(
            founder=settings.FOUNDER_PRICE,
            founder_gala_addon=settings.FOUNDER_GALA_ADDON,
            exhibitor=settings.EXHIBITOR_PRICE,
            pitching=settings.PITCHING_PRICE,
            visitor_standard=settings.VISITOR_STANDARD_PRICE,
            visitor_premium=settings.VISITOR_PREMIUM_PRICE,
        )


DEFAULT_PRICES = PriceTable()


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount to minor units (cents), rounding half up."""
    return int((amount * 100).to_integral_value(rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class CheckoutOffer:
    """What the registrant is asked to pay for, and where to send them back."""
    amount: Decimal
    product_name: str
    description: str
    return_url: str

    @property
    def success_url(self) -> str:
        return f"{self.return_url}?success=true"

    @property
    def cancel_url(self) -> str:
        return f"{self.return_url}?canceled=true"


def _founder_price(
    prices: PriceTable,
    is_gala: bool,
    ticket_tier: Optional[TicketTypeEnum]
) -> Decimal:
    if is_gala:
        return prices.founder + prices.founder_gala_addon
    return prices.founder


def _visitor_price(
    prices: PriceTable,
    is_gala: bool,
    ticket_tier: Optional[TicketTypeEnum]
) -> Decimal:
    if ticket_tier is TicketTypeEnum.PREMIUM:
        return prices.visitor_premium
    return prices.visitor_standard


_PRICE_RESOLVERS: dict[
    RegistrationCategoryEnum,
    Callable[[PriceTable, bool, Optional[TicketTypeEnum]], Decimal]
] = {
    RegistrationCategoryEnum.FOUNDER: _founder_price,
    RegistrationCategoryEnum.EXHIBITOR: lambda prices, *_: prices.exhibitor,
    RegistrationCategoryEnum.PITCHING: lambda prices, *_: prices.pitching,
    RegistrationCategoryEnum.VISITOR: _visitor_price,
}


def resolve_price(
    category: RegistrationCategoryEnum,
    is_gala: bool = False,
    ticket_tier: Optional[TicketTypeEnum] = None,
    prices: PriceTable = DEFAULT_PRICES
) -> Decimal:
    """Resolve the checkout amount for a registrant.

    The gala flag only affects founders and the ticket tier only affects
    visitors; a visitor without a tier pays the standard price.

    Args:
        category (RegistrationCategoryEnum): Registrant category.
        is_gala (bool): Founder gala dinner add-on.
        ticket_tier (Optional[TicketTypeEnum]): Visitor ticket tier.
        prices (PriceTable): Amounts configured for the deployment.

    Returns:
        Decimal: Amount in major currency units.
    """
    return _PRICE_RESOLVERS[category](prices, is_gala, ticket_tier)


def _describe(
    category: RegistrationCategoryEnum,
    company_name: str,
    is_gala: bool,
    ticket_tier: Optional[TicketTypeEnum]
) -> tuple[str, str]:
    if category is RegistrationCategoryEnum.PITCHING:
        return (
            f"Pitching Slot: {company_name}",
            "Official 10-minute Pitching Slot + Startup Pass"
        )
    if category is RegistrationCategoryEnum.EXHIBITOR:
        return (
            f"Exhibitor Registration: {company_name}",
            "Official Investarise Global Exhibitor Pass (approx. 10,000 AED)"
        )
    if category is RegistrationCategoryEnum.VISITOR:
        if ticket_tier is TicketTypeEnum.PREMIUM:
            return (
                f"Visitor Premium VIP Access: {company_name}",
                "Includes Gala Dinner, Lunch, Dinner, and Full Day VIP Access"
            )
        return (
            f"Visitor Standard Access Pass: {company_name}",
            "Includes Lunch, Dinner, and Full Day Event Access"
        )
    if is_gala:
        return (
            f"Founder Pass + Gala Dinner: {company_name}",
            "Official Startup Pass including Networking Gala Dinner"
        )
    return (
        f"Startup Verification: {company_name}",
        "Official Investarise Global Startup Pass"
    )


def resolve_offer(
    category: RegistrationCategoryEnum,
    company_name: str,
    frontend_base_url: str,
    is_gala: bool = False,
    ticket_tier: Optional[TicketTypeEnum] = None,
    prices: PriceTable = DEFAULT_PRICES
) -> CheckoutOffer:
    """Resolve price, product text and redirect target for a registrant.

    Args:
        category (RegistrationCategoryEnum): Registrant category.
        company_name (str): Company (or visitor) name shown on the checkout.
        frontend_base_url (str): Site the registrant returns to.
        is_gala (bool): Founder gala dinner add-on.
        ticket_tier (Optional[TicketTypeEnum]): Visitor ticket tier.
        prices (PriceTable): Amounts configured for the deployment.

    Returns:
        CheckoutOffer: The resolved offer.
    """
    product_name, description = _describe(
        category, company_name, is_gala, ticket_tier
    )
    return CheckoutOffer(
        amount=resolve_price(category, is_gala, ticket_tier, prices),
        product_name=product_name,
        description=description,
        return_url=f"{frontend_base_url.rstrip('/')}/{category.value}-form"
    )
