from datetime import datetime
from enum import Enum
from typing import Optional, Type

from sqlalchemy import Boolean, DateTime, Enum as SQLEnum, String
from sqlalchemy.orm import Mapped, mapped_column

from database.models.base import Base


def _enum_values(enum_class: Type[Enum]) -> list[str]:
    return [member.value for member in enum_class]


class RegistrationCategoryEnum(Enum):
    """Enumeration for registrant categories.

    The category decides the checkout price, the profile table a completed
    payment is written to, and which side fields are persisted:
    - FOUNDER: Startup founder pass, optional gala dinner add-on
    - EXHIBITOR: Exhibition booth registration
    - PITCHING: Pitching slot registration
    - VISITOR: Visitor pass with standard or premium ticket
    """
    FOUNDER = "founder"
    EXHIBITOR = "exhibitor"
    PITCHING = "pitching"
    VISITOR = "visitor"


class PaymentStatusEnum(Enum):
    """Enumeration for profile payment status values.

    - UNPAID: Profile registered, checkout not completed yet
    - PAID: Checkout completed and reconciled
    """
    UNPAID = "unpaid"
    PAID = "paid"


class TicketTypeEnum(Enum):
    """Enumeration for visitor ticket tiers."""
    STANDARD = "standard"
    PREMIUM = "premium"


class ProfilePaymentMixin:
    """Columns shared by every category-specific profile table.

    Profiles are created by the registration flow before checkout and are
    keyed by the same identifier that is sent to the payment provider as
    the checkout correlation id.
    """
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    company_name: Mapped[Optional[str]] = mapped_column(String(255))
    payment_status: Mapped[PaymentStatusEnum] = mapped_column(
        SQLEnum(
            PaymentStatusEnum,
            values_callable=_enum_values,
            native_enum=False,
            length=16
        ),
        nullable=False,
        default=PaymentStatusEnum.UNPAID
    )
    stripe_session_id: Mapped[Optional[str]] = mapped_column(String(255))
    paid_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True)
    )


class FounderProfileModel(ProfilePaymentMixin, Base):
    __tablename__ = "founder_profiles"

    is_gala: Mapped[Optional[bool]] = mapped_column(Boolean)

    def __repr__(self) -> str:
        return (f"<FounderProfileModel(user_id={self.user_id}, "
                f"payment_status={self.payment_status}, "
                f"is_gala={self.is_gala})>")


class ExhibitorProfileModel(ProfilePaymentMixin, Base):
    __tablename__ = "exhibitor_profiles"

    def __repr__(self) -> str:
        return (f"<ExhibitorProfileModel(user_id={self.user_id}, "
                f"payment_status={self.payment_status})>")


class PitchingProfileModel(ProfilePaymentMixin, Base):
    __tablename__ = "pitching_profiles"

    def __repr__(self) -> str:
        return (f"<PitchingProfileModel(user_id={self.user_id}, "
                f"payment_status={self.payment_status})>")


class VisitorProfileModel(ProfilePaymentMixin, Base):
    __tablename__ = "visitor_profiles"

    ticket_type: Mapped[Optional[TicketTypeEnum]] = mapped_column(
        SQLEnum(
            TicketTypeEnum,
            values_callable=_enum_values,
            native_enum=False,
            length=16
        )
    )

    def __repr__(self) -> str:
        return (f"<VisitorProfileModel(user_id={self.user_id}, "
                f"payment_status={self.payment_status}, "
                f"ticket_type={self.ticket_type})>")


PROFILE_MODELS: dict[RegistrationCategoryEnum, type[ProfilePaymentMixin]] = {
    RegistrationCategoryEnum.FOUNDER: FounderProfileModel,
    RegistrationCategoryEnum.EXHIBITOR: ExhibitorProfileModel,
    RegistrationCategoryEnum.PITCHING: PitchingProfileModel,
    RegistrationCategoryEnum.VISITOR: VisitorProfileModel,
}


def get_profile_model(
    category: RegistrationCategoryEnum
) -> type[ProfilePaymentMixin]:
    """Return the profile model that stores registrants of a category.

    Args:
        category (RegistrationCategoryEnum): Registrant category.

    Returns:
        type[ProfilePaymentMixin]: Mapped model class for the category table.
    """
    return PROFILE_MODELS[category]
