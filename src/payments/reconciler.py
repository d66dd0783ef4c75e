"""Webhook-driven reconciliation of completed registration payments.

A completed checkout flips the registrant's profile from unpaid to paid at
most once. Deliveries are at-least-once and may race each other: the
status check and the write are not atomic, which is acceptable because the
write is a convergent overwrite producing the same final row.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional

from loguru import logger

from database.models.profiles import (
    PaymentStatusEnum,
    RegistrationCategoryEnum,
    get_profile_model
)
from exceptions.payments import (
    PaymentValidationError,
    WebhookAuthenticationError
)
from exceptions.storages import StoreError
from payments.interfaces import PaymentServiceInterface
from payments.metadata import CheckoutMetadata
from storages.interfaces import ProfileStoreInterface

CHECKOUT_COMPLETED_EVENT = "checkout.session.completed"


class ReconciliationOutcomeEnum(Enum):
    """What a webhook delivery did to the profile store.

    - IGNORED: Event kind is not a completed checkout, nothing read or written
    - ALREADY_PAID: Profile was already paid, nothing written
    - PAID: Profile was marked paid
    """
    IGNORED = "ignored"
    ALREADY_PAID = "already_paid"
    PAID = "paid"


@dataclass(frozen=True)
class ReconciliationResult:
    outcome: ReconciliationOutcomeEnum
    event_type: str
    user_id: Optional[str] = None
    category: Optional[RegistrationCategoryEnum] = None
    table: Optional[str] = None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_paid_update(
    metadata: CheckoutMetadata,
    session_id: Optional[str],
    paid_at: datetime
) -> Dict[str, Any]:
    """Build the column values written when a profile becomes paid.

    Founders always get their gala flag written. Visitors only get their
    ticket type written when the checkout carried one, so an existing
    ticket type is never blanked out.
    """
    fields: Dict[str, Any] = {
        "payment_status": PaymentStatusEnum.PAID,
        "stripe_session_id": session_id,
        "paid_at": paid_at,
    }
    if metadata.category is RegistrationCategoryEnum.FOUNDER:
        fields["is_gala"] = metadata.is_gala
    elif (
        metadata.category is RegistrationCategoryEnum.VISITOR
        and metadata.ticket_tier is not None
    ):
        fields["ticket_type"] = metadata.ticket_tier
    return fields


class WebhookReconciler:
    """Applies payment-completion webhooks to the category profile tables.

    Collaborators are injected: the payment service verifies deliveries and
    the profile store holds the profiles. No state is shared between calls.
    """

    def __init__(
        self,
        payment_service: PaymentServiceInterface,
        profile_store: ProfileStoreInterface,
        clock: Callable[[], datetime] = utc_now
    ) -> None:
        self._payment_service = payment_service
        self._profile_store = profile_store
        self._clock = clock

    async def handle(
        self,
        payload: bytes,
        signature: str
    ) -> ReconciliationResult:
        """Verify a webhook delivery and reconcile it.

        Args:
            payload (bytes): Raw, unmodified request body.
            signature (str): Signature header sent with the delivery.

        Returns:
            ReconciliationResult: What the delivery did.

        Raises:
            WebhookAuthenticationError: If the delivery fails verification.
            PaymentValidationError: If a completed session cannot be mapped to a profile.
            StoreError: If the profile store read or write fails.
        """
        try:
            event = await self._payment_service.construct_event(
                payload,
                signature
            )
        except WebhookAuthenticationError as e:
            logger.warning(f"Webhook rejected: {e}")
            raise

        event_type = event.get("type") or ""
        if event_type != CHECKOUT_COMPLETED_EVENT:
            logger.debug(f"Ignoring webhook event {event_type!r}")
            return ReconciliationResult(
                outcome=ReconciliationOutcomeEnum.IGNORED,
                event_type=event_type
            )

        data = event.get("data")
        session = data.get("object") if isinstance(data, Mapping) else None
        if not isinstance(session, Mapping):
            logger.error(
                f"Webhook event {event.get('id')!r} carries no checkout session"
            )
            raise PaymentValidationError(
                "Completed checkout event carries no checkout session"
            )
        return await self.reconcile_completed_session(session)

    async def reconcile_completed_session(
        self,
        session: Mapping[str, Any]
    ) -> ReconciliationResult:
        """Mark the profile behind a completed checkout session as paid."""
        session_id = session.get("id")
        try:
            metadata = CheckoutMetadata.decode(
                session.get("metadata"),
                session.get("client_reference_id")
            )
        except PaymentValidationError as e:
            logger.bind(session_id=session_id).error(
                f"Completed checkout cannot be reconciled: {e}"
            )
            raise

        table = get_profile_model(metadata.category).__tablename__
        log = logger.bind(
            category=metadata.category.value,
            user_id=metadata.user_id,
            table=table,
            session_id=session_id
        )
        log.info(
            f"Payment success for [{metadata.category.value}]: "
            f"{metadata.user_id}"
        )

        try:
            status = await self._profile_store.select_payment_status(
                metadata.category,
                metadata.user_id
            )
        except StoreError as e:
            log.error(f"Payment status lookup failed: {e}")
            raise

        if status is PaymentStatusEnum.PAID:
            log.warning("Profile already paid, skipping update")
            return ReconciliationResult(
                outcome=ReconciliationOutcomeEnum.ALREADY_PAID,
                event_type=CHECKOUT_COMPLETED_EVENT,
                user_id=metadata.user_id,
                category=metadata.category,
                table=table
            )

        fields = build_paid_update(metadata, session_id, self._clock())
        try:
            await self._profile_store.update_profile(
                metadata.category,
                metadata.user_id,
                fields
            )
        except StoreError as e:
            log.error(f"Profile update failed: {e}")
            raise

        log.info(f"{table} updated successfully for user {metadata.user_id}")
        return ReconciliationResult(
            outcome=ReconciliationOutcomeEnum.PAID,
            event_type=CHECKOUT_COMPLETED_EVENT,
            user_id=metadata.user_id,
            category=metadata.category,
            table=table
        )
