import time

import pytest

from database import PaymentStatusEnum, RegistrationCategoryEnum
from tests.doubles.stubs.events import (
    checkout_completed_event,
    encode_event,
    stripe_signature_header
)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_signed_delivery_is_reconciled(
    stripe_client,
    settings,
    seed_profiles,
    fetch_profile
):
    user_id = seed_profiles[RegistrationCategoryEnum.EXHIBITOR]
    payload = encode_event(
        checkout_completed_event(
            user_id,
            session_id="cs_test_signed",
            metadata={"user_type": "exhibitor"}
        )
    )
    header = stripe_signature_header(payload, settings.STRIPE_WEBHOOK_SECRET)

    resp = await stripe_client.post(
        "/webhook",
        content=payload,
        headers={"stripe-signature": header}
    )

    assert resp.status_code == 200, resp.text
    profile = await fetch_profile(RegistrationCategoryEnum.EXHIBITOR, user_id)
    assert profile.payment_status == PaymentStatusEnum.PAID
    assert profile.stripe_session_id == "cs_test_signed"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_delivery_signed_with_other_secret_is_rejected(
    stripe_client,
    seed_profiles,
    fetch_profile
):
    user_id = seed_profiles[RegistrationCategoryEnum.FOUNDER]
    payload = encode_event(checkout_completed_event(user_id))
    header = stripe_signature_header(payload, "whsec_not_ours")

    resp = await stripe_client.post(
        "/webhook",
        content=payload,
        headers={"stripe-signature": header}
    )

    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Webhook Error: Invalid signature")
    profile = await fetch_profile(RegistrationCategoryEnum.FOUNDER, user_id)
    assert profile.payment_status == PaymentStatusEnum.UNPAID


@pytest.mark.integration
@pytest.mark.asyncio
async def test_replayed_old_delivery_is_rejected(
    stripe_client,
    settings,
    seed_profiles
):
    user_id = seed_profiles[RegistrationCategoryEnum.FOUNDER]
    payload = encode_event(checkout_completed_event(user_id))
    header = stripe_signature_header(
        payload,
        settings.STRIPE_WEBHOOK_SECRET,
        timestamp=int(time.time()) - settings.WEBHOOK_TOLERANCE_SECONDS - 60
    )

    resp = await stripe_client.post(
        "/webhook",
        content=payload,
        headers={"stripe-signature": header}
    )

    assert resp.status_code == 400


@pytest.mark.integration
@pytest.mark.asyncio
async def test_body_modified_after_signing_is_rejected(
    stripe_client,
    settings,
    seed_profiles,
    fetch_profile
):
    user_id = seed_profiles[RegistrationCategoryEnum.PITCHING]
    payload = encode_event(
        checkout_completed_event(user_id, metadata={"user_type": "pitching"})
    )
    header = stripe_signature_header(payload, settings.STRIPE_WEBHOOK_SECRET)
    modified = payload + b" "

    resp = await stripe_client.post(
        "/webhook",
        content=modified,
        headers={"stripe-signature": header}
    )

    assert resp.status_code == 400
    profile = await fetch_profile(RegistrationCategoryEnum.PITCHING, user_id)
    assert profile.payment_status == PaymentStatusEnum.UNPAID
