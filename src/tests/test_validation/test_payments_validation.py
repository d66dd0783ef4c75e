import pytest
from pydantic import ValidationError

from schemas.payments import (
    CheckoutSessionRequestSchema,
    CheckoutSessionResponseSchema,
    ErrorResponseSchema,
    WebhookResponseSchema,
)


@pytest.mark.validation
class TestCheckoutSessionRequestSchema:
    def test_valid_request_by_alias(self):
        data = {
            "userId": "visitor-user-1",
            "email": "visitor@mail.com",
            "companyName": "Jane Visitor",
            "type": "visitor",
            "isGala": False,
            "ticketType": "premium"
        }
        request = CheckoutSessionRequestSchema(**data)
        assert request.user_id == "visitor-user-1"
        assert request.company_name == "Jane Visitor"
        assert request.type == "visitor"
        assert request.ticket_type == "premium"

    def test_valid_request_by_field_name(self):
        request = CheckoutSessionRequestSchema(
            user_id="founder-user-1",
            email="founder@startup.io",
            is_gala=True
        )
        assert request.user_id == "founder-user-1"
        assert request.is_gala is True

    def test_defaults(self):
        request = CheckoutSessionRequestSchema()
        assert request.user_id is None
        assert request.email is None
        assert request.type is None
        assert request.is_gala is False
        assert request.ticket_type is None

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_category_and_ticket_type(self, value):
        request = CheckoutSessionRequestSchema(type=value, ticketType=value)
        assert request.type is None
        assert request.ticket_type is None

    def test_null_gala_flag(self):
        request = CheckoutSessionRequestSchema(isGala=None)
        assert request.is_gala is False

    def test_unknown_category_and_ticket_type_are_kept_as_tags(self):
        request = CheckoutSessionRequestSchema(type="Speaker ", ticketType="VIP")
        assert request.type == "speaker"
        assert request.ticket_type == "vip"

    def test_invalid_gala_flag(self):
        with pytest.raises(ValidationError):
            CheckoutSessionRequestSchema(isGala="sometimes")

    def test_non_string_category(self):
        with pytest.raises(ValidationError):
            CheckoutSessionRequestSchema(type=3)


@pytest.mark.validation
class TestResponseSchemas:
    def test_checkout_session_response(self):
        response = CheckoutSessionResponseSchema(url="https://checkout.stripe.com/c/pay/cs_1")
        assert response.model_dump() == {"url": "https://checkout.stripe.com/c/pay/cs_1"}

    def test_checkout_session_response_requires_url(self):
        with pytest.raises(ValidationError):
            CheckoutSessionResponseSchema()

    def test_webhook_response(self):
        assert WebhookResponseSchema().model_dump() == {"received": True}

    def test_error_response(self):
        error = ErrorResponseSchema(error="Missing data")
        assert error.model_dump() == {"error": "Missing data"}
