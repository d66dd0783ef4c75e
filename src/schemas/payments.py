from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exapmles.payments import (
    checkout_session_request_schema_example,
    checkout_session_response_schema_example,
    webhook_response_schema_example,
    error_response_schema_example
)


class CheckoutSessionRequestSchema(BaseModel):
    """Checkout request sent by the registration forms.

    The category and ticket tier stay plain strings here; they are decoded
    by the checkout service so an unknown value is answered with a 400
    error body rather than a schema error.
    """
    user_id: Optional[str] = Field(default=None, alias="userId")
    email: Optional[str] = None
    company_name: Optional[str] = Field(default=None, alias="companyName")
    type: Optional[str] = None
    is_gala: bool = Field(default=False, alias="isGala")
    ticket_type: Optional[str] = Field(default=None, alias="ticketType")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": checkout_session_request_schema_example
        }
    )

    @field_validator("type", "ticket_type", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str):
            return value.strip().lower() or None
        return value

    @field_validator("is_gala", mode="before")
    @classmethod
    def null_to_false(cls, value):
        return False if value is None else value


class CheckoutSessionResponseSchema(BaseModel):
    url: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": checkout_session_response_schema_example
        }
    )


class WebhookResponseSchema(BaseModel):
    received: bool = True

    model_config = ConfigDict(
        json_schema_extra={
            "example": webhook_response_schema_example
        }
    )


class ErrorResponseSchema(BaseModel):
    error: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": error_response_schema_example
        }
    )
