class PaymentError(Exception):
    """Base exception class for payment-related errors.

    This is the parent class for all payment exceptions in the application.
    It provides a common interface for payment error handling.
    """
    pass


class PaymentValidationError(PaymentError):
    """Exception raised when registration checkout input is invalid.

    This exception is raised when a required field (user id, email) is
    missing or blank. It is a client error and is never retried.
    """
    pass


class UnknownCategoryError(PaymentValidationError):
    """Exception raised when checkout metadata names an unknown category.

    Carries the offending value so the event can be reconciled by hand.
    """

    def __init__(self, category: str) -> None:
        """Initialize the unknown category error.

        Args:
            category (str): The category value found in the metadata.
        """
        self.category = category
        super().__init__(f"Unknown registration category: {category!r}")


class WebhookAuthenticationError(PaymentError):
    """Exception raised when a webhook payload fails signature verification.

    The event is rejected before any of its content is trusted.
    """
    pass


class PaymentProviderError(PaymentError):
    """Exception raised when the payment provider call fails.

    This exception is raised when creating a checkout session with the
    payment provider (e.g., Stripe) fails or times out.
    """
    pass
