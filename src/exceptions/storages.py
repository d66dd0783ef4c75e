class StoreError(Exception):
    """Base exception class for profile store errors.

    Raised when a read or write against the profile store fails or times
    out. The webhook endpoint answers these with a server error so the
    payment provider redelivers the event later.
    """

    def __init__(self, message: str | None = None) -> None:
        """Initialize the base store error.

        Args:
            message (str, optional): Custom error message. Defaults to generic message.
        """
        if message is None:
            message = "A profile store error occurred."
        super().__init__(message)


class ProfileNotFoundError(StoreError):
    """Exception raised when no profile row exists for a user id.

    A completed payment for a profile that does not exist points to a data
    integrity problem upstream of the checkout.
    """

    def __init__(self, table: str, user_id: str) -> None:
        """Initialize the profile not found error.

        Args:
            table (str): Name of the profile table that was queried.
            user_id (str): The user id that has no row.
        """
        self.table = table
        self.user_id = user_id
        super().__init__(f"No profile found in {table} for user {user_id}.")
