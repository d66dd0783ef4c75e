from abc import ABC, abstractmethod
from typing import Any, Mapping

from database.models.profiles import (
    PaymentStatusEnum,
    RegistrationCategoryEnum
)


class ProfileStoreInterface(ABC):
    """Abstract interface for the category profile store.

    This interface defines the two operations the webhook reconciler needs:
    reading the payment status of a profile and writing a set of fields to
    it. The category selects the profile table; the user id is the primary
    key shared with the payment provider's correlation id.
    """

    @abstractmethod
    async def select_payment_status(
        self,
        category: RegistrationCategoryEnum,
        user_id: str
    ) -> PaymentStatusEnum:
        """Read the payment status of a profile.

        Args:
            category (RegistrationCategoryEnum): Category selecting the table.
            user_id (str): Primary key of the profile.

        Returns:
            PaymentStatusEnum: Current payment status.

        Raises:
            ProfileNotFoundError: If no profile exists for the user id.
            StoreError: If the read fails or times out.
        """
        pass

    @abstractmethod
    async def update_profile(
        self,
        category: RegistrationCategoryEnum,
        user_id: str,
        fields: Mapping[str, Any]
    ) -> None:
        """Write a set of column values to a profile.

        Args:
            category (RegistrationCategoryEnum): Category selecting the table.
            user_id (str): Primary key of the profile.
            fields (Mapping[str, Any]): Column names mapped to new values.

        Raises:
            ProfileNotFoundError: If the update matched no profile.
            StoreError: If the write fails or times out.
        """
        pass
