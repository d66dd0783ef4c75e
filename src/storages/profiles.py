import asyncio
from typing import Any, Mapping

from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from database.models.profiles import (
    PaymentStatusEnum,
    RegistrationCategoryEnum,
    get_profile_model
)
from exceptions.storages import ProfileNotFoundError, StoreError
from storages.interfaces import ProfileStoreInterface


class SQLAlchemyProfileStore(ProfileStoreInterface):
    """Profile store backed by the category tables through SQLAlchemy.

    Every call opens its own session from the shared session factory, so no
    state is kept between requests. Each call is bounded by a timeout and
    any database failure is reported as a StoreError.

    Attributes:
        _session_factory (async_sessionmaker[AsyncSession]): Session factory
        _timeout (float): Seconds allowed for a single read or write
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        timeout: float = 10.0
    ) -> None:
        """Initialize the store with a session factory.

        Args:
            session_factory: Factory producing async database sessions
            timeout: Seconds allowed for a single read or write
        """
        self._session_factory = session_factory
        self._timeout = timeout

    async def select_payment_status(
        self,
        category: RegistrationCategoryEnum,
        user_id: str
    ) -> PaymentStatusEnum:
        model = get_profile_model(category)
        stmt = select(model.payment_status).where(model.user_id == user_id)

        async def _select() -> PaymentStatusEnum | None:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return result.scalar_one_or_none()

        status = await self._run(_select(), model.__tablename__, "read")
        if status is None:
            raise ProfileNotFoundError(model.__tablename__, user_id)
        return status

    async def update_profile(
        self,
        category: RegistrationCategoryEnum,
        user_id: str,
        fields: Mapping[str, Any]
    ) -> None:
        model = get_profile_model(category)
        stmt = (
            update(model)
            .where(model.user_id == user_id)
            .values(**fields)
            .execution_options(synchronize_session=False)
        )

        async def _update() -> int:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount

        updated = await self._run(_update(), model.__tablename__, "write")
        if not updated:
            raise ProfileNotFoundError(model.__tablename__, user_id)

    async def _run(self, operation, table: str, action: str):
        try:
            return await asyncio.wait_for(operation, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Profile store {action} on {table} timed out")
            raise StoreError(
                f"Profile store {action} on {table} timed out "
                f"after {self._timeout} seconds"
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Profile store {action} on {table} failed: {e}")
            raise StoreError(
                f"Profile store {action} on {table} failed: {str(e)}"
            ) from e
