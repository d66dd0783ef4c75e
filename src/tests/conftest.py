import os

os.environ["ENVIRONMENT"] = "testing"

from typing import AsyncGenerator, Any, Callable, Awaitable  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

from config.dependencies import get_payment_service  # noqa: E402
from config.settings import get_settings, BaseAppSettings  # noqa: E402
from database import (  # noqa: E402
    get_db_contextmanager,
    reset_database,
    FounderProfileModel,
    ExhibitorProfileModel,
    PitchingProfileModel,
    VisitorProfileModel,
    PROFILE_MODELS,
    RegistrationCategoryEnum,
    TicketTypeEnum
)
from main import create_app  # noqa: E402
from payments.reconciler import WebhookReconciler  # noqa: E402
from tests.doubles.fakes.payments import FakePaymentService  # noqa: E402
from tests.doubles.fakes.storage import FakeProfileStore  # noqa: E402
from tests.doubles.stubs.events import FIXED_NOW  # noqa: E402


@pytest.fixture(scope="session")
def app() -> FastAPI:
    """
    Session-scoped fixture to create and return a FastAPI app instance for testing.
    """
    return create_app()


@pytest_asyncio.fixture(scope="function", autouse=True)
async def reset_db():
    """
    Fixture to reset the database to a clean state before each test function.
    """
    await reset_database()
    yield


@pytest.fixture(scope="session")
def settings() -> BaseAppSettings:
    """
    Session-scoped fixture to provide application settings.
    """
    return get_settings()


@pytest.fixture(scope="function")
def payment_service_fake() -> FakePaymentService:
    """Provide a fake payment service for testing."""
    return FakePaymentService()


@pytest.fixture(scope="function")
def profile_store_fake() -> FakeProfileStore:
    """Provide an in-memory profile store for testing."""
    return FakeProfileStore()


@pytest.fixture(scope="function")
def reconciler(payment_service_fake, profile_store_fake) -> WebhookReconciler:
    """Provide a webhook reconciler wired to fakes and a fixed clock."""
    return WebhookReconciler(
        payment_service=payment_service_fake,
        profile_store=profile_store_fake,
        clock=lambda: FIXED_NOW
    )


@pytest_asyncio.fixture(scope="function")
async def client(
    app,
    payment_service_fake,
) -> AsyncGenerator[AsyncClient, Any]:
    """
    Provide an asynchronous HTTP client for testing.
    Replaces the Stripe payment service with a fake; the profile store is
    the real SQLAlchemy store over the test database.
    """
    app.dependency_overrides[get_payment_service] = (
        lambda: payment_service_fake
    )

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as async_client:
        yield async_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def stripe_client(app) -> AsyncGenerator[AsyncClient, Any]:
    """
    Provide an HTTP client that keeps the real Stripe payment service, so
    webhook deliveries go through real signature verification.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as async_client:
        yield async_client


@pytest_asyncio.fixture(scope="function")
async def seed_profiles() -> dict[RegistrationCategoryEnum, str]:
    """
    Create one unpaid profile per category and return their user ids.
    """
    user_ids = {
        RegistrationCategoryEnum.FOUNDER: "founder-user-1",
        RegistrationCategoryEnum.EXHIBITOR: "exhibitor-user-1",
        RegistrationCategoryEnum.PITCHING: "pitching-user-1",
        RegistrationCategoryEnum.VISITOR: "visitor-user-1",
    }
    async with get_db_contextmanager() as session:
        session.add_all([
            FounderProfileModel(
                user_id=user_ids[RegistrationCategoryEnum.FOUNDER],
                email="founder@startup.io",
                company_name="Startup Labs"
            ),
            ExhibitorProfileModel(
                user_id=user_ids[RegistrationCategoryEnum.EXHIBITOR],
                email="booth@exhibitor.io",
                company_name="Exhibit Co"
            ),
            PitchingProfileModel(
                user_id=user_ids[RegistrationCategoryEnum.PITCHING],
                email="pitch@startup.io",
                company_name="Pitch Deck Inc"
            ),
            VisitorProfileModel(
                user_id=user_ids[RegistrationCategoryEnum.VISITOR],
                email="visitor@mail.com",
                company_name="Jane Visitor",
                ticket_type=TicketTypeEnum.STANDARD
            ),
        ])
        await session.commit()
    return user_ids


@pytest.fixture(scope="function")
def fetch_profile() -> Callable[[RegistrationCategoryEnum, str], Awaitable[Any]]:
    """
    Provide a helper that loads a profile row in a fresh session.
    """
    async def _fetch(category: RegistrationCategoryEnum, user_id: str):
        async with get_db_contextmanager() as session:
            return await session.get(PROFILE_MODELS[category], user_id)

    return _fetch
