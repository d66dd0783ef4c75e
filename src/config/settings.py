import os
from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings


class BaseAppSettings(BaseSettings):
    """Base application settings configuration.

    This class contains the configuration shared by every environment of the
    registration payments service: Stripe credentials, the CORS allow-list,
    checkout pricing, redirect targets, timeouts and logging. It inherits
    from Pydantic's BaseSettings for automatic environment variable loading
    and validation, so a missing required value stops the service at
    startup.
    """
    BASE_DIR: Path = Path(__file__).parent.parent
    PORT: int = int(os.getenv("PORT", 4000))

    STRIPE_SECRET_KEY: str
    STRIPE_WEBHOOK_SECRET: str
    WEBHOOK_TOLERANCE_SECONDS: int = int(
        os.getenv("WEBHOOK_TOLERANCE_SECONDS", 300)
    )
    PROVIDER_TIMEOUT_SECONDS: float = float(
        os.getenv("PROVIDER_TIMEOUT_SECONDS", 20)
    )
    STORE_TIMEOUT_SECONDS: float = float(
        os.getenv("STORE_TIMEOUT_SECONDS", 10)
    )

    ALLOWED_ORIGINS: str

    CHECKOUT_CURRENCY: str = os.getenv("CHECKOUT_CURRENCY", "usd")
    FRONTEND_BASE_URL: str = os.getenv(
        "FRONTEND_BASE_URL",
        "https://www.investariseglobal.com"
    )
    FOUNDER_PRICE: Decimal = Decimal(os.getenv("FOUNDER_PRICE", "500.00"))
    FOUNDER_GALA_ADDON: Decimal = Decimal(
        os.getenv("FOUNDER_GALA_ADDON", "500.00")
    )
    EXHIBITOR_PRICE: Decimal = Decimal(
        os.getenv("EXHIBITOR_PRICE", "2725.00")
    )
    PITCHING_PRICE: Decimal = Decimal(os.getenv("PITCHING_PRICE", "2500.00"))
    VISITOR_STANDARD_PRICE: Decimal = Decimal(
        os.getenv("VISITOR_STANDARD_PRICE", "250.00")
    )
    VISITOR_PREMIUM_PRICE: Decimal = Decimal(
        os.getenv("VISITOR_PREMIUM_PRICE", "500.00")
    )

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_JSON: bool = os.getenv("LOG_JSON", "False").lower() == "true"

    @field_validator(
        "STRIPE_SECRET_KEY",
        "STRIPE_WEBHOOK_SECRET",
        "ALLOWED_ORIGINS"
    )
    @classmethod
    def reject_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator(
        "FOUNDER_PRICE",
        "FOUNDER_GALA_ADDON",
        "EXHIBITOR_PRICE",
        "PITCHING_PRICE",
        "VISITOR_STANDARD_PRICE",
        "VISITOR_PREMIUM_PRICE"
    )
    @classmethod
    def check_price(cls, value: Decimal) -> Decimal:
        if value < 0:
            raise ValueError("must not be negative")
        if value % Decimal("0.01") != 0:
            raise ValueError("must not have more than two decimal places")
        return value

    @property
    def ALLOWED_ORIGIN_LIST(self) -> list[str]:
        """Get the CORS allow-list as a list of origins.

        Returns:
            list[str]: Origins parsed from the comma-separated ALLOWED_ORIGINS.
        """
        return [
            origin.strip().rstrip("/")
            for origin in self.ALLOWED_ORIGINS.split(",")
            if origin.strip()
        ]


class Settings(BaseAppSettings):
    """Production settings configuration.

    Adds the connection settings of the PostgreSQL profile store. The host,
    database and service credentials have no defaults: the service refuses
    to start without them.
    """
    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_HOST: str
    POSTGRES_DB_PORT: int = int(os.getenv("POSTGRES_DB_PORT", 5432))
    POSTGRES_DB: str

    @field_validator(
        "POSTGRES_USER",
        "POSTGRES_PASSWORD",
        "POSTGRES_HOST",
        "POSTGRES_DB"
    )
    @classmethod
    def reject_blank_store_settings(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class TestingSettings(BaseAppSettings):
    """Testing settings configuration.

    Supplies throwaway credentials and a local SQLite profile store so the
    test suite runs without any external service.
    """
    PATH_TO_DB: str = str(
        Path(__file__).parent.parent
        / "database" / "source" / "registrations_test.db"
    )

    STRIPE_SECRET_KEY: str = "sk_test_registrations"
    STRIPE_WEBHOOK_SECRET: str = "whsec_test_registrations"
    ALLOWED_ORIGINS: str = (
        "http://localhost:3000,"
        "https://www.investariseglobal.com,"
        "https://investariseglobal.com"
    )


@lru_cache
def get_settings() -> BaseAppSettings:
    """Return the settings instance based on the ENVIRONMENT variable.

    If the ENVIRONMENT environment variable is set to 'testing', this function
    returns an instance of TestingSettings. For any other value (including
    when unset), it returns an instance of Settings. The instance is created
    once and shared for the process lifetime.

    Returns:
        BaseAppSettings: The settings instance appropriate for the current environment.

    Raises:
        pydantic.ValidationError: If a required setting is missing or blank.
    """
    environment = os.getenv("ENVIRONMENT", "developing")
    if environment == "testing":
        return TestingSettings()
    return Settings()
