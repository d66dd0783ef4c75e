"""Database module for the registration payments service.

This module provides database configuration and session management for the
category profile tables. It supports different database backends based on
the environment:

- Testing: SQLite with async support
- Any other environment: PostgreSQL through asyncpg

The module exports:
- get_db_contextmanager, reset_database: Session and schema helpers (testing only)
- AsyncSessionLocal: Session factory for async database operations
- The profile models and their enums
"""
import os

from database.models.base import Base
from database.models.profiles import (
    RegistrationCategoryEnum,
    PaymentStatusEnum,
    TicketTypeEnum,
    ProfilePaymentMixin,
    FounderProfileModel,
    ExhibitorProfileModel,
    PitchingProfileModel,
    VisitorProfileModel,
    PROFILE_MODELS,
    get_profile_model
)

environment = os.getenv("ENVIRONMENT", "developing")

if environment == "testing":
    from database.session_sqlite import (
        AsyncSQLiteSessionLocal as AsyncSessionLocal,
        get_sqlite_db_contextmanager as get_db_contextmanager,
        reset_sqlite_database as reset_database
    )
else:
    from database.session_postgresql import (
        AsyncPostgresqlSessionLocal as AsyncSessionLocal
    )
