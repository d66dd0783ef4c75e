
from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncSession,
    async_sessionmaker
)

from config.settings import get_settings

settings = get_settings()

POSTGRESQL_DATABASE_URL = URL.create(
    drivername="postgresql+asyncpg",
    username=settings.POSTGRES_USER,
    password=settings.POSTGRES_PASSWORD,
    host=settings.POSTGRES_HOST,
    port=settings.POSTGRES_DB_PORT,
    database=settings.POSTGRES_DB
)
postgresql_engine = create_async_engine(
    POSTGRESQL_DATABASE_URL,
    echo=False,
    pool_pre_ping=True
)
AsyncPostgresqlSessionLocal = async_sessionmaker(
    bind=postgresql_engine,
    class_=AsyncSession,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False
)
