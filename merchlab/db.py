# db.py
import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from merchlab.settings import Settings

# --- Configuration & Setup ---
logger = logging.getLogger(__name__)

# Base class for declarative models. All models in `models.py` inherit from this.
Base = declarative_base()


def normalize_database_url(url: str) -> str:
    """Points plain PostgreSQL URLs (as handed out by Render/Heroku) at the asyncpg driver."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def build_engine(app_settings: Settings) -> AsyncEngine:
    """
    Creates the asynchronous engine for the configured store.

    PostgreSQL gets a connection pool sized for production and, when
    DATABASE_SSL is set, TLS without certificate verification. Anything else
    (the local SQLite default) uses SQLAlchemy's defaults.
    """
    url = normalize_database_url(app_settings.DATABASE_URL)

    if url.startswith("postgresql+asyncpg://"):
        logger.info("✅ Connecting to PostgreSQL database.")
        connect_args = {"ssl": "require"} if app_settings.DATABASE_SSL else {}
        return create_async_engine(
            url,
            echo=False,
            connect_args=connect_args,
            # `pool_recycle` stops idle connections from being cut by the
            # database or the network after 30 minutes.
            pool_size=10,
            max_overflow=5,
            pool_timeout=30,
            pool_recycle=1800,
        )

    logger.info("✅ Using local SQLite database for development.")
    return create_async_engine(url, echo=False)


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    # `expire_on_commit=False` keeps loaded rows readable after the session closes.
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    """Creates the designs and signups tables if they do not exist yet."""
    # Imported for its side effect of registering the tables on Base.metadata.
    from merchlab import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables verified/created.")
