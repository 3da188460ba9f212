"""
XYFORA Backend — Database Session Management
=============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   The engine is a process-wide singleton created lazily on first use
       and disposed at shutdown. Each request gets its own session that
       commits on success and rolls back on error.

Connection Pooling Strategy (server databases only):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour

    SQLite (tests, local runs) uses SQLAlchemy's default pool for the
    dialect, so none of the sizing arguments are passed.
"""

import logging
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    before_sleep_log,
    retry,
    stop_after_attempt,
    wait_exponential,
)

from xyfora.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models, Alembic autogenerate,
    and `create_schema()`.
    """
    pass


class Database:
    """
    Lazily initialized engine + session factory.

    The first call to `engine` builds the engine from settings; later calls
    return the same instance. `dispose()` closes the pool and resets the
    singleton so a fresh engine is built on next use.
    """

    def __init__(self, url: Optional[str] = None) -> None:
        self._url = url
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def url(self) -> str:
        return self._url or settings.database_url

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_async_engine(self.url, **self._engine_options())
            logger.info("Database engine created (%s)", self._engine.url.render_as_string(hide_password=True))
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            # expire_on_commit=False: response models read attributes after commit
            self._session_factory = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_factory

    def _engine_options(self) -> dict:
        options = {"echo": settings.log_level == "DEBUG"}
        if not self.url.startswith("sqlite"):
            options.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
        return options

    async def dispose(self) -> None:
        """Close all pooled connections. Safe to call when no engine exists."""
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_factory = None


# Process-wide instance used by the session dependency and the lifespan
database = Database()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Commits when the handler returns normally, rolls back on any exception
    (then re-raises for the global handlers), and always closes the session.

    Example usage in a route:
        @router.get("/products")
        async def list_products(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
@retry(
    stop=stop_after_attempt(settings.db_connect_max_attempts),
    wait=wait_exponential(
        multiplier=1,
        min=settings.db_connect_min_wait,
        max=settings.db_connect_max_wait,
    ),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def create_schema() -> None:
    """
    Create all tables that do not exist yet.

    Retried with exponential backoff so the API can start before its
    database container accepts connections. Production schemas are managed
    by Alembic instead.
    """
    # Importing the models registers them on Base.metadata
    from xyfora.models import Product, User  # noqa: F401

    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured")


async def dispose_engine() -> None:
    """Gracefully closes all connections in the pool (application shutdown)."""
    await database.dispose()
