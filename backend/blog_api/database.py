"""
Blog API Backend: Database Engine & Session Management
=======================================================

What:  Async SQLAlchemy engine lifecycle, session factory, and FastAPI dependency.
How:   The engine is a process-scoped resource: `init_engine()` opens it once
       at startup, `dispose_engine()` releases it at shutdown. Each request
       gets its own session that commits on success and rolls back on error.
Who:   Lifespan handler (init/dispose), route handlers via Depends(), tests.

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from settings and are only
    applied to server databases. SQLite URLs keep SQLAlchemy's default pool.
"""

import logging
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from blog_api.config import settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object between the models, Alembic, and the
    schema helpers below.
    """
    pass


# ── Process-scoped store handle ───────────────────────────────────────────
# Set by init_engine(), cleared by dispose_engine(). Never mutated per request.
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def _engine_options(url: str) -> Dict[str, Any]:
    """Engine keyword arguments for the given URL."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


def init_engine(url: Optional[str] = None) -> AsyncEngine:
    """
    Open the store connection pool.

    What:  Creates the async engine and session factory.
    When:  Once, from the application lifespan (or a test fixture).
    Args:
        url: Database URL; defaults to settings.database_url.

    Calling it again while an engine is open returns the open engine.
    """
    global _engine, _session_factory

    if _engine is not None:
        return _engine

    url = url or settings.database_url
    _engine = create_async_engine(url, **_engine_options(url))
    # expire_on_commit=False: response models read attributes after commit
    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    logger.info("Database engine initialized (%s)", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_engine() -> AsyncEngine:
    """Return the open engine. Raises RuntimeError before init_engine()."""
    if _engine is None:
        raise RuntimeError("Database engine is not initialized; call init_engine() first")
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory bound to the open engine."""
    if _session_factory is None:
        raise RuntimeError("Database engine is not initialized; call init_engine() first")
    return _session_factory


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handler
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/posts")
        async def list_posts(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Schema Helpers ────────────────────────────────────────────────────────
async def create_schema() -> None:
    """Create every table registered on Base.metadata (tests and local dev)."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_schema() -> None:
    """Drop every table registered on Base.metadata. Destroys all data."""
    logger.warning("Dropping all blog tables")
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """
    What:  Closes all pooled connections and forgets the engine.
    When:  Application shutdown (lifespan handler) or test teardown.
    """
    global _engine, _session_factory

    if _engine is None:
        return
    await _engine.dispose()
    _engine = None
    _session_factory = None
    logger.info("Database engine disposed")
