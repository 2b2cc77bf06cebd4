"""Async engine, session factory and the per-request session dependency.

Services own their unit of work: each mutating call commits on success and
rolls back before raising, so the dependency below only opens and closes
the session.
"""

import logging
import os
from collections.abc import AsyncGenerator, Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import Settings, settings

logger = logging.getLogger(__name__)


def resolve_database_url(config: Settings, environ: Mapping[str, str] = os.environ) -> str:
    """Pick the board store URL, preferring the test database under TESTING=true."""
    if environ.get("TESTING") == "true":
        url = environ.get("TEST_DATABASE_URL") or config.test_database_url
    else:
        url = config.database_url

    url = (url or "").strip()
    if not url:
        raise RuntimeError(
            "DATABASE_URL is not configured. Set it in the environment or .env file "
            "(e.g., DATABASE_URL=postgresql+asyncpg://<user>:<pass>@<host>/<db>)."
        )
    return url


def engine_options(url: str, echo: bool = False) -> dict[str, Any]:
    """Engine keyword arguments for the given backend."""
    options: dict[str, Any] = {"echo": echo}
    if not url.startswith("sqlite"):
        options["pool_pre_ping"] = True
    return options


DB_URL = resolve_database_url(settings)

engine = create_async_engine(DB_URL, **engine_options(DB_URL, settings.db_echo))
logger.debug("Database engine created for %s", engine.url.render_as_string(hide_password=True))

AsyncSessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, Any]:
    async with AsyncSessionLocal() as session:
        yield session
