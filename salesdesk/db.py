import logging
from contextlib import contextmanager
from typing import Any, Iterator

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from salesdesk.exceptions import DependencyError

logger = logging.getLogger(__name__)


def normalize_url(raw_url: str) -> str:
    if raw_url.startswith("postgres://"):
        return raw_url.replace("postgres://", "postgresql+asyncpg://", 1)
    if raw_url.startswith("postgresql://"):
        return raw_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return raw_url


def build_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(normalize_url(database_url), pool_pre_ping=True)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session(request: Request) -> AsyncSession:  # type: ignore[misc]
    """Yield one session per request from the factory owned by the app lifespan."""
    async with request.app.state.sessionmaker() as session:
        yield session


@contextmanager
def dependency_errors(operation: str) -> Iterator[None]:
    """Re-raise driver/database failures as DependencyError, chained to the cause."""
    try:
        yield
    except (SQLAlchemyError, OSError) as exc:
        logger.exception("Database call failed during %s", operation)
        raise DependencyError(f"Database unavailable during {operation}") from exc


def row_to_dict(keys: Any, row: Any) -> dict[str, Any]:
    return dict(zip(keys, row))
