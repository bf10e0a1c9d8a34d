"""Async database access.

Engine and session factory built from settings, the ``get_db`` dependency
and Result-returning helpers. Helpers never raise SQLAlchemy errors; a
failure comes back as ``Err`` whose message names ``action`` when given.
"""
from typing import Any, AsyncIterator, Awaitable, Callable, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from core.config import settings
from core.errors import AppError, DatabaseErrorMapper, Err, Ok, Result, not_found
from core.logging import db_logger

T = TypeVar("T")

log = db_logger()


def _engine_kwargs(url: str) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"echo": settings.LOG_SQL}
    # sqlite uses a static/null pool; pool sizing only applies to server databases
    if not url.startswith("sqlite"):
        kwargs.update(pool_pre_ping=True, pool_size=5, max_overflow=10)
    return kwargs


engine = create_async_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()

_mapper = DatabaseErrorMapper("database")


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one session per request."""
    async with AsyncSessionLocal() as session:
        yield session


def _failed(event: str, exc: SQLAlchemyError, action: str | None, **fields) -> Err[AppError]:
    log.error(event, action=action, error=str(exc), **fields)
    return Err(_mapper.map_exception(exc, action))


async def fetch_one(
    session: AsyncSession,
    model: type[T],
    id: int,
    entity_name: str | None = None,
    *,
    action: str | None = None,
) -> Result[T, AppError]:
    """Row by primary key, ``not_found`` when absent."""
    name = entity_name or model.__name__
    try:
        entity = await session.get(model, id)
    except SQLAlchemyError as e:
        return _failed("fetch_one_failed", e, action, model=name, entity_id=id)
    if entity is None:
        return not_found(name, id, origin="database.fetch_one")
    return Ok(entity)


async def fetch_all(
    session: AsyncSession,
    model: type[T],
    *,
    order_by=None,
    action: str | None = None,
) -> Result[list[T], AppError]:
    query = select(model)
    if order_by is not None:
        query = query.order_by(order_by)
    try:
        rows = await session.execute(query)
    except SQLAlchemyError as e:
        return _failed("fetch_all_failed", e, action, model=model.__name__)
    return Ok(list(rows.scalars().all()))


async def _commit(
    session: AsyncSession,
    entity: T,
    stage: Callable[[], Awaitable[None] | None],
    *,
    refresh: bool,
    event: str,
    action: str | None,
) -> Result[T, AppError]:
    """Stage a change, commit it and roll back on failure."""
    try:
        staged = stage()
        if staged is not None:
            await staged
        await session.commit()
        if refresh:
            await session.refresh(entity)
    except SQLAlchemyError as e:
        await session.rollback()
        return _failed(event, e, action, model=type(entity).__name__)
    return Ok(entity)


async def create_entity(session: AsyncSession, entity: T, *, action: str | None = None) -> Result[T, AppError]:
    """Insert and reload, so the generated id is populated."""
    return await _commit(
        session, entity, lambda: session.add(entity),
        refresh=True, event="create_failed", action=action,
    )


async def update_entity(session: AsyncSession, entity: T, *, action: str | None = None) -> Result[T, AppError]:
    """Commit attribute changes already made on a loaded entity."""
    return await _commit(
        session, entity, lambda: None,
        refresh=True, event="update_failed", action=action,
    )


async def delete_entity(session: AsyncSession, entity: T, *, action: str | None = None) -> Result[T, AppError]:
    return await _commit(
        session, entity, lambda: session.delete(entity),
        refresh=False, event="delete_failed", action=action,
    )
