"""SQLAlchemy async engine and the todos table scaffolding.

Nothing here is reachable over HTTP; the table is created and listed at
startup only.
"""

import asyncio
import logging
import sys
from typing import TYPE_CHECKING, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import AsyncAdaptedQueuePool

from spa_server.config import Settings, settings

if TYPE_CHECKING:
    from spa_server.models import Todo

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def build_engine(app_settings: Settings) -> AsyncEngine:
    """Create the async engine with the configured connection pool."""
    kw: dict = {"echo": False}
    if not app_settings.is_memory_sqlite:
        kw.update(
            poolclass=AsyncAdaptedQueuePool,
            pool_size=app_settings.DB_POOL_SIZE,
            max_overflow=app_settings.DB_MAX_OVERFLOW,
            pool_recycle=app_settings.DB_POOL_RECYCLE,
            pool_timeout=app_settings.DB_POOL_TIMEOUT,
            pool_pre_ping=app_settings.DB_POOL_PRE_PING,
        )
    return create_async_engine(app_settings.DATABASE_URL, **kw)


def session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def create_todos_table(engine: AsyncEngine) -> None:
    """Create the todos table if it does not exist yet."""
    async with engine.begin() as conn:
        from spa_server.models import Todo  # noqa
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Table 'todos' created or already exists.")


async def add_todo(sessions: async_sessionmaker, description: str) -> int:
    from spa_server.models import Todo

    async with sessions() as session:
        todo = Todo(description=description)
        session.add(todo)
        await session.commit()
        return todo.id


async def list_todos(sessions: async_sessionmaker) -> List["Todo"]:
    """Return all todos ordered by id, logging one line per row."""
    from spa_server.models import Todo

    async with sessions() as session:
        result = await session.execute(select(Todo).order_by(Todo.id))
        todos = list(result.scalars().all())

    for todo in todos:
        logger.info(f"- [{'x' if todo.done else ' '}] {todo.id}: {todo.description}")
    return todos


async def init_db(engine: AsyncEngine) -> List["Todo"]:
    """Startup hook: create the table and list what is in it."""
    await create_todos_table(engine)
    return await list_todos(session_factory(engine))


async def _create_tables_only() -> None:
    engine = build_engine(settings)
    try:
        await create_todos_table(engine)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    if "--init" in sys.argv:
        # Go through the imported module: models register on its Base, not __main__'s
        from spa_server import database

        asyncio.run(database._create_tables_only())
        print("Database tables created successfully.")
