# backend/bookinghub/db/session.py
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from bookinghub.db import models  # noqa: F401  (registers tables on Base.metadata)
from bookinghub.db.base import Base

# connection option read by the SQLite "begin" hook below
WRITE_LOCK_OPTION = "bookinghub_write_lock"


def _sqlite_lower(value):
    return value.lower() if isinstance(value, str) else value


def _configure_sqlite(engine: AsyncEngine) -> None:
    """
    SQLite has no row locks and its built-in lower() only folds ASCII.

    SQLAlchemy takes over BEGIN so that write transactions can open with
    BEGIN IMMEDIATE, which holds the database write lock from the first
    statement to the commit, across processes. lower() is replaced by
    Python's str.lower.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        dbapi_connection.create_function("lower", 1, _sqlite_lower)

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        if conn.get_execution_options().get(WRITE_LOCK_OPTION):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    engine = create_async_engine(
        database_url,
        echo=echo,
        future=True,
    )
    if engine.dialect.name == "sqlite":
        _configure_sqlite(engine)
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def begin_write(db: AsyncSession) -> None:
    """
    Open the session's transaction as a writer. Must run before anything
    else in the session. On SQLite this takes the database write lock up
    front; other dialects rely on SELECT ... FOR UPDATE.
    """
    await db.connection(execution_options={WRITE_LOCK_OPTION: True})


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
