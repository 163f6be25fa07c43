from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import event, Engine, Result
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine

import config
from models import Base

# HARD DISABLE SQL echo - register logs should not be cluttered with SQL statements
sql_echo = False

engine: AsyncEngine = create_async_engine(config.DB_URL, echo=sql_echo)
session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@asynccontextmanager
async def get_db_session(maker: async_sessionmaker | None = None) -> AsyncSession:
    async with (maker or session_maker)() as session:
        yield session


async def session_execute(stmt, session: AsyncSession) -> Result[Any]:
    return await session.execute(stmt)


async def session_commit(session: AsyncSession) -> None:
    await session.commit()


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async def create_db_and_tables(target: AsyncEngine | None = None) -> None:
    """
    Create missing tables.

    Session data is the register's only local copy of today's orders,
    so existing tables are never dropped here.
    """
    target = target or engine
    if target is engine and config.DB_URL.startswith("sqlite+aiosqlite:///data/"):
        Path("data").mkdir(exist_ok=True)
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
