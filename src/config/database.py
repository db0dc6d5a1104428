import contextlib
import sys
from collections.abc import AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from src.config.settings import settings


def create_engine(url: str):
    url = str(url)
    use_echo = settings.LOG_DB
    connect_args = {}
    engine_kwargs = {}
    if "sqlite" in url:
        connect_args = {"timeout": 15}
        # aiosqlite connections are bound to the loop that opened them
        engine_kwargs["poolclass"] = NullPool
    new_engine = create_async_engine(
        url,
        echo=use_echo,
        future=True,  # use the sqlalchemy 2.0 classes
        connect_args=connect_args,
        **engine_kwargs,
    )
    if "sqlite" in url:
        event.listen(new_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return new_engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def generate_test_db_dsn(dsn: str) -> str:
    part_dsn, db_name = str(dsn).rsplit("/", 1)
    return f"{part_dsn}/test_{db_name}"


engine = create_engine(settings.database_url)
if "pytest" in sys.modules:
    # point the engine at the testing database
    engine = create_engine(generate_test_db_dsn(settings.database_url))


async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


@contextlib.asynccontextmanager
async def async_session_manager(
    auto_commit=True, session_overwrite: AsyncSession | None = None
) -> AsyncIterator[AsyncSession]:
    if session_overwrite:
        yield session_overwrite
    else:
        async with async_session_maker() as session:
            try:
                yield session
            except Exception as e:
                await session.rollback()
                raise e
            else:
                if auto_commit:
                    await session.commit()
