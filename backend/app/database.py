from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.config import settings
from app.models import category, photo  # noqa: F401  (enregistre les tables)
from app.models.base import Base


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    # SQLite n'applique ON DELETE CASCADE que si foreign_keys est activé
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def configure_engine(target: AsyncEngine) -> AsyncEngine:
    if target.dialect.name == "sqlite":
        event.listen(target.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return target


engine = configure_engine(create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO))

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_models(target: AsyncEngine = engine) -> None:
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        yield session
