from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import configure_engine, get_db, init_models
from app.main import app
from app.models.category import PhotoCategory
from app.models.photo import Photo
from app.services.photo_service import PhotoService


@pytest.fixture
async def engine():
    """Base SQLite en mémoire, neuve pour chaque test."""
    test_engine = configure_engine(
        create_async_engine(
            "sqlite+aiosqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    await init_models(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def service(db) -> PhotoService:
    return PhotoService(db)


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Client HTTP branché sur l'app, avec get_db redirigé vers la base de test."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_category(db):
    async def _make(name: str, sort_order: int = 0, display_name: str | None = None) -> PhotoCategory:
        category = PhotoCategory(name=name, display_name=display_name or name.title(), sort_order=sort_order)
        db.add(category)
        await db.commit()
        return category

    return _make


@pytest.fixture
def make_photo(db):
    async def _make(category: PhotoCategory, title: str, **fields) -> Photo:
        fields.setdefault("file_path", f"/images/{title.lower().replace(' ', '-')}.jpg")
        photo = Photo(category_id=category.id, title=title, **fields)
        db.add(photo)
        await db.commit()
        return photo

    return _make
