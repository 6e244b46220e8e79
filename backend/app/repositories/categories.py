"""Accès aux catégories de photos."""

from sqlalchemy import delete, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.category import PhotoCategory
from app.models.photo import Photo

_LISTING_ORDER = (PhotoCategory.sort_order.asc(), PhotoCategory.name.asc())


class CategoryRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> list[PhotoCategory]:
        result = await self.session.execute(select(PhotoCategory).order_by(*_LISTING_ORDER))
        return list(result.scalars().all())

    async def list_with_photo_count(self) -> list[tuple[PhotoCategory, int]]:
        """Catégories avec leur nombre de photos, en une seule requête."""
        query = (
            select(PhotoCategory, func.count(Photo.id))
            .outerjoin(Photo, Photo.category_id == PhotoCategory.id)
            .group_by(PhotoCategory.id)
            .order_by(*_LISTING_ORDER)
        )
        result = await self.session.execute(query)
        return [(category, int(count)) for category, count in result.all()]

    async def get_by_id(self, category_id: int) -> PhotoCategory | None:
        return await self.session.get(PhotoCategory, category_id)

    async def get_by_name(self, name: str) -> PhotoCategory | None:
        result = await self.session.execute(select(PhotoCategory).where(PhotoCategory.name == name))
        return result.scalar_one_or_none()

    async def get_by_display_name(self, display_name: str) -> PhotoCategory | None:
        result = await self.session.execute(
            select(PhotoCategory).where(PhotoCategory.display_name == display_name).limit(1)
        )
        return result.scalar_one_or_none()

    async def exists_by_name(self, name: str) -> bool:
        result = await self.session.execute(select(exists().where(PhotoCategory.name == name)))
        return bool(result.scalar())

    async def exists_any(self) -> bool:
        result = await self.session.execute(select(PhotoCategory.id).limit(1))
        return result.scalar_one_or_none() is not None

    async def save(self, category: PhotoCategory) -> PhotoCategory:
        """Insère ou met à jour ; l'id est disponible après le flush."""
        self.session.add(category)
        await self.session.flush()
        await self.session.refresh(category)
        return category

    async def delete_by_id(self, category_id: int) -> bool:
        # Suppression explicite des photos en plus du ON DELETE CASCADE
        await self.session.execute(delete(Photo).where(Photo.category_id == category_id))
        result = await self.session.execute(delete(PhotoCategory).where(PhotoCategory.id == category_id))
        return result.rowcount > 0
