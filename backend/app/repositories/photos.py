"""Accès aux photos.

Ordre de listing commun (liste, catégorie, featured, recherche) :
sort_order croissant, puis created_at et id décroissants.
Ordre par popularité : likes_count décroissant, puis id croissant.
"""

from sqlalchemy import Select, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import utcnow
from app.models.category import PhotoCategory
from app.models.photo import Photo

_LISTING_ORDER = (Photo.sort_order.asc(), Photo.created_at.desc(), Photo.id.desc())
_LIKES_ORDER = (Photo.likes_count.desc(), Photo.id.asc())


def like_pattern(term: str) -> str:
    """Motif LIKE « contient », avec %, _ et \\ pris littéralement."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PhotoRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _all(self, query: Select, page: int | None = None, size: int | None = None) -> list[Photo]:
        if page is not None and size is not None:
            query = query.offset(page * size).limit(size)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, photo_id: int) -> Photo | None:
        return await self.session.get(Photo, photo_id)

    async def list_all(self, page: int | None = None, size: int | None = None) -> list[Photo]:
        return await self._all(select(Photo).order_by(*_LISTING_ORDER), page, size)

    async def list_by_category(
        self, category_id: int, page: int | None = None, size: int | None = None
    ) -> list[Photo]:
        query = select(Photo).where(Photo.category_id == category_id).order_by(*_LISTING_ORDER)
        return await self._all(query, page, size)

    async def list_featured(self) -> list[Photo]:
        return await self._all(select(Photo).where(Photo.is_featured.is_(True)).order_by(*_LISTING_ORDER))

    async def list_by_likes(self) -> list[Photo]:
        return await self._all(select(Photo).order_by(*_LIKES_ORDER))

    async def list_by_category_by_likes(self, category_id: int) -> list[Photo]:
        query = select(Photo).where(Photo.category_id == category_id).order_by(*_LIKES_ORDER)
        return await self._all(query)

    async def top_by_likes(self, limit: int) -> list[Photo]:
        return await self._all(select(Photo).order_by(*_LIKES_ORDER).limit(limit))

    async def count_by_category(self, category_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Photo.id)).where(Photo.category_id == category_id)
        )
        return result.scalar() or 0

    async def has_photos(self, category_id: int) -> bool:
        result = await self.session.execute(
            select(Photo.id).where(Photo.category_id == category_id).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def search(self, keyword: str, page: int | None = None, size: int | None = None) -> list[Photo]:
        pattern = like_pattern(keyword)
        query = (
            select(Photo)
            .where(
                or_(
                    Photo.title.ilike(pattern, escape="\\"),
                    Photo.description.ilike(pattern, escape="\\"),
                )
            )
            .order_by(*_LISTING_ORDER)
        )
        return await self._all(query, page, size)

    async def search_by_location(self, location: str) -> list[Photo]:
        query = (
            select(Photo)
            .where(Photo.location.ilike(like_pattern(location), escape="\\"))
            .order_by(*_LISTING_ORDER)
        )
        return await self._all(query)

    async def category_display_names(self, category_ids: set[int]) -> dict[int, str]:
        if not category_ids:
            return {}
        result = await self.session.execute(
            select(PhotoCategory.id, PhotoCategory.display_name).where(PhotoCategory.id.in_(category_ids))
        )
        return {row.id: row.display_name for row in result.all()}

    async def save(self, photo: Photo) -> Photo:
        self.session.add(photo)
        await self.session.flush()
        await self.session.refresh(photo)
        return photo

    async def delete_by_id(self, photo_id: int) -> bool:
        result = await self.session.execute(delete(Photo).where(Photo.id == photo_id))
        return result.rowcount > 0

    async def increment_likes(self, photo_id: int) -> bool:
        """UPDATE atomique, sans lecture préalable. False si la photo n'existe pas."""
        result = await self.session.execute(
            update(Photo)
            .where(Photo.id == photo_id)
            .values(likes_count=Photo.likes_count + 1, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def decrement_likes(self, photo_id: int) -> bool:
        """False si la photo n'existe pas ou si ses likes sont déjà à 0."""
        result = await self.session.execute(
            update(Photo)
            .where(Photo.id == photo_id, Photo.likes_count > 0)
            .values(likes_count=Photo.likes_count - 1, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0
