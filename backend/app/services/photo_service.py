"""Orchestration catégories / photos.

Chaque opération d'écriture est une transaction : flush, puis commit, ou
rollback avant de relayer l'erreur. Les lectures n'émettent que des SELECT.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import InvalidStateError, NotFoundError, ValidationFailure
from app.models.category import PhotoCategory
from app.models.photo import Photo
from app.repositories.categories import CategoryRepository
from app.repositories.photos import PhotoRepository
from app.schemas.category import CategoryCreate, CategoryUpdate
from app.schemas.photo import PhotoCreate, PhotoUpdate

logger = logging.getLogger(__name__)

# OFFSET SQLite est un entier signé 64 bits
MAX_OFFSET = 2**63 - 1


def validate_page(page: int | None, size: int | None) -> tuple[int | None, int | None]:
    """Pas de pagination si les deux sont absents ; sinon page >= 0 et 0 < size <= MAX_PAGE_SIZE."""
    if page is None and size is None:
        return None, None
    page = 0 if page is None else page
    size = settings.DEFAULT_PAGE_SIZE if size is None else size
    if page < 0:
        raise ValidationFailure(f"page must be >= 0 (got {page})")
    if size <= 0 or size > settings.MAX_PAGE_SIZE:
        raise ValidationFailure(f"size must be between 1 and {settings.MAX_PAGE_SIZE} (got {size})")
    if page * size > MAX_OFFSET:
        raise ValidationFailure(f"page {page} is out of range for size {size}")
    return page, size


def _required_term(value: str | None, name: str) -> str:
    term = (value or "").strip()
    if not term:
        raise ValidationFailure(f"{name} is required")
    return term


class PhotoService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.categories = CategoryRepository(session)
        self.photos = PhotoRepository(session)

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ValidationFailure(f"Constraint violation: {exc.orig}") from exc
        except Exception:
            await self.session.rollback()
            raise

    async def _persist(self, save, entity):
        """Flush via le repository puis commit ; rollback sur toute erreur."""
        try:
            entity = await save(entity)
        except IntegrityError as exc:
            await self.session.rollback()
            raise ValidationFailure(f"Constraint violation: {exc.orig}") from exc
        except Exception:
            await self.session.rollback()
            raise
        await self._commit()
        return entity

    async def _rollback(self) -> None:
        await self.session.rollback()

    # --- Catégories ---

    async def get_all_categories(self) -> list[PhotoCategory]:
        return await self.categories.list_all()

    async def get_categories_with_counts(self) -> list[tuple[PhotoCategory, int]]:
        return await self.categories.list_with_photo_count()

    async def get_category_by_id(self, category_id: int) -> PhotoCategory | None:
        return await self.categories.get_by_id(category_id)

    async def get_category_by_name(self, name: str) -> PhotoCategory | None:
        return await self.categories.get_by_name(name)

    async def get_category_by_display_name(self, display_name: str) -> PhotoCategory | None:
        return await self.categories.get_by_display_name(display_name)

    async def create_category(self, data: CategoryCreate) -> PhotoCategory:
        if await self.categories.exists_by_name(data.name):
            raise ValidationFailure(f"Category name already exists: {data.name}")
        category = await self._persist(self.categories.save, PhotoCategory(**data.model_dump()))
        logger.info(f"Category created: id={category.id}, name={category.name!r}")
        return category

    async def update_category(self, category_id: int, data: CategoryUpdate) -> PhotoCategory:
        category = await self._get_category_or_raise(category_id)
        if data.name != category.name and await self.categories.exists_by_name(data.name):
            raise ValidationFailure(f"Category name already exists: {data.name}")
        for field, value in data.model_dump().items():
            setattr(category, field, value)
        category = await self._persist(self.categories.save, category)
        return category

    async def delete_category(self, category_id: int) -> None:
        try:
            deleted = await self.categories.delete_by_id(category_id)
        except Exception:
            await self._rollback()
            raise
        if not deleted:
            await self._rollback()
            raise NotFoundError(f"Category not found with id: {category_id}")
        await self._commit()
        logger.info(f"Category deleted with its photos: id={category_id}")

    async def count_photos_by_category(self, category_id: int) -> int:
        return await self.photos.count_by_category(category_id)

    # --- Photos ---

    async def get_all_photos(self, page: int | None = None, size: int | None = None) -> list[Photo]:
        page, size = validate_page(page, size)
        return await self.photos.list_all(page, size)

    async def get_photo_by_id(self, photo_id: int) -> Photo | None:
        return await self.photos.get_by_id(photo_id)

    async def get_photos_by_category_id(
        self, category_id: int, page: int | None = None, size: int | None = None
    ) -> list[Photo]:
        page, size = validate_page(page, size)
        return await self.photos.list_by_category(category_id, page, size)

    async def get_featured_photos(self) -> list[Photo]:
        return await self.photos.list_featured()

    async def get_photos_by_likes(self) -> list[Photo]:
        return await self.photos.list_by_likes()

    async def get_photos_by_category_order_by_likes(self, category_id: int) -> list[Photo]:
        return await self.photos.list_by_category_by_likes(category_id)

    async def get_top_photos_by_likes(self, limit: int | None = None) -> list[Photo]:
        return await self.photos.top_by_likes(limit or settings.TOP_PHOTOS_LIMIT)

    async def search_photos(
        self, keyword: str | None, page: int | None = None, size: int | None = None
    ) -> list[Photo]:
        keyword = _required_term(keyword, "keyword")
        page, size = validate_page(page, size)
        return await self.photos.search(keyword, page, size)

    async def get_photos_by_location(self, location: str | None) -> list[Photo]:
        return await self.photos.search_by_location(_required_term(location, "location"))

    async def category_names_for(self, photos: list[Photo]) -> dict[int, str]:
        return await self.photos.category_display_names({p.category_id for p in photos})

    async def create_photo(self, data: PhotoCreate) -> Photo:
        await self._get_category_or_raise(data.category_id)
        photo = await self._persist(self.photos.save, Photo(**data.model_dump()))
        logger.info(f"Photo created: id={photo.id}, category_id={photo.category_id}")
        return photo

    async def update_photo(self, photo_id: int, data: PhotoUpdate) -> Photo:
        photo = await self._get_photo_or_raise(photo_id)
        if data.category_id != photo.category_id:
            await self._get_category_or_raise(data.category_id)
        for field, value in data.model_dump().items():
            setattr(photo, field, value)
        photo = await self._persist(self.photos.save, photo)
        return photo

    async def delete_photo(self, photo_id: int) -> None:
        try:
            deleted = await self.photos.delete_by_id(photo_id)
        except Exception:
            await self._rollback()
            raise
        if not deleted:
            await self._rollback()
            raise NotFoundError(f"Photo not found with id: {photo_id}")
        await self._commit()

    async def increment_likes(self, photo_id: int) -> Photo:
        if not await self.photos.increment_likes(photo_id):
            await self._rollback()
            raise NotFoundError(f"Photo not found with id: {photo_id}")
        await self._commit()
        return await self._reload_photo(photo_id)

    async def decrement_likes(self, photo_id: int) -> Photo:
        if not await self.photos.decrement_likes(photo_id):
            await self._rollback()
            if await self.photos.get_by_id(photo_id) is None:
                raise NotFoundError(f"Photo not found with id: {photo_id}")
            raise InvalidStateError(f"Photo {photo_id} has no likes to remove")
        await self._commit()
        return await self._reload_photo(photo_id)

    # --- Helpers ---

    async def _get_category_or_raise(self, category_id: int) -> PhotoCategory:
        category = await self.categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError(f"Category not found with id: {category_id}")
        return category

    async def _get_photo_or_raise(self, photo_id: int) -> Photo:
        photo = await self.photos.get_by_id(photo_id)
        if photo is None:
            raise NotFoundError(f"Photo not found with id: {photo_id}")
        return photo

    async def _reload_photo(self, photo_id: int) -> Photo:
        # L'UPDATE atomique contourne l'identity map : relire depuis la base
        photo = await self.session.get(Photo, photo_id, populate_existing=True)
        if photo is None:
            raise NotFoundError(f"Photo not found with id: {photo_id}")
        return photo
