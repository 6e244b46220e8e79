import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from app.api.dependencies import get_photo_service
from app.models.category import PhotoCategory
from app.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from app.services.photo_service import PhotoService

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/photo-categories", tags=["photo-categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(service: PhotoService = Depends(get_photo_service)):
    rows = await service.get_categories_with_counts()
    return [_category_to_response(category, count) for category, count in rows]


@router.get("/name/{name}", response_model=CategoryResponse)
async def get_category_by_name(name: str, service: PhotoService = Depends(get_photo_service)):
    category = await service.get_category_by_name(name)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return _category_to_response(category, await service.count_photos_by_category(category.id))


@router.get("/display-name/{display_name}", response_model=CategoryResponse)
async def get_category_by_display_name(display_name: str, service: PhotoService = Depends(get_photo_service)):
    category = await service.get_category_by_display_name(display_name)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return _category_to_response(category, await service.count_photos_by_category(category.id))


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: int, service: PhotoService = Depends(get_photo_service)):
    category = await service.get_category_by_id(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return _category_to_response(category, await service.count_photos_by_category(category_id))


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(data: CategoryCreate, service: PhotoService = Depends(get_photo_service)):
    logger.info(f"POST /photo-categories: name={data.name!r}")
    category = await service.create_category(data)
    return _category_to_response(category, 0)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    data: CategoryUpdate,
    service: PhotoService = Depends(get_photo_service),
):
    category = await service.update_category(category_id, data)
    return _category_to_response(category, await service.count_photos_by_category(category_id))


@router.delete("/{category_id}", status_code=204)
async def delete_category(category_id: int, service: PhotoService = Depends(get_photo_service)):
    await service.delete_category(category_id)
    return Response(status_code=204)


def _category_to_response(category: PhotoCategory, photo_count: int) -> dict:
    return {
        **{c.name: getattr(category, c.name) for c in category.__table__.columns},
        "photo_count": photo_count,
    }
