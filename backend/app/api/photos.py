from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import inspect

from app.api.dependencies import get_photo_service
from app.models.photo import Photo
from app.schemas.photo import PhotoCreate, PhotoResponse, PhotoUpdate
from app.services.photo_service import PhotoService

router = APIRouter(prefix="/photos", tags=["photos"])


# Routes statiques avant /{photo_id}, sinon "search" serait lu comme un id


@router.get("", response_model=list[PhotoResponse])
async def list_photos(
    page: int | None = None,
    size: int | None = None,
    service: PhotoService = Depends(get_photo_service),
):
    return await _photos_to_response(service, await service.get_all_photos(page, size))


@router.get("/search", response_model=list[PhotoResponse])
async def search_photos(
    keyword: str | None = None,
    page: int | None = None,
    size: int | None = None,
    service: PhotoService = Depends(get_photo_service),
):
    return await _photos_to_response(service, await service.search_photos(keyword, page, size))


@router.get("/location", response_model=list[PhotoResponse])
async def photos_by_location(location: str | None = None, service: PhotoService = Depends(get_photo_service)):
    return await _photos_to_response(service, await service.get_photos_by_location(location))


@router.get("/featured", response_model=list[PhotoResponse])
async def featured_photos(service: PhotoService = Depends(get_photo_service)):
    return await _photos_to_response(service, await service.get_featured_photos())


@router.get("/popular", response_model=list[PhotoResponse])
async def popular_photos(service: PhotoService = Depends(get_photo_service)):
    return await _photos_to_response(service, await service.get_photos_by_likes())


@router.get("/top", response_model=list[PhotoResponse])
async def top_photos(service: PhotoService = Depends(get_photo_service)):
    return await _photos_to_response(service, await service.get_top_photos_by_likes())


@router.get("/category/{category_id}", response_model=list[PhotoResponse])
async def photos_by_category(
    category_id: int,
    page: int | None = None,
    size: int | None = None,
    service: PhotoService = Depends(get_photo_service),
):
    photos = await service.get_photos_by_category_id(category_id, page, size)
    return await _photos_to_response(service, photos)


@router.get("/category/{category_id}/popular", response_model=list[PhotoResponse])
async def popular_photos_by_category(category_id: int, service: PhotoService = Depends(get_photo_service)):
    photos = await service.get_photos_by_category_order_by_likes(category_id)
    return await _photos_to_response(service, photos)


@router.post("", response_model=PhotoResponse, status_code=201)
async def create_photo(data: PhotoCreate, service: PhotoService = Depends(get_photo_service)):
    photo = await service.create_photo(data)
    return await _photo_to_response(service, photo)


@router.get("/{photo_id}", response_model=PhotoResponse)
async def get_photo(photo_id: int, service: PhotoService = Depends(get_photo_service)):
    photo = await service.get_photo_by_id(photo_id)
    if not photo:
        raise HTTPException(status_code=404, detail="Photo not found")
    return await _photo_to_response(service, photo)


@router.put("/{photo_id}", response_model=PhotoResponse)
async def update_photo(photo_id: int, data: PhotoUpdate, service: PhotoService = Depends(get_photo_service)):
    photo = await service.update_photo(photo_id, data)
    return await _photo_to_response(service, photo)


@router.delete("/{photo_id}", status_code=204)
async def delete_photo(photo_id: int, service: PhotoService = Depends(get_photo_service)):
    await service.delete_photo(photo_id)
    return Response(status_code=204)


@router.post("/{photo_id}/like", response_model=PhotoResponse)
async def like_photo(photo_id: int, service: PhotoService = Depends(get_photo_service)):
    photo = await service.increment_likes(photo_id)
    return await _photo_to_response(service, photo)


@router.post("/{photo_id}/unlike", response_model=PhotoResponse)
async def unlike_photo(photo_id: int, service: PhotoService = Depends(get_photo_service)):
    photo = await service.decrement_likes(photo_id)
    return await _photo_to_response(service, photo)


def _photo_fields(photo: Photo) -> dict:
    # Clés d'attribut (photo_metadata), pas noms de colonne (metadata)
    return {attr.key: getattr(photo, attr.key) for attr in inspect(Photo).column_attrs}


async def _photo_to_response(service: PhotoService, photo: Photo) -> dict:
    names = await service.category_names_for([photo])
    return {**_photo_fields(photo), "category_name": names.get(photo.category_id)}


async def _photos_to_response(service: PhotoService, photos: list[Photo]) -> list[dict]:
    names = await service.category_names_for(photos)
    return [{**_photo_fields(p), "category_name": names.get(p.category_id)} for p in photos]
