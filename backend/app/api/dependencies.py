from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services.photo_service import PhotoService


async def get_photo_service(db: AsyncSession = Depends(get_db)) -> PhotoService:
    return PhotoService(db)
