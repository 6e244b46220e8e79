from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.api.categories import router as categories_router
from app.api.photos import router as photos_router

api_router = APIRouter(prefix="/api")
api_router.include_router(categories_router)
api_router.include_router(photos_router)


@api_router.get("/health", response_class=PlainTextResponse)
async def health_check():
    return "OK"
