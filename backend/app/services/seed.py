"""Données par défaut : catégories et photos d'exemple, insérées au démarrage si absentes."""

import logging
import random
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.base import utcnow
from app.schemas.category import CategoryCreate
from app.schemas.photo import PhotoCreate
from app.services.photo_service import PhotoService

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    {"name": "nature", "display_name": "Nature Photography",
     "description": "Beautiful landscapes, wildlife, and natural scenes", "icon_color": "#10B981", "sort_order": 1},
    {"name": "street", "display_name": "Street Photography",
     "description": "Urban life, people, and candid moments", "icon_color": "#6B7280", "sort_order": 2},
    {"name": "portrait", "display_name": "Portrait Photography",
     "description": "People portraits and character studies", "icon_color": "#EC4899", "sort_order": 3},
    {"name": "travel", "display_name": "Travel Photography",
     "description": "Adventures and places around the world", "icon_color": "#3B82F6", "sort_order": 4},
]

# (titre, description, fichier, lieu, appareil, featured)
SAMPLE_PHOTOS = {
    "nature": [
        ("Mountain Sunrise", "Golden hour over the mountain peaks", "mountain-sunrise",
         "Rocky Mountains, Colorado", "Canon EOS R5", True),
        ("Forest Stream", "Peaceful stream flowing through autumn forest", "forest-stream",
         "Pacific Northwest", "Nikon D850", False),
    ],
    "street": [
        ("City Rush", "People rushing through the busy intersection", "city-rush",
         "New York City", "Fujifilm X-T4", True),
        ("Coffee Shop Moments", "Candid scene from a local coffee shop", "coffee-shop",
         "San Francisco", "Leica Q2", False),
    ],
    "portrait": [
        ("Artist at Work", "Portrait of a painter in her studio", "artist-work",
         "Studio, Brooklyn", "Canon 5D Mark IV", True),
        ("Young Entrepreneur", "Professional headshot for business profile", "entrepreneur",
         "Silicon Valley", "Sony A7R IV", False),
    ],
    "travel": [
        ("Ancient Temple", "Sunrise over ancient temple complex", "ancient-temple",
         "Angkor Wat, Cambodia", "Canon EOS R6", True),
        ("Market Vendors", "Colorful spices at traditional market", "market-vendors",
         "Marrakech, Morocco", "Fujifilm X-Pro3", False),
    ],
}

SAMPLE_METADATA = {"aperture": "f/2.8", "shutterSpeed": "1/125", "iso": 800, "focalLength": "85mm"}


def _sample_photo(category_id: int, category_name: str, position: int, sample: tuple) -> PhotoCreate:
    title, description, slug, location, camera, featured = sample
    return PhotoCreate(
        category_id=category_id,
        title=title,
        description=description,
        file_path=f"/images/photography/{category_name}/{slug}.jpg",
        thumbnail_path=f"/images/photography/{category_name}/thumbs/{slug}-thumb.jpg",
        metadata=SAMPLE_METADATA,
        taken_at=utcnow() - timedelta(days=random.randint(0, 364)),
        location=location,
        camera_info=camera,
        file_size=random.randint(1_000_000, 6_000_000),
        dimensions="1920x1080",
        sort_order=position,
        is_featured=featured,
    )


async def seed_categories(service: PhotoService) -> int:
    logger.info("Initializing photo categories...")
    if await service.categories.exists_any():
        logger.info("Photo categories already exist, skipping initialization")
        return 0

    created = 0
    for data in DEFAULT_CATEGORIES:
        try:
            category = await service.create_category(CategoryCreate(**data))
            logger.info(f"Created photo category: {category.display_name} (id={category.id})")
            created += 1
        except Exception as exc:
            logger.error(f"Failed to create photo category {data['display_name']!r}: {exc}")
    return created


async def seed_photos(service: PhotoService) -> int:
    logger.info("Initializing sample photos...")
    categories = await service.get_all_categories()
    if not categories:
        logger.warning("No photo categories found, skipping photo initialization")
        return 0

    # Un rollback expire les objets chargés : on garde des valeurs simples
    targets = [(c.id, c.name.lower(), c.display_name) for c in categories]

    created = 0
    for category_id, name, display_name in targets:
        samples = SAMPLE_PHOTOS.get(name)
        if samples is None:
            logger.warning(f"Unknown category: {name}, skipping sample photos")
            continue
        if await service.photos.has_photos(category_id):
            logger.info(f"Category {name} already has photos, skipping")
            continue
        for position, sample in enumerate(samples, 1):
            try:
                photo = await service.create_photo(_sample_photo(category_id, name, position, sample))
                logger.info(f"Created sample photo: {photo.title} for category: {display_name}")
                created += 1
            except Exception as exc:
                logger.error(f"Failed to create sample photo {sample[0]!r} for {display_name}: {exc}")
    return created


async def seed_defaults(session_factory: async_sessionmaker[AsyncSession]) -> tuple[int, int]:
    """Idempotent : ne crée que ce qui manque. Retourne (catégories, photos) créées."""
    async with session_factory() as db:
        service = PhotoService(db)
        categories = await seed_categories(service)
        photos = await seed_photos(service)
    logger.info(f"Seed completed: {categories} categories, {photos} photos created")
    return categories, photos
