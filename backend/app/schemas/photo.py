from datetime import datetime

from pydantic import Field, field_validator

from app.schemas.common import CamelModel, not_blank


class PhotoCreate(CamelModel):
    category_id: int
    title: str = Field(..., max_length=200)
    description: str | None = None
    file_path: str = Field(..., max_length=500)
    thumbnail_path: str | None = Field(default=None, max_length=500)
    photo_metadata: dict | None = Field(default=None, alias="metadata")
    taken_at: datetime | None = None
    location: str | None = Field(default=None, max_length=200)
    camera_info: str | None = Field(default=None, max_length=200)
    file_size: int | None = Field(default=None, ge=0)
    dimensions: str | None = Field(default=None, max_length=20)
    sort_order: int = 0
    is_featured: bool = False

    @field_validator("title", "file_path")
    @classmethod
    def validate_required(cls, v: str) -> str:
        return not_blank(v)


# likes_count n'est modifiable que via like/unlike
PhotoUpdate = PhotoCreate


class PhotoResponse(CamelModel):
    id: int
    category_id: int
    category_name: str | None = None
    title: str
    description: str | None = None
    file_path: str
    thumbnail_path: str | None = None
    photo_metadata: dict | None = Field(default=None, alias="metadata")
    taken_at: datetime | None = None
    location: str | None = None
    camera_info: str | None = None
    file_size: int | None = None
    dimensions: str | None = None
    sort_order: int
    is_featured: bool
    likes_count: int
    created_at: datetime
    updated_at: datetime
