from datetime import datetime

from pydantic import Field, field_validator

from app.models.category import DEFAULT_ICON_COLOR
from app.schemas.common import CamelModel, not_blank


class CategoryCreate(CamelModel):
    name: str = Field(..., max_length=100)
    display_name: str = Field(..., max_length=100)
    description: str | None = None
    icon_color: str | None = Field(default=DEFAULT_ICON_COLOR, max_length=20)
    sort_order: int = 0

    @field_validator("name", "display_name")
    @classmethod
    def validate_required(cls, v: str) -> str:
        return not_blank(v)


# PUT = remplacement complet, mêmes champs qu'à la création
CategoryUpdate = CategoryCreate


class CategoryResponse(CamelModel):
    id: int
    name: str
    display_name: str
    description: str | None
    icon_color: str | None
    sort_order: int
    created_at: datetime
    updated_at: datetime
    photo_count: int = 0
