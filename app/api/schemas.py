from datetime import datetime

from pydantic import BaseModel, ConfigDict


class RecipeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    title: str | None
    description: str | None
    image_url: str | None
    site_name: str | None
    slug: str | None
    created_at: datetime | None


class RecipeListResponse(BaseModel):
    recipes: list[RecipeResponse]
