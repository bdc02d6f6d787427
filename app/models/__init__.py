from app.models.base import Base
from app.models.recipe import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, Recipe

__all__ = [
    "Base",
    "DESCRIPTION_MAX_LENGTH",
    "Recipe",
    "TITLE_MAX_LENGTH",
]
