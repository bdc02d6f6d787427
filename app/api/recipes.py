from fastapi import APIRouter

from app.api.schemas import RecipeListResponse, RecipeResponse
from app.dependencies import RecipeStoreDep
from app.errors import NotFoundError

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("")
async def list_recipes(store: RecipeStoreDep) -> RecipeListResponse:
    recipes = await store.list_all()
    return RecipeListResponse(
        recipes=[RecipeResponse.model_validate(r) for r in recipes],
    )


@router.get("/{slug}")
async def get_recipe(slug: str, store: RecipeStoreDep) -> RecipeResponse:
    recipe = await store.get_by_slug(slug)
    if not recipe:
        raise NotFoundError()
    return RecipeResponse.model_validate(recipe)
