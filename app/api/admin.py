import logging

from fastapi import APIRouter, Request, status
from pydantic import BaseModel

from app.api.schemas import RecipeResponse
from app.dependencies import AdminToken, RecipeStoreDep
from app.errors import (
    InvalidPasswordError,
    InvalidURLError,
    NotFoundError,
    ScrapingFailedError,
    ServerError,
)
from app.services.auth import TOKEN_EXPIRES_IN, create_admin_token, validate_password
from app.services.recipes import RecipeStoreError
from app.services.scraper import scrape_recipe_metadata

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


class AuthRequest(BaseModel):
    password: str | None = None


class AuthResponse(BaseModel):
    token: str
    expiresIn: str


class RecipeCreateRequest(BaseModel):
    url: str | None = None


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.post("/auth")
async def authenticate(body: AuthRequest, request: Request) -> AuthResponse:
    if not body.password:
        raise InvalidPasswordError("Password is required", status_code=status.HTTP_400_BAD_REQUEST)

    if not validate_password(body.password):
        logger.warning(f"Failed authentication attempt from {_client_host(request)}")
        raise InvalidPasswordError()

    logger.info(f"Successful authentication from {_client_host(request)}")
    return AuthResponse(token=create_admin_token(), expiresIn=TOKEN_EXPIRES_IN)


@router.post("/recipes", status_code=status.HTTP_201_CREATED)
async def create_recipe(
    body: RecipeCreateRequest,
    request: Request,
    store: RecipeStoreDep,
    _: AdminToken,
) -> RecipeResponse:
    url = (body.url or "").strip()
    if not url.startswith(("http://", "https://")):
        raise InvalidURLError()

    metadata = await scrape_recipe_metadata(url)

    try:
        recipe = await store.create(url, metadata)
    except RecipeStoreError as e:
        logger.error(f"Failed to create recipe for {url}: {e}")
        raise ScrapingFailedError()

    logger.info(f"Recipe {recipe.id} added by {_client_host(request)}: {recipe.title!r}")
    return RecipeResponse.model_validate(recipe)


@router.delete("/recipes/{recipe_id}")
async def delete_recipe(
    recipe_id: int,
    request: Request,
    store: RecipeStoreDep,
    _: AdminToken,
) -> dict:
    try:
        deleted = await store.delete(recipe_id)
    except RecipeStoreError as e:
        logger.error(f"Failed to delete recipe {recipe_id}: {e}")
        raise ServerError("Failed to delete recipe") from e

    if not deleted:
        raise NotFoundError()

    logger.info(f"Recipe {recipe_id} deleted by {_client_host(request)}")
    return {"success": True}
