import logging
from typing import Annotated, Any

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Database, get_db
from app.errors import InvalidTokenError
from app.services.auth import decode_admin_token
from app.services.recipes import RecipeStore

logger = logging.getLogger(__name__)


def get_database(request: Request) -> Database:
    return request.app.state.database


async def require_admin(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> dict[str, Any]:
    client = request.client.host if request.client else "unknown"

    if not authorization or not authorization.startswith("Bearer "):
        logger.warning(f"Missing or invalid authorization header from {client}")
        raise InvalidTokenError()

    token = authorization.removeprefix("Bearer ").strip()
    data = decode_admin_token(token)
    if not data:
        logger.warning(f"Invalid admin token from {client}")
        raise InvalidTokenError()

    return data


DbSession = Annotated[AsyncSession, Depends(get_db)]
AdminToken = Annotated[dict[str, Any], Depends(require_admin)]


def get_recipe_store(
    db: DbSession,
    database: Annotated[Database, Depends(get_database)],
) -> RecipeStore:
    """Provide a RecipeStore bound to the request session."""
    return RecipeStore(db, creation_lock=database.creation_lock)


RecipeStoreDep = Annotated[RecipeStore, Depends(get_recipe_store)]
