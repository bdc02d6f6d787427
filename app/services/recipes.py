"""
Recipe Store - the only writer of the recipes table.

Creation runs slug resolution, insert and commit while holding the
database creation lock, so two concurrent creations can never resolve
the same slug.
"""

import asyncio
import logging

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, Recipe
from app.services.scraper import RecipeMetadata
from app.services.slugs import resolve_unique_slug

logger = logging.getLogger(__name__)


class RecipeStoreError(Exception):
    """Storage failure while reading or writing recipes."""

    pass


def _truncate(value: str | None, limit: int) -> str | None:
    return value[:limit] if value else None


class RecipeStore:
    def __init__(self, db: AsyncSession, creation_lock: asyncio.Lock):
        self.db = db
        self.creation_lock = creation_lock

    async def create(self, url: str, metadata: RecipeMetadata) -> Recipe:
        """
        Persist a recipe built from scraped metadata.

        Title and description are truncated to their column limits and the
        slug is derived from the (truncated) title.

        Raises:
            RecipeStoreError: If the slug lookup, insert or commit fails
        """
        title = _truncate(metadata.title, TITLE_MAX_LENGTH)

        async with self.creation_lock:
            try:
                slug = await resolve_unique_slug(self.db, title)
                recipe = Recipe(
                    url=url,
                    title=title,
                    description=_truncate(metadata.description, DESCRIPTION_MAX_LENGTH),
                    image_url=metadata.image_url,
                    site_name=metadata.site_name,
                    slug=slug,
                )
                self.db.add(recipe)
                await self.db.commit()
                await self.db.refresh(recipe)
            except SQLAlchemyError as e:
                await self.db.rollback()
                raise RecipeStoreError(f"Failed to save recipe for {url}: {e}") from e

        logger.info(f"Recipe created: id={recipe.id} slug={recipe.slug} url={url}")
        return recipe

    async def get_by_slug(self, slug: str) -> Recipe | None:
        result = await self.db.execute(select(Recipe).where(Recipe.slug == slug))
        return result.scalars().first()

    async def get_by_id(self, recipe_id: int) -> Recipe | None:
        result = await self.db.execute(select(Recipe).where(Recipe.id == recipe_id))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Recipe]:
        """All recipes, newest first."""
        result = await self.db.execute(
            select(Recipe).order_by(desc(Recipe.created_at), desc(Recipe.id))
        )
        return list(result.scalars().all())

    async def delete(self, recipe_id: int) -> bool:
        """Delete a recipe by id. Returns False if it did not exist."""
        try:
            result = await self.db.execute(delete(Recipe).where(Recipe.id == recipe_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RecipeStoreError(f"Failed to delete recipe {recipe_id}: {e}") from e

        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Recipe deleted: id={recipe_id}")
        return deleted
