"""
Storage handle for the recipes database.

The Database object is built once at startup, handed to whatever needs it
(the FastAPI app state, maintenance scripts, tests) and disposed on shutdown.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from pathlib import Path

from fastapi import Request
from sqlalchemy import event, inspect, select, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.models import Base, Recipe
from app.services.slugs import resolve_unique_slug

logger = logging.getLogger(__name__)


def _enable_wal(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


class Database:
    """Async engine, session factory and the recipe creation lock."""

    def __init__(self, url: str, echo: bool = False):
        self.url = make_url(url)
        self.engine: AsyncEngine = create_async_engine(self.url, echo=echo)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        # Serializes slug resolution + insert for recipe creation
        self.creation_lock = asyncio.Lock()

        if self._is_file_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_wal)

    @property
    def _is_file_sqlite(self) -> bool:
        return self.url.get_backend_name() == "sqlite" and self.url.database not in (None, "", ":memory:")

    async def connect(self) -> None:
        """Create tables and run startup migrations. Safe to call repeatedly."""
        if self._is_file_sqlite:
            Path(self.url.database).parent.mkdir(parents=True, exist_ok=True)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            await conn.run_sync(_add_missing_slug_column)

        backfilled = await self.backfill_slugs()
        logger.info(
            f"Database ready at {self.url.render_as_string(hide_password=True)}"
            f" ({backfilled} slugs backfilled)"
        )

    async def backfill_slugs(self) -> int:
        """Assign slugs to rows missing one, oldest first. Returns rows updated."""
        async with self.creation_lock, self.session_maker() as session:
            result = await session.execute(
                select(Recipe)
                .where((Recipe.slug.is_(None)) | (Recipe.slug == ""))
                .order_by(Recipe.id)
            )
            recipes = result.scalars().all()

            for recipe in recipes:
                recipe.slug = await resolve_unique_slug(session, recipe.title)
                # Flush so the next resolution sees this slug as taken
                await session.flush()

            await session.commit()

        if recipes:
            logger.info(f"Backfilled slugs for {len(recipes)} recipes")
        return len(recipes)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database connection closed")


def _add_missing_slug_column(sync_conn) -> None:
    # Tables created before slugs existed
    columns = {column["name"] for column in inspect(sync_conn).get_columns("recipes")}
    if "slug" in columns:
        return

    logger.info("Adding slug column to recipes table")
    sync_conn.execute(text("ALTER TABLE recipes ADD COLUMN slug VARCHAR(255)"))
    sync_conn.execute(text("CREATE INDEX IF NOT EXISTS ix_recipes_slug ON recipes (slug)"))


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    database: Database = request.app.state.database
    async with database.session_maker() as session:
        yield session
