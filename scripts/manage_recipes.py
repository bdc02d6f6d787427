"""
Recipe maintenance script.

Usage:
    uv run python scripts/manage_recipes.py --list
    uv run python scripts/manage_recipes.py --backfill
    uv run python scripts/manage_recipes.py <url> [<url> ...]

Example:
    uv run python scripts/manage_recipes.py https://www.example.com/lasagne
"""
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import settings
from app.database import Database
from app.services.recipes import RecipeStore, RecipeStoreError
from app.services.scraper import scrape_recipe_metadata


async def list_recipes(database: Database):
    """List all recipes, newest first."""
    async with database.session_maker() as db:
        recipes = await RecipeStore(db, database.creation_lock).list_all()

    if not recipes:
        print("No recipes found in the database")
        return

    print(f"\n{len(recipes)} recipes:")
    for recipe in recipes:
        print(f"  [{recipe.id}] {recipe.slug}  {recipe.title}")
        print(f"        {recipe.url}")


async def add_recipes(database: Database, urls: list[str]) -> bool:
    """Scrape and store each URL. Returns False if any could not be saved."""
    ok = True
    async with database.session_maker() as db:
        store = RecipeStore(db, database.creation_lock)
        for url in urls:
            if not url.startswith(("http://", "https://")):
                print(f"❌ Skipping invalid URL: {url}")
                ok = False
                continue

            metadata = await scrape_recipe_metadata(url)
            try:
                recipe = await store.create(url, metadata)
            except RecipeStoreError as e:
                print(f"❌ {e}")
                ok = False
                continue

            print(f"✅ Added '{recipe.title}' as /recipe/{recipe.slug}")
    return ok


async def main():
    if len(sys.argv) < 2:
        print("Usage: uv run python scripts/manage_recipes.py <url> [<url> ...]")
        print("\nOptions:")
        print("  uv run python scripts/manage_recipes.py --list        List all recipes")
        print("  uv run python scripts/manage_recipes.py --backfill    Assign missing slugs")
        sys.exit(1)

    database = Database(settings.database_url)
    # connect() also runs the slug backfill
    await database.connect()

    try:
        if sys.argv[1] == "--list":
            await list_recipes(database)
            return

        if sys.argv[1] == "--backfill":
            count = await database.backfill_slugs()
            print(f"✅ Backfill complete ({count} remaining rows updated)")
            return

        success = await add_recipes(database, sys.argv[1:])
    finally:
        await database.dispose()

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    asyncio.run(main())
