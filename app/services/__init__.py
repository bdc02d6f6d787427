from app.services.meta_tags import inject_meta_tags, render_meta_tags
from app.services.recipes import RecipeStore, RecipeStoreError
from app.services.scraper import FALLBACK_IMAGE, RecipeMetadata, scrape_recipe_metadata
from app.services.slugs import generate_slug, resolve_unique_slug

__all__ = [
    # Meta tags
    "inject_meta_tags",
    "render_meta_tags",
    # Store
    "RecipeStore",
    "RecipeStoreError",
    # Scraper
    "FALLBACK_IMAGE",
    "RecipeMetadata",
    "scrape_recipe_metadata",
    # Slugs
    "generate_slug",
    "resolve_unique_slug",
]
