"""
Slug generation for recipe URLs.

Slugs are derived from recipe titles and made unique against the
``recipes`` table by appending ``-2``, ``-3``, ... on collision.
"""

import re
import unicodedata

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Recipe

FALLBACK_SLUG = "recipe"

_INVALID_CHARS = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATORS = re.compile(r"[\s_]+")
_HYPHEN_RUNS = re.compile(r"-+")


def generate_slug(title: str | None) -> str:
    """
    Turn a title into a URL-safe slug.

    The result contains only lowercase ASCII letters, digits and single
    hyphens. Empty titles (or titles with nothing usable) become "recipe".

    Examples:
        >>> generate_slug("Hello, World!!")
        'hello-world'
        >>> generate_slug("  Multi   Space -- Title  ")
        'multi-space-title'
    """
    if not title:
        return FALLBACK_SLUG

    # Fold accents so "Crème Brûlée" keeps its letters
    text = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")

    slug = _INVALID_CHARS.sub("", text.lower().strip())
    slug = _SEPARATORS.sub("-", slug)
    slug = _HYPHEN_RUNS.sub("-", slug)
    slug = slug.strip("-")

    return slug or FALLBACK_SLUG


async def slug_exists(db: AsyncSession, slug: str) -> bool:
    result = await db.execute(select(Recipe.id).where(Recipe.slug == slug).limit(1))
    return result.first() is not None


async def resolve_unique_slug(db: AsyncSession, title: str | None) -> str:
    """
    Return the first unused slug for ``title``.

    Tries the bare slug, then ``<slug>-2``, ``<slug>-3`` and so on. Callers
    must hold the database creation lock until the row using the slug is
    committed, otherwise two requests can resolve the same value.
    """
    base = generate_slug(title)
    if not await slug_exists(db, base):
        return base

    counter = 2
    while True:
        candidate = f"{base}-{counter}"
        if not await slug_exists(db, candidate):
            return candidate
        counter += 1
