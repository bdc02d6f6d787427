"""
Social sharing meta tags for server-rendered pages.

The frontend is a single-page app, so crawlers only see what the server puts
in index.html. These helpers render a <title> plus Open Graph / Twitter card
tags for a recipe (or the site defaults) and splice them into the page head.
"""

import html
import re

from app.config import settings
from app.models import Recipe
from app.services.scraper import FALLBACK_IMAGE, fallback_description, fallback_title

_TITLE_TAG = re.compile(r"<title\b[^>]*>.*?</title>", re.IGNORECASE | re.DOTALL)
_HEAD_CLOSE = re.compile(r"</head>", re.IGNORECASE)


def _text(value: str) -> str:
    return html.escape(value, quote=True)


def _url(value: str) -> str:
    # URLs are trusted as-is; only guard the attribute boundary
    return value.replace('"', "%22")


def recipe_url(slug: str) -> str:
    return f"{settings.site_url.rstrip('/')}/recipe/{slug}"


def render_meta_tags(recipe: Recipe | None) -> str:
    """Render the head fragment for ``recipe``, or site defaults when None."""
    if recipe is not None:
        site_name = recipe.site_name or settings.site_name
        title = recipe.title or fallback_title(site_name)
        description = recipe.description or fallback_description(site_name)
        image = recipe.image_url or FALLBACK_IMAGE
        url = recipe_url(recipe.slug) if recipe.slug else settings.site_url
        og_type = "article"
    else:
        title = settings.site_name
        description = settings.site_description
        image = FALLBACK_IMAGE
        url = settings.site_url
        og_type = "website"

    title = _text(title)
    description = _text(description)
    image = _url(image)
    url = _url(url)
    site = _text(settings.site_name)

    tags = [
        f"<title>{title}</title>",
        f'<meta name="description" content="{description}">',
        f'<meta property="og:type" content="{og_type}">',
        f'<meta property="og:site_name" content="{site}">',
        f'<meta property="og:title" content="{title}">',
        f'<meta property="og:description" content="{description}">',
        f'<meta property="og:image" content="{image}">',
        f'<meta property="og:url" content="{url}">',
        '<meta name="twitter:card" content="summary_large_image">',
        f'<meta name="twitter:title" content="{title}">',
        f'<meta name="twitter:description" content="{description}">',
        f'<meta name="twitter:image" content="{image}">',
        f'<link rel="canonical" href="{url}">',
    ]
    return "\n    ".join(tags)


def inject_meta_tags(page_html: str, fragment: str) -> str:
    """
    Replace the page's <title> with ``fragment`` placed right before </head>.

    Pages without a closing head tag are returned untouched.
    """
    match = _HEAD_CLOSE.search(page_html)
    if match is None:
        return page_html

    head, rest = page_html[: match.start()], page_html[match.start():]
    head = _TITLE_TAG.sub("", head, count=1)
    return f"{head}    {fragment}\n  {rest}"
