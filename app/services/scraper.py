"""
Metadata scraper for recipe links.

Fetches a page and pulls its Open Graph / Twitter card / HTML metadata.
Scraping is best effort: whatever goes wrong, callers get a complete
RecipeMetadata with fallback values so a bookmark can always be saved.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from urllib.parse import urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from app.config import settings

logger = logging.getLogger(__name__)

FALLBACK_IMAGE = "https://placehold.co/400x300/FF6B6B/FFFFFF?text=Recipe&font=quicksand"

_WHITESPACE = re.compile(r"\s+")


@dataclass
class RecipeMetadata:
    """Scraped (or fallback) metadata describing a linked page."""

    url: str
    title: str
    description: str
    image_url: str
    site_name: str


def site_name_from_url(url: str) -> str:
    """Host of ``url`` without a leading "www.", or "unknown"."""
    try:
        host = urlparse(url).hostname or ""
    except ValueError:
        host = ""
    return host.removeprefix("www.") or "unknown"


def fallback_title(site_name: str) -> str:
    return f"{site_name} Recipe"


def fallback_description(site_name: str) -> str:
    return f"View this delicious recipe from {site_name}"


def _clean(value: str | None) -> str | None:
    if not value:
        return None
    value = _WHITESPACE.sub(" ", value).strip()
    return value or None


def _meta_content(soup: BeautifulSoup, *keys: str) -> str | None:
    """First non-empty content of a <meta property|name=key> tag, in key order."""
    for key in keys:
        tag = soup.find("meta", attrs={"property": key}) or soup.find(
            "meta", attrs={"name": key}
        )
        if tag:
            content = _clean(tag.get("content"))
            if content:
                return content
    return None


def _absolute_image_url(image: str, page_url: str) -> str:
    if image.startswith("//"):
        return "https:" + image
    return urljoin(page_url, image)


def extract_metadata(html: str, page_url: str) -> dict[str, str]:
    """
    Extract title, description and image from page HTML.

    Only fields that were found are present in the returned dict.
    """
    soup = BeautifulSoup(html, "html.parser")
    found: dict[str, str] = {}

    title = _meta_content(soup, "og:title", "twitter:title")
    if not title and soup.title:
        title = _clean(soup.title.get_text())
    if not title:
        h1 = soup.find("h1")
        title = _clean(h1.get_text()) if h1 else None
    if title:
        found["title"] = title

    description = _meta_content(soup, "og:description", "twitter:description", "description")
    if description:
        found["description"] = description

    image = _meta_content(soup, "og:image", "og:image:secure_url", "twitter:image")
    if not image:
        link = soup.find("link", rel="image_src")
        image = _clean(link.get("href")) if link else None
    if image:
        found["image_url"] = _absolute_image_url(image, page_url)

    return found


async def fetch_html(url: str, client: httpx.AsyncClient | None = None) -> tuple[str, str] | None:
    """
    Fetch ``url`` and return ``(html, final_url)``, or None on any failure.

    The whole fetch (redirects and body included) is abandoned once
    ``settings.scraper_timeout`` seconds have passed. At most
    ``settings.scraper_max_redirects`` redirects are followed.
    """
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.scraper_timeout),
            follow_redirects=True,
            max_redirects=settings.scraper_max_redirects,
            headers={"User-Agent": settings.scraper_user_agent},
        )

    try:
        async with asyncio.timeout(settings.scraper_timeout):
            response = await client.get(url)
            response.raise_for_status()
            return response.text, str(response.url)
    except (httpx.TimeoutException, TimeoutError):
        logger.warning(f"Scraping timed out after {settings.scraper_timeout}s: {url}")
        return None
    except httpx.HTTPStatusError as e:
        logger.warning(f"Scraping got HTTP {e.response.status_code}: {url}")
        return None
    except Exception as e:
        # DNS, connection, redirect limit, malformed URL, bad encoding...
        logger.warning(f"Scraping failed for {url}: {e!r}")
        return None
    finally:
        if owns_client:
            await client.aclose()


async def scrape_recipe_metadata(
    url: str,
    client: httpx.AsyncClient | None = None,
) -> RecipeMetadata:
    """
    Scrape metadata for ``url``. Never raises.

    Each of title, description and image falls back independently:
        title       -> "<site_name> Recipe"
        description -> "View this delicious recipe from <site_name>"
        image       -> FALLBACK_IMAGE

    Args:
        url: Page to scrape
        client: Optional preconfigured httpx client (the caller keeps
            ownership and must close it)
    """
    # Derived locally so it survives a failed fetch
    site_name = site_name_from_url(url)

    logger.info(f"Scraping URL: {url}")
    found: dict[str, str] = {}

    fetched = await fetch_html(url, client=client)
    if fetched is not None:
        html, final_url = fetched
        try:
            found = extract_metadata(html, final_url)
        except Exception as e:
            logger.warning(f"Metadata extraction failed for {url}: {e}")
            found = {}

    metadata = RecipeMetadata(
        url=url,
        title=found.get("title") or fallback_title(site_name),
        description=found.get("description") or fallback_description(site_name),
        image_url=found.get("image_url") or FALLBACK_IMAGE,
        site_name=site_name,
    )

    if found:
        logger.info(f"Scraped metadata for {url}: {metadata.title!r}")
    else:
        logger.info(f"Using fallback metadata for {url}")

    return metadata
