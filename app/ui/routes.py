"""
Frontend serving.

Serves the built single-page app from ``settings.dist_dir``. Recipe pages get
per-recipe share tags injected into index.html so link previews work for
crawlers that don't run JavaScript.
"""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, HTMLResponse

from app.dependencies import RecipeStoreDep
from app.errors import NotFoundError
from app.services.meta_tags import inject_meta_tags, render_meta_tags

logger = logging.getLogger(__name__)


class PageTemplate:
    """index.html from the frontend build, read once and cached."""

    def __init__(self, dist_dir: Path):
        self.dist_dir = dist_dir
        self.index_path = dist_dir / "index.html"
        self._html: str | None = None

    @property
    def available(self) -> bool:
        return self._html is not None or self.index_path.is_file()

    def html(self) -> str:
        if self._html is None:
            if not self.index_path.is_file():
                raise NotFoundError("Frontend not built")
            self._html = self.index_path.read_text(encoding="utf-8")
            logger.info(f"Cached page template from {self.index_path}")
        return self._html

    def static_file(self, path: str) -> Path | None:
        """Resolve ``path`` to a file inside dist_dir, refusing anything outside it."""
        if not path:
            return None
        root = self.dist_dir.resolve()
        candidate = (root / path).resolve()
        if not candidate.is_relative_to(root) or not candidate.is_file():
            return None
        return candidate


def get_page_template(request: Request) -> PageTemplate:
    return request.app.state.page_template


PageTemplateDep = Annotated[PageTemplate, Depends(get_page_template)]

router = APIRouter(include_in_schema=False)


@router.get("/recipe/{slug}", response_class=HTMLResponse)
async def recipe_page(slug: str, store: RecipeStoreDep, template: PageTemplateDep):
    recipe = await store.get_by_slug(slug)
    if recipe is None:
        logger.info(f"Recipe page requested for unknown slug: {slug}")
    return HTMLResponse(inject_meta_tags(template.html(), render_meta_tags(recipe)))


@router.get("/{full_path:path}")
async def spa_fallback(full_path: str, template: PageTemplateDep):
    if full_path == "api" or full_path.startswith("api/"):
        raise NotFoundError("Not found")

    static_file = template.static_file(full_path)
    if static_file is not None:
        return FileResponse(static_file)

    return HTMLResponse(inject_meta_tags(template.html(), render_meta_tags(None)))
