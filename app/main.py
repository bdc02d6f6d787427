import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api import api_router
from app.config import settings
from app.database import Database
from app.errors import register_error_handlers
from app.ui.routes import PageTemplate
from app.ui.routes import router as ui_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle: startup and shutdown."""
    # Startup
    logger.info("Starting Kitchenmarks...")

    database = Database(settings.database_url)
    await database.connect()
    app.state.database = database

    app.state.page_template = PageTemplate(settings.dist_dir)
    if not app.state.page_template.available:
        logger.warning(f"No frontend build found in {settings.dist_dir}, serving API only")

    logger.info(f"Kitchenmarks started (CORS origin: {settings.cors_origin})")

    yield

    # Shutdown
    logger.info("Shutting down Kitchenmarks...")
    await database.dispose()
    logger.info("Kitchenmarks shut down")


app = FastAPI(
    title="Kitchenmarks",
    description="Self-hosted recipe bookmarks with link previews",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)

app.include_router(api_router)

if (settings.dist_dir / "assets").is_dir():
    app.mount("/assets", StaticFiles(directory=settings.dist_dir / "assets"), name="assets")

# Registered last: its catch-all path would shadow everything after it
app.include_router(ui_router)
