import os
from collections.abc import AsyncGenerator, Callable
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

# Set test environment before importing app
os.environ["ADMIN_PASSWORD"] = "test-admin-password"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SITE_URL"] = "https://kitchen.example.com"
os.environ["DIST_DIR"] = "/nonexistent/dist"

from app.database import Database, get_db
from app.main import app
from app.services.auth import create_admin_token
from app.services.recipes import RecipeStore
from app.services.scraper import RecipeMetadata
from app.ui.routes import PageTemplate

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8">
    <title>Kitchenmarks</title>
    <script type="module" src="/assets/index.js"></script>
  </head>
  <body>
    <div id="app"></div>
  </body>
</html>
"""


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    database = Database("sqlite+aiosqlite:///:memory:")
    await database.connect()
    yield database
    await database.dispose()


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session_maker() as session:
        yield session


@pytest.fixture
def store(db_session: AsyncSession, database: Database) -> RecipeStore:
    return RecipeStore(db_session, creation_lock=database.creation_lock)


@pytest.fixture
def dist_dir(tmp_path):
    """A minimal frontend build."""
    dist = tmp_path / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (dist / "favicon.ico").write_bytes(b"\x00\x00\x01\x00")
    return dist


@pytest.fixture
async def client(
    database: Database, db_session: AsyncSession, dist_dir
) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client for API tests WITHOUT authentication.
    Use admin_headers for admin requests.
    """
    async def override_get_db():
        yield db_session

    app.state.database = database
    app.state.page_template = PageTemplate(dist_dir)
    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_admin_token()}"}


def make_metadata(
    url: str = "https://www.example.com/pasta",
    title: str = "Pasta",
    description: str = "A very good pasta",
    image_url: str = "https://www.example.com/pasta.jpg",
    site_name: str = "example.com",
) -> RecipeMetadata:
    return RecipeMetadata(
        url=url,
        title=title,
        description=description,
        image_url=image_url,
        site_name=site_name,
    )


@pytest.fixture
def metadata_factory() -> Callable[..., RecipeMetadata]:
    return make_metadata


@pytest.fixture
def mock_scrape():
    """Replace network scraping in the admin API with canned metadata."""
    with patch("app.api.admin.scrape_recipe_metadata", new_callable=AsyncMock) as mock:
        mock.side_effect = lambda url: make_metadata(url=url)
        yield mock


@pytest.fixture
async def test_recipe(store: RecipeStore):
    """Create a stored recipe titled "Pasta"."""
    return await store.create("https://www.example.com/pasta", make_metadata())
