"""Tests for slug generation and uniqueness."""

import pytest

from app.models import Recipe
from app.services.slugs import generate_slug, resolve_unique_slug


class TestGenerateSlug:
    def test_punctuation_removed(self):
        assert generate_slug("Hello, World!!") == "hello-world"

    def test_whitespace_and_hyphen_runs_collapse(self):
        assert generate_slug("  Multi   Space -- Title  ") == "multi-space-title"

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_missing_title_falls_back(self, title):
        assert generate_slug(title) == "recipe"

    def test_only_punctuation_falls_back(self):
        assert generate_slug("!!! ???") == "recipe"

    def test_apostrophes_dropped(self):
        assert generate_slug("Grandma's Apple Pie") == "grandmas-apple-pie"

    def test_accents_folded(self):
        assert generate_slug("Crème Brûlée") == "creme-brulee"

    def test_underscores_become_hyphens(self):
        assert generate_slug("snake_case_title") == "snake-case-title"

    def test_digits_kept(self):
        assert generate_slug("30 Minute Meals: Top 10") == "30-minute-meals-top-10"

    def test_leading_and_trailing_hyphens_stripped(self):
        assert generate_slug("--Soup--") == "soup"

    @pytest.mark.parametrize(
        "title",
        [
            "Hello, World!!",
            "  Multi   Space -- Title  ",
            "Crème Brûlée",
            "Mom's <b>Best</b> Chili & Cornbread",
            "Pad Thai (Vegan)",
        ],
    )
    def test_idempotent(self, title):
        slug = generate_slug(title)
        assert generate_slug(slug) == slug

    @pytest.mark.parametrize("title", ["Ünïcödé ☃ Stew", "Tacos_al_Pastor!", "Ça va?"])
    def test_output_is_url_safe(self, title):
        slug = generate_slug(title)
        assert slug
        assert all(c.islower() or c.isdigit() or c == "-" for c in slug)
        assert slug.isascii()


class TestResolveUniqueSlug:
    async def test_unused_base_returned(self, db_session):
        assert await resolve_unique_slug(db_session, "Pasta") == "pasta"

    async def test_collision_appends_two(self, db_session):
        db_session.add(Recipe(url="https://a.example/1", title="Pasta", slug="pasta"))
        await db_session.flush()

        assert await resolve_unique_slug(db_session, "Pasta") == "pasta-2"

    async def test_probes_in_ascending_order(self, db_session):
        db_session.add_all(
            [
                Recipe(url="https://a.example/1", title="Pasta", slug="pasta"),
                Recipe(url="https://a.example/2", title="Pasta", slug="pasta-2"),
            ]
        )
        await db_session.flush()

        assert await resolve_unique_slug(db_session, "Pasta") == "pasta-3"

    async def test_gap_is_reused(self, db_session):
        db_session.add_all(
            [
                Recipe(url="https://a.example/1", title="Pasta", slug="pasta"),
                Recipe(url="https://a.example/3", title="Pasta", slug="pasta-3"),
            ]
        )
        await db_session.flush()

        assert await resolve_unique_slug(db_session, "Pasta") == "pasta-2"

    async def test_missing_title_uses_fallback(self, db_session):
        db_session.add(Recipe(url="https://a.example/1", title=None, slug="recipe"))
        await db_session.flush()

        assert await resolve_unique_slug(db_session, None) == "recipe-2"

    async def test_null_slugs_ignored(self, db_session):
        db_session.add(Recipe(url="https://a.example/1", title="Pasta", slug=None))
        await db_session.flush()

        assert await resolve_unique_slug(db_session, "Pasta") == "pasta"
