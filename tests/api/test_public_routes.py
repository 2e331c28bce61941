"""
Tests for the public JSON API.

Covers listing with filters, published-only lookups, search and taxonomy
endpoints against a temporary SQLite database.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from techblog.api.deps import Settings, get_query_service, get_rules, get_settings
from techblog.api.routes import public
from techblog.components.query import QueryService
from techblog.rules.models import Rules

ROOT = Path(__file__).resolve().parents[2]

# --- Test Setup ---


@pytest.fixture
def settings(db_path: str, monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("BLOG_DATA_DIR", str(Path(db_path).parent))
    monkeypatch.setenv("BLOG_RULES_PATH", str(ROOT / "rules.yaml"))
    return Settings()


@pytest.fixture
def app(settings: Settings, rules: Rules) -> FastAPI:
    """Test FastAPI app with public routes."""
    app = FastAPI()
    app.include_router(public.router, prefix="/api/public")
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_rules] = lambda: rules
    return app


@pytest.fixture
def client(app: FastAPI, blog_data: dict) -> TestClient:
    return TestClient(app)


# --- Listing ---


class TestListPosts:
    """GET /posts"""

    def test_default_listing(self, client: TestClient) -> None:
        res = client.get("/api/public/posts")
        assert res.status_code == 200
        data = res.json()
        assert [p["id"] for p in data["docs"]] == ["p2", "p3", "p1"]
        assert data["total_docs"] == 3
        assert data["page"] == 1
        assert data["has_prev_page"] is False
        assert data["has_next_page"] is False

    def test_category_by_slug(self, client: TestClient) -> None:
        data = client.get("/api/public/posts", params={"category": "tutorials"}).json()
        assert [p["id"] for p in data["docs"]] == ["p2", "p1"]

    def test_category_by_id(self, client: TestClient) -> None:
        data = client.get("/api/public/posts", params={"category": "c2"}).json()
        assert [p["id"] for p in data["docs"]] == ["p3"]

    def test_unknown_category_matches_nothing(self, client: TestClient) -> None:
        data = client.get("/api/public/posts", params={"category": "not-a-real-slug"}).json()
        assert data["docs"] == []
        assert data["total_docs"] == 0

    def test_tag_and_search(self, client: TestClient) -> None:
        data = client.get("/api/public/posts", params={"tag": "python", "search": "window"}).json()
        assert [p["id"] for p in data["docs"]] == ["p2"]

    def test_bad_page_defaults_to_first(self, client: TestClient) -> None:
        assert client.get("/api/public/posts", params={"page": "abc"}).json()["page"] == 1

    def test_out_of_range_page(self, client: TestClient) -> None:
        data = client.get("/api/public/posts", params={"page": "40"}).json()
        assert data["docs"] == []
        assert data["page"] == 40

    def test_drafts_never_listed(self, client: TestClient) -> None:
        data = client.get("/api/public/posts", params={"search": "unpublished"}).json()
        assert data["docs"] == []

    def test_store_failure_returns_empty_page(self, app: FastAPI, client: TestClient) -> None:
        class BrokenStore:
            def find(self, spec):
                raise RuntimeError("database is locked")

            def get_by_id(self, post_id):
                raise RuntimeError("database is locked")

        class NoLookups:
            def find_by_slug(self, slug):
                return None

            def list_all(self):
                return []

        app.dependency_overrides[get_query_service] = lambda: QueryService(
            BrokenStore(), NoLookups(), NoLookups()
        )
        res = client.get("/api/public/posts")
        assert res.status_code == 200
        assert res.json() == {
            "docs": [],
            "total_docs": 0,
            "total_pages": 0,
            "page": 1,
            "has_prev_page": False,
            "has_next_page": False,
        }


# --- Single post ---


class TestGetPost:
    """GET /posts/{id} and /posts/slug/{slug}"""

    def test_post_detail(self, client: TestClient) -> None:
        res = client.get("/api/public/posts/p1")
        assert res.status_code == 200
        data = res.json()
        assert data["title"] == "Python Basics"
        assert '<h2 id="variables">Variables</h2>' in data["content_html"]
        assert data["headings"] == [{"level": 2, "text": "Variables", "id": "variables"}]
        assert data["reading_time"] == 1
        assert data["category"]["slug"] == "tutorials"

    def test_stored_reading_time_wins(self, client: TestClient) -> None:
        assert client.get("/api/public/posts/p2").json()["reading_time"] == 7

    def test_draft_is_not_found(self, client: TestClient) -> None:
        assert client.get("/api/public/posts/p4").status_code == 404

    def test_missing_is_not_found(self, client: TestClient) -> None:
        assert client.get("/api/public/posts/nope").status_code == 404

    def test_by_slug(self, client: TestClient) -> None:
        res = client.get("/api/public/posts/slug/release-2-0")
        assert res.status_code == 200
        assert res.json()["id"] == "p3"

    def test_draft_slug_not_found(self, client: TestClient) -> None:
        assert client.get("/api/public/posts/slug/unpublished-python-notes").status_code == 404


# --- Lists ---


class TestLists:
    """Recent, search and taxonomy endpoints."""

    def test_recent(self, client: TestClient) -> None:
        data = client.get("/api/public/recent", params={"limit": 2}).json()
        assert [p["id"] for p in data] == ["p2", "p3"]

    def test_recent_excluding(self, client: TestClient) -> None:
        data = client.get("/api/public/recent", params={"limit": 2, "exclude": "p2"}).json()
        assert [p["id"] for p in data] == ["p3", "p1"]

    def test_search(self, client: TestClient) -> None:
        data = client.get("/api/public/search", params={"q": "FASTER"}).json()
        assert [p["id"] for p in data] == ["p3"]

    def test_blank_search(self, client: TestClient) -> None:
        assert client.get("/api/public/search", params={"q": "  "}).json() == []

    def test_categories_sorted(self, client: TestClient) -> None:
        data = client.get("/api/public/categories").json()
        assert [c["name"] for c in data] == ["News", "Tutorials"]

    def test_tags(self, client: TestClient) -> None:
        data = client.get("/api/public/tags").json()
        assert [t["slug"] for t in data] == ["python", "sql"]

    def test_category_posts(self, client: TestClient) -> None:
        data = client.get("/api/public/categories/news/posts").json()
        assert [p["id"] for p in data] == ["p3"]

    def test_unknown_category_posts(self, client: TestClient) -> None:
        assert client.get("/api/public/categories/c2/posts").json() == []

    def test_tag_posts(self, client: TestClient) -> None:
        data = client.get("/api/public/tags/python/posts").json()
        assert [p["id"] for p in data] == ["p2", "p1"]
