"""
Posts component unit tests.

Tests for published-only lookups and failure absorption.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from techblog.components.posts import (
    GetPostInput,
    PostService,
    PostsByTaxonomyInput,
    RecentPostsInput,
    SearchPostsInput,
    create_post_service,
    run,
    run_by_taxonomy,
    run_get,
    run_recent,
    run_search,
    run_taxonomy,
)
from techblog.components.query import PostPage, QueryFilterSpec
from techblog.domain.entities import Category, Post, Tag

# --- Mock Implementations ---


class MockStore:
    """In-memory post store."""

    def __init__(self, posts: list[Post]) -> None:
        self.posts = posts
        self.specs: list[QueryFilterSpec] = []

    def find(self, spec: QueryFilterSpec) -> PostPage:
        self.specs.append(spec)
        matches = [p for p in self.posts if p.status == spec.status]
        if spec.slug is not None:
            matches = [p for p in matches if p.slug == spec.slug]
        if spec.category is not None:
            matches = [p for p in matches if p.category and p.category.id == spec.category]
        if spec.tag is not None:
            matches = [p for p in matches if any(t.id == spec.tag for t in p.tags)]
        if spec.search:
            term = spec.search.casefold()
            matches = [
                p for p in matches if term in p.title.casefold() or term in p.excerpt.casefold()
            ]
        matches.sort(key=lambda p: p.published_date or datetime.min.replace(tzinfo=UTC), reverse=True)
        docs = matches[spec.offset : spec.offset + spec.page_size]
        return PostPage.from_slice(
            docs, total_docs=len(matches), page=spec.page, page_size=spec.page_size
        )

    def get_by_id(self, post_id: str) -> Post | None:
        return next((p for p in self.posts if p.id == post_id), None)


class BrokenStore:
    """Store that fails every call."""

    def find(self, spec: QueryFilterSpec) -> PostPage:
        raise ConnectionError("db gone")

    def get_by_id(self, post_id: str) -> Post | None:
        raise ConnectionError("db gone")


class MockTaxonomy:
    """In-memory category or tag lookup."""

    def __init__(self, items: list) -> None:
        self.items = items

    def find_by_slug(self, slug: str):
        return next((i for i in self.items if i.slug == slug), None)

    def list_all(self) -> list:
        return list(self.items)


# --- Fixtures ---

NOW = datetime(2024, 6, 1, tzinfo=UTC)


@pytest.fixture
def guides() -> Category:
    return Category(id="cat-guides", name="Guides", slug="guides")


@pytest.fixture
def news() -> Category:
    return Category(id="cat-news", name="News", slug="news")


@pytest.fixture
def rust() -> Tag:
    return Tag(id="tag-rust", name="Rust", slug="rust")


@pytest.fixture
def posts(guides: Category, news: Category, rust: Tag) -> list[Post]:
    return [
        Post(
            id="p1",
            title="Intro to Testing",
            slug="intro-to-testing",
            status="published",
            published_date=NOW - timedelta(days=3),
            category=guides,
        ),
        Post(
            id="p2",
            title="Release Notes",
            slug="release-notes",
            excerpt="What changed in testing tools",
            status="published",
            published_date=NOW - timedelta(days=1),
            category=news,
            tags=[rust],
        ),
        Post(
            id="p3",
            title="Unfinished Testing Draft",
            slug="unfinished",
            status="draft",
            category=guides,
            tags=[rust],
        ),
        Post(
            id="p4",
            title="Oldest Guide",
            slug="oldest-guide",
            status="published",
            published_date=NOW - timedelta(days=10),
            category=guides,
        ),
    ]


@pytest.fixture
def service(posts: list[Post], guides: Category, news: Category, rust: Tag) -> PostService:
    return create_post_service(
        store=MockStore(posts),
        categories=MockTaxonomy([news, guides]),
        tags=MockTaxonomy([rust]),
    )


@pytest.fixture
def broken_service() -> PostService:
    return PostService(BrokenStore(), BrokenStore(), BrokenStore())  # type: ignore[arg-type]


# --- Single post ---


class TestGetPost:
    """Single post lookups."""

    def test_published_post(self, service: PostService) -> None:
        post = service.get_post("p1")
        assert post is not None
        assert post.title == "Intro to Testing"

    def test_draft_hidden(self, service: PostService) -> None:
        assert service.get_post("p3") is None

    def test_missing(self, service: PostService) -> None:
        assert service.get_post("nope") is None

    def test_by_slug(self, service: PostService) -> None:
        post = service.get_post_by_slug("release-notes")
        assert post is not None
        assert post.id == "p2"

    def test_draft_slug_hidden(self, service: PostService) -> None:
        assert service.get_post_by_slug("unfinished") is None

    def test_store_failure(self, broken_service: PostService) -> None:
        assert broken_service.get_post("p1") is None
        assert broken_service.get_post_by_slug("x") is None


# --- Lists ---


class TestRecentPosts:
    """Newest published posts."""

    def test_newest_first(self, service: PostService) -> None:
        assert [p.id for p in service.get_recent_posts()] == ["p2", "p1", "p4"]

    def test_limit(self, service: PostService) -> None:
        assert [p.id for p in service.get_recent_posts(limit=1)] == ["p2"]

    def test_exclude_still_fills_limit(self, service: PostService) -> None:
        assert [p.id for p in service.get_recent_posts(limit=2, exclude_id="p2")] == ["p1", "p4"]

    def test_store_failure(self, broken_service: PostService) -> None:
        assert broken_service.get_recent_posts() == []


class TestTaxonomyPosts:
    """Posts by category or tag slug."""

    def test_by_category(self, service: PostService) -> None:
        assert [p.id for p in service.get_posts_by_category("guides")] == ["p1", "p4"]

    def test_unknown_category_is_empty(self, service: PostService) -> None:
        assert service.get_posts_by_category("cat-guides") == []

    def test_by_tag_excludes_drafts(self, service: PostService) -> None:
        assert [p.id for p in service.get_posts_by_tag("rust")] == ["p2"]

    def test_unknown_tag(self, service: PostService) -> None:
        assert service.get_posts_by_tag("go") == []

    def test_store_failure(self, broken_service: PostService) -> None:
        assert broken_service.get_posts_by_category("guides") == []
        assert broken_service.get_posts_by_tag("rust") == []


class TestSearch:
    """Free-text search."""

    def test_matches_title_and_excerpt(self, service: PostService) -> None:
        assert [p.id for p in service.search_posts("TESTING")] == ["p2", "p1"]

    def test_blank_query(self, service: PostService) -> None:
        assert service.search_posts("   ") == []

    def test_limit(self, service: PostService) -> None:
        assert len(service.search_posts("testing", limit=1)) == 1

    def test_store_failure(self, broken_service: PostService) -> None:
        assert broken_service.search_posts("x") == []


class TestTaxonomyLists:
    """Category and tag listings."""

    def test_categories_sorted_by_name(self, service: PostService) -> None:
        assert [c.name for c in service.get_all_categories()] == ["Guides", "News"]

    def test_tags(self, service: PostService) -> None:
        assert [t.slug for t in service.get_all_tags()] == ["rust"]

    def test_failure(self, broken_service: PostService) -> None:
        assert broken_service.get_all_categories() == []
        assert broken_service.get_all_tags() == []


# --- Entry points ---


class TestEntryPoints:
    """Component run_* functions."""

    def test_run_get_by_id(self, service: PostService) -> None:
        out = run_get(GetPostInput(post_id="p1"), service)
        assert out.success
        assert out.post is not None

    def test_run_get_by_slug(self, service: PostService) -> None:
        assert run_get(GetPostInput(slug="oldest-guide"), service).success

    def test_run_get_missing(self, service: PostService) -> None:
        out = run_get(GetPostInput(post_id="p3"), service)
        assert not out.success
        assert out.post is None

    def test_run_recent(self, service: PostService) -> None:
        out = run_recent(RecentPostsInput(limit=5, exclude_id="p1"), service)
        assert [p.id for p in out.posts] == ["p2", "p4"]

    def test_run_by_taxonomy(self, service: PostService) -> None:
        out = run_by_taxonomy(PostsByTaxonomyInput(slug="rust", kind="tag"), service)
        assert [p.id for p in out.posts] == ["p2"]

    def test_run_by_taxonomy_unknown_kind(self, service: PostService) -> None:
        with pytest.raises(ValueError):
            run_by_taxonomy(PostsByTaxonomyInput(slug="x", kind="author"), service)

    def test_run_search(self, service: PostService) -> None:
        assert run_search(SearchPostsInput(query="guide"), service).posts[0].id == "p4"

    def test_run_taxonomy(self, service: PostService) -> None:
        out = run_taxonomy(service)
        assert len(out.categories) == 2
        assert len(out.tags) == 1

    def test_dispatcher(self, service: PostService) -> None:
        assert run(SearchPostsInput(query="notes"), service).posts[0].id == "p2"

    def test_dispatcher_rejects_unknown_input(self, service: PostService) -> None:
        with pytest.raises(ValueError):
            run(object(), service)  # type: ignore[arg-type]
