"""
Post lookups - Published-only reads behind the public pages.

Every lookup here absorbs store failures: the error is logged and the caller
gets the empty value (None or []), so a broken store shows up as "nothing
found" rather than an error page.
"""

from __future__ import annotations

import logging

from techblog.components.query import (
    DEFAULT_SORT_KEY,
    CategoryRepoPort,
    PostStorePort,
    QueryFilterSpec,
    TagRepoPort,
    normalize_search,
)
from techblog.domain.entities import Category, Post, Tag

from .models import DEFAULT_RECENT_LIMIT, DEFAULT_SEARCH_LIMIT, DEFAULT_TAXONOMY_LIMIT

logger = logging.getLogger(__name__)


def _published(
    *,
    limit: int,
    category: str | None = None,
    tag: str | None = None,
    search: str | None = None,
    slug: str | None = None,
) -> QueryFilterSpec:
    return QueryFilterSpec(
        status="published",
        category=category,
        tag=tag,
        search=search,
        slug=slug,
        page=1,
        page_size=limit,
        sort_key=DEFAULT_SORT_KEY,
    )


class PostService:
    """
    Post lookup service.

    Wraps the post store and taxonomy lookups with published-only,
    failure-absorbing reads.
    """

    def __init__(
        self,
        store: PostStorePort,
        categories: CategoryRepoPort,
        tags: TagRepoPort,
    ) -> None:
        self._store = store
        self._categories = categories
        self._tags = tags

    def get_post(self, post_id: str) -> Post | None:
        """Get a published post by id; None if missing or unpublished."""
        try:
            post = self._store.get_by_id(post_id)
        except Exception:
            logger.exception("Error fetching post %s", post_id)
            return None

        if post is None or not post.is_published:
            logger.info("Post not found or not published: %s", post_id)
            return None
        return post

    def get_post_by_slug(self, slug: str) -> Post | None:
        """Get a published post by slug."""
        try:
            page = self._store.find(_published(limit=1, slug=slug))
        except Exception:
            logger.exception("Error fetching post by slug %s", slug)
            return None
        return page.docs[0] if page.docs else None

    def get_recent_posts(
        self,
        limit: int = DEFAULT_RECENT_LIMIT,
        exclude_id: str | None = None,
    ) -> list[Post]:
        """Newest published posts, optionally excluding one."""
        # One extra so excluding a post still fills the limit
        fetch = limit + 1 if exclude_id else limit
        try:
            page = self._store.find(_published(limit=fetch))
        except Exception:
            logger.exception("Error fetching recent posts")
            return []
        return [post for post in page.docs if post.id != exclude_id][:limit]

    def get_posts_by_category(
        self,
        slug: str,
        limit: int = DEFAULT_TAXONOMY_LIMIT,
    ) -> list[Post]:
        """Published posts in a category; unknown slugs match nothing."""
        try:
            category = self._categories.find_by_slug(slug)
            if category is None:
                return []
            page = self._store.find(_published(limit=limit, category=category.id))
        except Exception:
            logger.exception("Error fetching posts by category %s", slug)
            return []
        return page.docs

    def get_posts_by_tag(
        self,
        slug: str,
        limit: int = DEFAULT_TAXONOMY_LIMIT,
    ) -> list[Post]:
        """Published posts with a tag; unknown slugs match nothing."""
        try:
            tag = self._tags.find_by_slug(slug)
            if tag is None:
                return []
            page = self._store.find(_published(limit=limit, tag=tag.id))
        except Exception:
            logger.exception("Error fetching posts by tag %s", slug)
            return []
        return page.docs

    def search_posts(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[Post]:
        """Free-text search over published posts; blank queries match nothing."""
        term = normalize_search(query)
        if term is None:
            return []
        try:
            page = self._store.find(_published(limit=limit, search=term))
        except Exception:
            logger.exception("Error searching posts")
            return []
        return page.docs

    def get_all_categories(self) -> list[Category]:
        try:
            return sorted(self._categories.list_all(), key=lambda c: c.name)
        except Exception:
            logger.exception("Error fetching categories")
            return []

    def get_all_tags(self) -> list[Tag]:
        try:
            return sorted(self._tags.list_all(), key=lambda t: t.name)
        except Exception:
            logger.exception("Error fetching tags")
            return []


# --- Factory ---


def create_post_service(
    store: PostStorePort,
    categories: CategoryRepoPort,
    tags: TagRepoPort,
) -> PostService:
    """Create a PostService."""
    return PostService(store=store, categories=categories, tags=tags)
