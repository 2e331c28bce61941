"""
Posts component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from techblog.domain.entities import Category, Post, Tag

DEFAULT_RECENT_LIMIT = 5
DEFAULT_TAXONOMY_LIMIT = 10
DEFAULT_SEARCH_LIMIT = 20


# --- Input Models ---


@dataclass(frozen=True)
class GetPostInput:
    """Input for retrieving one published post."""

    post_id: str | None = None
    slug: str | None = None


@dataclass(frozen=True)
class RecentPostsInput:
    """Input for the newest published posts."""

    limit: int = DEFAULT_RECENT_LIMIT
    exclude_id: str | None = None


@dataclass(frozen=True)
class PostsByTaxonomyInput:
    """Input for posts in a category or with a tag, by slug."""

    slug: str
    kind: str = "category"  # category | tag
    limit: int = DEFAULT_TAXONOMY_LIMIT


@dataclass(frozen=True)
class SearchPostsInput:
    """Input for free-text search over published posts."""

    query: str
    limit: int = DEFAULT_SEARCH_LIMIT


# --- Output Models ---


@dataclass(frozen=True)
class PostOutput:
    """Output containing a single post, or None when unavailable."""

    post: Post | None
    success: bool = True


@dataclass(frozen=True)
class PostListOutput:
    """Output containing a list of posts."""

    posts: list[Post] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class TaxonomyOutput:
    """Output containing all categories and tags."""

    categories: list[Category] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
