"""
Query component models - filter spec, result page and store results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from techblog.domain.entities import Post, PostStatus

DEFAULT_PAGE_SIZE = 10
DEFAULT_SORT_KEY = "-published_date"

# Fields a free-text search matches against (OR, substring)
SEARCH_FIELDS = ("title", "excerpt", "content", "seo.keywords")


# --- Filter Spec ---


@dataclass(frozen=True)
class QueryFilterSpec:
    """
    Normalized constraints for one page of posts.

    Built fresh per request and consumed once by the store.
    """

    status: PostStatus = "published"
    category: str | None = None
    tag: str | None = None
    search: str | None = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_key: str = DEFAULT_SORT_KEY
    slug: str | None = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def to_where(self) -> dict[str, Any]:
        """Express the constraints as a store-agnostic where clause."""
        where: dict[str, Any] = {"status": {"equals": self.status}}
        if self.slug is not None:
            where["slug"] = {"equals": self.slug}
        if self.category is not None:
            where["category"] = {"equals": self.category}
        if self.tag is not None:
            where["tags"] = {"in": [self.tag]}
        if self.search:
            where["or"] = [{name: {"contains": self.search}} for name in SEARCH_FIELDS]
        return where


# --- Result Page ---


@dataclass(frozen=True)
class PostPage:
    """One page of posts plus pagination metadata."""

    docs: list[Post] = field(default_factory=list)
    total_docs: int = 0
    total_pages: int = 0
    page: int = 1
    has_prev_page: bool = False
    has_next_page: bool = False

    @classmethod
    def empty(cls) -> PostPage:
        return cls()

    @classmethod
    def from_slice(
        cls,
        docs: list[Post],
        *,
        total_docs: int,
        page: int,
        page_size: int,
    ) -> PostPage:
        """Build pagination metadata around one slice of results."""
        total_pages = -(-total_docs // page_size) if page_size > 0 else 0
        return cls(
            docs=docs,
            total_docs=total_docs,
            total_pages=total_pages,
            page=page,
            has_prev_page=page > 1,
            has_next_page=page < total_pages,
        )


# --- Store Results ---


@dataclass(frozen=True)
class StoreOk:
    """Successful store call."""

    page: PostPage


@dataclass(frozen=True)
class StoreFailure:
    """Failed store call; the cause is kept for logging only."""

    error: Exception
    where: dict[str, Any] = field(default_factory=dict)


StoreResult = Union[StoreOk, StoreFailure]


# --- Input Models ---


@dataclass(frozen=True)
class ListPostsInput:
    """Input for listing a page of public posts from URL parameters."""

    params: dict[str, str | None] = field(default_factory=dict)
