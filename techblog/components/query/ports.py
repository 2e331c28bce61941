"""
Query component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from techblog.domain.entities import Category, Post, Tag

from .models import PostPage, QueryFilterSpec


class PostStorePort(Protocol):
    """Document store holding posts."""

    def find(self, spec: QueryFilterSpec) -> PostPage:
        """Return one page of posts matching the filter spec."""
        ...

    def get_by_id(self, post_id: str) -> Post | None:
        """Get a post by its internal id."""
        ...


class CategoryRepoPort(Protocol):
    """Lookup service for categories."""

    def find_by_slug(self, slug: str) -> Category | None:
        """Resolve a slug to at most one category."""
        ...

    def list_all(self) -> list[Category]:
        """List all categories ordered by name."""
        ...


class TagRepoPort(Protocol):
    """Lookup service for tags."""

    def find_by_slug(self, slug: str) -> Tag | None:
        """Resolve a slug to at most one tag."""
        ...

    def list_all(self) -> list[Tag]:
        """List all tags ordered by name."""
        ...
