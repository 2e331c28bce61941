"""
Content query builder - Translate listing parameters into a filter spec.

Listing parameters arrive as URL query strings (category, tag, search, page).
They are turned into a QueryFilterSpec, executed once against the post
store, and any store failure collapses into an empty page.

Key behaviors:
- Public queries are always constrained to published posts
- Category/tag slugs resolve to ids; unknown values pass through literally
- Blank search terms add no constraint
- Page defaults to 1 on absent or non-numeric input; no upper bound
- Store failures of any kind become an empty page, logged, never raised
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from .models import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_KEY,
    PostPage,
    QueryFilterSpec,
    StoreFailure,
    StoreOk,
    StoreResult,
)
from .ports import CategoryRepoPort, PostStorePort, TagRepoPort

logger = logging.getLogger(__name__)


# --- Parameter Parsing ---


def parse_page(value: str | int | None) -> int:
    """Parse a 1-based page number, defaulting to 1."""
    if value is None:
        return 1
    if isinstance(value, int) and not isinstance(value, bool):
        page = value
    else:
        try:
            page = int(str(value).strip())
        except ValueError:
            return 1
    return page if page >= 1 else 1


def normalize_search(value: str | None) -> str | None:
    """Trim a search term; blank terms mean no search."""
    if value is None:
        return None
    term = value.strip()
    return term or None


def resolve_reference(value: str, repo: CategoryRepoPort | TagRepoPort) -> str:
    """
    Resolve a slug to an internal id.

    Falls back to the supplied value when no match is found, so callers
    can pass either a slug or an id.
    """
    match = repo.find_by_slug(value)
    if match is not None:
        return match.id
    return value


# --- Filter Builder ---


def build_filter(
    params: Mapping[str, str | None],
    *,
    categories: CategoryRepoPort,
    tags: TagRepoPort,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> QueryFilterSpec:
    """
    Build the filter spec for a public post listing.

    Args:
        params: Optional ``category``, ``tag``, ``search`` and ``page``.
        categories: Category lookup used to resolve slugs.
        tags: Tag lookup used to resolve slugs.
        page_size: Fixed number of posts per page.

    Returns:
        A QueryFilterSpec constrained to published posts.
    """
    category = params.get("category") or None
    tag = params.get("tag") or None

    # Lookups run one after the other: category first, then tag
    category_id = resolve_reference(category, categories) if category else None
    tag_id = resolve_reference(tag, tags) if tag else None

    return QueryFilterSpec(
        status="published",
        category=category_id,
        tag=tag_id,
        search=normalize_search(params.get("search")),
        page=parse_page(params.get("page")),
        page_size=page_size,
        sort_key=DEFAULT_SORT_KEY,
    )


# --- Execution ---


def execute_query(spec: QueryFilterSpec, store: PostStorePort) -> StoreResult:
    """Run a filter against the store, capturing any failure as a value."""
    where = spec.to_where()
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Query conditions: %s", json.dumps(where, indent=2))
    try:
        return StoreOk(page=store.find(spec))
    except Exception as e:
        return StoreFailure(error=e, where=where)


def page_or_empty(result: StoreResult) -> PostPage:
    """Fallback policy: every store failure degrades to an empty page."""
    if isinstance(result, StoreOk):
        return result.page

    logger.error("Error fetching posts: %s", result.error, exc_info=result.error)
    return PostPage.empty()


def get_blog_posts(
    params: Mapping[str, str | None],
    *,
    store: PostStorePort,
    categories: CategoryRepoPort,
    tags: TagRepoPort,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> PostPage:
    """
    Fetch one page of published posts for listing parameters.

    Never raises for store or lookup failures; those yield an empty page.
    """
    try:
        spec = build_filter(params, categories=categories, tags=tags, page_size=page_size)
    except Exception as e:
        return page_or_empty(StoreFailure(error=e))

    return page_or_empty(execute_query(spec, store))


# --- Service Class ---


class QueryService:
    """
    Post listing service.

    Binds the store and taxonomy lookups used to answer listing requests.
    """

    def __init__(
        self,
        store: PostStorePort,
        categories: CategoryRepoPort,
        tags: TagRepoPort,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._store = store
        self._categories = categories
        self._tags = tags
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        return self._page_size

    def build_filter(self, params: Mapping[str, str | None]) -> QueryFilterSpec:
        return build_filter(
            params,
            categories=self._categories,
            tags=self._tags,
            page_size=self._page_size,
        )

    def list_posts(self, params: Mapping[str, str | None]) -> PostPage:
        return get_blog_posts(
            params,
            store=self._store,
            categories=self._categories,
            tags=self._tags,
            page_size=self._page_size,
        )
