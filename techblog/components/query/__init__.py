"""
Query component - Filtered, paginated listing of published posts.
"""

from ._impl import (
    QueryService,
    build_filter,
    execute_query,
    get_blog_posts,
    normalize_search,
    page_or_empty,
    parse_page,
    resolve_reference,
)
from .component import run, run_list
from .models import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_KEY,
    SEARCH_FIELDS,
    ListPostsInput,
    PostPage,
    QueryFilterSpec,
    StoreFailure,
    StoreOk,
    StoreResult,
)
from .ports import CategoryRepoPort, PostStorePort, TagRepoPort

__all__ = [
    # Entry points
    "run",
    "run_list",
    # Builder
    "QueryService",
    "build_filter",
    "execute_query",
    "get_blog_posts",
    "normalize_search",
    "page_or_empty",
    "parse_page",
    "resolve_reference",
    # Models
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_SORT_KEY",
    "SEARCH_FIELDS",
    "ListPostsInput",
    "PostPage",
    "QueryFilterSpec",
    "StoreFailure",
    "StoreOk",
    "StoreResult",
    # Ports
    "CategoryRepoPort",
    "PostStorePort",
    "TagRepoPort",
]
