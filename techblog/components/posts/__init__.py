"""
Posts component - Published-only post and taxonomy reads.
"""

from ._impl import PostService, create_post_service
from .component import (
    run,
    run_by_taxonomy,
    run_get,
    run_recent,
    run_search,
    run_taxonomy,
)
from .models import (
    DEFAULT_RECENT_LIMIT,
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_TAXONOMY_LIMIT,
    GetPostInput,
    PostListOutput,
    PostOutput,
    PostsByTaxonomyInput,
    RecentPostsInput,
    SearchPostsInput,
    TaxonomyOutput,
)

__all__ = [
    # Entry points
    "run",
    "run_by_taxonomy",
    "run_get",
    "run_recent",
    "run_search",
    "run_taxonomy",
    # Service
    "PostService",
    "create_post_service",
    # Input models
    "GetPostInput",
    "PostsByTaxonomyInput",
    "RecentPostsInput",
    "SearchPostsInput",
    # Output models
    "PostListOutput",
    "PostOutput",
    "TaxonomyOutput",
    # Defaults
    "DEFAULT_RECENT_LIMIT",
    "DEFAULT_SEARCH_LIMIT",
    "DEFAULT_TAXONOMY_LIMIT",
]
