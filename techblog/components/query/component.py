"""
Query component - Filtered, paginated listing of published posts.

Invariants:
- I1: status = published on every public listing
- I2: Slug lookups never fail a query; misses pass through literally
- I3: Sort is always newest first
- I4: Store failures yield the empty page shape
"""

from __future__ import annotations

from ._impl import QueryService
from .models import ListPostsInput, PostPage


def run_list(inp: ListPostsInput, service: QueryService) -> PostPage:
    """
    List one page of published posts.

    Args:
        inp: Input containing raw listing parameters.
        service: Query service bound to a store and taxonomy lookups.

    Returns:
        PostPage, empty on any failure.
    """
    return service.list_posts(inp.params)


def run(inp: ListPostsInput, service: QueryService) -> PostPage:
    """Main entry point for the query component."""
    if isinstance(inp, ListPostsInput):
        return run_list(inp, service)
    raise ValueError(f"Unknown input type: {type(inp)}")
