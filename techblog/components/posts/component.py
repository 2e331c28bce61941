"""
Posts component - Published-only post and taxonomy reads.

Invariants:
- I1: Only published posts are ever returned
- I2: Results are newest first
- I3: Store failures yield empty results, never errors
"""

from __future__ import annotations

from ._impl import PostService
from .models import (
    GetPostInput,
    PostListOutput,
    PostOutput,
    PostsByTaxonomyInput,
    RecentPostsInput,
    SearchPostsInput,
    TaxonomyOutput,
)


def run_get(inp: GetPostInput, service: PostService) -> PostOutput:
    """Get one published post by id, falling back to slug."""
    post = None
    if inp.post_id:
        post = service.get_post(inp.post_id)
    elif inp.slug:
        post = service.get_post_by_slug(inp.slug)
    return PostOutput(post=post, success=post is not None)


def run_recent(inp: RecentPostsInput, service: PostService) -> PostListOutput:
    return PostListOutput(posts=service.get_recent_posts(inp.limit, exclude_id=inp.exclude_id))


def run_by_taxonomy(inp: PostsByTaxonomyInput, service: PostService) -> PostListOutput:
    """Posts in a category or with a tag, looked up by slug."""
    if inp.kind == "category":
        posts = service.get_posts_by_category(inp.slug, inp.limit)
    elif inp.kind == "tag":
        posts = service.get_posts_by_tag(inp.slug, inp.limit)
    else:
        raise ValueError(f"Unknown taxonomy kind: {inp.kind}")
    return PostListOutput(posts=posts)


def run_search(inp: SearchPostsInput, service: PostService) -> PostListOutput:
    return PostListOutput(posts=service.search_posts(inp.query, inp.limit))


def run_taxonomy(service: PostService) -> TaxonomyOutput:
    return TaxonomyOutput(
        categories=service.get_all_categories(),
        tags=service.get_all_tags(),
    )


def run(
    inp: GetPostInput | RecentPostsInput | PostsByTaxonomyInput | SearchPostsInput,
    service: PostService,
) -> PostOutput | PostListOutput:
    """
    Main entry point for the posts component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, GetPostInput):
        return run_get(inp, service)
    elif isinstance(inp, RecentPostsInput):
        return run_recent(inp, service)
    elif isinstance(inp, PostsByTaxonomyInput):
        return run_by_taxonomy(inp, service)
    elif isinstance(inp, SearchPostsInput):
        return run_search(inp, service)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
