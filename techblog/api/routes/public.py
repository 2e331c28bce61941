from fastapi import APIRouter, Depends, HTTPException, Query

from techblog.api.deps import get_post_renderer, get_post_service, get_query_service, get_rules
from techblog.api.schemas import (
    CategoryResponse,
    HeadingResponse,
    PostDetailResponse,
    PostPageResponse,
    PostSummaryResponse,
    TagResponse,
)
from techblog.components.posts import (
    DEFAULT_RECENT_LIMIT,
    GetPostInput,
    PostService,
    PostsByTaxonomyInput,
    RecentPostsInput,
    SearchPostsInput,
    run_by_taxonomy,
    run_get,
    run_recent,
    run_search,
    run_taxonomy,
)
from techblog.components.query import ListPostsInput, QueryService, run_list
from techblog.components.render_posts import ExtractTextInput, PostRenderer, run_extract_text
from techblog.domain.entities import Post
from techblog.rules.models import Rules

router = APIRouter()


def _post_detail(post: Post, renderer: PostRenderer) -> PostDetailResponse:
    """Attach rendered HTML, headings and reading time to a post."""
    rendered = renderer.render(post.content)
    text = run_extract_text(ExtractTextInput(content=post.content))

    data = post.model_dump()
    data["reading_time"] = post.reading_time or text.reading_time
    data["content_html"] = rendered.html
    data["headings"] = [HeadingResponse(level=h.level, text=h.text, id=h.id) for h in text.headings]
    return PostDetailResponse.model_validate(data)


@router.get("/posts", response_model=PostPageResponse)
def list_posts(
    category: str | None = None,
    tag: str | None = None,
    search: str | None = None,
    page: str | None = None,
    service: QueryService = Depends(get_query_service),
) -> PostPageResponse:
    """One page of published posts, newest first. Failures yield an empty page."""
    params = {"category": category, "tag": tag, "search": search, "page": page}
    result = run_list(ListPostsInput(params=params), service)
    return PostPageResponse.model_validate(result)


@router.get("/posts/slug/{slug}", response_model=PostDetailResponse)
def get_post_by_slug(
    slug: str,
    service: PostService = Depends(get_post_service),
    renderer: PostRenderer = Depends(get_post_renderer),
) -> PostDetailResponse:
    res = run_get(GetPostInput(slug=slug), service)
    if not res.success or res.post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return _post_detail(res.post, renderer)


@router.get("/posts/{post_id}", response_model=PostDetailResponse)
def get_post(
    post_id: str,
    service: PostService = Depends(get_post_service),
    renderer: PostRenderer = Depends(get_post_renderer),
) -> PostDetailResponse:
    """Published post by id; drafts are indistinguishable from missing posts."""
    res = run_get(GetPostInput(post_id=post_id), service)
    if not res.success or res.post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return _post_detail(res.post, renderer)


@router.get("/recent", response_model=list[PostSummaryResponse])
def recent_posts(
    limit: int = Query(default=DEFAULT_RECENT_LIMIT, ge=1, le=50),
    exclude: str | None = None,
    service: PostService = Depends(get_post_service),
) -> list[PostSummaryResponse]:
    res = run_recent(RecentPostsInput(limit=limit, exclude_id=exclude), service)
    return [PostSummaryResponse.model_validate(p) for p in res.posts]


@router.get("/search", response_model=list[PostSummaryResponse])
def search_posts(
    q: str = "",
    limit: int | None = Query(default=None, ge=1, le=100),
    service: PostService = Depends(get_post_service),
    rules: Rules = Depends(get_rules),
) -> list[PostSummaryResponse]:
    inp = SearchPostsInput(query=q, limit=limit or rules.listing.search_limit)
    res = run_search(inp, service)
    return [PostSummaryResponse.model_validate(p) for p in res.posts]


@router.get("/categories", response_model=list[CategoryResponse])
def list_categories(service: PostService = Depends(get_post_service)) -> list[CategoryResponse]:
    return [CategoryResponse.model_validate(c) for c in run_taxonomy(service).categories]


@router.get("/tags", response_model=list[TagResponse])
def list_tags(service: PostService = Depends(get_post_service)) -> list[TagResponse]:
    return [TagResponse.model_validate(t) for t in run_taxonomy(service).tags]


@router.get("/categories/{slug}/posts", response_model=list[PostSummaryResponse])
def posts_by_category(
    slug: str,
    service: PostService = Depends(get_post_service),
    rules: Rules = Depends(get_rules),
) -> list[PostSummaryResponse]:
    inp = PostsByTaxonomyInput(slug=slug, kind="category", limit=rules.listing.taxonomy_limit)
    return [PostSummaryResponse.model_validate(p) for p in run_by_taxonomy(inp, service).posts]


@router.get("/tags/{slug}/posts", response_model=list[PostSummaryResponse])
def posts_by_tag(
    slug: str,
    service: PostService = Depends(get_post_service),
    rules: Rules = Depends(get_rules),
) -> list[PostSummaryResponse]:
    inp = PostsByTaxonomyInput(slug=slug, kind="tag", limit=rules.listing.taxonomy_limit)
    return [PostSummaryResponse.model_validate(p) for p in run_by_taxonomy(inp, service).posts]
