"""
Public SSR Routes - Server-side rendered blog pages.

Serves the home feed, post detail and about pages as complete HTML
documents. Wires QueryService, PostService and PostRenderer together.
"""

from datetime import datetime
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from techblog.api.deps import get_post_renderer, get_post_service, get_query_service, get_rules
from techblog.components.document import MalformedDocument, parse_document
from techblog.components.posts import PostService
from techblog.components.query import PostPage, QueryService
from techblog.components.render_posts import PostRenderer, estimate_reading_time
from techblog.domain.entities import Category, Post
from techblog.rules.models import Rules

router = APIRouter()


# --- HTML Rendering ---


def _escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def format_date(value: datetime | None) -> str:
    """Long-form date, e.g. 'March 4, 2024'."""
    if value is None:
        return ""
    return f"{value:%B} {value.day}, {value.year}"


def reading_time_for(post: Post, words_per_minute: int = 200) -> int:
    """Stored reading time, else an estimate from the document."""
    if post.reading_time:
        return post.reading_time
    try:
        return estimate_reading_time(parse_document(post.content), words_per_minute)
    except MalformedDocument:
        return 1


def render_ssr_page(rules: Rules, title: str, body_content: str = "", description: str = "") -> str:
    """Render a complete HTML page around body content."""
    site = rules.site
    page_title = f"{title} | {site.title}" if title != site.title else site.title
    meta = description or site.subtitle

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{_escape_html(page_title)}</title>
    <meta name="description" content="{_escape_html(meta)}" />
</head>
<body>
    <header>
        <a href="/" class="site-title">{_escape_html(site.title)}</a>
        <nav><a href="/">Home</a> <a href="/about">About</a></nav>
    </header>
    {body_content}
</body>
</html>"""


def _query_string(params: dict[str, str | int | None]) -> str:
    present = {k: v for k, v in params.items() if v not in (None, "")}
    return f"?{urlencode(present)}" if present else ""


def render_category_nav(categories: list[Category], active: str | None) -> str:
    css = ' class="active"' if not active else ""
    items = [f'<a href="/"{css}>All Posts</a>']
    for cat in categories:
        css = ' class="active"' if active == cat.slug else ""
        items.append(
            f'<a href="/?category={_escape_html(cat.slug)}"{css}>{_escape_html(cat.name)}</a>'
        )
    return f'<nav class="categories">{"".join(items)}</nav>'


def render_search_form(search: str | None, category: str | None) -> str:
    hidden = ""
    if category:
        hidden = f'<input type="hidden" name="category" value="{_escape_html(category)}" />'
    return (
        '<form class="search" method="get" action="/">'
        f'<input type="search" name="search" value="{_escape_html(search or "")}" '
        'placeholder="Search articles..." />'
        f"{hidden}"
        '<button type="submit">Search</button>'
        "</form>"
    )


def render_post_card(post: Post, words_per_minute: int = 200) -> str:
    parts = ['<article class="post-card">']
    if post.featured_image:
        parts.append(
            f'<img src="{_escape_html(post.featured_image.url)}" '
            f'alt="{_escape_html(post.featured_image.alt or post.title)}" />'
        )
    if post.category:
        parts.append(f'<span class="badge">{_escape_html(post.category.name)}</span>')
    parts.append(f'<h2><a href="/blog/{_escape_html(post.id)}">{_escape_html(post.title)}</a></h2>')
    if post.excerpt:
        parts.append(f"<p>{_escape_html(post.excerpt)}</p>")
    parts.append(
        f'<p class="meta">{_escape_html(format_date(post.published_date))} · '
        f"{reading_time_for(post, words_per_minute)} min read</p>"
    )
    parts.append("</article>")
    return "".join(parts)


def render_pagination(page: PostPage, filters: dict[str, str | None]) -> str:
    """Previous/next links that keep the active filters."""
    last_page = max(page.total_pages, 1)
    if page.total_pages <= 1 and page.page <= last_page:
        return ""

    def href(number: int) -> str:
        return "/" + _escape_html(_query_string({**filters, "page": number}))

    links = []
    if page.has_prev_page:
        # out-of-range pages step back to the last real page
        links.append(f'<a href="{href(min(page.page - 1, last_page))}">Previous</a>')
    links.append(f"<span>Page {page.page} of {page.total_pages}</span>")
    if page.has_next_page:
        links.append(f'<a href="{href(page.page + 1)}">Next</a>')
    return f'<nav class="pagination">{"".join(links)}</nav>'


# --- SSR Endpoints ---


@router.get("/", response_class=HTMLResponse, summary="Home feed SSR")
def ssr_homepage(
    category: str | None = None,
    tag: str | None = None,
    search: str | None = None,
    page: str | None = None,
    query_service: QueryService = Depends(get_query_service),
    post_service: PostService = Depends(get_post_service),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse:
    """Serve the home feed with category navigation, search and pagination."""
    filters = {"category": category, "tag": tag, "search": search}
    result = query_service.list_posts({**filters, "page": page})
    categories = post_service.get_all_categories()
    wpm = rules.render.words_per_minute

    if result.docs:
        cards = "".join(render_post_card(post, wpm) for post in result.docs)
        listing = f'<section class="posts">{cards}</section>'
    else:
        listing = '<p class="empty">No posts found.</p>'

    body = f"""
    <main>
        <h1>{_escape_html(rules.site.title)}</h1>
        <p>{_escape_html(rules.site.subtitle)}</p>
        {render_search_form(search, category)}
        {render_category_nav(categories, category)}
        {listing}
        {render_pagination(result, filters)}
    </main>
    """

    html = render_ssr_page(rules, rules.site.title, body)
    return HTMLResponse(content=html, status_code=200)


@router.get("/blog/{post_id}", response_class=HTMLResponse, summary="Post SSR")
def ssr_post(
    post_id: str,
    post_service: PostService = Depends(get_post_service),
    renderer: PostRenderer = Depends(get_post_renderer),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse:
    """Serve a published post with its rendered body and recent posts."""
    post = post_service.get_post(post_id)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")

    content_html = renderer.render_html(post.content)
    wpm = rules.render.words_per_minute

    header = []
    if post.category:
        header.append(
            f'<a class="badge" href="/?category={_escape_html(post.category.slug)}">'
            f"{_escape_html(post.category.name)}</a>"
        )
    header.append(f"<h1>{_escape_html(post.title)}</h1>")
    header.append(
        f'<p class="meta">{_escape_html(format_date(post.published_date))} · '
        f"{reading_time_for(post, wpm)} min read</p>"
    )
    if post.excerpt:
        header.append(f'<p class="excerpt">{_escape_html(post.excerpt)}</p>')

    tags_html = ""
    if post.tags:
        links = "".join(
            f'<a class="tag" href="/?tag={_escape_html(t.slug)}">#{_escape_html(t.name)}</a>'
            for t in post.tags
        )
        tags_html = f'<footer class="tags">{links}</footer>'

    recent = post_service.get_recent_posts(rules.listing.recent_posts, exclude_id=post.id)
    recent_html = ""
    if recent:
        items = "".join(
            f'<li><a href="/blog/{_escape_html(p.id)}">{_escape_html(p.title)}</a></li>'
            for p in recent
        )
        recent_html = f'<aside class="recent"><h2>Recent Posts</h2><ul>{items}</ul></aside>'

    body = f"""
    <main>
        <article>
            {"".join(header)}
            {content_html}
            {tags_html}
        </article>
        {recent_html}
    </main>
    """

    html = render_ssr_page(
        rules,
        post.seo.meta_title or post.title,
        body,
        description=post.seo.meta_description or post.excerpt,
    )
    return HTMLResponse(content=html, status_code=200)


@router.get("/about", response_class=HTMLResponse, summary="About page SSR")
def ssr_about(rules: Rules = Depends(get_rules)) -> HTMLResponse:
    paragraphs = "".join(
        f"<p>{_escape_html(block.strip())}</p>"
        for block in rules.site.about.split("\n\n")
        if block.strip()
    )
    body = f"""
    <main>
        <h1>About {_escape_html(rules.site.title)}</h1>
        {paragraphs}
    </main>
    """
    return HTMLResponse(content=render_ssr_page(rules, "About", body), status_code=200)
