"""Demo content for a fresh database."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from techblog.adapters.sqlite.repos import SQLiteCategoryRepo, SQLitePostRepo, SQLiteTagRepo
from techblog.domain.entities import Category, Post, SeoMeta, Tag, slugify

logger = logging.getLogger(__name__)


# --- Document builders ---


def text(value: str, fmt: int = 0) -> dict[str, Any]:
    return {"type": "text", "text": value, "format": fmt}


def heading(value: str, tag: str = "h2") -> dict[str, Any]:
    return {"type": "heading", "tag": tag, "children": [text(value)]}


def paragraph(*children: dict[str, Any], text_format: int = 0) -> dict[str, Any]:
    return {"type": "paragraph", "textFormat": text_format, "children": list(children)}


def code_block(source: str) -> dict[str, Any]:
    return paragraph(text(source, 16), text_format=16)


def document(*children: dict[str, Any]) -> dict[str, Any]:
    return {"root": {"type": "root", "children": list(children)}}


CATEGORIES = [
    Category(name="Python", description="The language and its ecosystem", color="#3776AB"),
    Category(name="DevOps", description="Deploying and running software", color="#10B981"),
    Category(name="Databases", description="Storage engines and query design", color="#F59E0B"),
]

TAGS = [Tag(name=name) for name in ("fastapi", "sqlite", "testing", "performance", "docker")]


def _demo_posts(categories: dict[str, Category], tags: dict[str, Tag]) -> list[Post]:
    now = datetime.now(UTC)
    return [
        Post(
            title="Getting Started with FastAPI",
            slug="getting-started-with-fastapi",
            excerpt="Build a small JSON API and serve server-rendered pages from one app.",
            content=document(
                heading("Why FastAPI"),
                paragraph(
                    text("Type hints drive validation, so "),
                    text("Depends", 16),
                    text(" wires services without globals."),
                ),
                code_block("uvicorn techblog.api.main:app --reload"),
                {"type": "horizontalrule"},
                {"type": "quote", "children": [text("Make it work, then make it fast.")]},
            ),
            status="published",
            published_date=now - timedelta(days=1),
            category=categories["python"],
            tags=[tags["fastapi"], tags["testing"]],
            seo=SeoMeta(keywords="python, api, web"),
        ),
        Post(
            title="SQLite in Production",
            slug="sqlite-in-production",
            excerpt="When a single file database is the right call.",
            content=document(
                heading("Write-ahead logging"),
                paragraph(text("Enable WAL mode before you reach for a server database.")),
            ),
            status="published",
            published_date=now - timedelta(days=3),
            category=categories["databases"],
            tags=[tags["sqlite"], tags["performance"]],
        ),
        Post(
            title="Container Images That Stay Small",
            slug="container-images-that-stay-small",
            excerpt="Multi-stage builds and what to leave out.",
            content=document(
                paragraph(text("Start from a slim base and copy only the built wheel.")),
            ),
            status="published",
            published_date=now - timedelta(days=7),
            category=categories["devops"],
            tags=[tags["docker"]],
        ),
        Post(
            title="Draft: Profiling Async Code",
            slug="draft-profiling-async-code",
            excerpt="Work in progress.",
            content=document(paragraph(text("Coming soon."))),
            status="draft",
            category=categories["python"],
            tags=[tags["performance"]],
        ),
    ]


def seed_demo(db_path: str) -> int:
    """Insert demo categories, tags and posts. Returns the number of posts saved."""
    category_repo = SQLiteCategoryRepo(db_path)
    tag_repo = SQLiteTagRepo(db_path)
    post_repo = SQLitePostRepo(db_path)

    categories = {}
    for category in CATEGORIES:
        saved = category_repo.find_by_slug(slugify(category.name))
        categories[category.name.lower()] = saved or category_repo.save(category)

    tags = {}
    for tag in TAGS:
        tags[tag.name] = tag_repo.find_by_slug(slugify(tag.name)) or tag_repo.save(tag)

    count = 0
    for post in _demo_posts(categories, tags):
        if post_repo.get_by_slug(post.slug) is not None:
            logger.info("Skipping existing post: %s", post.slug)
            continue
        post_repo.save(post)
        count += 1

    logger.info("Seeded %d posts", count)
    return count
