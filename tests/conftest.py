from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from techblog.adapters.sqlite.migrator import SQLiteMigrator
from techblog.adapters.sqlite.repos import (
    SQLiteCategoryRepo,
    SQLiteMediaRepo,
    SQLitePostRepo,
    SQLiteTagRepo,
)
from techblog.domain.entities import Category, Media, Post, SeoMeta, Tag
from techblog.rules.loader import load_rules
from techblog.rules.models import Rules

ROOT = Path(__file__).resolve().parent.parent
NOW = datetime(2024, 5, 20, 12, 0, tzinfo=UTC)


def doc(*children: dict) -> dict:
    return {"root": {"type": "root", "children": list(children)}}


def text(value: str, fmt: int = 0) -> dict:
    return {"type": "text", "text": value, "format": fmt}


def para(*children: dict) -> dict:
    return {"type": "paragraph", "children": list(children)}


@pytest.fixture
def rules() -> Rules:
    """The project rules file."""
    return load_rules(ROOT / "rules.yaml")


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    path = str(tmp_path / "blog.db")
    SQLiteMigrator(path).run_migrations()
    return path


@pytest.fixture
def post_repo(db_path: str) -> SQLitePostRepo:
    return SQLitePostRepo(db_path)


@pytest.fixture
def category_repo(db_path: str) -> SQLiteCategoryRepo:
    return SQLiteCategoryRepo(db_path)


@pytest.fixture
def tag_repo(db_path: str) -> SQLiteTagRepo:
    return SQLiteTagRepo(db_path)


@pytest.fixture
def media_repo(db_path: str) -> SQLiteMediaRepo:
    return SQLiteMediaRepo(db_path)


@pytest.fixture
def blog_data(
    post_repo: SQLitePostRepo,
    category_repo: SQLiteCategoryRepo,
    tag_repo: SQLiteTagRepo,
    media_repo: SQLiteMediaRepo,
) -> dict[str, object]:
    """
    A small published blog:
    - 'tutorials' category with two published posts and one draft
    - 'news' category with one published post
    - tags 'python' and 'sql'
    """
    tutorials = category_repo.save(Category(id="c1", name="Tutorials"))
    news = category_repo.save(Category(id="c2", name="News"))
    python = tag_repo.save(Tag(id="t1", name="Python"))
    sql = tag_repo.save(Tag(id="t2", name="SQL"))
    cover = media_repo.save(Media(id="m1", url="/media/cover.png", alt="Cover"))

    posts = [
        Post(
            id="p1",
            title="Python Basics",
            slug="python-basics",
            excerpt="Start here",
            content=doc(
                {"type": "heading", "tag": "h2", "children": [text("Variables")]},
                para(text("Names point at objects.")),
            ),
            status="published",
            published_date=NOW - timedelta(days=5),
            category=tutorials,
            tags=[python],
            featured_image=cover,
            seo=SeoMeta(keywords="beginner"),
        ),
        Post(
            id="p2",
            title="Window Functions",
            slug="window-functions",
            excerpt="Ranking rows",
            content=doc(para(text("Use ROW_NUMBER for pagination."))),
            status="published",
            published_date=NOW - timedelta(days=1),
            category=tutorials,
            tags=[sql, python],
            reading_time=7,
        ),
        Post(
            id="p3",
            title="Release 2.0",
            slug="release-2-0",
            excerpt="What is new",
            content=doc(para(text("Faster queries everywhere."))),
            status="published",
            published_date=NOW - timedelta(days=3),
            category=news,
        ),
        Post(
            id="p4",
            title="Unpublished Python Notes",
            slug="unpublished-python-notes",
            content=doc(para(text("Not ready."))),
            status="draft",
            category=tutorials,
            tags=[python],
        ),
    ]
    for post in posts:
        post_repo.save(post)

    return {
        "categories": {"tutorials": tutorials, "news": news},
        "tags": {"python": python, "sql": sql},
        "posts": {p.id: p for p in posts},
    }
