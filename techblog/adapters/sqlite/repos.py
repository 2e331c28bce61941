import json
import logging
import sqlite3
from datetime import datetime
from typing import Any

from techblog.components.document import MalformedDocument, parse_document
from techblog.components.query import PostPage, QueryFilterSpec
from techblog.components.render_posts import extract_text
from techblog.domain.entities import Category, Media, Post, SeoMeta, Tag, slugify

logger = logging.getLogger(__name__)

# Sort keys accepted by SQLitePostRepo.find, mapped to columns
SORT_COLUMNS = {
    "published_date": "p.published_date",
    "created_at": "p.created_at",
    "updated_at": "p.updated_at",
    "title": "p.title",
}

# Columns searched by QueryFilterSpec.search
SEARCH_COLUMNS = ("p.title", "p.excerpt", "p.content_text", "p.seo_keywords")


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def contains_ci(haystack: str | None, needle: str | None) -> int:
    """Case-insensitive substring test, registered as a SQL function."""
    if haystack is None or needle is None:
        return 0
    return int(needle.casefold() in haystack.casefold())


def parse_dt(s: str | None) -> datetime | None:
    return datetime.fromisoformat(s) if s else None


class _SQLiteRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.create_function("contains_ci", 2, contains_ci, deterministic=True)
        return conn


# --- Taxonomy ---


def _row_to_category(row: dict[str, Any]) -> Category:
    return Category(
        id=row["id"],
        name=row["name"],
        slug=row["slug"],
        description=row["description"],
        color=row["color"],
        icon=row["icon"],
    )


def _row_to_tag(row: dict[str, Any]) -> Tag:
    return Tag(id=row["id"], name=row["name"], slug=row["slug"], color=row["color"])


class SQLiteCategoryRepo(_SQLiteRepo):
    def save(self, category: Category) -> Category:
        if not category.slug:
            category = category.model_copy(update={"slug": slugify(category.name)})
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO categories (id, name, slug, description, color, icon)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name=excluded.name,
                    slug=excluded.slug,
                    description=excluded.description,
                    color=excluded.color,
                    icon=excluded.icon
            """,
                (
                    category.id,
                    category.name,
                    category.slug,
                    category.description,
                    category.color,
                    category.icon,
                ),
            )
            conn.commit()
            return category
        finally:
            conn.close()

    def get_by_id(self, category_id: str) -> Category | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM categories WHERE id = ?", (category_id,)).fetchone()
            return _row_to_category(row) if row else None
        finally:
            conn.close()

    def find_by_slug(self, slug: str) -> Category | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM categories WHERE slug = ?", (slug,)).fetchone()
            return _row_to_category(row) if row else None
        finally:
            conn.close()

    def list_all(self) -> list[Category]:
        conn = self._get_conn()
        try:
            rows = conn.execute("SELECT * FROM categories ORDER BY name ASC").fetchall()
            return [_row_to_category(r) for r in rows]
        finally:
            conn.close()


class SQLiteTagRepo(_SQLiteRepo):
    def save(self, tag: Tag) -> Tag:
        if not tag.slug:
            tag = tag.model_copy(update={"slug": slugify(tag.name)})
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO tags (id, name, slug, color) VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name=excluded.name,
                    slug=excluded.slug,
                    color=excluded.color
            """,
                (tag.id, tag.name, tag.slug, tag.color),
            )
            conn.commit()
            return tag
        finally:
            conn.close()

    def get_by_id(self, tag_id: str) -> Tag | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM tags WHERE id = ?", (tag_id,)).fetchone()
            return _row_to_tag(row) if row else None
        finally:
            conn.close()

    def find_by_slug(self, slug: str) -> Tag | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM tags WHERE slug = ?", (slug,)).fetchone()
            return _row_to_tag(row) if row else None
        finally:
            conn.close()

    def list_all(self) -> list[Tag]:
        conn = self._get_conn()
        try:
            rows = conn.execute("SELECT * FROM tags ORDER BY name ASC").fetchall()
            return [_row_to_tag(r) for r in rows]
        finally:
            conn.close()


class SQLiteMediaRepo(_SQLiteRepo):
    def save(self, media: Media) -> Media:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO media (id, url, alt, filename) VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    url=excluded.url,
                    alt=excluded.alt,
                    filename=excluded.filename
            """,
                (media.id, media.url, media.alt, media.filename),
            )
            conn.commit()
            return media
        finally:
            conn.close()

    def get_by_id(self, media_id: str) -> Media | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM media WHERE id = ?", (media_id,)).fetchone()
            if not row:
                return None
            return Media(id=row["id"], url=row["url"], alt=row["alt"], filename=row["filename"])
        finally:
            conn.close()


# --- Posts ---


def _content_to_text(content: str | dict[str, Any]) -> str:
    """Plain text of a post's document, for search. Empty if unparseable."""
    if not content:
        return ""
    try:
        return extract_text(parse_document(content))
    except MalformedDocument as e:
        logger.warning("Indexing post without body text: %s", e.message)
        return ""


def _order_clause(sort_key: str) -> str:
    descending = sort_key.startswith("-")
    column = SORT_COLUMNS.get(sort_key.lstrip("-"))
    if column is None:
        raise ValueError(f"Unsupported sort key: {sort_key}")
    direction = "DESC" if descending else "ASC"
    return f"{column} {direction}, p.created_at {direction}"


def _where_clause(spec: QueryFilterSpec) -> tuple[str, list[Any]]:
    conditions = ["p.status = ?"]
    params: list[Any] = [spec.status]

    if spec.slug is not None:
        conditions.append("p.slug = ?")
        params.append(spec.slug)
    if spec.category is not None:
        conditions.append("p.category_id = ?")
        params.append(spec.category)
    if spec.tag is not None:
        conditions.append("EXISTS (SELECT 1 FROM post_tags pt WHERE pt.post_id = p.id AND pt.tag_id = ?)")
        params.append(spec.tag)
    if spec.search:
        matches = [f"contains_ci({col}, ?)" for col in SEARCH_COLUMNS]
        conditions.append("(" + " OR ".join(matches) + ")")
        params.extend([spec.search] * len(SEARCH_COLUMNS))

    return " AND ".join(conditions), params


class SQLitePostRepo(_SQLiteRepo):
    def save(self, post: Post) -> Post:
        content = post.content if isinstance(post.content, str) else json.dumps(post.content)
        conn = self._get_conn()
        try:
            # 1. Upsert post
            conn.execute(
                """
                INSERT INTO posts (
                    id, title, slug, excerpt, content, content_text, status,
                    published_date, category_id, featured_image_id, reading_time,
                    seo_meta_title, seo_meta_description, seo_keywords,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    title=excluded.title,
                    slug=excluded.slug,
                    excerpt=excluded.excerpt,
                    content=excluded.content,
                    content_text=excluded.content_text,
                    status=excluded.status,
                    published_date=excluded.published_date,
                    category_id=excluded.category_id,
                    featured_image_id=excluded.featured_image_id,
                    reading_time=excluded.reading_time,
                    seo_meta_title=excluded.seo_meta_title,
                    seo_meta_description=excluded.seo_meta_description,
                    seo_keywords=excluded.seo_keywords,
                    updated_at=excluded.updated_at
            """,
                (
                    post.id,
                    post.title,
                    post.slug,
                    post.excerpt,
                    content,
                    _content_to_text(post.content),
                    post.status,
                    post.published_date.isoformat() if post.published_date else None,
                    post.category.id if post.category else None,
                    post.featured_image.id if post.featured_image else None,
                    post.reading_time,
                    post.seo.meta_title,
                    post.seo.meta_description,
                    post.seo.keywords,
                    post.created_at.isoformat(),
                    post.updated_at.isoformat(),
                ),
            )

            # 2. Replace tag links, keeping their order
            conn.execute("DELETE FROM post_tags WHERE post_id = ?", (post.id,))
            for i, tag in enumerate(post.tags):
                conn.execute(
                    "INSERT INTO post_tags (post_id, tag_id, position) VALUES (?, ?, ?)",
                    (post.id, tag.id, i),
                )

            conn.commit()
            return post
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def get_by_id(self, post_id: str) -> Post | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM posts WHERE id = ?", (post_id,)).fetchone()
            return self._row_to_post(conn, row) if row else None
        finally:
            conn.close()

    def get_by_slug(self, slug: str) -> Post | None:
        """Get a post by slug regardless of status."""
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM posts WHERE slug = ?", (slug,)).fetchone()
            return self._row_to_post(conn, row) if row else None
        finally:
            conn.close()

    def delete(self, post_id: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM posts WHERE id = ?", (post_id,))
            conn.commit()
        finally:
            conn.close()

    def find(self, spec: QueryFilterSpec) -> PostPage:
        where, params = _where_clause(spec)
        order = _order_clause(spec.sort_key)
        conn = self._get_conn()
        try:
            total = conn.execute(
                f"SELECT COUNT(*) AS total FROM posts p WHERE {where}", params
            ).fetchone()["total"]
            docs: list[Post] = []
            # Offsets past the last row (possibly beyond int64) are never bound
            if spec.offset < total:
                rows = conn.execute(
                    f"SELECT p.* FROM posts p WHERE {where} ORDER BY {order} LIMIT ? OFFSET ?",
                    [*params, spec.page_size, spec.offset],
                ).fetchall()
                docs = [self._row_to_post(conn, r) for r in rows]
        finally:
            conn.close()

        return PostPage.from_slice(
            docs,
            total_docs=total,
            page=spec.page,
            page_size=spec.page_size,
        )

    def _row_to_post(self, conn: sqlite3.Connection, row: dict[str, Any]) -> Post:
        category = None
        if row["category_id"]:
            cat_row = conn.execute(
                "SELECT * FROM categories WHERE id = ?", (row["category_id"],)
            ).fetchone()
            category = _row_to_category(cat_row) if cat_row else None

        featured_image = None
        if row["featured_image_id"]:
            m = conn.execute(
                "SELECT * FROM media WHERE id = ?", (row["featured_image_id"],)
            ).fetchone()
            if m:
                featured_image = Media(id=m["id"], url=m["url"], alt=m["alt"], filename=m["filename"])

        tag_rows = conn.execute(
            """
            SELECT t.* FROM tags t
            JOIN post_tags pt ON pt.tag_id = t.id
            WHERE pt.post_id = ?
            ORDER BY pt.position ASC
        """,
            (row["id"],),
        ).fetchall()

        return Post(
            id=row["id"],
            title=row["title"],
            slug=row["slug"],
            excerpt=row["excerpt"],
            content=row["content"],
            status=row["status"],
            published_date=parse_dt(row["published_date"]),
            category=category,
            tags=[_row_to_tag(t) for t in tag_rows],
            featured_image=featured_image,
            reading_time=row["reading_time"],
            seo=SeoMeta(
                meta_title=row["seo_meta_title"],
                meta_description=row["seo_meta_description"],
                keywords=row["seo_keywords"],
            ),
            created_at=parse_dt(row["created_at"]) or datetime.min,
            updated_at=parse_dt(row["updated_at"]) or datetime.min,
        )
