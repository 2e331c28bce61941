import re
from datetime import UTC, datetime
from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, Field

# --- Enums / Literals ---
PostStatus = Literal["draft", "published"]

_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Derive a URL-safe slug from a display name."""
    return _SLUG_SEPARATORS.sub("-", name.lower()).strip("-")


def _utcnow() -> datetime:
    return datetime.now(UTC)


def new_id() -> str:
    return uuid4().hex


# --- Taxonomy ---

class Category(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    slug: str = ""
    description: str = ""
    color: str = "#3B82F6"
    icon: str | None = None

class Tag(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str = Field(max_length=30)
    slug: str = ""
    color: str = "#6B7280"

# --- Media ---

class Media(BaseModel):
    id: str = Field(default_factory=new_id)
    url: str
    alt: str = ""
    filename: str | None = None

# --- Posts ---

class SeoMeta(BaseModel):
    meta_title: str = ""
    meta_description: str = ""
    keywords: str = ""

class Post(BaseModel):
    id: str = Field(default_factory=new_id)
    title: str
    slug: str
    excerpt: str = ""
    # Rich text document tree, either serialized JSON or already decoded
    content: str | dict[str, Any] = ""
    status: PostStatus = "draft"
    published_date: datetime | None = None

    category: Category | None = None
    tags: list[Tag] = Field(default_factory=list)
    featured_image: Media | None = None

    reading_time: int | None = None
    seo: SeoMeta = Field(default_factory=SeoMeta)

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_published(self) -> bool:
        return self.status == "published"
