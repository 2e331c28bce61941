from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from techblog.domain.entities import PostStatus


# --- Taxonomy ---
class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    description: str = ""
    color: str
    icon: str | None = None


class TagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    color: str


class MediaResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    url: str
    alt: str = ""


class SeoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    meta_title: str = ""
    meta_description: str = ""
    keywords: str = ""


# --- Posts ---
class PostSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    slug: str
    excerpt: str = ""
    status: PostStatus
    published_date: datetime | None = None
    category: CategoryResponse | None = None
    tags: list[TagResponse] = []
    featured_image: MediaResponse | None = None
    reading_time: int | None = None


class HeadingResponse(BaseModel):
    level: int
    text: str
    id: str


class PostDetailResponse(PostSummaryResponse):
    content: str | dict[str, Any]
    content_html: str
    headings: list[HeadingResponse] = []
    seo: SeoResponse


class PostPageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    docs: list[PostSummaryResponse]
    total_docs: int
    total_pages: int
    page: int
    has_prev_page: bool
    has_next_page: bool
