import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from techblog.adapters.sqlite.repos import (
    SQLiteCategoryRepo,
    SQLitePostRepo,
    SQLiteTagRepo,
)

# Atomic components are stateless, so we import them here for dependency injection.
# Dependencies are injected as ports/repos/adapters.
from techblog.components.posts import PostService
from techblog.components.query import QueryService
from techblog.components.render_posts import PostRenderer, build_render_config
from techblog.rules.loader import load_rules
from techblog.rules.models import RenderRulesAdapter, Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("BLOG_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "blog.db")
        self.rules_path = Path(os.environ.get("BLOG_RULES_PATH", str(self.base_dir / "rules.yaml")))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


# --- Repos ---
def get_post_repo(settings: Settings = Depends(get_settings)) -> SQLitePostRepo:
    return SQLitePostRepo(settings.db_path)


def get_category_repo(settings: Settings = Depends(get_settings)) -> SQLiteCategoryRepo:
    return SQLiteCategoryRepo(settings.db_path)


def get_tag_repo(settings: Settings = Depends(get_settings)) -> SQLiteTagRepo:
    return SQLiteTagRepo(settings.db_path)


# --- Services ---
def get_query_service(
    rules: Rules = Depends(get_rules),
    store: SQLitePostRepo = Depends(get_post_repo),
    categories: SQLiteCategoryRepo = Depends(get_category_repo),
    tags: SQLiteTagRepo = Depends(get_tag_repo),
) -> QueryService:
    return QueryService(
        store=store,
        categories=categories,
        tags=tags,
        page_size=rules.listing.page_size,
    )


def get_post_service(
    store: SQLitePostRepo = Depends(get_post_repo),
    categories: SQLiteCategoryRepo = Depends(get_category_repo),
    tags: SQLiteTagRepo = Depends(get_tag_repo),
) -> PostService:
    return PostService(store=store, categories=categories, tags=tags)


def get_post_renderer(rules: Rules = Depends(get_rules)) -> PostRenderer:
    return PostRenderer(config=build_render_config(RenderRulesAdapter(rules)))
