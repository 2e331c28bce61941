import argparse
import logging
import sys
from pathlib import Path

from techblog.adapters.sqlite.migrator import SQLiteMigrator
from techblog.adapters.sqlite.repos import SQLiteCategoryRepo, SQLitePostRepo, SQLiteTagRepo
from techblog.api.deps import Settings
from techblog.app_shell.seed import seed_demo
from techblog.components.query import QueryService
from techblog.components.render_posts import PostRenderer, build_render_config
from techblog.rules.loader import load_rules
from techblog.rules.models import RenderRulesAdapter, Rules

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("cli")


def get_rules(settings: Settings) -> Rules:
    if not settings.rules_path.exists():
        logger.error("Rules file %s not found.", settings.rules_path)
        sys.exit(1)
    return load_rules(settings.rules_path)


def handle_migrate(settings: Settings, args: argparse.Namespace) -> int:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    applied = SQLiteMigrator(settings.db_path).run_migrations()
    print(f"Applied {len(applied)} migrations.")
    return 0


def handle_render(settings: Settings, args: argparse.Namespace) -> int:
    """Render a stored document file to HTML on stdout."""
    path = Path(args.file)
    if not path.exists():
        logger.error("File %s not found.", path)
        return 1

    rules = get_rules(settings)
    renderer = PostRenderer(config=build_render_config(RenderRulesAdapter(rules)))
    result = renderer.render(path.read_text())
    if not result.success:
        for error in result.errors:
            logger.error("%s at %s: %s", error.code, error.field, error.message)
        return 1

    print(result.html)
    return 0


def handle_posts(settings: Settings, args: argparse.Namespace) -> int:
    rules = get_rules(settings)
    service = QueryService(
        store=SQLitePostRepo(settings.db_path),
        categories=SQLiteCategoryRepo(settings.db_path),
        tags=SQLiteTagRepo(settings.db_path),
        page_size=rules.listing.page_size,
    )
    page = service.list_posts(
        {
            "category": args.category,
            "tag": args.tag,
            "search": args.search,
            "page": args.page,
        }
    )

    for post in page.docs:
        published = post.published_date.date().isoformat() if post.published_date else "-"
        print(f"{published}  {post.id}  {post.title}")
    print(f"Page {page.page} of {page.total_pages} ({page.total_docs} posts)")
    return 0


def handle_seed(settings: Settings, args: argparse.Namespace) -> int:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    SQLiteMigrator(settings.db_path).run_migrations()
    count = seed_demo(settings.db_path)
    print(f"Seeded {count} posts into {settings.db_path}")
    return 0


HANDLERS = {
    "migrate": handle_migrate,
    "render": handle_render,
    "posts": handle_posts,
    "seed": handle_seed,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TechBlog Pro CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # render
    render_parser = subparsers.add_parser("render", help="Render a document JSON file to HTML")
    render_parser.add_argument("file", help="Path to a stored document (JSON)")

    # posts
    posts_parser = subparsers.add_parser("posts", help="List a page of published posts")
    posts_parser.add_argument("--category", help="Category slug or id")
    posts_parser.add_argument("--tag", help="Tag slug or id")
    posts_parser.add_argument("--search", help="Free-text search term")
    posts_parser.add_argument("--page", default="1", help="1-based page number")

    # seed
    subparsers.add_parser("seed", help="Insert demo categories, tags and posts")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return HANDLERS[args.command](Settings(), args)


if __name__ == "__main__":
    sys.exit(main())
