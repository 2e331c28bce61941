import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from techblog.adapters.sqlite.migrator import SQLiteMigrator
from techblog.api.deps import get_settings
from techblog.app_shell.config import validate_ops_rules
from techblog.rules.loader import load_rules

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules and validate on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
        validate_ops_rules(rules, settings.data_dir)
        logger.info("Rules loaded from %s", settings.rules_path)
    except Exception as e:
        logger.critical("Rules load failed: %s", e)
        sys.exit(1)

    SQLiteMigrator(settings.db_path).run_migrations()

    yield


app = FastAPI(
    title="TechBlog Pro",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from techblog.api.routes import public, public_ssr  # noqa: E402

app.include_router(public.router, prefix="/api/public", tags=["Public"])
app.include_router(public_ssr.router, prefix="", tags=["SSR"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "blog"}
