"""Website — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Page routes registered before the static mount at "/", so they win
    - Every response passes through SecurityHeadersMiddleware
    - Logging configured on startup and flushed on shutdown via lifespan

Design Decisions:
    - create_app() factory over a module-level app: importing this module has
      no side effects and tests build apps with their own Settings. Local runs
      use `uvicorn website.main:create_app --factory`
    - Settings the lifespan depends on are validated here, so a bad value
      fails while the host is built rather than after uvicorn starts
    - Middleware order: CaseInsensitiveRoutingMiddleware runs inside
      SecurityHeadersMiddleware so rewritten paths still get headers
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from website.api.error_handlers import register_error_handlers
from website.api.middleware import (
    CaseInsensitiveRoutingMiddleware, SecurityHeadersMiddleware,
)
from website.api.routes import home, projects, tools
from website.config import Settings, get_settings
from website.core.errors import ConfigurationError
from website.infrastructure.file_versions import FileVersionProvider
from website.infrastructure.observability import (
    configure_logging, shutdown_logging, validate_log_format,
)
from website.infrastructure.static_files import SiteStaticFiles
from website.infrastructure.templating import STATIC_DIR, create_templates

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    configure_logging(settings)
    logger.info(
        f"Website started ({settings.environment}, revision {settings.git_commit})",
    )
    yield
    logger.info("Website shutting down")
    shutdown_logging()


def create_app(
    settings: Settings | None = None, static_dir: Path = STATIC_DIR,
) -> FastAPI:
    """Build the website application."""
    settings = settings or get_settings()
    if not static_dir.is_dir():
        raise ConfigurationError(
            f"static directory '{static_dir}' does not exist", "static_dir",
        )
    validate_log_format(settings.log_format)

    app = FastAPI(
        title="Website",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )
    versions = FileVersionProvider(static_dir)
    templates = create_templates(settings, versions)
    app.state.settings = settings
    app.state.templates = templates

    # Added last runs first: security headers wrap the routing rewrite
    app.add_middleware(CaseInsensitiveRoutingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, settings=settings)

    app.include_router(home.router)
    app.include_router(projects.router)
    app.include_router(tools.router)

    # Mounted AFTER the routes so page paths take precedence
    app.mount("/", SiteStaticFiles(directory=static_dir), name="static")

    register_error_handlers(app, templates)
    return app

