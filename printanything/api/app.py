"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from core import TemplateStore
from printanything import __version__
from printanything.api.routes import convert, templates
from printanything.config import get_database_path
from printanything.database import MemoryTemplateStore, SqliteTemplateStore
from printanything.editor import RecentNames
from printanything.utilities.logging import setup_logging

logger = logging.getLogger(__name__)


def _default_store() -> TemplateStore:
    db_path = get_database_path()
    if db_path:
        return SqliteTemplateStore(db_path)
    return MemoryTemplateStore()


def create_app(store: TemplateStore | None = None) -> FastAPI:
    """Build the API around a template store.

    Without an explicit store, templates go to the configured SQLite file,
    or stay in memory when no database path is set.
    """
    setup_logging()

    app = FastAPI(title="Print-Anything", version=__version__)
    app.state.store = store or _default_store()
    app.state.recent_names = RecentNames()

    app.include_router(templates.router, prefix="/api", tags=["templates"])
    app.include_router(convert.router, prefix="/api", tags=["convert"])

    logger.info(f"[API] Print-Anything {__version__} ready ({type(app.state.store).__name__})")
    return app
