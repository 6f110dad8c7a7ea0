import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from storefront.api.routes import router
from storefront.core.config import Settings, get_settings
from storefront.core.revalidation import PageCache
from storefront.data_access.database import MongoConnectionPool
from storefront.services.ai_service import AIService
from storefront.services.storage_service import StorageService


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handles system startup and shutdown events.

    Initializes logging, reads the configuration (a missing document store
    setting stops startup here) and builds the process-wide handles: the
    MongoDB connection pool, the page cache, and the storage and AI clients.
    The pool connects lazily on first use and is closed on shutdown.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler()] # This sends it to the Terminal
    )

    state = app.state
    state.settings = state.settings or get_settings()
    if state.pool is None:
        state.pool = MongoConnectionPool(state.settings.MONGODB_URI, state.settings.MONGODB_DB_NAME)
    if state.page_cache is None:
        state.page_cache = PageCache()
    if state.storage is None:
        state.storage = StorageService(state.settings)
    if state.ai is None:
        state.ai = AIService(state.settings.GEMINI_API_KEY, model=state.settings.GEMINI_MODEL)

    yield

    state.pool.close()


def create_app(
    settings: Optional[Settings] = None,
    pool: Optional[MongoConnectionPool] = None,
    page_cache: Optional[PageCache] = None,
    storage: Optional[StorageService] = None,
    ai: Optional[AIService] = None,
) -> FastAPI:
    """Builds the API; any handle passed in replaces the one built at startup."""
    app = FastAPI(
        title="Storefront CMS API",
        description="Storefront pages and admin back office for products, categories and the homepage carousel",
        version="0.1.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.pool = pool
    app.state.page_cache = page_cache
    app.state.storage = storage
    app.state.ai = ai

    # Include our routes
    app.include_router(router)

    @app.get("/")
    def read_root() -> dict[str, str]:
        """Landing endpoint for the API.

        Returns:
            Dict[str, str]: A welcome message.
        """
        return {"message": "Welcome to the Storefront CMS API"}

    return app


app = create_app()
