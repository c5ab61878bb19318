"""
FastAPI application factory.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..core import get_config, get_logger, BackendUnavailableError
from ..database import init_schema
from .dependencies import Services
from .errors import register_exception_handlers
from .routes import router

logger = get_logger(__name__)


def create_app(services: Services = None, init_index: bool = True) -> FastAPI:
    """
    Create and configure the application.

    Args:
        services: Collaborators to serve with. Built from configuration
                  when omitted.
        init_index: Create the search index on startup if it is missing.

    Returns:
        Configured FastAPI application.
    """
    config = get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_index:
            repository = app.state.services.repository
            try:
                init_schema(repository.client, repository.index_name)
            except BackendUnavailableError as e:
                logger.warning(f"Search index not initialized at startup: {e.message}")
        logger.info(f"{config.api.title} {__version__} started")
        yield
        logger.info(f"{config.api.title} stopped")

    app = FastAPI(
        title=config.api.title,
        version=__version__,
        lifespan=lifespan
    )
    app.state.services = services or Services.from_config()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    register_exception_handlers(app)
    app.include_router(router)

    return app
