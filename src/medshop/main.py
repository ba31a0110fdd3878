"""
Application factory.

    uvicorn --factory medshop.main:create_app   # settings from the environment / .env
    python -m medshop                           # same, HOST/PORT from settings
    create_app(Settings(...))                   # tests and embedding
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from medshop.api.v1 import api_router, register_exception_handlers
from medshop.config.settings import Settings, get_settings
from medshop.core.logging import RequestIDMiddleware, setup_logging, stop_queue_logging
from medshop.database.session import create_engine_from_settings, create_session_factory
from medshop.exceptions.mapper import ErrorTranslator
from medshop.utils.logging import get_project_version

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "app.startup",
        extra={"routines_backend": app.state.settings.routines_backend, "env": app.state.settings.ENV},
    )
    try:
        yield
    finally:
        await app.state.engine.dispose()
        logger.info("app.shutdown")
        stop_queue_logging()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="MedShop API",
        version=get_project_version(),
        lifespan=lifespan,
    )

    # Everything the request dependencies need hangs off app.state
    app.state.settings = settings
    app.state.engine = create_engine_from_settings(settings)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.error_translator = ErrorTranslator(settings.BUSINESS_ERROR_THRESHOLD)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location", "X-Request-ID"],
    )
    app.add_middleware(RequestIDMiddleware)

    app.include_router(api_router, prefix=settings.API_PREFIX)
    register_exception_handlers(app)

    return app

