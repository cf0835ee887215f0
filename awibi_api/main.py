"""FastAPI app entrypoint."""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from awibi_api import __version__
from awibi_api.api import api_router
from awibi_api.core.config import Settings, get_settings
from awibi_api.middleware.json_body import JSONBodyParserMiddleware

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Only the greeting and health routes are exposed; the generated docs and
    OpenAPI schema routes are switched off.

    Args:
        settings: Settings to use, defaults to the cached environment settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="AWIBI MEDTECH API",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Body parsing runs inside CORS so rejected bodies still carry CORS headers
    app.add_middleware(JSONBodyParserMiddleware, limit=settings.JSON_BODY_LIMIT)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_origin_regex=settings.CORS_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    app.include_router(api_router)

    logger.debug("Application created with %d routes", len(app.routes))
    return app


app = create_app()
