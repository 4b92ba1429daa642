"""
Application factory for the seller accounts API.

Serve with `uvicorn shop_api.app:create_app --factory`; nothing is built at import time.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shop_api.core.config import Settings, get_settings
from shop_api.core.errors import ExternalServiceError, ServiceFailure, ValidationError, error_response
from shop_api.core.mailer import Mailer
from shop_api.core.media import MediaHost
from shop_api.core.tokens import TokenIssuer
from shop_api.db.create_tables import create_all
from shop_api.repositories.shop_repository import ShopRepository
from shop_api.routers import shop as shop_router
from shop_api.services.access_service import AccessService
from shop_api.services.shop_service import ShopService

logger = logging.getLogger(__name__)


async def _service_failure_handler(request: Request, exc: ServiceFailure) -> JSONResponse:
    return error_response(exc.error)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(ValidationError("Invalid request body"))


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(ExternalServiceError("Internal server error"))


def create_app(
    settings: Settings | None = None,
    *,
    mailer: Mailer | None = None,
    media: MediaHost | None = None,
) -> FastAPI:
    """Build the app; provider clients can be swapped (tests pass fakes)."""
    logging.basicConfig(level=logging.INFO)
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        create_all(settings.database_url)
        yield

    app = FastAPI(title="Seller Accounts API", lifespan=lifespan)

    repository = ShopRepository(settings.database_url)
    tokens = TokenIssuer(settings)
    app.state.settings = settings
    app.state.access_service = AccessService(tokens, repository)
    app.state.shop_service = ShopService(
        settings,
        repository,
        tokens,
        mailer or Mailer(settings),
        media or MediaHost(settings),
    )

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "OPTIONS"],
            allow_headers=["*"],
        )

    app.add_exception_handler(ServiceFailure, _service_failure_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
    app.include_router(shop_router.router)
    return app
