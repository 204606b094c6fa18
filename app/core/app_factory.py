from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .container import ApplicationContainer
from .logging import configure_logging
from ..application.services.catalog_service import CatalogService
from ..application.services.subscription_service import SubscriptionService
from ..infrastructure.persistence.catalog_seed import load_products
from ..infrastructure.persistence.sqlite import SQLitePersistence
from ..presentation.api.errors import http_exception_handler, validation_exception_handler
from ..presentation.api.routers import products as products_router
from ..presentation.api.routers import subscriptions as subscriptions_router

logger = logging.getLogger(__name__)


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(title="Subscription API", lifespan=_create_lifespan(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(products_router.router)
    app.include_router(subscriptions_router.router)

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {"ok": True}

    return app


def _create_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        persistence = SQLitePersistence(settings.database_path)
        if settings.product_seed_path:
            count = persistence.insert_products(load_products(settings.product_seed_path))
            logger.info("Seeded %d products into %s", count, settings.database_path)

        catalog_service = CatalogService(persistence)
        subscription_service = SubscriptionService(catalog_service, persistence)

        app.state.container = ApplicationContainer(  # type: ignore[attr-defined]
            settings=settings,
            persistence=persistence,
            catalog_service=catalog_service,
            subscription_service=subscription_service,
        )

        try:
            yield
        finally:
            persistence.close()

    return lifespan
