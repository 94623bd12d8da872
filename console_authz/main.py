# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from console_authz.api import router
from console_authz.api.middleware import request_context_middleware
from console_authz.clients import BindingStore, StoreUnavailableError, create_binding_store
from console_authz.config import settings
from console_authz.core.catalog import Catalog, load_catalog
from console_authz.core.service import CapabilityService
from console_authz.logging_config import setup_logging

load_dotenv()
setup_logging()

logger = logging.getLogger(__name__)


def _log_catalog_error(path: Path, error: Exception) -> None:
    logger.warning("Ignoring catalog override %s, using defaults: %s", path, error)


def create_app(store: BindingStore | None = None, catalog: Catalog | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up: loading capability catalog...")
        app_catalog = catalog or load_catalog(
            settings.rules_config_path,
            settings.cluster_rules_config_path,
            settings.workspace_rules_config_path,
            on_error=_log_catalog_error,
        )
        logger.info(
            "Catalog ready: %d namespace, %d cluster, %d workspace categories",
            len(app_catalog.namespace_categories),
            len(app_catalog.cluster_categories),
            len(app_catalog.workspace_categories),
        )

        app_store = store or create_binding_store(settings)
        if not app_store.check_connection():
            logger.warning("Binding store is not reachable yet")

        app.state.capability_service = CapabilityService(app_store, app_catalog)

        yield

        logger.info("Shutting down...")
        app_store.close()

    app = FastAPI(lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
    app.middleware("http")(request_context_middleware)
    app.add_exception_handler(StoreUnavailableError, _store_unavailable_handler)
    app.include_router(router)
    return app


async def _store_unavailable_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.error("Binding store unavailable: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"detail": {"error": "STORE_UNAVAILABLE", "message": str(exc)}},
    )


app = create_app()
