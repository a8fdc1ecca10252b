"""FastAPI application with lifespan, CORS, error rendering and router mounting."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskdesk.api.routes import bootstrap, health, tasks
from taskdesk.bootstrap.provisioner import AdminProvisioner
from taskdesk.bootstrap.rate_limiter import FixedWindowRateLimiter
from taskdesk.core.config import AppSettings
from taskdesk.core.exceptions import TaskDeskError
from taskdesk.core.protocols import IAccountService, IDataStore, IRateLimitStore
from taskdesk.persistence import create_persistence
from taskdesk.task_import.reconciler import ImportReconciler

logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = [
    "authorization", "x-client-info", "apikey", "content-type",
    "x-bootstrap-token", "x-user-id",
]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    settings: AppSettings = app.state.settings
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)

    data_store, accounts, rate_limit_store = create_persistence(settings)
    overrides = app.state.overrides
    if overrides.get("data_store") is not None:
        data_store = overrides["data_store"]
    if overrides.get("accounts") is not None:
        accounts = overrides["accounts"]
    if overrides.get("rate_limit_store") is not None:
        rate_limit_store = overrides["rate_limit_store"]

    app.state.rate_limiter = FixedWindowRateLimiter(
        rate_limit_store,
        max_requests=settings.rate_limit.max_requests,
        window_seconds=settings.rate_limit.window_seconds,
    )
    app.state.provisioner = AdminProvisioner(accounts, data_store)
    app.state.reconciler = ImportReconciler(data_store)
    logger.info(
        "Starting TaskDesk (%s, backend=%s, rate limit store=%s)",
        settings.environment, settings.backend, settings.rate_limit.backend,
    )
    yield
    logger.info("Shutting down TaskDesk")


async def taskdesk_error_handler(request: Request, exc: TaskDeskError) -> JSONResponse:
    """Render domain errors as ``{"error": message}``."""
    logger.warning("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc)
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


def create_app(
    settings: AppSettings | None = None,
    *,
    data_store: IDataStore | None = None,
    accounts: IAccountService | None = None,
    rate_limit_store: IRateLimitStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Explicit backends replace the ones ``create_persistence`` would build.
    """
    app = FastAPI(
        title="TaskDesk Backend",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings or AppSettings()
    app.state.overrides = {
        "data_store": data_store,
        "accounts": accounts,
        "rate_limit_store": rate_limit_store,
    }

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=CORS_ALLOW_HEADERS,
    )
    app.add_exception_handler(TaskDeskError, taskdesk_error_handler)

    app.include_router(health.router)
    app.include_router(bootstrap.router)
    app.include_router(tasks.router, prefix="/tasks")
    return app
