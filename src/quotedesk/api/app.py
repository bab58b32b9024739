"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from quotedesk.api.routes import census, health
from quotedesk.core.config import AppSettings
from quotedesk.core.exceptions import CensusInputError, CensusNotFoundError, CensusParseError
from quotedesk.core.logging import configure_logging
from quotedesk.persistence import create_persistence
from quotedesk.services.census_service import CensusService


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    settings: AppSettings = app.state.settings
    configure_logging(settings.log_level)
    if getattr(app.state, "census_service", None) is None:
        store, _cache, file_store = create_persistence(settings)
        app.state.census_service = CensusService(
            settings=settings, store=store, file_store=file_store,
        )
    yield


async def _not_found(request: Request, exc: CensusNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _unprocessable(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def create_app(
    settings: AppSettings | None = None,
    census_service: CensusService | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="QuoteDesk Census Quality",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings or AppSettings()
    app.state.census_service = census_service
    app.add_exception_handler(CensusNotFoundError, _not_found)
    app.add_exception_handler(CensusInputError, _unprocessable)
    app.add_exception_handler(CensusParseError, _unprocessable)
    app.include_router(health.router)
    app.include_router(census.router)
    return app
