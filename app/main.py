"""FastAPI application for the liquid staking backend."""

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.routes import admin, balances, health, withdrawals
from app.schemas.common import ErrorResponse
from config import Settings, get_settings, project_root

logger: logging.Logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = get_settings()
    logger.info(
        "Chain %s at %s; LiquidStaking %s, stPEAQ %s",
        settings.chain.chain_id,
        settings.chain.rpc_url,
        settings.contracts.liquid_staking_address,
        settings.contracts.st_peaq_address,
    )
    if not settings.server_private_key:
        logger.warning("SERVER_PRIVATE_KEY not set; admin transactions will be refused")
    if not settings.api_key:
        logger.warning("STAKING_API_KEY not set; admin routes are unauthenticated")
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app: FastAPI = FastAPI(
        title="PEAQ Liquid Staking API",
        version="0.1.0",
        debug=settings.debug,
        lifespan=_lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def _on_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        body = ErrorResponse(error="Internal server error", details=type(exc).__name__)
        return JSONResponse(status_code=500, content=body.model_dump())

    for module in (health, withdrawals, balances, admin):
        app.include_router(module.router)

    return app


app: FastAPI = create_app()


def start() -> None:
    """Entry point for liquidstake-api. Host, port and reload come from STAKING_*."""
    settings: Settings = get_settings()
    # reload re-imports "app.main" from the project root
    os.chdir(project_root())
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level="debug" if settings.debug else "info",
    )
