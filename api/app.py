"""
Module 06 - FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health, tree, verify
from api.errors import (
    APIError,
    api_error_handler,
    civis_error_handler,
    generic_error_handler,
)
from core.config.runtime import get_default_config
from core.schemas.errors import CivisException


def _resolve_log_level() -> int:
    """Resolve log level from CIVIS_LOG_LEVEL or civis.json, defaulting to INFO."""
    raw = get_default_config().logging.level
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="CivisGrid API",
        description="""
HTTP API for building Merkle trees and checking inclusion proofs.

## Endpoints

- **POST /tree** - Build a tree and return its root label
- **POST /proof** - Build a tree and return the proof of one item
- **POST /verify** - Verify a proof against a trusted root label
- **GET /health** - Health check

## Items

Items are strings decoded with `encoding`: `utf-8` (default) or `hex`.
Proof entries are `[sibling_label, side_bit]` pairs, bottom-up, with
0 = sibling on the left and 1 = sibling on the right.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(CivisException, civis_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(tree.router)
    app.include_router(verify.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    api_config = get_default_config().api
    uvicorn.run(app, host=api_config.host, port=api_config.port)
