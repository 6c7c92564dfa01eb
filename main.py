"""Main entrypoint and application factory for the Product Transactions API.

This module configures logging, builds the FastAPI application, opens the store
connection during the lifespan, maps the error taxonomy to JSON responses, and
exposes the Scalar API reference endpoint. It also includes the main entrypoint
for running the app with Uvicorn.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from scalar_fastapi import get_scalar_api_reference

from product_transactions.api.routes import router
from product_transactions.core.db import create_session_factory, get_engine, init_db
from product_transactions.core.errors import ClientError, ServerError
from product_transactions.core.settings import get_settings
from product_transactions.core.utils import ensure_dir, get_logger

logger = get_logger("product-transactions")


# --- Logging Setup ---
def setup_logging() -> None:
    """Configure logging to file and console, and ensure the log directory exists."""
    log_file = Path(get_settings().log_file)
    ensure_dir(log_file.parent)
    logger.setLevel(logging.INFO)
    # Add file handler for persistent logs (not colorized)
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(file_handler)
    logger.propagate = False


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the store once for the process lifetime; refuse to start if it is unreachable."""
    settings = get_settings()
    engine = get_engine(settings.database_url)
    try:
        init_db(engine)
    except Exception:
        logger.exception(f"Database connection error: {engine.url!r}")
        engine.dispose()
        raise
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    logger.info(f"Connected to store at {engine.url!r}")
    try:
        yield
    finally:
        engine.dispose()


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    """Render a ClientError as a 400 response."""
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def server_error_handler(request: Request, exc: ServerError) -> JSONResponse:
    """Render a ServerError as a 500 response carrying the underlying error."""
    _ = request
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message, "error": exc.error})


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    setup_logging()
    settings = get_settings()
    app = FastAPI(
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        title="Product Transactions API",
        description="""
    The Product Transactions API seeds, searches and reports on product sale records.

    **Endpoints:**
    - `GET /api/initialize`: Seed the store from the external transaction feed.
    - `GET /api/transactions`: Paged, searchable transaction list.
    - `GET /api/statistics/{month}`: Total sales and item counts for a month.
    - `GET /api/bar-chart/{month}`: Price-range histogram for a month.
    - `GET /api/pie-chart/{month}`: Category breakdown for a month.
    - `GET /api/combined/{month}`: The three monthly reports together.
    - `GET /scalar`: Interactive Scalar OpenAPI documentation.
    """,
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(ServerError, server_error_handler)
    app.include_router(router, prefix=settings.api_prefix)

    @app.get("/scalar", include_in_schema=False)
    async def scalar_docs() -> JSONResponse:
        """Return Scalar API reference."""
        return get_scalar_api_reference(openapi_url=app.openapi_url, title=app.title)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("main:app", host=settings.server_host, port=settings.server_port, reload=True)
