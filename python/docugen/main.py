"""DocuGen - FastAPI application turning insurance estimates into project documents."""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from docugen.cache.redis import close_redis_cache, init_redis_cache
from docugen.config import get_settings
from docugen.errors import (
    APIError,
    api_error_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from docugen.logging import clear_session, get_logger, set_request_id, setup_logging
from docugen.routes import exports, health, reports

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    settings = get_settings()
    logger.info(
        "Starting DocuGen",
        env=settings.env,
        host=settings.server_host,
        port=settings.server_port,
        default_report_format=settings.default_report_format,
    )

    cache = await init_redis_cache()
    if cache:
        logger.info("Redis cache initialized")
    else:
        logger.warning("Redis cache not available - running without caching")

    yield

    await close_redis_cache()
    logger.info("Shutting down DocuGen")


app = FastAPI(
    title="DocuGen",
    description="Turns insurance claim estimates into scope, budget, work order and selection documents",
    version="0.1.0",
    docs_url="/docs" if not get_settings().is_production else None,
    redoc_url="/redoc" if not get_settings().is_production else None,
    lifespan=lifespan,
)


# Note: type: ignore needed due to FastAPI's overly strict ExceptionHandler typing
app.add_exception_handler(APIError, api_error_handler)  # type: ignore[arg-type]
app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, unhandled_exception_handler)  # type: ignore[arg-type]


# The browser editor talks to the API directly during development
if get_settings().env == "dev":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "x-request-id"],
    )


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Extract or generate request ID and propagate it."""
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    set_request_id(request_id)
    clear_session()

    response = await call_next(request)

    response.headers["x-request-id"] = request_id
    return response


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """Log requests and responses."""
    logger.info(
        "Request started",
        method=request.method,
        path=request.url.path,
        client=request.client.host if request.client else None,
    )

    response = await call_next(request)

    logger.info(
        "Request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
    )

    return response


app.include_router(health.router)
app.include_router(reports.router, prefix="/v1/reports", tags=["Reports"])
app.include_router(exports.router, prefix="/v1/reports", tags=["Exports"])


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "docugen.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.env == "dev",
    )
