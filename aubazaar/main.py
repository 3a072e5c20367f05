"""
FastAPI application entry point.
Builds the AppContext, mounts routes, uploads and Prometheus metrics, and maps errors to JSON.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from prometheus_client import make_asgi_app
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from aubazaar.api.router import api_router
from aubazaar.config import Settings, get_settings
from aubazaar.core.context import AppContext
from aubazaar.core.exceptions import AppError, InternalError
from aubazaar.core.logging_config import configure_logging
from aubazaar.db.base import Base

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: upload dir and (optionally) tables. Shutdown: release pool and cache."""
    ctx: AppContext = app.state.context
    ctx.media.ensure_dir()
    if ctx.settings.auto_create_tables:
        async with ctx.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    logger.info("%s started", ctx.settings.app_name)
    yield
    await ctx.aclose()


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = "Endpoint not found" if exc.status_code == 404 else exc.detail
    return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Store error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": InternalError().message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Something went wrong!"})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="University marketplace: listings, messaging and profiles.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.context = AppContext.build(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Prometheus metrics at /metrics
    app.mount("/metrics", make_asgi_app())

    app.include_router(api_router, prefix="/api")

    # Uploaded images are publicly served; the directory is created on startup or first upload
    app.mount(
        settings.uploads_url_path,
        StaticFiles(directory=str(app.state.context.media.upload_dir), check_dir=False),
        name="uploads",
    )

    return app


app = create_app()
