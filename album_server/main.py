"""
Album Server application.

``create_app`` wires:
- storage bootstrap and database lifecycle (lifespan)
- CORS middleware
- structured request logging
- API routers and the static uploads mount
- exception handlers
- Prometheus metrics
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from album_server.bootstrap import bootstrap_storage
from album_server.config import Settings, get_settings
from album_server.database import Database
from album_server.exceptions import AlbumServerError, BootstrapError
from album_server.middlewares.logging_middleware import REQUEST_ID_HEADER, LoggingMiddleware
from album_server.routers import albums_router, health_router, photos_router
from album_server.schemas.album import format_validation_error
from album_server.services.local_storage import LocalUploadStorage
from album_server.utils.logger import get_request_id, log_error, log_info, setup_logging
from album_server.utils.prometheus_metrics import exceptions_total, ready, setup_prometheus

logger = logging.getLogger("album_server")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Startup: materialize seed data, then create the schema.
    Any failure here is fatal: it is logged and re-raised so the server
    never starts accepting connections.
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    try:
        paths = bootstrap_storage(settings)
        await database.init_db()
    except BootstrapError as e:
        log_error("Startup failed: storage bootstrap", error_message=str(e), event="lifecycle")
        raise
    except Exception as e:
        log_error(
            "Startup failed: database initialization",
            error_type=type(e).__name__,
            error_message=str(e),
            event="lifecycle",
            exc_info=True,
        )
        raise BootstrapError(f"Cannot open database {settings.database_path}: {e}") from e

    # 부트스트랩 완료 후에만 ready=1 (헬스체크 200)
    ready.set(1)
    log_info(
        "Application startup completed",
        event="lifecycle",
        version=settings.app_version,
        environment=settings.environment.value,
        database_path=str(paths.database_path),
        uploads_dir=str(paths.uploads_dir),
    )

    yield

    # 종료 시작: 헬스체크 503
    ready.set(0)
    await database.close()
    log_info("Application shutdown completed", event="lifecycle")


def register_exception_handlers(app: FastAPI) -> None:
    """Map application exceptions to JSON responses."""

    @app.exception_handler(AlbumServerError)
    async def album_server_error_handler(request: Request, exc: AlbumServerError):
        return JSONResponse(
            status_code=exc.status_code,
            content={exc.response_key: exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": format_validation_error(exc)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Unhandled exception handler: logged with the Request ID, 500 response.
        """
        exceptions_total.inc()
        rid = get_request_id()

        log_error(
            "Unhandled exception occurred",
            error_type=type(exc).__name__,
            error_message=str(exc),
            error_code="INTERNAL_SERVER_ERROR",
            http_method=request.method,
            http_path=request.url.path,
            request_id=rid,
            event="exception",
            exc_info=True,
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error",
                "request_id": rid,
            },
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    The persistence handle and upload storage are created here, once, and
    stored on ``app.state``; the lifespan prepares the files they point at.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
## Album Server

CRUD backend for photo albums and their photos.

- **Albums**: list, create, update and delete albums
- **Photos**: list and upload photos of an album
- **Uploads**: stored files are served under `/uploads`
        """,
        openapi_tags=[
            {"name": "Albums", "description": "Album management"},
            {"name": "Photos", "description": "Photo listing and upload"},
            {"name": "Health", "description": "Health checks"},
        ],
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = Database(
        settings.database_url,
        slow_query_threshold=settings.slow_query_threshold,
    )
    app.state.upload_storage = LocalUploadStorage(
        settings.uploads_dir,
        url_prefix=settings.uploads_segment,
    )

    if settings.metrics_enabled:
        setup_prometheus(app, settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        expose_headers=settings.cors_expose_headers,
    )
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(albums_router)
    app.include_router(photos_router)

    # 업로드 디렉터리는 lifespan 부트스트랩에서 생성됨 (check_dir=False)
    app.mount(
        f"/{settings.uploads_segment}",
        StaticFiles(directory=settings.uploads_dir, check_dir=False),
        name=settings.uploads_segment,
    )

    @app.get(
        "/",
        tags=["Root"],
        summary="API information",
    )
    async def root():
        """
        Root endpoint with API information.
        """
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
        }

    return app


def run() -> None:
    """Console entry point: serve the app factory with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "album_server.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
