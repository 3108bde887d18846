# src/murmur/main.py
"""Main entry point for the Murmur application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from murmur.api.endpoints import (
    auth_router,
    comments_router,
    posts_router,
    upload_router,
    users_router,
)
from murmur.core.context import AppContext, build_context
from murmur.core.errors import FIELD_MESSAGES, ApiError, ErrorKind, StoreError, to_api_error
from murmur.core.settings import Settings
from murmur.db.session import create_tables
from murmur.schemas.common import FieldError

logger = logging.getLogger(__name__)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Render a repository failure; the detail is logged, never returned."""
    logger.error(
        "%s %s failed in store: %s (%s)",
        request.method,
        request.url.path,
        exc.kind.value,
        exc.detail,
    )
    return await api_error_handler(request, to_api_error(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request body problems as 400 with one entry per field."""
    errors = []
    for error in exc.errors():
        loc = error.get("loc") or ("body",)
        param = str(loc[-1])
        field_error = FieldError(
            msg=FIELD_MESSAGES.get(param, error.get("msg", "Invalid value")),
            param=param,
            location=str(loc[0]),
        )
        errors.append(field_error.model_dump())
    api_error = ApiError(ErrorKind.VALIDATION, "Invalid request", errors=errors)
    return await api_error_handler(request, api_error)


def create_app(settings: Settings | None = None, context: AppContext | None = None) -> FastAPI:
    """Build the application around an explicit context.

    Args:
        settings: Configuration; read from the environment when omitted.
        context: Prebuilt context, for callers that own the engine.

    Returns:
        The configured FastAPI application.
    """
    if context is None:
        context = build_context(settings or Settings())  # type: ignore[call-arg]
    settings = context.settings

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Minimal social network API",
        version=settings.app_version,
        debug=settings.debug,
    )
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(ApiError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StoreError, store_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]

    app.include_router(auth_router, prefix="/api")
    app.include_router(posts_router, prefix="/api")
    app.include_router(comments_router, prefix="/api")
    app.include_router(upload_router, prefix="/api")
    app.include_router(users_router, prefix="/api")

    context.upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=context.upload_dir), name="uploads")

    @app.on_event("startup")
    async def on_startup() -> None:
        create_tables(context.engine)
        logger.info("%s %s ready", settings.app_name, settings.app_version)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        context.dispose()

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn

    _settings = Settings()  # type: ignore[call-arg]
    uvicorn.run(
        "murmur.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=_settings.port,
        reload=_settings.debug,
    )
