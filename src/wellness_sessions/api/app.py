"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from wellness_sessions.api.sessions import router as sessions_router
from wellness_sessions.app_logging import configure_logging
from wellness_sessions.containers import AppContainer
from wellness_sessions.domain.errors import (
    NotFoundOrUnauthorized,
    StorageFailure,
    Unauthenticated,
    ValidationFailed,
)


def _field_errors(exc: RequestValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        # Locations start with "body"; malformed JSON only carries an offset.
        loc = [str(part) for part in error["loc"][1:]]
        field = "" if error["type"] == "json_invalid" else ".".join(loc)
        errors.setdefault(field or "body", error["msg"])
    return errors


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Wellness Sessions")
    app.state.container = container

    @app.middleware("http")
    async def log_requests(request: Request, call_next):  # type: ignore[no-untyped-def]
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.exception_handler(Unauthenticated)
    async def unauthenticated_handler(
        request: Request, exc: Unauthenticated
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"message": exc.message},
        )

    @app.exception_handler(ValidationFailed)
    async def validation_handler(
        request: Request, exc: ValidationFailed
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "; ".join(exc.errors.values()), "errors": exc.errors},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Validation failed", "errors": _field_errors(exc)},
        )

    @app.exception_handler(NotFoundOrUnauthorized)
    async def not_found_handler(
        request: Request, exc: NotFoundOrUnauthorized
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": str(exc)},
        )

    @app.exception_handler(StorageFailure)
    async def storage_failure_handler(
        request: Request, exc: StorageFailure
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": exc.message},
        )

    prefix = container.settings.api_prefix

    @app.get(f"{prefix}/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    app.include_router(sessions_router, prefix=prefix)

    return app
