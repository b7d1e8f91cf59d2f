"""Map catalog errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalog.config import ConfigurationError
from catalog.services.errors import (
    CatalogError,
    DuplicateSlugError,
    NotFoundError,
    UnexpectedError,
    UploadConfigError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_CODES: dict[type[CatalogError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    DuplicateSlugError: 409,
    UploadConfigError: 500,
    UnexpectedError: 500,
}


def status_code_for(error: CatalogError) -> int:
    """HTTP status for a catalog error; unknown subclasses map to 500."""
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(error, error_type):
            return status_code
    return 500


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure in the ``{success: false, error}`` envelope."""

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
        return error_response(status_code_for(exc), str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return error_response(400, f"Invalid request: {details}")

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(
        request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        logger.error(f"Configuration error on {request.url.path}: {exc}")
        return error_response(500, str(exc))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return error_response(500, str(exc) or "Internal server error")
