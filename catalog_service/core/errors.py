import functools

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger
from pymongo.errors import PyMongoError


class CatalogError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "unknown_failure"
    message: str = "Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class BadRequestError(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "bad_request"
    message = "Bad request"


class NotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    message = "Not found"


class UpstreamUploadError(CatalogError):
    status_code = status.HTTP_502_BAD_GATEWAY
    code = "upload_failed"
    message = "Image upload failed"


class PersistenceError(CatalogError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "persistence_failed"
    message = "Database operation failed"


def persistence_guard(func):
    """Turns driver errors raised by a repository coroutine into PersistenceError."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except PyMongoError as e:
            logger.exception(
                "Document store call {name} failed: {error}",
                name=func.__qualname__,
                error=e,
            )
            raise PersistenceError() from e

    return wrapper


async def catalog_error_handler(request: Request, exc: CatalogError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "error": exc.code},
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error on {method} {path}",
        method=request.method,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": CatalogError.message, "error": CatalogError.code},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
