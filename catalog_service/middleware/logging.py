import time
import uuid

from fastapi import status
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from catalog_service.core.errors import CatalogError


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))

        with logger.contextualize(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(
                    "Unhandled error on {method} {path}",
                    method=request.method,
                    path=request.url.path,
                )
                response = JSONResponse(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    content={"message": CatalogError.message, "error": CatalogError.code},
                )

            process_time_ms = (time.time() - start_time) * 1000
            path = request.url.path
            route = request.scope.get("route")
            if route and hasattr(route, "path"):
                path = route.path

            logger.bind(
                request_path=request.url.path,
                route=path,
                method=request.method,
                status_code=response.status_code,
                process_time_ms=round(process_time_ms, 2),
            ).info("http_request_processed")

            response.headers["X-Request-ID"] = request_id
            return response
