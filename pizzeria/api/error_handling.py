"""Render service errors and malformed requests as {"message": ...} responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pizzeria.core.errors import FactoryError, ServiceError, UnauthenticatedError

logger = logging.getLogger(__name__)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers mapping ServiceError subclasses and request validation to HTTP."""

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
        log_fn = logger.error if exc.status_code >= 500 else logger.warning
        log_fn(
            "Request failed: %s",
            exc.message,
            extra={
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.status_code,
            },
        )
        content: dict[str, str] = {"message": exc.message}
        headers = None
        if isinstance(exc, FactoryError) and exc.report_url:
            content["followLinkToEndChaos"] = exc.report_url
        if isinstance(exc, UnauthenticatedError):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(status_code=exc.status_code, content=content, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _describe_validation_errors(exc)
        logger.warning(
            "Request validation failed: %s",
            message,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(status_code=400, content={"message": message})
