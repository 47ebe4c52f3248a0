"""HTTP plumbing shared by every router: error mapping, request context, dependencies."""

import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shared.config import Settings
from shared.db import Database
from shared.errors import ErrorKind, StorefrontError

logger = structlog.get_logger(__name__)

_STATUS_FOR_KIND = {
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.INVALID_STATE: 400,
    ErrorKind.TRANSACTION_FAILED: 500,
}


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def _storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    status_code = _STATUS_FOR_KIND[exc.kind]
    headers = {"WWW-Authenticate": "Bearer"} if exc.kind == ErrorKind.UNAUTHENTICATED else None

    if exc.kind == ErrorKind.TRANSACTION_FAILED:
        # Storage detail stays in the log (the handler that raised already logged the cause)
        content = {"error": {"_entity": ["The request could not be completed, nothing was saved"]}}
    else:
        content = {"error": exc.messages}
    content["kind"] = exc.kind.value

    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.unhandled_error", path=request.url.path, error_type=type(exc).__name__)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, _storefront_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)


def register_request_context(app: FastAPI) -> None:
    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind request metadata to every log line emitted while handling the request."""
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            structlog.contextvars.clear_contextvars()
