"""
Exception handlers for FastAPI.

Response bodies follow the shapes the React client reads:
- {"msg": "..."} for single errors
- {"errors": [{"field": ..., "msg": ...}, ...]} for validation failures

Storage failures are logged server-side and reported as an opaque
"Server Error".
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from devconnector.schemas.validators import error_field
from devconnector.services.errors import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
)

logger = logging.getLogger(__name__)

VALUE_ERROR_PREFIX = "Value error, "


def validation_errors(exc: RequestValidationError) -> list[dict]:
    """Flatten pydantic errors into (field, message) pairs."""
    errors = []
    for error in exc.errors():
        message = error.get("msg", "Invalid value")
        if message.startswith(VALUE_ERROR_PREFIX):
            message = message[len(VALUE_ERROR_PREFIX):]
        errors.append({"field": error_field(error.get("loc", ())), "msg": message})
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        content = exc.detail if isinstance(exc.detail, dict) else {"msg": exc.detail}
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = validation_errors(exc)
        logger.info(f"Validation failed on {request.url.path}: {errors}")
        return JSONResponse(status_code=400, content={"errors": errors})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"msg": exc.message})

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        return JSONResponse(status_code=409, content={"msg": exc.message})

    @app.exception_handler(PermissionDeniedError)
    async def permission_handler(request: Request, exc: PermissionDeniedError):
        return JSONResponse(status_code=401, content={"msg": exc.message})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Storage failure on {request.method} {request.url.path}: {exc.__cause__}")
        return JSONResponse(status_code=500, content={"msg": "Server Error"})
