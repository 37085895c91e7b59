"""
Exception handlers turning application errors into the standard
error envelope.
"""

from typing import List

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from smart_sac.config.settings import settings
from smart_sac.core.exceptions import BaseAppException, ErrorCode
from smart_sac.core.logging import get_logger
from smart_sac.schemas.common.response import ErrorDetail, ErrorResponse

logger = get_logger(__name__)


def _field_errors(exc: BaseAppException) -> List[ErrorDetail]:
    field_errors = exc.details.get("field_errors") or {}
    return [
        ErrorDetail(field=field, message=message, code=exc.error_code.value)
        for field, messages in field_errors.items()
        for message in messages
    ]


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__}: {exc.message}", extra={"path": request.url.path})
    else:
        logger.info(
            f"{exc.__class__.__name__}: {exc.message}",
            extra={"path": request.url.path, "error_code": exc.error_code.value},
        )

    body = ErrorResponse.create(
        message=exc.message,
        errors=_field_errors(exc) or None,
        error_code=exc.error_code.value,
        details=exc.details or None,
        path=request.url.path,
    )
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(body))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        ErrorDetail(
            field=".".join(str(part) for part in err.get("loc", ())[1:]) or None,
            message=err.get("msg", "Invalid value"),
            code=err.get("type"),
        )
        for err in exc.errors()
    ]
    body = ErrorResponse.create(
        message=f"Validation failed with {len(errors)} error(s)",
        errors=errors,
        error_code=ErrorCode.VALIDATION_ERROR.value,
        path=request.url.path,
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=jsonable_encoder(body))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception: {exc}", exc_info=True, extra={"path": request.url.path})
    body = ErrorResponse.create(
        message=str(exc) if settings.DEBUG else "An error occurred",
        error_code=ErrorCode.INTERNAL_ERROR.value,
        path=request.url.path,
    )
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=jsonable_encoder(body))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
