"""Mapping of service errors onto HTTP responses."""

import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...domain.errors import ErrorKind, RecordNotFoundError, SubscriptionError

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.NOT_ALLOWED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.STATUS_UNCHANGED: status.HTTP_400_BAD_REQUEST,
}


def to_http_exception(exc: Exception) -> HTTPException:
    if isinstance(exc, SubscriptionError):
        return HTTPException(status_code=_STATUS_BY_KIND[exc.kind], detail=str(exc))
    if isinstance(exc, RecordNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    logger.exception("Unexpected error while handling request: %s", exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="internal server error"
    )


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"errorMessage": str(exc.detail)})


async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errorMessage": "; ".join(messages)},
    )
