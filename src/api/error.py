"""API error handling

Use case errors are raised as ClientError and rendered as
``{"error": {"code": ..., "message": ..., "details": ...}}``.
"""

import logging
from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from libs.result import Error

logger = logging.getLogger(__name__)


class ClientError(HTTPException):
    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(status_code=status_code, detail=error.to_dict())
        self.error = error


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} {exc.error.code}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = {}
    for item in exc.errors():
        # Drop the leading "body"/"query"/"path" segment
        loc = [str(part) for part in item.get("loc", ())[1:]]
        details[".".join(loc) or "request"] = item.get("msg", "Invalid value")

    error = Error(
        code="VALIDATION_ERROR",
        message="Invalid request parameters",
        details=details,
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": error.to_dict()})
