"""Mapping of domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from greyn.domain.error import DomainError

STATUS_BY_KIND: dict[str, int] = {
    "validation_error": status.HTTP_400_BAD_REQUEST,
    "invalid_role": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "invalid_state": status.HTTP_409_CONFLICT,
    "duplicate_pending_invitation": status.HTTP_409_CONFLICT,
    "duplicate_email": status.HTTP_409_CONFLICT,
    "expired": status.HTTP_410_GONE,
    "partial_migration": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "store_unavailable": status.HTTP_503_SERVICE_UNAVAILABLE,
    "code_generation_exhausted": status.HTTP_503_SERVICE_UNAVAILABLE,
}


class ErrorResponse(BaseModel):
    """Error body returned for every domain error."""

    kind: str
    message: str
    retryable: bool


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Translate a DomainError into a JSON error response."""
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logfire.error(
            "Request failed",
            kind=exc.kind,
            message=exc.message,
            path=request.url.path,
        )
    body = ErrorResponse(kind=exc.kind, message=exc.message, retryable=exc.retryable)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_error_handlers(app: FastAPI) -> None:
    """Register the domain error handler on an application."""
    app.add_exception_handler(DomainError, domain_error_handler)
