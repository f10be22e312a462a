from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum as PyEnum
from typing import Any, Iterator

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger("salesdesk.errors")


class ErrorKind(str, PyEnum):
    validation = "validation"
    duplicate = "duplicate"
    not_found = "not_found"
    referenced = "referenced"
    database = "database"


_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.validation: status.HTTP_400_BAD_REQUEST,
    ErrorKind.duplicate: status.HTTP_409_CONFLICT,
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.referenced: status.HTTP_409_CONFLICT,
    ErrorKind.database: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ServiceError(Exception):
    kind: ErrorKind = ErrorKind.database

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self.kind]

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message}


def _field_errors(raw: Any) -> list[dict[str, Any]]:
    return [{"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]} for err in raw]


class ValidationFailedError(ServiceError):
    kind = ErrorKind.validation

    def __init__(self, message: str, errors: list[dict[str, Any]]) -> None:
        super().__init__(message)
        self.errors = errors

    @classmethod
    def from_pydantic(cls, message: str, exc: ValidationError) -> "ValidationFailedError":
        return cls(
            message,
            _field_errors(exc.errors(include_url=False, include_context=False, include_input=False)),
        )

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class DuplicateRecordError(ServiceError):
    kind = ErrorKind.duplicate

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message, "error": self.detail}


class RecordNotFoundError(ServiceError):
    kind = ErrorKind.not_found


class RecordReferencedError(ServiceError):
    kind = ErrorKind.referenced


class DatabaseError(ServiceError):
    """Store failure. ``detail`` keeps the driver message; the HTTP body does not."""

    kind = ErrorKind.database


@contextmanager
def store_errors(message: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("store_error", extra={"operation": message})
        raise DatabaseError(message, detail=str(exc)) from exc


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.kind is ErrorKind.database:
        logger.error(
            "service_database_error",
            extra={
                "method": request.method,
                "path": request.url.path,
                "error": str(exc),
            },
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Missing or malformed bodies and bad query values get the 400 validation shape."""
    error = ValidationFailedError("Invalid request data", _field_errors(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_body())
