"""Error taxonomy and the single JSON formatter used by every endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from fastapi.responses import JSONResponse


@dataclass(frozen=True)
class ServiceError:
    """Failure returned (not raised) by service operations."""

    message: str
    status_code: ClassVar[int] = 500


class ValidationError(ServiceError):
    status_code = 400


class DuplicateError(ServiceError):
    status_code = 400


class AuthError(ServiceError):
    status_code = 401


class ForbiddenError(ServiceError):
    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404


class ExternalServiceError(ServiceError):
    status_code = 500


class ServiceFailure(Exception):
    """Raised where FastAPI only lets us fail by raising (dependencies)."""

    def __init__(self, error: ServiceError):
        super().__init__(error.message)
        self.error = error


def error_response(error: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"success": False, "message": error.message},
    )
