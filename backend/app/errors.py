"""Domain error taxonomy and the FastAPI handlers that render it.

Services raise these exceptions; routers never build error responses by hand.
Every error renders as ``{"detail": ...}`` so clients see the same shape as
FastAPI's own ``HTTPException`` responses.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"
    headers: dict[str, str] | None = None

    def __init__(self, detail: str | list | None = None) -> None:
        self.detail = detail if detail is not None else self.default_detail
        super().__init__(self.detail if isinstance(self.detail, str) else self.default_detail)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class InvalidInputError(AppError):
    """Malformed input, detected before the store is touched."""

    status_code = 422
    default_detail = "Invalid input"

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "InvalidInputError":
        """Wrap a pydantic ``ValidationError`` keeping only JSON-safe fields."""
        return cls(
            [
                {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                for err in exc.errors()
            ]
        )


class InvalidFilterError(InvalidInputError):
    default_detail = "Invalid search filter"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials"
    headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Admin access required"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class StorageError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Storage failure"


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Translate SQLAlchemy failures raised inside the block into domain errors.

    Integrity violations become ``ConflictError``; anything else the store
    raises becomes ``StorageError``. Nothing is retried.
    """
    try:
        yield
    except IntegrityError as exc:
        raise ConflictError(f"Could not {operation}: conflicting data") from exc
    except SQLAlchemyError as exc:
        raise StorageError(f"Could not {operation}") from exc


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an ``AppError`` and log it at a level matching its kind."""
    if isinstance(exc, StorageError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail, exc_info=exc.__cause__)
    elif isinstance(exc, (UnauthorizedError, ForbiddenError)):
        logger.info("%s %s denied: %s", request.method, request.url.path, exc.detail)
    else:
        logger.debug("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain error handler to the application."""
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
