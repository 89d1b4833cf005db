"""
Error taxonomy for the capacity tracker and its translation to HTTP responses.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from capacity_tracker.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


class CapacityError(Exception):
    """Base exception for business-rule rejections."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(CapacityError):
    """Raised when a referenced project or resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id=None):
        message = f"{entity} not found"
        if entity_id is not None:
            message = f"{entity} with ID {entity_id} not found"
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message)


class ConflictError(CapacityError):
    """Raised when a write would violate a resource or workload rule."""

    status_code = status.HTTP_409_CONFLICT


def register_exception_handlers(app: FastAPI) -> None:
    """Translate CapacityError subclasses into JSON error responses."""

    @app.exception_handler(CapacityError)
    async def handle_capacity_error(request: Request, exc: CapacityError):
        logger.warning(
            f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}"
        )
        body = ErrorResponse(detail=exc.message, error=exc.__class__.__name__)
        return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))
