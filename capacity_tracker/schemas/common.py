# capacity_tracker/schemas/common.py
"""Common schemas used across multiple modules."""
from pydantic import BaseModel, Field
from typing import Optional

class ErrorResponse(BaseModel):
    """Standard error response format."""
    detail: str = Field(..., description="Human-readable error message")
    error: Optional[str] = Field(None, description="Error type, e.g. NotFoundError or ConflictError")

ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Not found"},
    409: {"model": ErrorResponse, "description": "Conflict"},
}
