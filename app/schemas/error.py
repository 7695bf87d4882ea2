"""
Pydantic schemas for error responses.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Examples:
        400: {"error": "invalid_attributes", "message": "..."}
        401: {"error": "unauthorized", "message": "Valid token required"}
        403: {"error": "ownership_conflict", "message": "...", "details": {...}}
        404: {"error": "not_found", "message": "Asset with ID '7' not found"}
    """

    error: str = Field(
        ...,
        description="Error code string",
        examples=["not_found", "ownership_conflict", "access_restricted"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional additional error details",
    )
