"""
Response utilities for the registry API.
Provides standardized error formatting.
"""

from typing import Any

from fastapi.responses import JSONResponse


def create_error_response(
    error: str,
    message: str,
    status_code: int,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """
    Create a standardized error response.

    Args:
        error: Error code string
        message: Human-readable error message
        status_code: HTTP status code
        details: Optional additional error details

    Returns:
        JSONResponse with error payload
    """
    content: dict[str, Any] = {
        "error": error,
        "message": message,
    }
    if details:
        content["details"] = details

    return JSONResponse(status_code=status_code, content=content)
