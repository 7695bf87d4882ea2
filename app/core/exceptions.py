"""
Custom exceptions for the Digital Asset Registry.

Every registry failure kind maps to one subclass of RegistryException
carrying a stable error code and the HTTP status it is reported with.
"""

from typing import Any


class RegistryException(Exception):
    """Base exception for all registry errors."""

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.error = error
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to response dictionary."""
        response = {
            "error": self.error,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


# ===================
# Registry taxonomy
# ===================

class AssetNotFoundException(RegistryException):
    """404 - Referenced asset id is absent."""

    def __init__(self, asset_id: int):
        super().__init__(
            error="not_found",
            message=f"Asset with ID '{asset_id}' not found",
            status_code=404,
            details={"asset_id": asset_id},
        )


class DuplicateAssetException(RegistryException):
    """409 - Asset id already present. Reserved: ids are always freshly minted."""

    def __init__(self, asset_id: int):
        super().__init__(
            error="duplicate_asset",
            message=f"Asset with ID '{asset_id}' already exists",
            status_code=409,
            details={"asset_id": asset_id},
        )


class InvalidAttributesException(RegistryException):
    """400 - Name or attribute schema length out of bounds."""

    def __init__(self, field: str, min_length: int, max_length: int):
        super().__init__(
            error="invalid_attributes",
            message=f"'{field}' must be between {min_length} and {max_length} characters",
            status_code=400,
            details={"field": field, "min_length": min_length, "max_length": max_length},
        )


class CapacityThresholdException(RegistryException):
    """400 - Payload size outside the accepted range."""

    def __init__(self, payload_size: Any, ceiling: int):
        super().__init__(
            error="capacity_threshold_violation",
            message=f"Payload size must be greater than 0 and less than {ceiling}",
            status_code=400,
            details={"payload_size": payload_size},
        )


class PermissionDeniedException(RegistryException):
    """403 - Reserved for explicit permission checks."""

    def __init__(self, message: str = "Permission denied", details: dict[str, Any] | None = None):
        super().__init__(
            error="permission_denied",
            message=message,
            status_code=403,
            details=details,
        )


class OwnershipConflictException(RegistryException):
    """403 - Caller is not the owner of the asset for an owner-gated operation."""

    def __init__(self, asset_id: int, action: str):
        super().__init__(
            error="ownership_conflict",
            message=f"Only the asset owner can {action} this asset",
            status_code=403,
            details={"asset_id": asset_id, "required": "ownership", "action": action},
        )


class ElevatedPrivilegesRequiredException(RegistryException):
    """403 - Reserved for authority-only operations."""

    def __init__(self, message: str = "Elevated privileges required"):
        super().__init__(
            error="elevated_privileges_required",
            message=message,
            status_code=403,
        )


class AccessRestrictedException(RegistryException):
    """403 - Caller has neither an explicit grant nor ownership."""

    def __init__(self, asset_id: int):
        super().__init__(
            error="access_restricted",
            message="Insufficient permissions to access this asset",
            status_code=403,
            details={
                "asset_id": asset_id,
                "required": "explicit authorization or ownership",
            },
        )


class AttributeVerificationException(RegistryException):
    """400 - Tag sequence failed verification."""

    def __init__(self, max_tags: int, max_tag_length: int):
        super().__init__(
            error="attribute_verification_failure",
            message=(
                f"Tags must be a list of 1-{max_tags} entries, "
                f"each 1-{max_tag_length} characters"
            ),
            status_code=400,
            details={"max_tags": max_tags, "max_tag_length": max_tag_length},
        )


# ===================
# Request-level errors
# ===================

class ValidationException(RegistryException):
    """400 - Malformed request (invalid JSON, missing parameters)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="validation_failed",
            message=message,
            status_code=400,
            details=details,
        )


class UnauthorizedException(RegistryException):
    """401 - Missing or invalid bearer token."""

    def __init__(self, message: str = "Valid token required"):
        super().__init__(
            error="unauthorized",
            message=message,
            status_code=401,
        )
