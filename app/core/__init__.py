"""Core utilities, validation and exceptions for the registry."""

from app.core.exceptions import (
    RegistryException,
    AssetNotFoundException,
    DuplicateAssetException,
    InvalidAttributesException,
    CapacityThresholdException,
    PermissionDeniedException,
    OwnershipConflictException,
    ElevatedPrivilegesRequiredException,
    AccessRestrictedException,
    AttributeVerificationException,
    ValidationException,
    UnauthorizedException,
)

__all__ = [
    "RegistryException",
    "AssetNotFoundException",
    "DuplicateAssetException",
    "InvalidAttributesException",
    "CapacityThresholdException",
    "PermissionDeniedException",
    "OwnershipConflictException",
    "ElevatedPrivilegesRequiredException",
    "AccessRestrictedException",
    "AttributeVerificationException",
    "ValidationException",
    "UnauthorizedException",
]
