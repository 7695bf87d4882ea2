"""
Pydantic schemas for request/response validation.
"""

from app.schemas.asset import (
    AssetFields,
    AssetTransfer,
    AssetRecordResponse,
    AssetRegisteredResponse,
    OperationResult,
    AssetOwnerResponse,
    AuthorizationResponse,
    RegistryMetricsResponse,
)
from app.schemas.error import ErrorResponse

__all__ = [
    # Request schemas
    "AssetFields",
    "AssetTransfer",
    # Response schemas
    "AssetRecordResponse",
    "AssetRegisteredResponse",
    "OperationResult",
    "AssetOwnerResponse",
    "AuthorizationResponse",
    "RegistryMetricsResponse",
    # Error schemas
    "ErrorResponse",
]
