"""
Asset endpoints.

Mutations (register, modify, transfer, delete) require the registry:write
scope; reads require registry:read. The caller identity always comes from
the authenticated principal.
"""

from typing import Any

from fastapi import APIRouter, Query

from app.auth.dependencies import RequireRead, RequireWrite
from app.dependencies import Registry
from app.models.asset import AssetRecord
from app.schemas.asset import (
    AssetFields,
    AssetOwnerResponse,
    AssetRecordResponse,
    AssetRegisteredResponse,
    AssetTransfer,
    AuthorizationResponse,
    OperationResult,
)
from app.schemas.error import ErrorResponse

router = APIRouter()

_NOT_FOUND = {404: {"model": ErrorResponse}}
_WRITE_ERRORS = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


def _record_to_response(record: AssetRecord) -> dict[str, Any]:
    """Convert AssetRecord model to response dict."""
    return {
        "assetId": record.asset_id,
        "name": record.name,
        "owner": record.owner,
        "payloadSize": record.payload_size,
        "registeredAt": record.registered_at,
        "attributeSchema": record.attribute_schema,
        "tags": list(record.tags),
    }


@router.post(
    "",
    status_code=201,
    response_model=AssetRegisteredResponse,
    responses={400: {"model": ErrorResponse}},
)
async def register_asset(
    data: AssetFields,
    service: Registry,
    principal: RequireWrite,
):
    """
    Register a new asset owned by the caller.

    The caller is also given an explicit read grant on the new asset.
    Returns the minted asset id.
    """
    asset_id = await service.register(
        caller=principal["principal"],
        name=data.name,
        payload_size=data.payload_size,
        attribute_schema=data.attribute_schema,
        tags=data.tags,
    )
    return {"assetId": asset_id}


@router.get(
    "/{asset_id}",
    response_model=AssetRecordResponse,
    responses={403: {"model": ErrorResponse}, **_NOT_FOUND},
)
async def get_asset(
    asset_id: int,
    service: Registry,
    principal: RequireRead,
):
    """
    Get the full asset record.

    The caller must own the asset or hold an explicit grant on it.
    """
    record = await service.get_record(principal["principal"], asset_id)
    return _record_to_response(record)


@router.put("/{asset_id}", response_model=OperationResult, responses=_WRITE_ERRORS)
async def modify_asset(
    asset_id: int,
    data: AssetFields,
    service: Registry,
    principal: RequireWrite,
):
    """
    Replace name, payload size, attribute schema and tags.
    Owner only.
    """
    success = await service.modify(
        caller=principal["principal"],
        asset_id=asset_id,
        name=data.name,
        payload_size=data.payload_size,
        attribute_schema=data.attribute_schema,
        tags=data.tags,
    )
    return {"success": success}


@router.post("/{asset_id}/transfer", response_model=OperationResult, responses=_WRITE_ERRORS)
async def transfer_asset(
    asset_id: int,
    data: AssetTransfer,
    service: Registry,
    principal: RequireWrite,
):
    """
    Transfer ownership to another principal.
    Owner only. Existing explicit grants are left as they are.
    """
    success = await service.transfer(
        caller=principal["principal"],
        asset_id=asset_id,
        new_owner=data.new_owner,
    )
    return {"success": success}


@router.delete("/{asset_id}", response_model=OperationResult, responses=_WRITE_ERRORS)
async def delete_asset(
    asset_id: int,
    service: Registry,
    principal: RequireWrite,
):
    """
    Delete an asset.
    Owner only. This operation cannot be undone and the id is never reused.
    """
    success = await service.delete(caller=principal["principal"], asset_id=asset_id)
    return {"success": success}


@router.get("/{asset_id}/owner", response_model=AssetOwnerResponse, responses=_NOT_FOUND)
async def get_asset_owner(
    asset_id: int,
    service: Registry,
    principal: RequireRead,
):
    """Look up the current owner of an asset."""
    owner = await service.get_owner(asset_id)
    return {"assetId": asset_id, "owner": owner}


@router.get(
    "/{asset_id}/authorization",
    response_model=AuthorizationResponse,
    responses=_NOT_FOUND,
)
async def get_asset_authorization(
    asset_id: int,
    service: Registry,
    principal: RequireRead,
    entity: str = Query(..., min_length=1, description="Principal to evaluate"),
):
    """
    Report whether an entity can read an asset.

    Returns the explicit grant flag, whether the entity is the current
    owner, and whether either applies. Never denies; it only reports.
    """
    analysis = await service.get_authorization(asset_id, entity)
    return {
        "assetId": asset_id,
        "entity": entity,
        "explicit": analysis.explicit,
        "isOwner": analysis.is_owner,
        "canAccess": analysis.can_access,
    }
