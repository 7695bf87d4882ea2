"""
Pydantic schemas for registry request/response bodies.

Request schemas only check types. Length and range rules live in
app.core.validation; violations surface as registry errors such as
invalid_attributes or capacity_threshold_violation.
"""

from pydantic import BaseModel, ConfigDict, Field


# ===================
# Request Schemas
# ===================

class AssetFields(BaseModel):
    """The revisable fields of an asset (POST /assets, PUT /assets/{id})."""

    name: str = Field(
        ...,
        description="Asset name (1-64 chars)",
        examples=["turbine-blade-scan"],
    )
    payload_size: int = Field(
        ...,
        alias="payloadSize",
        description="Payload size, greater than 0 and less than 1,000,000,000",
        examples=[2048],
    )
    attribute_schema: str = Field(
        ...,
        alias="attributeSchema",
        description="Attribute schema descriptor (1-128 chars)",
        examples=["schema://mesh/v1"],
    )
    tags: list[str] = Field(
        ...,
        description="Ordered list of 1-10 tags, each 1-32 chars",
        examples=[["cad", "turbine"]],
    )

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class AssetTransfer(BaseModel):
    """Schema for transferring ownership (POST /assets/{id}/transfer)."""

    new_owner: str = Field(
        ...,
        min_length=1,
        max_length=255,
        alias="newOwner",
        description="Identity of the principal receiving ownership",
    )

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


# ===================
# Response Schemas
# ===================

class AssetRecordResponse(BaseModel):
    """Full projection of an asset record."""

    asset_id: int = Field(alias="assetId")
    name: str
    owner: str
    payload_size: int = Field(alias="payloadSize")
    registered_at: int = Field(alias="registeredAt")
    attribute_schema: str = Field(alias="attributeSchema")
    tags: list[str]

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class AssetRegisteredResponse(BaseModel):
    """Response for a successful registration."""

    asset_id: int = Field(alias="assetId")

    model_config = ConfigDict(populate_by_name=True)


class OperationResult(BaseModel):
    """Response for modify, transfer and delete."""

    success: bool = True


class AssetOwnerResponse(BaseModel):
    """Response for owner lookup."""

    asset_id: int = Field(alias="assetId")
    owner: str

    model_config = ConfigDict(populate_by_name=True)


class AuthorizationResponse(BaseModel):
    """Authorization analysis of one entity against one asset."""

    asset_id: int = Field(alias="assetId")
    entity: str
    explicit: bool
    is_owner: bool = Field(alias="isOwner")
    can_access: bool = Field(alias="canAccess")

    model_config = ConfigDict(populate_by_name=True)


class RegistryMetricsResponse(BaseModel):
    """Infrastructure metrics."""

    total_count: int = Field(alias="totalCount")
    authority: str
    block_height: int = Field(alias="blockHeight")

    model_config = ConfigDict(populate_by_name=True)
