"""
Registry service - Business logic for the asset registry.

Handles registration, modification, ownership transfer, deletion and the
read-side queries. Every operation checks all of its preconditions before
touching any row, so a failing call writes nothing.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.permissions import (
    AuthorizationAnalysis,
    analyze_access,
    check_record_access,
    require_owner,
)
from app.config import get_settings
from app.core.exceptions import AssetNotFoundException
from app.core.validation import validate_asset_fields
from app.models.asset import ASSET_ID_MAX, AssetRecord
from app.models.permission import PermissionEntry
from app.models.registry_state import REGISTRY_STATE_ID, RegistryState

logger = logging.getLogger(__name__)


def _in_id_range(asset_id: int) -> bool:
    """Whether asset_id fits the asset_id column."""
    return 1 <= asset_id <= ASSET_ID_MAX


@dataclass(frozen=True)
class RegistryMetrics:
    """Infrastructure metrics snapshot."""

    total_count: int
    authority: str
    block_height: int


class RegistryService:
    """Service class for registry operations."""

    def __init__(self, db: AsyncSession, authority: str | None = None):
        self.db = db
        self.authority = authority or get_settings().registry_authority

    # ===================
    # State helpers
    # ===================

    async def _load_state(self, for_update: bool = False) -> RegistryState:
        """
        Load the registry state row, creating it on first use.

        The authority is captured when the row is created and never
        rewritten afterwards. With for_update the row is locked and any
        copy already in the session is reloaded.
        """
        query = select(RegistryState).where(RegistryState.id == REGISTRY_STATE_ID)
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)
        result = await self.db.execute(query)
        state = result.scalar_one_or_none()

        if state is None:
            state = RegistryState(
                id=REGISTRY_STATE_ID,
                asset_counter=0,
                block_height=0,
                authority=self.authority,
            )
            self.db.add(state)
            await self.db.flush()
            logger.info(f"Registry initialized with authority '{self.authority}'")

        return state

    def _advance_clock(self, state: RegistryState) -> int:
        """Move the logical clock forward one block and return the new height."""
        state.block_height += 1
        return state.block_height

    async def _get_record(self, asset_id: int, refresh: bool = False) -> AssetRecord:
        """
        Get record by ID.

        Ids outside the column range cannot exist and are reported as
        missing without querying. With refresh, a copy already in the
        session is reloaded from the database.

        Raises:
            AssetNotFoundException: If no record has this id
        """
        if not _in_id_range(asset_id):
            raise AssetNotFoundException(asset_id)
        record = await self.db.get(AssetRecord, asset_id, populate_existing=refresh)
        if record is None:
            raise AssetNotFoundException(asset_id)
        return record

    async def _explicit_grant(self, asset_id: int, grantee: str | None) -> bool:
        """Explicit authorization flag for (asset_id, grantee); False if absent."""
        if grantee is None or not _in_id_range(asset_id):
            return False
        entry = await self.db.get(PermissionEntry, (asset_id, grantee))
        return bool(entry and entry.authorized)

    async def initialize(self) -> RegistryState:
        """Ensure the registry state exists. Safe to call repeatedly."""
        return await self._load_state()

    # ===================
    # Mutating operations
    # ===================

    async def register(
        self,
        caller: str,
        name: str,
        payload_size: int,
        attribute_schema: str,
        tags: list[str],
    ) -> int:
        """
        Register a new asset owned by the caller.

        Args:
            caller: Identity of the registering principal
            name: Asset name (1-64 chars)
            payload_size: Payload size (1 to 999,999,999)
            attribute_schema: Schema descriptor (1-128 chars)
            tags: 1-10 tags, each 1-32 chars

        Returns:
            The newly minted asset id (previous counter + 1)

        Raises:
            InvalidAttributesException: name or schema out of bounds
            CapacityThresholdException: payload size out of range
            AttributeVerificationException: invalid tags
        """
        validate_asset_fields(name, payload_size, attribute_schema, tags)

        state = await self._load_state(for_update=True)
        next_id = state.asset_counter + 1
        registered_at = self._advance_clock(state)

        self.db.add(
            AssetRecord(
                asset_id=next_id,
                name=name,
                owner=caller,
                payload_size=payload_size,
                registered_at=registered_at,
                attribute_schema=attribute_schema,
                tags=list(tags),
            )
        )
        self.db.add(PermissionEntry(asset_id=next_id, grantee=caller, authorized=True))
        state.asset_counter = next_id

        await self.db.flush()

        logger.info(f"Asset {next_id} registered by '{caller}' at block {registered_at}")
        return next_id

    async def modify(
        self,
        caller: str,
        asset_id: int,
        name: str,
        payload_size: int,
        attribute_schema: str,
        tags: list[str],
    ) -> bool:
        """
        Replace the revisable fields of an asset.

        asset_id, owner and registered_at are left untouched.

        Raises:
            AssetNotFoundException: If the asset does not exist
            OwnershipConflictException: If caller is not the owner
            InvalidAttributesException, CapacityThresholdException,
            AttributeVerificationException: If a field is invalid
        """
        state = await self._load_state(for_update=True)
        record = await self._get_record(asset_id, refresh=True)
        require_owner(record, caller, "modify")
        validate_asset_fields(name, payload_size, attribute_schema, tags)

        record.name = name
        record.payload_size = payload_size
        record.attribute_schema = attribute_schema
        record.tags = list(tags)
        self._advance_clock(state)

        await self.db.flush()

        logger.info(f"Asset {asset_id} modified by '{caller}'")
        return True

    async def transfer(self, caller: str, asset_id: int, new_owner: str) -> bool:
        """
        Hand ownership of an asset to another principal.

        Permission entries are not touched: the previous owner keeps any
        explicit grant it holds, and the new owner reads by ownership.

        Raises:
            AssetNotFoundException: If the asset does not exist
            OwnershipConflictException: If caller is not the owner
        """
        state = await self._load_state(for_update=True)
        record = await self._get_record(asset_id, refresh=True)
        require_owner(record, caller, "transfer")

        previous_owner = record.owner
        record.owner = new_owner
        self._advance_clock(state)

        await self.db.flush()

        logger.info(f"Asset {asset_id} transferred from '{previous_owner}' to '{new_owner}'")
        return True

    async def delete(self, caller: str, asset_id: int) -> bool:
        """
        Delete an asset. Irreversible; the id is never minted again.

        Permission entries for the id are left in place.

        Raises:
            AssetNotFoundException: If the asset does not exist
            OwnershipConflictException: If caller is not the owner
        """
        state = await self._load_state(for_update=True)
        record = await self._get_record(asset_id, refresh=True)
        require_owner(record, caller, "delete")

        await self.db.delete(record)
        self._advance_clock(state)

        await self.db.flush()

        logger.info(f"Asset {asset_id} deleted by '{caller}'")
        return True

    # ===================
    # Queries
    # ===================

    async def get_record(self, caller: str, asset_id: int) -> AssetRecord:
        """
        Get a full record, enforcing read authorization.

        Raises:
            AssetNotFoundException: If the asset does not exist
            AccessRestrictedException: If caller is neither owner nor
                explicitly authorized
        """
        record = await self._get_record(asset_id)
        explicit = await self._explicit_grant(asset_id, caller)
        check_record_access(record, caller, explicit)
        return record

    async def get_metrics(self) -> RegistryMetrics:
        """
        Current counter, authority and block height. No authorization.

        On a database the startup hook has not initialized, this creates
        the registry state row as a side effect.
        """
        state = await self._load_state()
        return RegistryMetrics(
            total_count=state.asset_counter,
            authority=state.authority,
            block_height=state.block_height,
        )

    async def get_owner(self, asset_id: int) -> str:
        """Owner of an existing asset."""
        record = await self._get_record(asset_id)
        return record.owner

    async def get_authorization(self, asset_id: int, entity: str) -> AuthorizationAnalysis:
        """
        Report how an entity relates to an asset.

        Reports the answer instead of enforcing it; the only error is
        AssetNotFoundException.
        """
        record = await self._get_record(asset_id)
        explicit = await self._explicit_grant(asset_id, entity)
        return analyze_access(record, entity, explicit)
