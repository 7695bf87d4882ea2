"""
SQLAlchemy ORM models for the Digital Asset Registry.
"""

from app.models.asset import AssetRecord
from app.models.permission import PermissionEntry
from app.models.registry_state import RegistryState, REGISTRY_STATE_ID

__all__ = [
    "AssetRecord",
    "PermissionEntry",
    "RegistryState",
    "REGISTRY_STATE_ID",
]
