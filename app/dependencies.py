"""
FastAPI dependency injection functions.
Provides common dependencies used across endpoints.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.db.session import get_db
from app.services.registry_service import RegistryService


# Type aliases for cleaner endpoint signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_registry_service(db: DbSession, settings: AppSettings) -> RegistryService:
    """Registry service bound to the request's database session."""
    return RegistryService(db, authority=settings.registry_authority)


Registry = Annotated[RegistryService, Depends(get_registry_service)]
