"""SQLAlchemy declarative base for the registry tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for AssetRecord, PermissionEntry and RegistryState."""
    pass
