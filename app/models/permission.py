"""
PermissionEntry SQLAlchemy model - the Permission Governance table.
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class PermissionEntry(Base):
    """
    Explicit read grant for one (asset, grantee) pair.

    No foreign key to asset_repository: entries outlive the record they
    were granted on, and every read re-checks that the record exists.
    """
    __tablename__ = "permission_governance"

    asset_id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
        comment="Asset the grant applies to",
    )
    grantee: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        comment="Identity of the granted principal",
    )
    authorized: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Explicit authorization flag",
    )

    def __repr__(self) -> str:
        return (
            f"<PermissionEntry(asset_id={self.asset_id}, grantee={self.grantee}, "
            f"authorized={self.authorized})>"
        )
