"""
AssetRecord SQLAlchemy model - the Asset Repository.
"""

from sqlalchemy import BigInteger, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

ASSET_ID_MAX = 2**31 - 1


class AssetRecord(Base):
    """
    A registered digital asset.

    asset_id and registered_at are fixed at registration. owner changes
    only through a transfer; the remaining fields are revisable by the
    current owner.
    """
    __tablename__ = "asset_repository"

    asset_id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
        comment="Registry-minted identifier, never reused",
    )
    name: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Asset name (1-64 chars)",
    )
    owner: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Identity of the controlling principal",
    )
    payload_size: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="Payload size (1 to 999,999,999)",
    )
    registered_at: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="Block height at registration",
    )
    attribute_schema: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        comment="Attribute schema descriptor (1-128 chars)",
    )
    tags: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered list of 1-10 tags, each 1-32 chars",
    )

    def __repr__(self) -> str:
        return f"<AssetRecord(asset_id={self.asset_id}, name={self.name}, owner={self.owner})>"
