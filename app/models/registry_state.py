"""
RegistryState SQLAlchemy model - the registry counter, authority and clock.
"""

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

REGISTRY_STATE_ID = 1


class RegistryState(Base):
    """
    Single-row table holding process-wide registry state.

    asset_counter is the last minted asset id. block_height is the
    logical clock, advanced once per successful state transition.
    authority is written when the row is created and never changed.
    """
    __tablename__ = "registry_state"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
        default=REGISTRY_STATE_ID,
    )
    asset_counter: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Last minted asset id",
    )
    block_height: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
        comment="Logical clock",
    )
    authority: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Principal that initialized the registry",
    )

    def __repr__(self) -> str:
        return (
            f"<RegistryState(asset_counter={self.asset_counter}, "
            f"block_height={self.block_height}, authority={self.authority})>"
        )
