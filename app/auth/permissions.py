"""
Asset-level permission checking.

Two rules govern access to a record:
1. Owner-gated mutation - only the current owner may modify, transfer
   or delete.
2. Authorization-gated reads - the owner, or any principal holding an
   explicit grant set to true, may read the full record.
"""

from dataclasses import dataclass

from app.core.exceptions import AccessRestrictedException, OwnershipConflictException
from app.models.asset import AssetRecord


@dataclass(frozen=True)
class AuthorizationAnalysis:
    """Result of evaluating one principal against one record."""

    explicit: bool
    is_owner: bool

    @property
    def can_access(self) -> bool:
        return self.explicit or self.is_owner


def is_owner(record: AssetRecord, principal: str | None) -> bool:
    """Check if principal is the record's current owner."""
    return principal is not None and record.owner == principal


def analyze_access(
    record: AssetRecord,
    principal: str | None,
    explicit_grant: bool,
) -> AuthorizationAnalysis:
    """
    Evaluate a principal against a record without enforcing anything.

    Args:
        record: Record being accessed
        principal: Identity being evaluated
        explicit_grant: Value of the (asset, principal) permission entry,
            False when no entry exists

    Returns:
        AuthorizationAnalysis with explicit, is_owner and can_access
    """
    return AuthorizationAnalysis(
        explicit=bool(explicit_grant),
        is_owner=is_owner(record, principal),
    )


def check_record_access(
    record: AssetRecord,
    principal: str | None,
    explicit_grant: bool,
) -> bool:
    """
    Enforce read access to a record.

    Returns:
        True if access is granted

    Raises:
        AccessRestrictedException: If the principal is neither owner nor
            explicitly authorized
    """
    if not analyze_access(record, principal, explicit_grant).can_access:
        raise AccessRestrictedException(record.asset_id)
    return True


def require_owner(record: AssetRecord, principal: str | None, action: str) -> None:
    """
    Enforce ownership for a mutating action.

    Raises:
        OwnershipConflictException: If principal is not the current owner
    """
    if not is_owner(record, principal):
        raise OwnershipConflictException(record.asset_id, action)
