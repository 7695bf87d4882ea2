"""
Authentication and authorization module for the registry.
"""

from app.auth.jwt import validate_token, extract_principal_claims, fetch_jwks, check_scope
from app.auth.permissions import (
    AuthorizationAnalysis,
    analyze_access,
    check_record_access,
    is_owner,
    require_owner,
)
from app.auth.dependencies import (
    get_current_principal,
    require_scope,
    CurrentPrincipal,
    RequireRead,
    RequireWrite,
)

__all__ = [
    # JWT functions
    "validate_token",
    "extract_principal_claims",
    "fetch_jwks",
    "check_scope",
    # Permission functions
    "AuthorizationAnalysis",
    "analyze_access",
    "check_record_access",
    "is_owner",
    "require_owner",
    # Dependencies
    "get_current_principal",
    "require_scope",
    # Type aliases
    "CurrentPrincipal",
    "RequireRead",
    "RequireWrite",
]
