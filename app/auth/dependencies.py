"""
Authentication dependencies for FastAPI.

Resolve the calling principal for every request. In development mode the
identity comes from the X-Principal header (falling back to DEV_USER_ID);
otherwise it is the sub claim of a validated bearer token.
"""

from typing import Annotated, Any

from fastapi import Depends, Header, Request

from app.config import Settings, get_settings
from app.core.exceptions import UnauthorizedException
from app.auth.jwt import validate_token, extract_principal_claims, check_scope

DEV_SCOPES = ["registry:read", "registry:write"]


async def get_current_principal(
    request: Request,
    authorization: str | None = Header(default=None),
    x_principal: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """
    Dependency to get the calling principal.

    Args:
        request: FastAPI request
        authorization: Authorization header value
        x_principal: Development-mode identity override
        settings: Application settings

    Returns:
        Principal claims dictionary

    Raises:
        UnauthorizedException: If authentication fails
    """
    if settings.DEV_MODE:
        claims = {
            "principal": x_principal or settings.DEV_USER_ID,
            "name": "Development Principal",
            "scopes": list(DEV_SCOPES),
        }
        request.state.principal = claims
        return claims

    if not authorization:
        raise UnauthorizedException("Authorization header required")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise UnauthorizedException("Invalid authorization header format")

    payload = await validate_token(parts[1])
    claims = extract_principal_claims(payload)

    request.state.principal = claims
    return claims


def require_scope(required_scope: str):
    """
    Dependency factory to require a specific scope.

    Usage:
        @router.post("/assets")
        async def register_asset(
            principal: dict = Depends(require_scope("registry:write"))
        ):
            ...
    """
    async def _check_scope(
        claims: dict[str, Any] = Depends(get_current_principal),
    ) -> dict[str, Any]:
        if not check_scope(claims, required_scope):
            raise UnauthorizedException(
                f"Required scope '{required_scope}' not present in token"
            )
        return claims

    return _check_scope


# Type aliases for dependency injection
CurrentPrincipal = Annotated[dict[str, Any], Depends(get_current_principal)]

# Scoped dependencies
RequireRead = Annotated[dict[str, Any], Depends(require_scope("registry:read"))]
RequireWrite = Annotated[dict[str, Any], Depends(require_scope("registry:write"))]
