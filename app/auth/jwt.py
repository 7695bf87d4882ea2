"""
JWT bearer token validation with JWKS caching.

The identity provider signs tokens with RS256; the public keys are
fetched from its JWKS endpoint and cached for JWKS_CACHE_TTL seconds.
"""

import logging
import time
from typing import Any

import httpx
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from app.config import get_settings
from app.core.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)
settings = get_settings()


# JWKS cache
_jwks_cache: dict[str, Any] = {}
_jwks_cache_time: float = 0


async def fetch_jwks() -> dict[str, Any]:
    """
    Fetch the JSON Web Key Set from the identity provider.

    Returns:
        JWKS dictionary with public keys

    Raises:
        UnauthorizedException: If JWKS cannot be fetched and nothing is cached
    """
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()
    if _jwks_cache and (current_time - _jwks_cache_time) < settings.JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(settings.AUTH_JWKS_URL, timeout=10.0)
            response.raise_for_status()

            _jwks_cache = response.json()
            _jwks_cache_time = current_time

            return _jwks_cache

    except httpx.HTTPError as e:
        # Stale keys are served while the provider is unreachable
        if _jwks_cache:
            logger.warning(f"JWKS refresh failed, using cached keys: {e}")
            return _jwks_cache
        raise UnauthorizedException(f"Failed to fetch JWKS: {str(e)}")


def get_rsa_key(jwks: dict[str, Any], kid: str) -> dict[str, Any] | None:
    """Get RSA public key from JWKS by key ID, or None if not present."""
    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return {
                "kty": key.get("kty"),
                "kid": key.get("kid"),
                "use": key.get("use"),
                "n": key.get("n"),
                "e": key.get("e"),
            }
    return None


async def validate_token(token: str) -> dict[str, Any]:
    """
    Validate a bearer token.

    Performs signature verification against the JWKS key named by the
    token's kid header, then expiry, issuer and audience checks.

    Args:
        token: JWT token string

    Returns:
        Decoded token claims

    Raises:
        UnauthorizedException: If token is invalid
    """
    try:
        unverified_header = jwt.get_unverified_header(token)
        kid = unverified_header.get("kid")

        if not kid:
            raise UnauthorizedException("Token missing key ID")

        jwks = await fetch_jwks()
        rsa_key = get_rsa_key(jwks, kid)

        if not rsa_key:
            raise UnauthorizedException("Unable to find appropriate key")

        return jwt.decode(
            token,
            rsa_key,
            algorithms=["RS256"],
            audience=settings.AUTH_AUDIENCE,
            issuer=settings.AUTH_ISSUER,
        )

    except ExpiredSignatureError:
        raise UnauthorizedException("Token has expired")
    except JWTError as e:
        raise UnauthorizedException(f"Invalid token: {str(e)}")


def extract_principal_claims(payload: dict[str, Any]) -> dict[str, Any]:
    """
    Extract the caller identity from a validated JWT payload.

    The sub claim is the principal identity used as asset owner and
    permission grantee; scope is a space-separated list.

    Raises:
        UnauthorizedException: If the token carries no subject
    """
    principal = payload.get("sub")
    if not principal:
        raise UnauthorizedException("Token missing subject claim")

    return {
        "principal": principal,
        "name": payload.get("name"),
        "scopes": payload.get("scope", "").split() if payload.get("scope") else [],
    }


def check_scope(claims: dict[str, Any], required_scope: str) -> bool:
    """Check if the caller's claims include required_scope."""
    return required_scope in claims.get("scopes", [])
