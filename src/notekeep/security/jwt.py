"""Bearer token issuing and checking.

Tokens are HS256 JWTs carrying the user id in ``sub``, an ``iat``/``exp``
pair and ``type: "access"``. There is no refresh flow and no revocation;
a token is good until it expires.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from jose import JWTError, jwt

from ..config import get_settings

TOKEN_TYPE = "access"

_REQUIRED_CLAIMS = {"require_exp": True, "require_sub": True}


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Sign ``data`` as an access token.

    Lifetime defaults to ``access_token_expire_days``.
    """
    settings = get_settings()
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(days=settings.access_token_expire_days)

    claims = {**data, "iat": issued_at, "exp": issued_at + lifetime, "type": TOKEN_TYPE}
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verified claims, or None for a bad signature, expiry, missing claim or wrong type."""
    settings = get_settings()
    try:
        claims = jwt.decode(
            token, settings.secret_key, algorithms=[settings.algorithm], options=_REQUIRED_CLAIMS
        )
    except JWTError:
        return None

    if claims.get("type") != TOKEN_TYPE:
        return None
    return claims


def get_user_id_from_token(token: str) -> Optional[UUID]:
    """The token's subject as a UUID, or None when the token is unusable."""
    claims = decode_access_token(token)
    if claims is None:
        return None

    try:
        return UUID(str(claims["sub"]))
    except ValueError:
        return None
