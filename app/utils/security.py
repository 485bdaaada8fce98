"""
HS256 access tokens issued by the backend itself

End users sign in with Firebase and present Firebase ID tokens. These tokens
cover service callers and local development (see scripts/issue_dev_token.py)
and carry the same identity fields: sub (uid), email and role. They are
refused entirely until JWT_SECRET_KEY is configured.
"""

from datetime import datetime, timedelta, UTC
from typing import Optional, Dict, Any
from jose import JWTError, jwt

from app.config import settings

TOKEN_TYPE = "access"


def _signing_key() -> str:
    if not settings.JWT_SECRET_KEY:
        raise JWTError("Internal tokens are disabled: JWT_SECRET_KEY is not set")
    return settings.JWT_SECRET_KEY


def create_access_token(
    uid: str,
    email: Optional[str] = None,
    role: str = "user",
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign an access token for a uid

    Args:
        uid: Becomes the "sub" claim
        email: Needed by checkout, which bills the token's email
        role: "user", "lawyer" or "admin"
        expires_delta: Lifetime; ACCESS_TOKEN_EXPIRE_MINUTES when omitted
    """
    issued_at = datetime.now(UTC)
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims: Dict[str, Any] = {
        "sub": uid,
        "role": role,
        "type": TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    if email:
        claims["email"] = email
    return jwt.encode(claims, _signing_key(), algorithm=settings.JWT_ALGORITHM)


def verify_access_token(token: str) -> Dict[str, Any]:
    """
    Check signature, expiry and token type and return the claims

    Raises:
        JWTError: on any failure, or when no signing key is configured
    """
    claims = jwt.decode(
        token, _signing_key(), algorithms=[settings.JWT_ALGORITHM]
    )
    if claims.get("type") != TOKEN_TYPE:
        raise JWTError(f"Expected an {TOKEN_TYPE} token")
    return claims
