"""
FastAPI dependency injection for authentication
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from app.models.user import RequestIdentity, UserRole
from app.services.firebase_service import firebase_service
from app.utils.security import verify_access_token

logger = logging.getLogger(__name__)

# Security scheme for Bearer tokens
security = HTTPBearer()
# optional bearer that doesn't raise when missing
security_optional = HTTPBearer(auto_error=False)


def _role_from_claims(claims: dict) -> UserRole:
    try:
        return UserRole(claims.get("role") or UserRole.USER.value)
    except ValueError:
        return UserRole.USER


async def resolve_identity(token: str) -> Optional[RequestIdentity]:
    """
    Resolve a bearer token into a RequestIdentity

    Firebase ID tokens are tried first, then internally issued access tokens.
    Returns None when neither verifies.
    """
    if not token:
        return None

    try:
        decoded = await firebase_service.verify_id_token(token)
        uid = decoded.get("uid")
        if uid:
            return RequestIdentity(
                uid=uid, email=decoded.get("email"), role=_role_from_claims(decoded)
            )
        logger.debug("Firebase ID token decoded but missing UID")
    except ValueError as e:
        logger.debug(f"Firebase ID token verification failed: {e}")
    except Exception as e:
        logger.warning(
            f"Unexpected error during Firebase ID token verification: {e}")

    try:
        payload = verify_access_token(token)
    except JWTError as e:
        logger.debug(f"Internal token verification failed: {e}")
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None
    return RequestIdentity(
        uid=user_id, email=payload.get("email"), role=_role_from_claims(payload)
    )


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> RequestIdentity:
    """
    Dependency to get the identity of the authenticated caller

    Raises:
        HTTPException: 401 if the token cannot be verified
    """
    identity = await resolve_identity(credentials.credentials)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


async def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(
        security_optional),
) -> Optional[RequestIdentity]:
    """Dependency that returns None instead of raising when unauthenticated"""
    if not credentials:
        return None
    return await resolve_identity(credentials.credentials)
