"""
User Models for CyberLawyerHub Backend

This module defines the request identity resolved from a bearer token and
the user profile stored in Firebase Firestore.
"""

from datetime import datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


class UserRole(str, Enum):
    """User role enumeration"""

    USER = "user"
    LAWYER = "lawyer"
    ADMIN = "admin"


class RequestIdentity(BaseModel):
    """
    Identity of the caller for a single request

    Built by the auth dependency from a verified token and passed explicitly
    into every service call that needs it.
    """

    uid: str = Field(..., description="Auth provider UID")
    email: Optional[str] = None
    role: UserRole = UserRole.USER

    model_config = ConfigDict(frozen=True)


class Profile(BaseModel):
    """
    Public profile of a user

    Collection: users/
    Document ID: uid (Firebase Auth UID)
    """

    uid: str
    display_name: Optional[str] = Field(None, alias="displayName")
    email: Optional[str] = None
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)


def firestore_profile_to_model(doc: dict, uid: str) -> Profile:
    return Profile(
        uid=uid,
        display_name=doc.get("displayName") or doc.get(
            "display_name") or doc.get("fullName"),
        email=doc.get("email"),
        avatar_url=doc.get("avatarUrl") or doc.get("avatar_url"),
        created_at=doc.get("createdAt"),
    )
