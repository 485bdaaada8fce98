"""
Lawyer model and Firestore conversion helpers
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field, ConfigDict

from app.models.user import Profile, firestore_profile_to_model


class Lawyer(BaseModel):
    id: str
    user_id: str = Field(..., alias="userId")
    bar_council_id: Optional[str] = Field(None, alias="barCouncilId")
    photo_url: Optional[str] = Field(None, alias="photoUrl")
    hourly_rate: int = Field(0, alias="hourlyRate")
    city: Optional[str] = None
    specializations: list[str] = Field(default_factory=list)
    bio: Optional[str] = None
    experience_years: Optional[int] = Field(None, alias="experienceYears")
    verified: bool = False
    rating: float = 0.0
    review_count: int = Field(0, alias="reviewCount")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)


class LawyerListing(Lawyer):
    """Lawyer joined with the owning user's profile"""

    display_name: str = Field("Unnamed Lawyer", alias="displayName")
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")


def _unique(values) -> list[str]:
    seen = []
    for value in values or []:
        if value and value not in seen:
            seen.append(value)
    return seen


def firestore_lawyer_to_model(doc: dict, lawyer_id: str) -> Lawyer:
    return Lawyer(
        id=lawyer_id,
        user_id=doc.get("userId") or doc.get("user_id") or "",
        bar_council_id=doc.get("barCouncilId") or doc.get("bar_council_id"),
        photo_url=doc.get("photoUrl") or doc.get("photo_url"),
        hourly_rate=doc.get("hourlyRate") or doc.get("hourly_rate") or 0,
        city=doc.get("city"),
        specializations=_unique(doc.get("specializations")),
        bio=doc.get("bio"),
        experience_years=doc.get("experienceYears"),
        verified=bool(doc.get("verified") or doc.get("isVerified")),
        rating=float(doc.get("rating") or 0),
        review_count=int(doc.get("reviewCount") or 0),
        created_at=doc.get("createdAt"),
        updated_at=doc.get("updatedAt"),
    )


def lawyer_model_to_firestore(lawyer: Lawyer) -> dict:
    data = lawyer.model_dump(by_alias=True)
    data.pop("id", None)
    return data


def _normalize_profile(value: Any, fallback_uid: str) -> Optional[Profile]:
    """Collapse an embedded profile given as object, one-element list or nothing"""
    if isinstance(value, Profile):
        return value
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if isinstance(value, dict):
        return firestore_profile_to_model(value, value.get("uid") or fallback_uid)
    return None


def project_lawyer_listing(
    doc: dict, lawyer_id: str, profile: Any = None
) -> LawyerListing:
    """
    Build a LawyerListing from a lawyer document and its owner's profile

    The profile may be passed explicitly, or be embedded in the lawyer
    document under "profile" as an object or a single-element list.
    """
    lawyer = firestore_lawyer_to_model(doc, lawyer_id)
    resolved = _normalize_profile(
        profile if profile is not None else doc.get("profile"), lawyer.user_id
    )

    data = lawyer.model_dump()
    if resolved is not None:
        if resolved.display_name:
            data["display_name"] = resolved.display_name
        data["avatar_url"] = resolved.avatar_url
    return LawyerListing(**data)
