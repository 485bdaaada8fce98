"""
Lawyer directory and profile lookups
"""

import asyncio
import logging
from typing import Optional

from app.models.lawyer import (
    Lawyer,
    LawyerListing,
    firestore_lawyer_to_model,
    project_lawyer_listing,
)
from app.services.firebase_service import firebase_service

logger = logging.getLogger(__name__)

ALL_CITIES = "All Cities"
DEFAULT_LAWYER_NAME = "Lawyer"


def filter_lawyers(
    lawyers: list[LawyerListing],
    search: Optional[str] = None,
    city: Optional[str] = None,
    min_rate: Optional[int] = None,
    max_rate: Optional[int] = None,
    min_rating: float = 0,
) -> list[LawyerListing]:
    """Apply the directory filters; search matches name or specialization"""
    q = (search or "").strip().lower()
    results = []
    for lawyer in lawyers:
        if q:
            specs = " ".join(lawyer.specializations).lower()
            if q not in lawyer.display_name.lower() and q not in specs:
                continue
        if city and city != ALL_CITIES and lawyer.city != city:
            continue
        if min_rate is not None and lawyer.hourly_rate < min_rate:
            continue
        if max_rate is not None and lawyer.hourly_rate > max_rate:
            continue
        if lawyer.rating < min_rating:
            continue
        results.append(lawyer)
    return results


class LawyerService:
    async def get_lawyer(self, lawyer_id: str) -> Optional[Lawyer]:
        doc = await firebase_service.get_document(f"lawyers/{lawyer_id}")
        if not doc:
            return None
        return firestore_lawyer_to_model(doc, lawyer_id)

    async def get_lawyer_for_user(self, user_id: str) -> Optional[Lawyer]:
        """Find the lawyer record owned by a user, if any"""
        docs, _ = await firebase_service.query_collection(
            "lawyers", filters={"userId": user_id}, limit=1
        )
        if not docs:
            return None
        doc_id, doc = docs[0]
        return firestore_lawyer_to_model(doc, doc_id)

    async def get_profile_doc(self, user_id: str) -> Optional[dict]:
        if not user_id:
            return None
        return await firebase_service.get_document(f"users/{user_id}")

    async def get_display_name(self, user_id: str) -> str:
        profile = await self.get_profile_doc(user_id)
        if not profile:
            return DEFAULT_LAWYER_NAME
        return profile.get("displayName") or profile.get("fullName") or DEFAULT_LAWYER_NAME

    async def get_listing(self, lawyer_id: str) -> Optional[LawyerListing]:
        doc = await firebase_service.get_document(f"lawyers/{lawyer_id}")
        if not doc:
            return None
        profile = doc.get("profile")
        if profile is None:
            profile = await self.get_profile_doc(doc.get("userId"))
        return project_lawyer_listing(doc, lawyer_id, profile)

    async def list_listings(self) -> list[LawyerListing]:
        docs, _ = await firebase_service.query_collection("lawyers")

        owner_ids = sorted({
            doc.get("userId") for _, doc in docs
            if doc.get("userId") and doc.get("profile") is None
        })
        profiles = await asyncio.gather(
            *(self.get_profile_doc(uid) for uid in owner_ids))
        profiles_by_owner = dict(zip(owner_ids, profiles))

        listings = []
        for doc_id, doc in docs:
            try:
                profile = doc.get("profile")
                if profile is None:
                    profile = profiles_by_owner.get(doc.get("userId"))
                listings.append(project_lawyer_listing(doc, doc_id, profile))
            except Exception as e:
                logger.warning(f"Error converting lawyer {doc_id}: {str(e)}")
                continue
        return listings


lawyer_service = LawyerService()
