import asyncio
from datetime import datetime, timezone, timedelta
import random
import uuid

from app.models.availability import SlotCreateRequest
from app.models.lawyer import Lawyer, lawyer_model_to_firestore
from app.services.availability_service import availability_service
from app.services.firebase_service import firebase_service

# --- Configuration for seeding ---
NUM_LAWYERS_TO_CREATE = 5
SLOTS_PER_LAWYER = 3

SPECIALIZATIONS = [
    "UPI Fraud", "Online Banking Fraud", "Credit Card Fraud",
    "Investment Scam", "Identity Theft", "Cyber Stalking",
]
CITIES = ["Mumbai", "Delhi", "Bangalore", "Hyderabad", "Chennai", "Kolkata", "Pune"]


# --- Helper functions for dummy data generation ---
def generate_dummy_lawyer(lawyer_id: str, uid: str) -> Lawyer:
    """Generates a dummy Lawyer object."""
    return Lawyer(
        id=lawyer_id,
        user_id=uid,
        bar_council_id=f"MAH/{random.randint(1000, 9999)}/{random.randint(2005, 2022)}",
        hourly_rate=random.choice([1000, 1500, 2000, 2500, 3000]),
        city=random.choice(CITIES),
        specializations=random.sample(SPECIALIZATIONS, k=random.randint(1, 3)),
        bio="Advocate handling cyber fraud complaints and recovery of lost funds.",
        experience_years=random.randint(3, 25),
        verified=random.choice([True, False]),
        rating=round(random.uniform(3.5, 5.0), 1),
        review_count=random.randint(0, 150),
        created_at=datetime.now(timezone.utc) - timedelta(days=random.randint(30, 365 * 3)),
        updated_at=datetime.now(timezone.utc),
    )


async def seed_lawyers():
    """
    Seeds Firestore with dummy lawyer profiles, their owner profiles and a few
    upcoming availability slots.
    """
    print(f"--- Seeding {NUM_LAWYERS_TO_CREATE} dummy lawyers ---")

    for i in range(NUM_LAWYERS_TO_CREATE):
        uid = f"seed-lawyer-{i + 1}"
        display_name = f"Adv. Seed Lawyer {i + 1}"
        lawyer_id = f"lawyer_{uuid.uuid4().hex[:12]}"

        try:
            await firebase_service.set_document(
                f"users/{uid}",
                {
                    "displayName": display_name,
                    "email": f"lawyer{i + 1}@example.com",
                    "avatarUrl": f"https://api.dicebear.com/7.x/initials/svg?seed={display_name}",
                    "createdAt": datetime.now(timezone.utc),
                },
                merge=True,
            )

            lawyer = generate_dummy_lawyer(lawyer_id, uid)
            await firebase_service.set_document(
                f"lawyers/{lawyer_id}", lawyer_model_to_firestore(lawyer))
            print(f"Lawyer {display_name} saved (id: {lawyer_id}, rate: ₹{lawyer.hourly_rate}/hr).")

            for day in range(1, SLOTS_PER_LAWYER + 1):
                slot_date = (datetime.now(timezone.utc) + timedelta(days=day)).date()
                await availability_service.add_slot(
                    lawyer_id,
                    SlotCreateRequest(
                        slot_date=slot_date, start_time="10:00", end_time="11:00"),
                )
        except Exception as e:
            print(f"An unexpected error occurred for {display_name}: {e}")

    print("--- Lawyer seeding complete ---")


if __name__ == "__main__":
    asyncio.run(seed_lawyers())
