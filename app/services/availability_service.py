"""
Lawyer availability slots
"""

import logging
from datetime import date
from typing import Optional
from uuid import uuid4

from app.exceptions import NotFound, SlotAlreadyBooked
from app.models.availability import (
    AvailabilitySlot,
    SlotCreateRequest,
    firestore_slot_to_model,
    slot_model_to_firestore,
)
from app.services.firebase_service import firebase_service

logger = logging.getLogger(__name__)


class AvailabilityService:
    async def list_upcoming(
        self, lawyer_id: str, today: Optional[date] = None
    ) -> list[AvailabilitySlot]:
        """Slots dated today or later, soonest first"""
        today = today or date.today()
        docs, _ = await firebase_service.query_collection(
            "availability",
            filters=[("lawyerId", "==", lawyer_id),
                     ("date", ">=", today.isoformat())],
            order_by="date",
        )
        slots = []
        for doc_id, doc in docs:
            try:
                slots.append(firestore_slot_to_model(doc, doc_id))
            except Exception as e:
                logger.warning(f"Error converting slot {doc_id}: {str(e)}")
        return sorted(slots, key=lambda s: (s.slot_date, s.start_time))

    async def add_slot(self, lawyer_id: str, data: SlotCreateRequest) -> AvailabilitySlot:
        slot = AvailabilitySlot(
            id=f"slot_{uuid4().hex[:12]}",
            lawyer_id=lawyer_id,
            slot_date=data.slot_date,
            start_time=data.start_time,
            end_time=data.end_time,
            is_booked=False,
        )
        await firebase_service.set_document(
            f"availability/{slot.id}", slot_model_to_firestore(slot))
        logger.info(f"Slot {slot.id} added for lawyer {lawyer_id}")
        return slot

    async def remove_slot(self, lawyer_id: str, slot_id: str):
        """
        Delete an unbooked slot owned by the lawyer

        Raises:
            NotFound: slot missing or owned by another lawyer
            SlotAlreadyBooked: slot has a booking against it
        """
        doc = await firebase_service.get_document(f"availability/{slot_id}")
        if not doc or doc.get("lawyerId") != lawyer_id:
            raise NotFound("Slot not found")
        if doc.get("isBooked"):
            raise SlotAlreadyBooked(slot_id)
        await firebase_service.delete_document(f"availability/{slot_id}")
        logger.info(f"Slot {slot_id} removed for lawyer {lawyer_id}")


availability_service = AvailabilityService()
