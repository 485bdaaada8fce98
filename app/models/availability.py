"""
Availability slot model

Collection: availability/
"""

from datetime import date, time
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, model_validator


class AvailabilitySlot(BaseModel):
    id: str
    lawyer_id: str = Field(..., alias="lawyerId")
    slot_date: date = Field(..., alias="date")
    start_time: time = Field(..., alias="startTime")
    end_time: time = Field(..., alias="endTime")
    is_booked: bool = Field(False, alias="isBooked")

    model_config = ConfigDict(populate_by_name=True)


class SlotCreateRequest(BaseModel):
    slot_date: date = Field(..., alias="date")
    start_time: time = Field(..., alias="startTime")
    end_time: time = Field(..., alias="endTime")

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def _check_order(self):
        if self.end_time <= self.start_time:
            raise ValueError("endTime must be after startTime")
        return self


class SlotListResponse(BaseModel):
    slots: list[AvailabilitySlot]
    lawyer_id: Optional[str] = Field(None, alias="lawyerId")

    model_config = ConfigDict(populate_by_name=True)


def firestore_slot_to_model(doc: dict, slot_id: str) -> AvailabilitySlot:
    return AvailabilitySlot.model_validate({**doc, "id": slot_id})


def slot_model_to_firestore(slot: AvailabilitySlot) -> dict:
    # Firestore has no date/time types; store ISO strings
    return {
        "lawyerId": slot.lawyer_id,
        "date": slot.slot_date.isoformat(),
        "startTime": slot.start_time.strftime("%H:%M"),
        "endTime": slot.end_time.strftime("%H:%M"),
        "isBooked": slot.is_booked,
    }
