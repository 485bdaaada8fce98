"""
Booking Models for CyberLawyerHub Backend

This module defines the Booking model that represents a paid lawyer
consultation stored in Firebase Firestore.
"""

from datetime import datetime, timezone
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, model_validator


# Helper function for timezone-aware UTC datetime
def utc_now():
    """Get current UTC datetime (timezone-aware)"""
    return datetime.now(timezone.utc)


class BookingStatus(str, Enum):
    """Booking status enumeration"""

    PENDING = "pending"
    PAID = "paid"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


# Statuses reachable from each status. Nothing moves backwards and
# cancelled is terminal.
ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.PAID, BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.PAID: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.CANCELLED},
    BookingStatus.CANCELLED: set(),
}

# Bookings that count towards spend, earnings and upcoming sessions
SETTLED_STATUSES = (BookingStatus.PAID, BookingStatus.CONFIRMED)


def can_transition(current: BookingStatus, new: BookingStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


class Booking(BaseModel):
    """
    Complete Booking model representing a consultation booking in Firestore

    Collection: bookings/
    Document ID: bookingId
    """

    booking_id: str = Field(...,
                            description="Unique booking identifier", alias="bookingId")
    user_id: str = Field(...,
                         description="UID of the requesting client", alias="userId")
    lawyer_id: str = Field(...,
                           description="ID of the lawyer document", alias="lawyerId")
    duration_minutes: int = Field(...,
                                  description="Consultation length (30 or 60)", alias="durationMinutes")

    # Pricing, whole rupees
    base_amount: int = Field(..., ge=0, alias="baseAmount")
    platform_fee: int = Field(..., ge=0, alias="platformFee")
    total_amount: int = Field(..., ge=0, alias="totalAmount")
    currency: str = Field(default="inr")

    status: BookingStatus = Field(
        default=BookingStatus.PENDING, description="Current booking status"
    )
    stripe_session_id: Optional[str] = Field(
        default=None, description="Stripe Checkout session id", alias="stripeSessionId"
    )
    start_time: Optional[datetime] = Field(
        default=None, description="Scheduled start, when known", alias="startTime"
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now, description="Booking creation timestamp", alias="createdAt"
    )
    updated_at: datetime = Field(
        default_factory=utc_now, description="Last update timestamp", alias="updatedAt"
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "bookingId": "booking_5f2a9c1e7b3d",
                "userId": "user_uid_456",
                "lawyerId": "lawyer_123",
                "durationMinutes": 30,
                "baseAmount": 750,
                "platformFee": 188,
                "totalAmount": 938,
                "currency": "inr",
                "status": "pending",
                "stripeSessionId": "cs_test_a1b2c3",
                "createdAt": "2025-02-01T10:00:00Z",
            }
        }
    )

    @property
    def total_amount_minor(self) -> int:
        """Total in paise, as the payment processor expects"""
        return self.total_amount * 100

    @model_validator(mode="after")
    def _check_total(self):
        if self.total_amount != self.base_amount + self.platform_fee:
            raise ValueError("totalAmount must equal baseAmount + platformFee")
        return self


class BookingWithLawyer(Booking):
    """Booking joined with the lawyer's display details, for dashboards"""

    lawyer_name: str = Field("Lawyer", alias="lawyerName")
    lawyer_city: Optional[str] = Field(None, alias="lawyerCity")


class BookingStatusUpdateRequest(BaseModel):
    """
    Request model for updating booking status

    Used in PUT /api/v1/bookings/{id}/status endpoint.
    """

    status: BookingStatus = Field(..., description="New booking status")


class BookingListResponse(BaseModel):
    """Response model for listing bookings"""

    bookings: list[Booking]
    total: int


# Helper function to convert Firestore document to Booking model
def firestore_booking_to_model(doc_data: dict, booking_id: str) -> Booking:
    return Booking.model_validate({**doc_data, "bookingId": booking_id})


# Helper function to convert Booking model to Firestore document
def booking_model_to_firestore(booking: Booking) -> dict:
    data = booking.model_dump(by_alias=True, mode="python")
    data.pop("bookingId", None)
    data["status"] = booking.status.value
    return data
