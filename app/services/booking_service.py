"""
Booking persistence and lifecycle
"""

import logging
from datetime import datetime, UTC
from typing import Optional
from uuid import uuid4

from firebase_admin import firestore

from app.config import settings
from app.exceptions import (
    InvalidStatusTransition,
    NotFound,
    PersistenceError,
    SelfBookingError,
)
from app.models.booking import (
    Booking,
    BookingStatus,
    can_transition,
    booking_model_to_firestore,
    firestore_booking_to_model,
)
from app.models.lawyer import Lawyer
from app.models.user import RequestIdentity, UserRole
from app.services.firebase_service import firebase_service
from app.services.lawyer_service import lawyer_service
from app.services.pricing import calculate_price

logger = logging.getLogger(__name__)

# Status changes each party may request; everything else is admin or webhook only
LAWYER_SETTABLE = {BookingStatus.CONFIRMED, BookingStatus.CANCELLED}
CLIENT_SETTABLE = {BookingStatus.CANCELLED}


def _to_models(docs) -> list[Booking]:
    bookings = []
    for doc_id, doc_data in docs:
        try:
            bookings.append(firestore_booking_to_model(doc_data, doc_id))
        except Exception as e:
            logger.warning(f"Error converting booking {doc_id}: {str(e)}")
            continue
    return bookings


class BookingService:
    async def create_pending_booking(
        self,
        identity: RequestIdentity,
        lawyer_id: str,
        duration_minutes: int,
    ) -> tuple[Booking, Lawyer]:
        """
        Create a pending booking priced from the lawyer's stored hourly rate

        Raises:
            NotFound: lawyer does not exist
            SelfBookingError: the caller owns the lawyer record
            InvalidDuration / InvalidRate: pricing rejected the input
            PersistenceError: the booking could not be written
        """
        lawyer = await lawyer_service.get_lawyer(lawyer_id)
        if lawyer is None:
            raise NotFound("Lawyer not found")

        if lawyer.user_id == identity.uid:
            raise SelfBookingError("Cannot book yourself")

        quote = calculate_price(
            lawyer.hourly_rate, duration_minutes, settings.PLATFORM_FEE_PERCENT)

        now = datetime.now(UTC)
        booking = Booking(
            booking_id=f"booking_{uuid4().hex[:12]}",
            user_id=identity.uid,
            lawyer_id=lawyer.id,
            duration_minutes=duration_minutes,
            base_amount=quote.base_amount,
            platform_fee=quote.platform_fee,
            total_amount=quote.total_amount,
            currency=settings.BOOKING_CURRENCY,
            status=BookingStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

        try:
            await firebase_service.set_document(
                f"bookings/{booking.booking_id}", booking_model_to_firestore(booking)
            )
        except Exception as e:
            raise PersistenceError(f"Failed to create booking: {e}") from e

        logger.info(
            f"Booking created: {booking.booking_id} user={identity.uid} "
            f"lawyer={lawyer.id} total={booking.total_amount}"
        )
        return booking, lawyer

    async def attach_session(self, booking_id: str, session_id: str):
        try:
            await firebase_service.update_document(
                f"bookings/{booking_id}",
                {"stripeSessionId": session_id, "updatedAt": datetime.now(UTC)},
            )
        except Exception as e:
            raise PersistenceError(
                f"Failed to update booking {booking_id}: {e}") from e

    async def get_booking(self, booking_id: str) -> Optional[Booking]:
        doc = await firebase_service.get_document(f"bookings/{booking_id}")
        if not doc:
            return None
        return firestore_booking_to_model(doc, booking_id)

    async def get_by_session(self, session_id: str) -> Optional[Booking]:
        docs, _ = await firebase_service.query_collection(
            "bookings", filters={"stripeSessionId": session_id}, limit=1
        )
        bookings = _to_models(docs)
        return bookings[0] if bookings else None

    async def list_for_user(self, user_id: str) -> list[Booking]:
        docs, _ = await firebase_service.query_collection(
            "bookings",
            filters={"userId": user_id},
            order_by="createdAt",
            direction=firestore.Query.DESCENDING,
        )
        return _to_models(docs)

    async def list_for_lawyer(self, lawyer_id: str) -> list[Booking]:
        docs, _ = await firebase_service.query_collection(
            "bookings",
            filters={"lawyerId": lawyer_id},
            order_by="createdAt",
            direction=firestore.Query.DESCENDING,
        )
        return _to_models(docs)

    async def update_status(
        self,
        identity: RequestIdentity,
        booking_id: str,
        new_status: BookingStatus,
    ) -> Booking:
        """
        Move a booking forward in its lifecycle

        Raises:
            NotFound: booking does not exist
            PermissionError: caller may not set this status
            InvalidStatusTransition: the change would move backwards
        """
        booking = await self.get_booking(booking_id)
        if booking is None:
            raise NotFound("Booking not found")

        if identity.role == UserRole.ADMIN:
            allowed = set(BookingStatus)
        else:
            allowed = set()
            if identity.uid == booking.user_id:
                allowed |= CLIENT_SETTABLE
            lawyer = await lawyer_service.get_lawyer(booking.lawyer_id)
            if lawyer is not None and lawyer.user_id == identity.uid:
                allowed |= LAWYER_SETTABLE

        if new_status not in allowed:
            raise PermissionError("Not authorized to set this booking status")

        if not can_transition(booking.status, new_status):
            raise InvalidStatusTransition(booking.status.value, new_status.value)

        now = datetime.now(UTC)
        await firebase_service.update_document(
            f"bookings/{booking_id}", {"status": new_status.value, "updatedAt": now}
        )
        logger.info(
            f"Booking {booking_id} status {booking.status.value} -> {new_status.value}")
        return booking.model_copy(update={"status": new_status, "updated_at": now})


booking_service = BookingService()
