"""
Checkout orchestration for lawyer consultations

Creates a pending booking, opens a Stripe Checkout session for it and links
the two. A provider failure after the booking insert leaves the booking
pending with no session id; nothing here cleans it up.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from app.config import settings
from app.exceptions import (
    InvalidRequest,
    PaymentProviderError,
    Unauthenticated,
)
from app.models.payment import CheckoutRequest, CheckoutResponse
from app.models.user import RequestIdentity
from app.services.booking_service import BookingService, booking_service
from app.services.lawyer_service import LawyerService, lawyer_service
from app.services.payment_service import PaymentGateway, payment_gateway
from app.services.pricing import ALLOWED_DURATIONS

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid lawyer_id or duration_minutes (must be 30 or 60)"


def parse_checkout_request(payload: Any) -> CheckoutRequest:
    """Validate the raw request body, raising InvalidRequest on any problem"""
    if not isinstance(payload, dict):
        raise InvalidRequest(INVALID_REQUEST_MESSAGE)
    try:
        request = CheckoutRequest.model_validate(payload)
    except ValidationError as e:
        raise InvalidRequest(INVALID_REQUEST_MESSAGE) from e
    if request.duration_minutes not in ALLOWED_DURATIONS:
        raise InvalidRequest(INVALID_REQUEST_MESSAGE)
    return request


class CheckoutService:
    def __init__(
        self,
        bookings: BookingService = booking_service,
        lawyers: LawyerService = lawyer_service,
        gateway: PaymentGateway = payment_gateway,
    ):
        self.bookings = bookings
        self.lawyers = lawyers
        self.gateway = gateway

    async def create_checkout(
        self,
        identity: Optional[RequestIdentity],
        payload: Any,
        origin: Optional[str] = None,
    ) -> CheckoutResponse:
        """
        Book a consultation and return the hosted payment page URL

        Raises:
            Unauthenticated, InvalidRequest, NotFound, SelfBookingError,
            PersistenceError, PaymentProviderError
        """
        if identity is None or not identity.email:
            raise Unauthenticated("User not authenticated")

        request = parse_checkout_request(payload)
        logger.info(
            f"Checkout requested: user={identity.uid} lawyer={request.lawyer_id} "
            f"duration={request.duration_minutes}"
        )

        booking, lawyer = await self.bookings.create_pending_booking(
            identity, request.lawyer_id, request.duration_minutes
        )
        lawyer_name = await self.lawyers.get_display_name(lawyer.user_id)

        customer = await self.gateway.find_customer(identity.email)
        customer_id = customer.value if customer.ok else None

        base_url = (origin or settings.FRONTEND_URL).rstrip("/")

        result = await self.gateway.create_checkout_session(
            product_name=f"{request.duration_minutes}-min Consultation with {lawyer_name}",
            product_description=(
                f"Legal consultation session (₹{booking.base_amount} + "
                f"₹{booking.platform_fee} platform fee)"
            ),
            unit_amount=booking.total_amount_minor,
            currency=booking.currency,
            customer_id=customer_id,
            customer_email=None if customer_id else identity.email,
            success_url=f"{base_url}/booking-success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{base_url}/lawyers/{lawyer.id}",
            metadata={
                "booking_id": booking.booking_id,
                "lawyer_id": lawyer.id,
                "user_id": identity.uid,
            },
        )
        if not result.ok:
            logger.error(
                f"Booking {booking.booking_id} left pending without a session: {result.message}")
            raise PaymentProviderError(
                f"Payment provider error: {result.message}")

        session = result.value
        await self.bookings.attach_session(booking.booking_id, session.id)
        logger.info(
            f"Checkout session {session.id} created for booking {booking.booking_id}")
        return CheckoutResponse(url=session.url)


checkout_service = CheckoutService()
