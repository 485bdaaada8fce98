"""
Booking Routes for CyberLawyerHub Backend

This module defines the HTTP endpoints for reading and progressing bookings.
Bookings themselves are created through the checkout endpoint.
- List the caller's bookings
- Look up the booking behind a checkout session (booking success page)
- Retrieve booking details
- Move a booking forward in its lifecycle
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_current_identity
from app.exceptions import InvalidStatusTransition, NotFound
from app.models.booking import (
    Booking,
    BookingListResponse,
    BookingStatusUpdateRequest,
)
from app.models.user import RequestIdentity, UserRole
from app.services.booking_service import booking_service
from app.services.lawyer_service import lawyer_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


async def _ensure_can_view(booking: Booking, identity: RequestIdentity):
    if identity.role == UserRole.ADMIN or identity.uid == booking.user_id:
        return
    lawyer = await lawyer_service.get_lawyer(booking.lawyer_id)
    if lawyer is not None and lawyer.user_id == identity.uid:
        return
    raise HTTPException(
        status_code=403, detail="Not authorized to view this booking")


# GET /api/v1/bookings/my - current user's bookings, newest first
@router.get("/my", response_model=BookingListResponse)
async def my_bookings(identity: RequestIdentity = Depends(get_current_identity)):
    try:
        bookings = await booking_service.list_for_user(identity.uid)
    except Exception as e:
        logger.error(f"Error in my_bookings: {str(e)}")
        raise HTTPException(
            status_code=500, detail="Failed to retrieve bookings")
    return BookingListResponse(bookings=bookings, total=len(bookings))


# GET /api/v1/bookings/session/{session_id} - booking for a checkout session
@router.get("/session/{session_id}", response_model=Booking)
async def get_booking_by_session(
    session_id: str,
    identity: RequestIdentity = Depends(get_current_identity),
):
    booking = await booking_service.get_by_session(session_id)
    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    await _ensure_can_view(booking, identity)
    return booking


# GET /api/v1/bookings/{booking_id} - booking details
@router.get("/{booking_id}", response_model=Booking)
async def get_booking(
    booking_id: str,
    identity: RequestIdentity = Depends(get_current_identity),
):
    booking = await booking_service.get_booking(booking_id)
    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    await _ensure_can_view(booking, identity)
    return booking


# PUT /api/v1/bookings/{booking_id}/status - forward-only status change
@router.put("/{booking_id}/status", response_model=Booking)
async def update_booking_status(
    booking_id: str,
    data: BookingStatusUpdateRequest,
    identity: RequestIdentity = Depends(get_current_identity),
):
    try:
        return await booking_service.update_status(identity, booking_id, data.status)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
