"""
Dashboard summaries for clients and lawyers

The summary functions are pure; DashboardService gathers the records.
"""

import asyncio
from datetime import datetime, UTC
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from app.models.availability import AvailabilitySlot
from app.models.booking import Booking, BookingWithLawyer, SETTLED_STATUSES
from app.models.lawyer import Lawyer
from app.services.availability_service import availability_service
from app.services.booking_service import booking_service
from app.services.lawyer_service import lawyer_service

RECENT_LIMIT = 5


class UserDashboard(BaseModel):
    total_bookings: int = Field(..., alias="totalBookings")
    upcoming: int
    total_spent: int = Field(..., alias="totalSpent")
    recent_bookings: list[BookingWithLawyer] = Field(..., alias="recentBookings")

    model_config = ConfigDict(populate_by_name=True)


class LawyerDashboard(BaseModel):
    lawyer_id: str = Field(..., alias="lawyerId")
    total_bookings: int = Field(..., alias="totalBookings")
    clients: int
    this_month_earnings: int = Field(..., alias="thisMonthEarnings")
    total_earnings: int = Field(..., alias="totalEarnings")
    recent_bookings: list[Booking] = Field(..., alias="recentBookings")
    upcoming_slots: list[AvailabilitySlot] = Field(..., alias="upcomingSlots")

    model_config = ConfigDict(populate_by_name=True)


def _settled(bookings: list[Booking]) -> list[Booking]:
    return [b for b in bookings if b.status in SETTLED_STATUSES]


def total_spent(bookings: list[Booking]) -> int:
    return sum(b.total_amount for b in _settled(bookings))


def upcoming_count(bookings: list[Booking]) -> int:
    return len(_settled(bookings))


def unique_clients(bookings: list[Booking]) -> int:
    return len({b.user_id for b in bookings})


def total_earnings(bookings: list[Booking]) -> int:
    # Lawyers earn the base amount; the platform keeps the fee
    return sum(b.base_amount for b in _settled(bookings))


def month_earnings(bookings: list[Booking], now: Optional[datetime] = None) -> int:
    now = now or datetime.now(UTC)
    return sum(
        b.base_amount for b in _settled(bookings)
        if b.created_at.year == now.year and b.created_at.month == now.month
    )


class DashboardService:
    async def _with_lawyer(self, booking: Booking, lawyers: dict) -> BookingWithLawyer:
        lawyer: Optional[Lawyer] = lawyers.get(booking.lawyer_id)
        name = "Lawyer"
        if lawyer is not None:
            name = await lawyer_service.get_display_name(lawyer.user_id)
        return BookingWithLawyer(
            **booking.model_dump(),
            lawyer_name=name,
            lawyer_city=lawyer.city if lawyer else None,
        )

    async def user_dashboard(self, user_id: str) -> UserDashboard:
        bookings = await booking_service.list_for_user(user_id)
        recent = bookings[:RECENT_LIMIT]

        lawyer_ids = sorted({b.lawyer_id for b in recent})
        found = await asyncio.gather(*(lawyer_service.get_lawyer(i) for i in lawyer_ids))
        lawyers = dict(zip(lawyer_ids, found))

        return UserDashboard(
            total_bookings=len(bookings),
            upcoming=upcoming_count(bookings),
            total_spent=total_spent(bookings),
            recent_bookings=[await self._with_lawyer(b, lawyers) for b in recent],
        )

    async def lawyer_dashboard(self, lawyer: Lawyer) -> LawyerDashboard:
        bookings, slots = await asyncio.gather(
            booking_service.list_for_lawyer(lawyer.id),
            availability_service.list_upcoming(lawyer.id),
        )
        return LawyerDashboard(
            lawyer_id=lawyer.id,
            total_bookings=len(bookings),
            clients=unique_clients(bookings),
            this_month_earnings=month_earnings(bookings),
            total_earnings=total_earnings(bookings),
            recent_bookings=bookings[:RECENT_LIMIT],
            upcoming_slots=slots,
        )


dashboard_service = DashboardService()
