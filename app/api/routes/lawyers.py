"""
Lawyer public endpoints

Endpoints:
- GET /api/v1/lawyers - directory with search and filters
- GET /api/v1/lawyers/{id} - lawyer profile with consultation prices
- GET /api/v1/lawyers/{id}/quote - price for one duration
- GET /api/v1/lawyers/{id}/availability - upcoming availability slots
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from app.config import settings
from app.exceptions import InvalidRequest
from app.models.availability import SlotListResponse
from app.schemas.lawyer import LawyerListResponse, LawyerProfileResponse
from app.services.availability_service import availability_service
from app.services.lawyer_service import filter_lawyers, lawyer_service
from app.services.pricing import PriceQuote, calculate_price, quote_all_durations

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/lawyers", tags=["lawyers"])


@router.get("", response_model=LawyerListResponse)
async def list_lawyers(
    search: Optional[str] = Query(None, description="Matches name or specialization"),
    city: Optional[str] = Query(None),
    min_rate: Optional[int] = Query(None, ge=0),
    max_rate: Optional[int] = Query(None, ge=0),
    min_rating: float = Query(0, ge=0, le=5),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    listings = await lawyer_service.list_listings()
    matches = filter_lawyers(
        listings,
        search=search,
        city=city,
        min_rate=min_rate,
        max_rate=max_rate,
        min_rating=min_rating,
    )
    start = (page - 1) * page_size
    return LawyerListResponse(
        lawyers=matches[start:start + page_size],
        total=len(matches),
        page=page,
        page_size=page_size,
    )


@router.get("/{lawyer_id}", response_model=LawyerProfileResponse)
async def get_lawyer(lawyer_id: str):
    listing = await lawyer_service.get_listing(lawyer_id)
    if listing is None:
        raise HTTPException(status_code=404, detail="Lawyer not found")

    try:
        quotes = quote_all_durations(
            listing.hourly_rate, settings.PLATFORM_FEE_PERCENT)
    except InvalidRequest as e:
        logger.warning(f"Lawyer {lawyer_id} has no usable rate: {e}")
        quotes = []
    return LawyerProfileResponse(**listing.model_dump(), quotes=quotes)


@router.get("/{lawyer_id}/quote", response_model=PriceQuote)
async def get_quote(lawyer_id: str, duration_minutes: int = Query(...)):
    lawyer = await lawyer_service.get_lawyer(lawyer_id)
    if lawyer is None:
        raise HTTPException(status_code=404, detail="Lawyer not found")
    try:
        return calculate_price(
            lawyer.hourly_rate, duration_minutes, settings.PLATFORM_FEE_PERCENT)
    except InvalidRequest as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{lawyer_id}/availability", response_model=SlotListResponse)
async def get_availability(lawyer_id: str):
    slots = await availability_service.list_upcoming(lawyer_id)
    return SlotListResponse(slots=slots, lawyer_id=lawyer_id)
