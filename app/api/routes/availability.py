"""
Availability management for lawyers

Endpoints:
- POST /api/v1/availability - add a slot to the caller's lawyer record
- DELETE /api/v1/availability/{slot_id} - remove an unbooked slot
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_current_identity
from app.exceptions import NotFound, SlotAlreadyBooked
from app.models.availability import AvailabilitySlot, SlotCreateRequest
from app.models.lawyer import Lawyer
from app.models.user import RequestIdentity
from app.services.availability_service import availability_service
from app.services.lawyer_service import lawyer_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/availability", tags=["availability"])


async def require_lawyer_record(
    identity: RequestIdentity = Depends(get_current_identity),
) -> Lawyer:
    """Dependency resolving the lawyer record owned by the caller"""
    lawyer = await lawyer_service.get_lawyer_for_user(identity.uid)
    if lawyer is None:
        raise HTTPException(
            status_code=403, detail="No lawyer profile for this account")
    return lawyer


@router.post("", response_model=AvailabilitySlot, status_code=201)
async def add_slot(
    data: SlotCreateRequest,
    lawyer: Lawyer = Depends(require_lawyer_record),
):
    return await availability_service.add_slot(lawyer.id, data)


@router.delete("/{slot_id}")
async def remove_slot(
    slot_id: str,
    lawyer: Lawyer = Depends(require_lawyer_record),
):
    try:
        await availability_service.remove_slot(lawyer.id, slot_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SlotAlreadyBooked as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"ok": True}
