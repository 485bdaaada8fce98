"""
Checkout endpoint

POST /api/v1/checkout - book a consultation and get a Stripe Checkout URL

Every failure is returned as {"error": message} with status 500; clients tell
failure kinds apart by the message only.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.dependencies import get_optional_identity
from app.exceptions import CheckoutError, InvalidRequest
from app.models.payment import CheckoutErrorResponse, CheckoutResponse
from app.models.user import RequestIdentity
from app.services.checkout_service import checkout_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/checkout", tags=["checkout"])


@router.post(
    "",
    response_model=CheckoutResponse,
    responses={500: {"model": CheckoutErrorResponse}},
)
async def create_checkout(
    request: Request,
    identity: Optional[RequestIdentity] = Depends(get_optional_identity),
):
    """
    Create a pending booking and a hosted payment session for it

    Body: {"lawyer_id": str, "duration_minutes": 30 | 60}
    """
    try:
        try:
            payload = await request.json()
        except ValueError as e:
            raise InvalidRequest("Request body must be valid JSON") from e

        return await checkout_service.create_checkout(
            identity, payload, origin=request.headers.get("origin")
        )
    except Exception as e:
        kind = e.kind if isinstance(e, CheckoutError) else type(e).__name__
        logger.error(f"Checkout error ({kind}): {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
