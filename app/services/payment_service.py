import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

import stripe

from app.config import settings
from app.models.payment import CheckoutSession
from app.utils.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class PaymentGateway(ABC):
    @abstractmethod
    async def find_customer(self, email: str) -> Result[Optional[str]]:
        pass

    @abstractmethod
    async def create_checkout_session(
        self,
        *,
        product_name: str,
        product_description: str,
        unit_amount: int,
        currency: str,
        customer_id: Optional[str],
        customer_email: Optional[str],
        success_url: str,
        cancel_url: str,
        metadata: Dict[str, str],
    ) -> Result[CheckoutSession]:
        pass


class StripePaymentGateway(PaymentGateway):
    """Stripe Checkout; SDK errors come back as Err instead of raising"""

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = api_key

    @property
    def api_key(self) -> str:
        return self._api_key or settings.STRIPE_SECRET_KEY

    async def find_customer(self, email: str) -> Result[Optional[str]]:
        try:
            customers = await asyncio.to_thread(
                stripe.Customer.list, email=email, limit=1, api_key=self.api_key
            )
        except stripe.StripeError as e:
            logger.warning(f"Stripe customer lookup failed: {e}")
            return Err(kind="customer_lookup_failed", message=str(e))
        data = customers.data
        return Ok(data[0].id if data else None)

    async def create_checkout_session(
        self,
        *,
        product_name: str,
        product_description: str,
        unit_amount: int,
        currency: str,
        customer_id: Optional[str],
        customer_email: Optional[str],
        success_url: str,
        cancel_url: str,
        metadata: Dict[str, str],
    ) -> Result[CheckoutSession]:
        params = {
            "mode": "payment",
            "line_items": [
                {
                    "price_data": {
                        "currency": currency,
                        "product_data": {
                            "name": product_name,
                            "description": product_description,
                        },
                        "unit_amount": unit_amount,
                    },
                    "quantity": 1,
                }
            ],
            "success_url": success_url,
            "cancel_url": cancel_url,
            "metadata": metadata,
        }
        if customer_id:
            params["customer"] = customer_id
        else:
            params["customer_email"] = customer_email

        logger.info(
            f"Creating Stripe checkout session for booking {metadata.get('booking_id')}: "
            f"{unit_amount} {currency}"
        )
        try:
            session = await asyncio.to_thread(
                stripe.checkout.Session.create, api_key=self.api_key, **params
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe checkout session creation failed: {e}")
            return Err(kind="session_create_failed", message=str(e))

        if not session.url:
            return Err(kind="session_missing_url",
                       message="Checkout session has no redirect URL")
        return Ok(CheckoutSession(id=session.id, url=session.url, customer=session.customer))


payment_gateway = StripePaymentGateway()
