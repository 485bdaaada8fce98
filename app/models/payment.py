from pydantic import BaseModel, Field, field_validator
from typing import Optional


class CheckoutRequest(BaseModel):
    lawyer_id: str = Field(..., min_length=1)
    duration_minutes: int = Field(..., strict=True)

    @field_validator("lawyer_id")
    @classmethod
    def _strip_lawyer_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("lawyer_id is required")
        return value

    @field_validator("duration_minutes", mode="before")
    @classmethod
    def _whole_number_duration(cls, value):
        # JSON numbers like 30.0 count as 30; strings and booleans do not
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


class CheckoutResponse(BaseModel):
    url: str


class CheckoutErrorResponse(BaseModel):
    error: str


class CheckoutSession(BaseModel):
    """The subset of a Stripe Checkout session the app keeps"""

    id: str
    url: str
    customer: Optional[str] = None
