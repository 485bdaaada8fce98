"""
Schemas for lawyer directory and profile responses
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import List

from app.models.lawyer import LawyerListing
from app.services.pricing import PriceQuote


class LawyerProfileResponse(LawyerListing):
    quotes: List[PriceQuote] = Field(default_factory=list)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "lawyer_123",
                "userId": "user_abc",
                "displayName": "Adv. Priya Nair",
                "hourlyRate": 1500,
                "city": "Bangalore",
                "specializations": ["UPI Fraud", "Banking Fraud"],
                "verified": True,
                "rating": 4.7,
                "reviewCount": 31,
                "quotes": [
                    {"durationMinutes": 30, "baseAmount": 750,
                     "platformFee": 188, "totalAmount": 938},
                    {"durationMinutes": 60, "baseAmount": 1500,
                     "platformFee": 375, "totalAmount": 1875},
                ],
            }
        },
    )


class LawyerListResponse(BaseModel):
    lawyers: List[LawyerListing]
    total: int
    page: int
    page_size: int = Field(..., alias="pageSize")

    model_config = ConfigDict(populate_by_name=True)
