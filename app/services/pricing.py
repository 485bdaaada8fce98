"""
Consultation pricing

Amounts are whole rupees, the unit lawyers quote their hourly rate in.
Both the half-hour split and the platform fee round half up, so the estimate
shown on a lawyer profile and the amount charged at checkout always agree.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from pydantic import BaseModel, Field, ConfigDict

from app.exceptions import InvalidDuration, InvalidRate

ALLOWED_DURATIONS = (30, 60)
DEFAULT_PLATFORM_FEE_PERCENT = 25


class PriceQuote(BaseModel):
    """Price breakdown for one consultation"""

    duration_minutes: int = Field(..., alias="durationMinutes")
    base_amount: int = Field(..., alias="baseAmount")
    platform_fee: int = Field(..., alias="platformFee")
    total_amount: int = Field(..., alias="totalAmount")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _normalize_rate(hourly_rate: Union[int, float, Decimal]) -> int:
    if isinstance(hourly_rate, bool) or not isinstance(hourly_rate, (int, float, Decimal)):
        raise InvalidRate(f"Invalid hourly rate: {hourly_rate!r}")
    rate = Decimal(str(hourly_rate))
    if rate != rate.to_integral_value() or rate <= 0:
        raise InvalidRate(
            f"Hourly rate must be a positive whole amount, got {hourly_rate!r}")
    return int(rate)


def calculate_price(
    hourly_rate: Union[int, float, Decimal],
    duration_minutes: int,
    fee_percent: int = DEFAULT_PLATFORM_FEE_PERCENT,
) -> PriceQuote:
    """
    Compute base amount, platform fee and total for a consultation

    Args:
        hourly_rate: Lawyer's hourly rate in whole rupees
        duration_minutes: 30 or 60
        fee_percent: Platform surcharge on the base amount

    Raises:
        InvalidDuration: duration is not 30 or 60
        InvalidRate: rate is not a positive whole amount
    """
    if isinstance(duration_minutes, bool) or duration_minutes not in ALLOWED_DURATIONS:
        raise InvalidDuration(
            "Invalid lawyer_id or duration_minutes (must be 30 or 60)")

    rate = _normalize_rate(hourly_rate)

    if duration_minutes == 30:
        base_amount = round_half_up(Decimal(rate) / 2)
    else:
        base_amount = rate

    platform_fee = round_half_up(
        Decimal(base_amount) * Decimal(fee_percent) / Decimal(100))

    return PriceQuote(
        duration_minutes=duration_minutes,
        base_amount=base_amount,
        platform_fee=platform_fee,
        total_amount=base_amount + platform_fee,
    )


def quote_all_durations(
    hourly_rate: Union[int, float, Decimal],
    fee_percent: int = DEFAULT_PLATFORM_FEE_PERCENT,
) -> list[PriceQuote]:
    return [calculate_price(hourly_rate, d, fee_percent) for d in ALLOWED_DURATIONS]
