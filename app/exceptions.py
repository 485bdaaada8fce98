"""
Domain exceptions for CyberLawyerHub Backend

Checkout failures share the CheckoutError base so the checkout route can
catch them once and turn them into a single error response.
"""


class CheckoutError(Exception):
    """Base class for booking and checkout failures"""

    kind = "checkout_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(CheckoutError):
    kind = "unauthenticated"


class InvalidRequest(CheckoutError):
    kind = "invalid_request"


class InvalidDuration(InvalidRequest):
    kind = "invalid_duration"


class InvalidRate(InvalidRequest):
    kind = "invalid_rate"


class NotFound(CheckoutError):
    kind = "not_found"


class SelfBookingError(CheckoutError):
    kind = "self_booking"


class PersistenceError(CheckoutError):
    kind = "persistence_error"


class PaymentProviderError(CheckoutError):
    kind = "payment_provider_error"


class InvalidStatusTransition(Exception):
    """Raised when a booking status change would move backwards"""

    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Cannot change booking status from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested


class SlotAlreadyBooked(Exception):
    """Raised when removing an availability slot that has been booked"""

    def __init__(self, slot_id: str):
        super().__init__(f"Slot {slot_id} is already booked")
        self.slot_id = slot_id
