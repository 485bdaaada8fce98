from app.models.user import Profile, RequestIdentity, UserRole
from app.models.lawyer import Lawyer, LawyerListing
from app.models.booking import Booking, BookingStatus, BookingWithLawyer
from app.models.availability import AvailabilitySlot
from app.models.fir import FirReportData, IncidentType, Severity

__all__ = [
    "Profile",
    "RequestIdentity",
    "UserRole",
    "Lawyer",
    "LawyerListing",
    "Booking",
    "BookingStatus",
    "BookingWithLawyer",
    "AvailabilitySlot",
    "FirReportData",
    "IncidentType",
    "Severity",
]
