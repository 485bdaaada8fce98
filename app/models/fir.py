"""
FIR (First Information Report) form models

FIR data is never persisted; it lives only for the request that renders it.
"""

import re
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


class IncidentType(str, Enum):
    UPI_FRAUD = "UPI Fraud"
    PHISHING = "Phishing"
    BANKING_FRAUD = "Banking Fraud"
    INVESTMENT_SCAM = "Investment Scam"
    AADHAAR_FRAUD = "Aadhaar Fraud"


class Severity(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def label(self) -> str:
        return f"{self.value} Severity"


BANKS = [
    "State Bank of India",
    "HDFC Bank",
    "ICICI Bank",
    "Axis Bank",
    "Kotak Mahindra Bank",
    "Punjab National Bank",
    "Bank of Baroda",
    "Canara Bank",
    "Union Bank of India",
    "IndusInd Bank",
    "Other",
]

# Cyber crime cell helplines, in the order they are printed
CYBER_CELLS = {
    "Delhi": "011-26885656",
    "Mumbai": "022-22641261",
    "Bangalore": "080-22942264",
    "Chennai": "044-28512527",
    "Hyderabad": "040-27852040",
    "Pune": "020-26122880",
    "Kolkata": "033-22143024",
    "Ahmedabad": "079-25252626",
    "Jaipur": "0141-2741092",
    "Lucknow": "0522-2287253",
}

_PHONE_RE = re.compile(r"^\d{10}$")


def _digits_only(value: Optional[str]) -> str:
    return re.sub(r"\D", "", value or "")


class FirReportData(BaseModel):
    incident_type: IncidentType = Field(..., alias="incidentType")
    amount: Decimal = Field(..., ge=0, description="Amount lost in rupees")
    incident_date: date = Field(..., alias="date")
    transaction_id: Optional[str] = Field(
        None, max_length=100, alias="transactionId")
    bank_name: Optional[str] = Field(None, max_length=100, alias="bankName")
    description: Optional[str] = Field(None, max_length=5000)
    victim_name: Optional[str] = Field(None, max_length=200, alias="victimName")
    phone: str = Field(..., description="10-digit mobile number without +91")
    whatsapp: Optional[str] = None
    state: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: str) -> str:
        digits = _digits_only(value)
        if not _PHONE_RE.match(digits):
            raise ValueError("phone must be a 10-digit number")
        return digits

    @field_validator("whatsapp")
    @classmethod
    def _check_whatsapp(cls, value: Optional[str]) -> Optional[str]:
        digits = _digits_only(value)
        if not digits:
            return None
        if not _PHONE_RE.match(digits):
            raise ValueError("whatsapp must be a 10-digit number")
        return digits


class SeverityResponse(BaseModel):
    amount: Decimal
    severity: Severity
    label: str


class FirOptionsResponse(BaseModel):
    incident_types: list[str] = Field(..., alias="incidentTypes")
    banks: list[str]
    cyber_cells: dict[str, str] = Field(..., alias="cyberCells")

    model_config = ConfigDict(populate_by_name=True)
