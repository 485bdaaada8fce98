"""
FIR report generator endpoints (no account required)

- GET /api/v1/fir/options - form choices
- GET /api/v1/fir/severity - severity for an amount lost
- POST /api/v1/fir/report - render the report as a PDF download
"""

import logging
from decimal import Decimal

from fastapi import APIRouter, Query
from fastapi.responses import Response

from app.models.fir import (
    BANKS,
    CYBER_CELLS,
    FirOptionsResponse,
    FirReportData,
    IncidentType,
    SeverityResponse,
)
from app.services.fir_pdf_service import (
    FIR_FILENAME,
    classify_severity,
    generate_fir_pdf,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/fir", tags=["fir"])


@router.get("/options", response_model=FirOptionsResponse)
async def get_options():
    return FirOptionsResponse(
        incident_types=[t.value for t in IncidentType],
        banks=BANKS,
        cyber_cells=CYBER_CELLS,
    )


@router.get("/severity", response_model=SeverityResponse)
async def get_severity(amount: Decimal = Query(..., ge=0)):
    severity = classify_severity(amount)
    return SeverityResponse(amount=amount, severity=severity, label=severity.label)


@router.post("/report")
def create_report(report: FirReportData):
    """Render the FIR PDF; nothing is stored"""
    pdf_bytes = generate_fir_pdf(report)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{FIR_FILENAME}"'},
    )
