from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

from app.main import app
from app.models.fir import CYBER_CELLS, FirReportData, Severity
from app.services.fir_pdf_service import (
    FIR_FILENAME,
    ROW_LIMIT,
    TOP,
    TextItem,
    WRAP_WIDTH,
    classify_severity,
    format_inr,
    generate_fir_pdf,
    layout_fir_report,
)

client = TestClient(app)

REPORT = {
    "incidentType": "UPI Fraud",
    "amount": "150000",
    "date": "2025-01-15",
    "transactionId": "UPI123456789",
    "bankName": "HDFC Bank",
    "description": "Received a call from a fake bank officer asking for an OTP.",
    "victimName": "Ravi Kumar",
    "phone": "98765 43210",
    "state": "Mumbai",
}


def _report(**overrides):
    return FirReportData.model_validate({**REPORT, **overrides})


def _all_texts(pages):
    return [t for page in pages for t in page.texts]


@pytest.mark.parametrize("amount, expected", [
    (0, Severity.LOW),
    (9999.99, Severity.LOW),
    (10000, Severity.MEDIUM),
    (99999, Severity.MEDIUM),
    (100000, Severity.HIGH),
    (Decimal("2500000"), Severity.HIGH),
])
def test_severity_thresholds(amount, expected):
    assert classify_severity(amount) == expected


def test_severity_label():
    assert Severity.HIGH.label == "High Severity"


@pytest.mark.parametrize("amount, expected", [
    (999, "999"),
    (1000, "1,000"),
    (100000, "1,00,000"),
    (1234567.5, "12,34,567.5"),
    (Decimal("50000.25"), "50,000.25"),
    (0, "0"),
])
def test_format_inr(amount, expected):
    assert format_inr(amount) == expected


def test_phone_is_normalised_to_ten_digits():
    report = _report(phone="(987) 654-3210")
    assert report.phone == "9876543210"
    with pytest.raises(ValidationError):
        _report(phone="12345")
    with pytest.raises(ValidationError):
        _report(whatsapp="123")
    assert _report(whatsapp="").whatsapp is None


def test_layout_contains_report_fields():
    texts = _all_texts(layout_fir_report(_report()))

    assert "CYBER CRIME FIR REPORT" in texts
    assert "Severity: High Severity" in texts
    assert "Name: Ravi Kumar" in texts
    assert "Phone: +91 9876543210" in texts
    assert "WhatsApp: +91 9876543210" in texts
    assert "Amount Lost: Rs. 1,50,000" in texts
    assert "Date of Incident: 2025-01-15" in texts
    assert "4. Your nearest Cyber Crime Cell (Mumbai): 022-22641261" in texts
    for region, phone in CYBER_CELLS.items():
        assert f"{region}: {phone}" in texts
    assert texts[-1].startswith("Visit CyberLawyerHub")


def test_missing_optional_fields_use_placeholders():
    texts = _all_texts(layout_fir_report(_report(
        victimName=None, transactionId=None, bankName=None, description="  ", state="Goa")))

    assert "Name: N/A" in texts
    assert "Transaction ID: N/A" in texts
    assert "Bank: N/A" in texts
    assert "No description provided." in texts
    assert "4. Your nearest Cyber Crime Cell (see contacts below)" in texts


def test_long_description_flows_onto_new_pages():
    long_text = " ".join(["The caller asked me to share the OTP and then"] * 80)
    pages = layout_fir_report(_report(description=long_text))

    assert len(pages) >= 2
    assert "INCIDENT DESCRIPTION" in pages[0].texts
    for page in pages:
        body = [i for i in page.items if isinstance(i, TextItem)
                and not i.text.startswith("Visit CyberLawyerHub")]
        assert all(i.y <= ROW_LIMIT for i in body)
    assert pages[1].items[0].y == TOP


def test_region_table_is_never_dropped():
    long_text = "x " * 1500
    texts = _all_texts(layout_fir_report(_report(description=long_text)))
    assert "STATE-WISE CYBER CRIME CELL CONTACTS" in texts


def test_pdf_bytes_are_deterministic():
    first = generate_fir_pdf(_report())
    second = generate_fir_pdf(_report())

    assert first.startswith(b"%PDF")
    assert first == second


def test_report_endpoint_returns_pdf_download():
    response = client.post("/api/v1/fir/report", json=REPORT)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert FIR_FILENAME in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_report_endpoint_validates_phone():
    response = client.post("/api/v1/fir/report", json={**REPORT, "phone": "123"})
    assert response.status_code == 422


def test_severity_endpoint():
    response = client.get("/api/v1/fir/severity", params={"amount": 25000})
    assert response.status_code == 200
    assert response.json()["severity"] == "Medium"
    assert response.json()["label"] == "Medium Severity"


def test_options_endpoint():
    data = client.get("/api/v1/fir/options").json()
    assert data["incidentTypes"][0] == "UPI Fraud"
    assert "HDFC Bank" in data["banks"]
    assert data["cyberCells"]["Delhi"] == "011-26885656"


def _widest_line_mm(pages):
    return max(
        stringWidth(i.text, i.font, i.size) / mm
        for page in pages for i in page.items
        if isinstance(i, TextItem) and not i.centered
    )


def test_long_unbroken_words_are_split_to_the_column():
    link = "https://phish.example.com/" + "a" * 300
    pages = layout_fir_report(_report(description=f"Clicked {link} then paid"))

    assert _widest_line_mm(pages) <= WRAP_WIDTH
    texts = _all_texts(pages)
    start = texts.index("INCIDENT DESCRIPTION") + 1
    end = texts.index("IMPORTANT CONTACTS & RESOURCES")
    assert "".join(texts[start:end]).replace(" ", "") == f"Clicked{link}thenpaid"


def test_overlong_single_line_fields_stay_inside_the_column():
    pages = layout_fir_report(_report(victimName="R" * 200, bankName="B" * 100))

    assert _widest_line_mm(pages) <= WRAP_WIDTH
    assert any(t.startswith("Name: RRR") and t.endswith("...") for t in _all_texts(pages))


def test_region_table_splits_across_pages():
    pages = layout_fir_report(_report(description="word " * 30))

    rows = [
        (index, item)
        for index, page in enumerate(pages)
        for item in page.items
        if isinstance(item, TextItem) and any(
            item.text == f"{region}: {phone}" for region, phone in CYBER_CELLS.items())
    ]
    assert len(rows) == len(CYBER_CELLS)
    assert all(item.y <= ROW_LIMIT for _, item in rows)

    first_page = rows[0][0]
    *head, (last_page, last_row) = rows
    assert all(index == first_page for index, _ in head)
    assert last_row.text.startswith("Lucknow")
    assert last_page == first_page + 1
    assert last_row.y == TOP
