"""
FIR Report PDF Generator

Lays out a cyber crime FIR report on A4 pages and renders it with reportlab.
Layout is computed first as plain data (page -> positioned items) in
millimetres from the top-left corner, then drawn; the same report always
yields the same bytes.
"""

import io
import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from app.models.fir import CYBER_CELLS, FirReportData, Severity

logger = logging.getLogger(__name__)

FIR_FILENAME = "CyberLawyerHub_FIR_Report.pdf"

PAGE_WIDTH_MM = A4[0] / mm
PAGE_HEIGHT_MM = A4[1] / mm
LEFT = 20
RIGHT = 190
TOP = 20
WRAP_WIDTH = 170

# Any line placed below this starts a new page
ROW_LIMIT = 275
# The footer needs two lines, so it breaks earlier
FOOTER_LIMIT = 270
# The region table is started on a fresh page when its heading would sit this low
TABLE_START_LIMIT = 240

BODY_LINE_HEIGHT = 6
CONTACT_LINE_HEIGHT = 7
TABLE_ROW_HEIGHT = 6

REGULAR = "Helvetica"
BOLD = "Helvetica-Bold"
ACCENT = colors.Color(34 / 255, 211 / 255, 238 / 255)

HIGH_SEVERITY_THRESHOLD = Decimal("100000")
MEDIUM_SEVERITY_THRESHOLD = Decimal("10000")


def classify_severity(amount: Union[int, float, Decimal]) -> Severity:
    amount = Decimal(str(amount))
    if amount >= HIGH_SEVERITY_THRESHOLD:
        return Severity.HIGH
    if amount >= MEDIUM_SEVERITY_THRESHOLD:
        return Severity.MEDIUM
    return Severity.LOW


def format_inr(amount: Union[int, float, Decimal]) -> str:
    """Format an amount with Indian digit grouping, e.g. 1,00,000.5"""
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    whole, _, frac = f"{value:f}".partition(".")
    frac = frac.rstrip("0")

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])

    return f"{whole}.{frac}" if frac else whole


@dataclass(frozen=True)
class TextItem:
    x: float
    y: float
    text: str
    font: str = REGULAR
    size: float = 11
    centered: bool = False


@dataclass(frozen=True)
class RuleItem:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass
class PageLayout:
    items: list = field(default_factory=list)

    @property
    def texts(self) -> list[str]:
        return [i.text for i in self.items if isinstance(i, TextItem)]


class _Cursor:
    """Tracks the current page and places items, breaking pages as needed"""

    def __init__(self):
        self.pages = [PageLayout()]

    @property
    def page(self) -> PageLayout:
        return self.pages[-1]

    def new_page(self) -> float:
        self.pages.append(PageLayout())
        return TOP

    def text(self, y: float, text: str, font: str = REGULAR, size: float = 11,
             limit: float = ROW_LIMIT, x: float = LEFT) -> float:
        """Place one line at y, on a new page if y is past limit; returns the y used"""
        if y > limit:
            y = self.new_page()
        text = clip_text(text, font, size, RIGHT - x)
        self.page.items.append(TextItem(x=x, y=y, text=text, font=font, size=size))
        return y


def wrap_text(text: str, font: str = REGULAR, size: float = 11,
              width_mm: float = WRAP_WIDTH) -> list[str]:
    """Word-wrap to the column width, breaking words that are wider than the column"""
    max_width = width_mm * mm
    lines = []
    for line in simpleSplit(text, font, size, max_width):
        while stringWidth(line, font, size) > max_width:
            cut = len(line) - 1
            while cut > 1 and stringWidth(line[:cut], font, size) > max_width:
                cut -= 1
            lines.append(line[:cut])
            line = line[cut:]
        lines.append(line)
    return lines


def clip_text(text: str, font: str, size: float, width_mm: float) -> str:
    """Shorten a single-line field with an ellipsis so it stays inside the column"""
    max_width = width_mm * mm
    if stringWidth(text, font, size) <= max_width:
        return text
    while text and stringWidth(text + "...", font, size) > max_width:
        text = text[:-1]
    return text + "..."


def _nearest_cell_line(state: str) -> str:
    phone = CYBER_CELLS.get(state or "")
    if phone:
        return f"4. Your nearest Cyber Crime Cell ({state}): {phone}"
    return "4. Your nearest Cyber Crime Cell (see contacts below)"


def layout_fir_report(report: FirReportData) -> list[PageLayout]:
    """Compute page-by-page positions for every line of the report"""
    cursor = _Cursor()
    page = cursor.page
    severity = classify_severity(report.amount)

    # Header
    page.items.append(TextItem(x=PAGE_WIDTH_MM / 2, y=20, text="CYBER CRIME FIR REPORT",
                               font=BOLD, size=18, centered=True))
    page.items.append(TextItem(x=PAGE_WIDTH_MM / 2, y=27, text="Generated via CyberLawyerHub",
                               size=10, centered=True))
    page.items.append(RuleItem(x1=LEFT, y1=32, x2=RIGHT, y2=32))

    cursor.text(42, f"Severity: {severity.label}", font=BOLD, size=12)

    # Victim details
    cursor.text(55, "VICTIM DETAILS", font=BOLD, size=14)
    cursor.text(63, f"Name: {report.victim_name or 'N/A'}")
    cursor.text(70, f"Phone: +91 {report.phone}")
    cursor.text(77, f"WhatsApp: +91 {report.whatsapp or report.phone}")
    cursor.text(84, f"State: {report.state or 'N/A'}")

    # Incident details
    cursor.text(97, "INCIDENT DETAILS", font=BOLD, size=14)
    cursor.text(105, f"Type: {report.incident_type.value}")
    cursor.text(112, f"Amount Lost: Rs. {format_inr(report.amount)}")
    cursor.text(119, f"Date of Incident: {report.incident_date.isoformat()}")
    cursor.text(126, f"Transaction ID: {report.transaction_id or 'N/A'}")
    cursor.text(133, f"Bank: {report.bank_name or 'N/A'}")

    # Description, wrapped to the column width
    cursor.text(146, "INCIDENT DESCRIPTION", font=BOLD, size=14)
    description = (report.description or "").strip() or "No description provided."
    y = 154
    for line in wrap_text(description):
        y = cursor.text(y, line) + BODY_LINE_HEIGHT
    y += 10

    # Contacts and resources
    y = cursor.text(y, "IMPORTANT CONTACTS & RESOURCES", font=BOLD, size=14) + 8
    for line in (
        "1. National Cyber Crime Helpline: 1930",
        "2. Online Complaint: https://cybercrime.gov.in",
        "3. RBI Complaint (Banking/UPI): https://cms.rbi.org.in",
        _nearest_cell_line(report.state),
    ):
        y = cursor.text(y, line) + CONTACT_LINE_HEIGHT
    y += 12 - CONTACT_LINE_HEIGHT

    # Region contact table
    if y >= TABLE_START_LIMIT:
        y = cursor.new_page()
    y = cursor.text(y, "STATE-WISE CYBER CRIME CELL CONTACTS", font=BOLD, size=12) + 8
    for region, phone in CYBER_CELLS.items():
        y = cursor.text(y, f"{region}: {phone}", size=9) + TABLE_ROW_HEIGHT

    # Footer call to action
    y += 10
    y = cursor.text(y, "Need Expert Legal Help?", font=BOLD, size=12, limit=FOOTER_LIMIT)
    cursor.text(y + 7, "Visit CyberLawyerHub to connect with verified cyber crime lawyers.",
                size=10, limit=PAGE_HEIGHT_MM)

    return cursor.pages


def render_pages(pages: list[PageLayout], title: str = "Cyber Crime FIR Report") -> bytes:
    buffer = io.BytesIO()
    # invariant=1 drops the creation date and random document id
    pdf = canvas.Canvas(buffer, pagesize=A4, invariant=1)
    pdf.setTitle(title)
    pdf.setAuthor("CyberLawyerHub")

    page_height = A4[1]
    for index, page in enumerate(pages):
        if index:
            pdf.showPage()
        for item in page.items:
            if isinstance(item, RuleItem):
                pdf.setStrokeColor(ACCENT)
                pdf.line(item.x1 * mm, page_height - item.y1 * mm,
                         item.x2 * mm, page_height - item.y2 * mm)
                continue
            pdf.setFont(item.font, item.size)
            x, y = item.x * mm, page_height - item.y * mm
            if item.centered:
                pdf.drawCentredString(x, y, item.text)
            else:
                pdf.drawString(x, y, item.text)

    pdf.save()
    return buffer.getvalue()


def generate_fir_pdf(report: FirReportData) -> bytes:
    """Render the FIR report to PDF bytes"""
    pages = layout_fir_report(report)
    pdf_bytes = render_pages(pages)
    logger.info(
        f"Generated FIR PDF: {len(pages)} page(s), {len(pdf_bytes)} bytes")
    return pdf_bytes
