# travelcrm/infra/pdf/history_renderer.py
from __future__ import annotations

from datetime import datetime, timezone
from io import BytesIO
from xml.sax.saxutils import escape
from zoneinfo import ZoneInfo

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from travelcrm.services._shared.ports import HistoryDocument, HistoryRenderer

DATE_FORMAT = "%d %B %Y, %H:%M"
TABLE_HEADER = ("No", "Destination", "Start", "End", "Status")


class ReportLabHistoryRenderer(HistoryRenderer):
    """
    Render a customer's travel history as an A4 PDF.

    :param timezone_name: IANA zone in which dates are printed.
    :type timezone_name: str
    """

    def __init__(self, timezone_name: str = "Asia/Jakarta") -> None:
        self.tz = ZoneInfo(timezone_name)

    def format_date(self, value: datetime) -> str:
        """Print ``value`` in the configured zone; naive values count as UTC."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(self.tz).strftime(DATE_FORMAT)

    def render(self, document: HistoryDocument) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            title=f"Destinations history - {document.customer_name}",
            leftMargin=15 * mm,
            rightMargin=15 * mm,
            topMargin=15 * mm,
            bottomMargin=15 * mm,
        )
        styles = getSampleStyleSheet()

        story = [
            Paragraph("Customer Destinations History", styles["Title"]),
            Paragraph(f"Name: {escape(document.customer_name)}", styles["Normal"]),
            Paragraph(f"Email: {escape(document.customer_email)}", styles["Normal"]),
            Spacer(1, 6 * mm),
        ]

        if document.entries:
            rows = [list(TABLE_HEADER)]
            for index, entry in enumerate(document.entries, start=1):
                rows.append(
                    [
                        str(index),
                        Paragraph(escape(entry.destination), styles["BodyText"]),
                        self.format_date(entry.start_date),
                        self.format_date(entry.end_date),
                        entry.status,
                    ]
                )
            table = Table(rows, repeatRows=1, colWidths=[12 * mm, 52 * mm, 42 * mm, 42 * mm, 28 * mm])
            table.setStyle(
                TableStyle(
                    [
                        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                        ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ]
                )
            )
            story.append(table)
        else:
            story.append(Paragraph("No destinations recorded.", styles["Italic"]))

        doc.build(story)
        return buffer.getvalue()
