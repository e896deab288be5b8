from datetime import UTC, datetime

from travelcrm.infra.pdf.history_renderer import ReportLabHistoryRenderer
from travelcrm.services._shared.ports import HistoryDocument, HistoryEntry


def _document(entries=()) -> HistoryDocument:
    return HistoryDocument(
        customer_id=1,
        customer_name="Budi <Santoso> & Co",
        customer_email="budi@example.com",
        entries=list(entries),
    )


def test_formats_dates_in_configured_zone():
    renderer = ReportLabHistoryRenderer("Asia/Jakarta")

    assert renderer.format_date(datetime(2025, 3, 1, 2, 0, tzinfo=UTC)) == "01 March 2025, 09:00"
    # naive values are read as UTC
    assert renderer.format_date(datetime(2025, 3, 1, 20, 30)) == "02 March 2025, 03:30"


def test_renders_pdf_bytes():
    renderer = ReportLabHistoryRenderer()
    document = _document(
        [
            HistoryEntry(
                destination="Bali",
                start_date=datetime(2025, 3, 1, tzinfo=UTC),
                end_date=datetime(2025, 3, 5, tzinfo=UTC),
                status="COMPLETED",
            )
        ]
    )

    content = renderer.render(document)

    assert content.startswith(b"%PDF")


def test_renders_empty_history():
    content = ReportLabHistoryRenderer().render(_document())

    assert content.startswith(b"%PDF")
