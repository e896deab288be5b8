from datetime import UTC, datetime

import pytest
from tests.factories.customer import CustomerFactory
from tests.factories.destination import DestinationFactory
from travelcrm.services._shared.errors import NotFoundError
from travelcrm.services._shared.ports import HistoryDocument
from travelcrm.services.history.service import HistoryExportService, history_filename


class RecordingRenderer:
    """Renderer double keeping the last document it was given."""

    def __init__(self) -> None:
        self.documents: list[HistoryDocument] = []

    def render(self, document: HistoryDocument) -> bytes:
        self.documents.append(document)
        return b"%PDF-fake"


@pytest.fixture()
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture()
def service(renderer) -> HistoryExportService:
    return HistoryExportService(renderer=renderer)


def test_history_filename():
    assert history_filename(7) == "customer-7-destinations-history.pdf"


def test_export_orders_trips_by_start_date(service, renderer):
    customer = CustomerFactory(name="Rahmat", email="rahmat@example.com")
    DestinationFactory(
        customer=customer,
        destination="Jakarta",
        start_date=datetime(2025, 9, 1, tzinfo=UTC),
        end_date=datetime(2025, 9, 3, tzinfo=UTC),
    )
    DestinationFactory(
        customer=customer,
        destination="Aceh",
        start_date=datetime(2025, 1, 5, tzinfo=UTC),
        end_date=datetime(2025, 1, 12, tzinfo=UTC),
    )

    export = service.export(customer.id)

    assert export.content == b"%PDF-fake"
    assert export.media_type == "application/pdf"
    assert export.filename == f"customer-{customer.id}-destinations-history.pdf"

    document = renderer.documents[-1]
    assert document.customer_name == "Rahmat"
    assert document.customer_email == "rahmat@example.com"
    assert [e.destination for e in document.entries] == ["Aceh", "Jakarta"]
    assert document.entries[0].start_date == datetime(2025, 1, 5, tzinfo=UTC)
    assert document.entries[0].status == "PLANNED"


def test_export_missing_customer(service, renderer):
    with pytest.raises(NotFoundError):
        service.export(31337)

    assert renderer.documents == []
