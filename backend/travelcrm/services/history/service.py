"""Printable travel history of a single customer."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from travelcrm.models.base import as_utc
from travelcrm.services._shared.base import BaseService, ServiceContext
from travelcrm.services._shared.errors import NotFoundError
from travelcrm.services._shared.ports import (
    HistoryDocument,
    HistoryEntry,
    HistoryRenderer,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HistoryExportOut:
    """Rendered document plus the filename offered to the client."""

    filename: str
    content: bytes
    media_type: str = "application/pdf"


def history_filename(customer_id: int) -> str:
    return f"customer-{customer_id}-destinations-history.pdf"


class HistoryExportService(BaseService):
    """Render a customer's destinations, oldest trip first, through a :class:`HistoryRenderer`."""

    def __init__(self, *, renderer: HistoryRenderer, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.renderer = renderer

    def export(self, customer_id: int) -> HistoryExportOut:
        """
        Build the history document for ``customer_id``.

        :raises NotFoundError: If the customer does not exist.
        """
        with self.ro_uow() as uow:
            customer = uow.customers.get(customer_id)
            if customer is None:
                raise NotFoundError("Customer", customer_id)

            document = HistoryDocument(
                customer_id=customer.id,
                customer_name=customer.name,
                customer_email=customer.email,
                entries=[
                    HistoryEntry(
                        destination=row.destination,
                        start_date=as_utc(row.start_date),
                        end_date=as_utc(row.end_date),
                        status=row.status.value,
                    )
                    for row in uow.destinations.list_for_customer(customer_id)
                ],
            )

        content = self.renderer.render(document)
        logger.info(
            "History exported with %d destination(s)",
            len(document.entries),
            extra={"customer_id": customer_id},
        )
        return HistoryExportOut(filename=history_filename(customer_id), content=content)
