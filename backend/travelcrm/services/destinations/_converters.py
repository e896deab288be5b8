from __future__ import annotations

from travelcrm.models.base import as_utc
from travelcrm.models.destination import Destination

from .dto import DestinationOut


def destination_to_out(row: Destination) -> DestinationOut:
    return DestinationOut(
        id=row.id,
        customer_id=row.customer_id,
        destination=row.destination,
        start_date=as_utc(row.start_date),
        end_date=as_utc(row.end_date),
        status=row.status.value,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at) if row.updated_at is not None else None,
    )
