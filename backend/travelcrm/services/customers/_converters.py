from __future__ import annotations

from operator import attrgetter

from travelcrm.models.base import as_utc
from travelcrm.models.customer import Customer
from travelcrm.services.destinations._converters import destination_to_out

from .dto import CustomerOut


def customer_to_out(row: Customer) -> CustomerOut:
    destinations = sorted(row.destinations, key=attrgetter("id"))
    return CustomerOut(
        id=row.id,
        name=row.name,
        email=row.email,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at) if row.updated_at is not None else None,
        destinations=[destination_to_out(d) for d in destinations],
    )
