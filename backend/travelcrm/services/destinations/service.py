"""
DestinationService
==================

Use cases for the trips owned by customers:
- Filtered, sorted and paginated listings (global and per customer)
- Create / partial update / delete
- The "a customer keeps at least one destination" rule
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from travelcrm.models.base import as_utc
from travelcrm.models.destination import Destination, DestinationStatus
from travelcrm.repositories.customer import CustomerRepository
from travelcrm.repositories.destination import DestinationFilter, DestinationRepository
from travelcrm.services._shared.base import BaseService
from travelcrm.services._shared.dto import ListQueryIn, PageMeta, PageOut
from travelcrm.services._shared.errors import NotFoundError, ServiceError

from ._converters import destination_to_out
from .dto import (
    DestinationCreateIn,
    DestinationListIn,
    DestinationOut,
    DestinationUpdateIn,
)

logger = logging.getLogger(__name__)

LAST_DESTINATION_MESSAGE = "Customer must have at least one destination"


def ensure_trip_window(start_date: datetime, end_date: datetime) -> None:
    """
    Reject trips that end before they start.

    :raises ServiceError: When ``end_date < start_date``.
    """
    if as_utc(end_date) < as_utc(start_date):
        raise ServiceError("endDate must be on or after startDate")


class DestinationService(BaseService):
    """Application service for :class:`Destination` records."""

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    def get(self, destination_id: int) -> DestinationOut:
        """
        Retrieve one destination.

        :raises NotFoundError: If it does not exist.
        """
        with self.ro_uow() as uow:
            destination = uow.destinations.get(destination_id)
            if destination is None:
                raise NotFoundError("Destination", destination_id)
            return destination_to_out(destination)

    def list(self, dto: DestinationListIn) -> PageOut[DestinationOut]:
        """Paginate every destination matching the filters."""
        spec = DestinationFilter(
            name=dto.name,
            start_date=dto.start_date,
            end_date=dto.end_date,
            status=dto.status,
        )
        with self.ro_uow(isolation=self.LISTING_ISOLATION) as uow:
            return self._paginate(uow.destinations, dto.query, spec)

    def list_for_customer(self, customer_id: int, dto: DestinationListIn) -> PageOut[DestinationOut]:
        """
        Paginate the destinations of one customer.

        :raises NotFoundError: If the customer does not exist.
        """
        spec = DestinationFilter(
            name=dto.name,
            start_date=dto.start_date,
            end_date=dto.end_date,
            status=dto.status,
            customer_id=customer_id,
        )
        with self.ro_uow(isolation=self.LISTING_ISOLATION) as uow:
            customers: CustomerRepository = uow.customers
            if not customers.exists(id=customer_id):
                raise NotFoundError("Customer", customer_id)
            return self._paginate(uow.destinations, dto.query, spec)

    def _paginate(
        self, repo: DestinationRepository, query: ListQueryIn, spec: DestinationFilter
    ) -> PageOut[DestinationOut]:
        pagination = self.ensure_pagination(
            page=query.page,
            limit=query.limit,
            sort_by=query.sort_by,
            sort_order=query.sort_order,
            allowed=repo.sortable_keys(),
        )
        page = repo.paginate(pagination, spec=spec)
        items = [destination_to_out(row) for row in page.items]
        return PageOut(
            items=items,
            meta=PageMeta(
                page=page.page,
                limit=page.limit,
                total=page.total,
                total_pages=page.total_pages,
            ),
        )

    # --------------------------------------------------------------------- #
    # Commands
    # --------------------------------------------------------------------- #

    def create(self, dto: DestinationCreateIn) -> DestinationOut:
        """
        Add a trip to an existing customer.

        :raises NotFoundError: If ``dto.customer_id`` does not exist.
        :raises ServiceError: If the trip ends before it starts.
        """
        ensure_trip_window(dto.start_date, dto.end_date)

        with self.rw_uow() as uow:
            if not uow.customers.exists(id=dto.customer_id):
                raise NotFoundError("Customer", dto.customer_id)

            destination = uow.destinations.add(
                Destination(
                    customer_id=dto.customer_id,
                    destination=dto.destination,
                    start_date=dto.start_date,
                    end_date=dto.end_date,
                    status=dto.status or DestinationStatus.PLANNED,
                )
            )
            out = destination_to_out(destination)

        logger.info(
            "Destination created",
            extra={"destination_id": out.id, "customer_id": out.customer_id},
        )
        return out

    def update(self, destination_id: int, dto: DestinationUpdateIn) -> DestinationOut:
        """
        Apply a partial update; ``updated_at`` is stamped even when nothing changed.

        :raises NotFoundError: If the destination does not exist.
        :raises ServiceError: If the merged dates end before they start.
        """
        with self.rw_uow() as uow:
            repo: DestinationRepository = uow.destinations
            destination = repo.get_for_update(destination_id)
            if destination is None:
                raise NotFoundError("Destination", destination_id)

            updates: dict[str, Any] = {
                k: v
                for k, v in {
                    "destination": dto.destination,
                    "start_date": dto.start_date,
                    "end_date": dto.end_date,
                    "status": dto.status,
                }.items()
                if v is not None
            }
            ensure_trip_window(
                updates.get("start_date", destination.start_date),
                updates.get("end_date", destination.end_date),
            )

            repo.update(destination, **updates)
            out = destination_to_out(destination)

        logger.info("Destination updated", extra={"destination_id": out.id})
        return out

    def delete(self, destination_id: int) -> DestinationOut:
        """
        Delete a destination unless it is its customer's last one.

        The owning customer row is locked before counting so two concurrent
        deletes cannot both pass the check on databases honouring ``FOR UPDATE``.

        :raises NotFoundError: If the destination does not exist.
        :raises ServiceError: If it is the customer's only destination.
        """
        with self.rw_uow() as uow:
            repo: DestinationRepository = uow.destinations
            destination = repo.get(destination_id)
            if destination is None:
                raise NotFoundError("Destination", destination_id)

            uow.customers.get_for_update(destination.customer_id)
            if repo.count_for_customer(destination.customer_id) <= 1:
                raise ServiceError(LAST_DESTINATION_MESSAGE)

            out = destination_to_out(destination)
            repo.delete(destination)

        logger.info(
            "Destination deleted",
            extra={"destination_id": out.id, "customer_id": out.customer_id},
        )
        return out
