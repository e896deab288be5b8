"""Destination repository scoped by customer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import Select, func, select

from travelcrm.models.destination import Destination, DestinationStatus
from travelcrm.repositories.base import BaseRepository


@dataclass(frozen=True, slots=True)
class DestinationFilter:
    """
    Optional predicates for destination listings.

    ``start_date`` and ``end_date`` are independent bounds, not a range pair:
    the first keeps trips starting on or after it, the second keeps trips
    ending on or before it.

    :param name: Substring of the destination label.
    :param start_date: Lower bound on ``start_date``.
    :param end_date: Upper bound on ``end_date``.
    :param status: Exact status.
    :param customer_id: Restrict to one customer's trips.
    """

    name: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: DestinationStatus | None = None
    customer_id: int | None = None


class DestinationRepository(BaseRepository[Destination]):
    """Persistence-only repository for :class:`Destination`."""

    model = Destination

    # ---------------------------- Whitelists ----------------------------

    def _sortable_fields(self):
        return {
            "id": Destination.id,
            "customerId": Destination.customer_id,
            "destination": Destination.destination,
            "startDate": Destination.start_date,
            "endDate": Destination.end_date,
            "createdAt": Destination.created_at,
            "updatedAt": Destination.updated_at,
        }

    def _filterable_fields(self):
        return {
            "id": Destination.id,
            "customer_id": Destination.customer_id,
            "status": Destination.status,
        }

    def _updatable_fields(self):
        """``customer_id`` is deliberately absent: ownership never changes."""
        return {"destination", "start_date", "end_date", "status"}

    # ---------------------------- Filtering ----------------------------

    def _apply_filters(self, stmt: Select[Any], spec: DestinationFilter | None) -> Select[Any]:
        if spec is None:
            return stmt
        if spec.customer_id is not None:
            stmt = stmt.where(Destination.customer_id == spec.customer_id)
        if spec.name:
            stmt = stmt.where(Destination.destination.contains(spec.name, autoescape=True))
        if spec.start_date is not None:
            stmt = stmt.where(Destination.start_date >= spec.start_date)
        if spec.end_date is not None:
            stmt = stmt.where(Destination.end_date <= spec.end_date)
        if spec.status is not None:
            stmt = stmt.where(Destination.status == spec.status)
        return stmt

    # ---------------------------- Customer scope ----------------------------

    def count_for_customer(self, customer_id: int) -> int:
        """Return how many destinations ``customer_id`` currently owns."""
        stmt = select(func.count(Destination.id)).where(Destination.customer_id == customer_id)
        return int(self.session.execute(stmt).scalar_one())

    def list_for_customer(self, customer_id: int) -> list[Destination]:
        """Return every destination of ``customer_id`` in travel order."""
        return self.list(
            spec=DestinationFilter(customer_id=customer_id),
            sort_by="startDate",
            sort_order="asc",
        )
