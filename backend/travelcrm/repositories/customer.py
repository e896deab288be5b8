"""Customer repository: filtered, sorted and paginated access to customers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from travelcrm.models.customer import Customer
from travelcrm.repositories.base import BaseRepository


@dataclass(frozen=True, slots=True)
class CustomerFilter:
    """
    Optional predicates for customer listings.

    :param name: Substring of the customer name.
    :param email: Substring of the customer email.
    :param created_from: Inclusive lower bound on ``created_at``.
    :param created_to: Inclusive upper bound on ``created_at``.
    :param updated_from: Inclusive lower bound on ``updated_at``.
    :param updated_to: Inclusive upper bound on ``updated_at``.
    """

    name: str | None = None
    email: str | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None
    updated_from: datetime | None = None
    updated_to: datetime | None = None


class CustomerRepository(BaseRepository[Customer]):
    """Persistence-only repository for :class:`Customer` aggregates.

    Every customer is loaded together with its destinations.
    """

    model = Customer

    # ---------------------------- Whitelists ----------------------------

    def _sortable_fields(self):
        return {
            "id": Customer.id,
            "name": Customer.name,
            "createdAt": Customer.created_at,
            "updatedAt": Customer.updated_at,
        }

    def _filterable_fields(self):
        return {"id": Customer.id, "email": Customer.email}

    def _updatable_fields(self):
        return {"name", "email"}

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        """Load destinations in one extra ``SELECT ... IN`` per page."""
        return stmt.options(selectinload(Customer.destinations))

    # ---------------------------- Filtering ----------------------------

    def _apply_filters(self, stmt: Select[Any], spec: CustomerFilter | None) -> Select[Any]:
        if spec is None:
            return stmt
        if spec.name:
            stmt = stmt.where(Customer.name.contains(spec.name, autoescape=True))
        if spec.email:
            stmt = stmt.where(Customer.email.contains(spec.email, autoescape=True))
        if spec.created_from is not None:
            stmt = stmt.where(Customer.created_at >= spec.created_from)
        if spec.created_to is not None:
            stmt = stmt.where(Customer.created_at <= spec.created_to)
        if spec.updated_from is not None:
            stmt = stmt.where(Customer.updated_at >= spec.updated_from)
        if spec.updated_to is not None:
            stmt = stmt.where(Customer.updated_at <= spec.updated_to)
        return stmt

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> Customer | None:
        """Fetch a customer by normalised email."""
        stmt = self._default_eagerload(
            select(Customer).where(Customer.email == email.strip().lower())
        )
        return self.session.execute(stmt).scalars().first()
