"""
CustomerService
===============

Aggregate service for customers and the trips they own:
- Filtered, sorted and paginated listings with destinations attached
- Atomic creation of a customer together with its first destinations
- Partial updates and cascading deletes
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from travelcrm.models.customer import Customer
from travelcrm.models.destination import Destination, DestinationStatus
from travelcrm.repositories.customer import CustomerFilter, CustomerRepository
from travelcrm.services._shared.base import BaseService
from travelcrm.services._shared.dto import PageMeta, PageOut
from travelcrm.services._shared.errors import (
    ConflictError,
    NotFoundError,
    ServiceError,
    violates,
)
from travelcrm.services.destinations.service import ensure_trip_window

from ._converters import customer_to_out
from .dto import CustomerCreateIn, CustomerListIn, CustomerOut, CustomerUpdateIn

logger = logging.getLogger(__name__)


def _email_conflict(exc: IntegrityError) -> bool:
    return violates(exc, "uq_customers_email") or violates(exc, "customers.email")


class CustomerService(BaseService):
    """
    Application service for the ``Customer`` aggregate.

    Responsibilities
    ----------------
    - List and fetch customers with their destinations.
    - Create a customer and its destinations in one unit of work.
    - Keep customer emails unique.
    """

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    def get(self, customer_id: int) -> CustomerOut:
        """
        Retrieve one customer aggregate.

        :param customer_id: Customer primary key.
        :type customer_id: int
        :returns: Customer with its destinations.
        :rtype: CustomerOut
        :raises NotFoundError: If the customer does not exist.
        """
        with self.ro_uow() as uow:
            customer = uow.customers.get(customer_id)
            if customer is None:
                raise NotFoundError("Customer", customer_id)
            return customer_to_out(customer)

    def list(self, dto: CustomerListIn) -> PageOut[CustomerOut]:
        """
        Paginate customers matching the filters.

        Page and count are read inside one read-only transaction.

        :param dto: Filters plus pagination.
        :type dto: CustomerListIn
        :returns: Page of customers.
        :rtype: PageOut[CustomerOut]
        :raises ServiceError: On an unknown ``sortBy``/``sortOrder``.
        """
        spec = CustomerFilter(
            name=dto.name,
            email=dto.email,
            created_from=dto.created_from,
            created_to=dto.created_to,
            updated_from=dto.updated_from,
            updated_to=dto.updated_to,
        )
        with self.ro_uow(isolation=self.LISTING_ISOLATION) as uow:
            repo: CustomerRepository = uow.customers
            pagination = self.ensure_pagination(
                page=dto.query.page,
                limit=dto.query.limit,
                sort_by=dto.query.sort_by,
                sort_order=dto.query.sort_order,
                allowed=repo.sortable_keys(),
            )
            page = repo.paginate(pagination, spec=spec)
            return PageOut(
                items=[customer_to_out(row) for row in page.items],
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

    def create(self, dto: CustomerCreateIn) -> CustomerOut:
        """
        Create a customer together with its destinations.

        Either every row is persisted or none is.

        :param dto: Customer plus at least one destination.
        :type dto: CustomerCreateIn
        :returns: The created aggregate.
        :rtype: CustomerOut
        :raises ServiceError: If no destination is given or a trip ends before it starts.
        :raises ConflictError: If the email is already in use.
        """
        if not dto.destinations:
            raise ServiceError("Customer must have at least one destination")
        for draft in dto.destinations:
            ensure_trip_window(draft.start_date, draft.end_date)

        with self.rw_uow() as uow:
            repo: CustomerRepository = uow.customers
            if repo.exists(email=dto.email.strip().lower()):
                raise ConflictError("Customer", "email already in use")

            customer = Customer(
                name=dto.name,
                email=dto.email,
                destinations=[
                    Destination(
                        destination=draft.destination,
                        start_date=draft.start_date,
                        end_date=draft.end_date,
                        status=draft.status or DestinationStatus.PLANNED,
                    )
                    for draft in dto.destinations
                ],
            )
            try:
                repo.add(customer)
            except IntegrityError as exc:
                if _email_conflict(exc):
                    raise ConflictError("Customer", "email already in use") from exc
                raise

            out = customer_to_out(customer)

        logger.info("Customer created", extra={"customer_id": out.id})
        return out

    def update(self, customer_id: int, dto: CustomerUpdateIn) -> CustomerOut:
        """
        Apply a partial update; ``updated_at`` is always stamped.

        :param customer_id: Customer primary key.
        :type customer_id: int
        :param dto: Fields to change.
        :type dto: CustomerUpdateIn
        :returns: The updated aggregate.
        :rtype: CustomerOut
        :raises NotFoundError: If the customer does not exist.
        :raises ConflictError: If the new email belongs to another customer.
        """
        with self.rw_uow() as uow:
            repo: CustomerRepository = uow.customers
            customer = repo.get_for_update(customer_id)
            if customer is None:
                raise NotFoundError("Customer", customer_id)

            updates: dict[str, Any] = {
                k: v for k, v in {"name": dto.name, "email": dto.email}.items() if v is not None
            }
            if "email" in updates:
                other = repo.get_by_email(updates["email"])
                if other is not None and other.id != customer.id:
                    raise ConflictError("Customer", "email already in use")

            try:
                repo.update(customer, **updates)
            except IntegrityError as exc:
                if _email_conflict(exc):
                    raise ConflictError("Customer", "email already in use") from exc
                raise

            out = customer_to_out(customer)

        logger.info("Customer updated", extra={"customer_id": out.id})
        return out

    def delete(self, customer_id: int) -> CustomerOut:
        """
        Delete a customer and, by cascade, all of its destinations.

        :param customer_id: Customer primary key.
        :type customer_id: int
        :returns: The aggregate as it was before deletion.
        :rtype: CustomerOut
        :raises NotFoundError: If the customer does not exist.
        """
        with self.rw_uow() as uow:
            repo: CustomerRepository = uow.customers
            customer = repo.get_for_update(customer_id)
            if customer is None:
                raise NotFoundError("Customer", customer_id)

            out = customer_to_out(customer)
            repo.delete(customer)

        logger.info(
            "Customer deleted with %d destination(s)",
            len(out.destinations),
            extra={"customer_id": out.id},
        )
        return out
