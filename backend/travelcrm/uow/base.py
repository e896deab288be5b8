"""
Abstract Unit of Work contracts.

Services only see these contracts; the SQLAlchemy implementations live in
:mod:`travelcrm.uow.sqlalchemy_uow`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from travelcrm.repositories import (
        CustomerRepository,
        DestinationRepository,
        StaffRepository,
    )


class UnitOfWork(ABC):
    """
    Transactional boundary for one use case.

    Every repository exposed here shares the same session, so a customer and
    the destinations created with it land in one transaction.

    Attributes
    ----------
    customers : CustomerRepository
        Customer aggregates, loaded with their destinations.
    destinations : DestinationRepository
        Trips, filterable per customer.
    staff : StaffRepository
        Authentication principals.
    """

    customers: CustomerRepository
    destinations: DestinationRepository
    staff: StaffRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None:
        """Finish the unit: writers commit on clean exit, any error rolls back."""

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
