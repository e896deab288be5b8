"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from travelcrm.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    paginate_select,
)
from travelcrm.repositories.customer import CustomerFilter, CustomerRepository
from travelcrm.repositories.destination import DestinationFilter, DestinationRepository
from travelcrm.repositories.staff import StaffRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "Pagination",
    "paginate_select",
    # Domain
    "CustomerFilter",
    "CustomerRepository",
    "DestinationFilter",
    "DestinationRepository",
    "StaffRepository",
]
