"""
DTOs for the customer use cases.

A customer is always returned together with its destinations.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from travelcrm.services._shared.dto import ListQueryIn
from travelcrm.services.destinations.dto import DestinationDraftIn, DestinationOut

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class CustomerCreateIn:
    """
    Input DTO for creating a customer together with its trips.

    :param name: Display name.
    :type name: str
    :param email: Contact email (unique).
    :type email: str
    :param destinations: At least one trip; all are persisted atomically.
    :type destinations: Sequence[DestinationDraftIn]
    """

    name: str
    email: str
    destinations: Sequence[DestinationDraftIn]


@dataclass(frozen=True, slots=True)
class CustomerUpdateIn:
    """Partial update; ``None`` means "keep the stored value"."""

    name: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class CustomerListIn:
    """
    Listing filters plus pagination.

    Every bound is inclusive and optional.
    """

    query: ListQueryIn = field(default_factory=ListQueryIn)
    name: str | None = None
    email: str | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None
    updated_from: datetime | None = None
    updated_to: datetime | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class CustomerOut:
    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime | None
    destinations: Sequence[DestinationOut] = ()
