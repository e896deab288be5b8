"""
DTOs for the destination use cases.

Dates are timezone-aware UTC datetimes on both sides of the service boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from travelcrm.models.destination import DestinationStatus
from travelcrm.services._shared.dto import ListQueryIn, PageOut

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class DestinationDraftIn:
    """
    One trip submitted without an owner yet (customer creation payload).

    :param destination: Trip label, e.g. ``"Bali"``.
    :type destination: str
    :param start_date: Departure.
    :type start_date: datetime
    :param end_date: Return; must not precede ``start_date``.
    :type end_date: datetime
    :param status: Lifecycle state, ``PLANNED`` when omitted.
    :type status: DestinationStatus | None
    """

    destination: str
    start_date: datetime
    end_date: datetime
    status: DestinationStatus | None = None


@dataclass(frozen=True, slots=True)
class DestinationCreateIn:
    """Input DTO for adding a trip to an existing customer."""

    customer_id: int
    destination: str
    start_date: datetime
    end_date: datetime
    status: DestinationStatus | None = None


@dataclass(frozen=True, slots=True)
class DestinationUpdateIn:
    """
    Partial update; ``None`` means "keep the stored value".

    ``customer_id`` is not part of this contract: ownership never changes.
    """

    destination: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: DestinationStatus | None = None


@dataclass(frozen=True, slots=True)
class DestinationListIn:
    """
    Listing filters plus pagination.

    :param name: Substring of the label.
    :param start_date: Keep trips starting on or after this instant.
    :param end_date: Keep trips ending on or before this instant.
    :param status: Exact lifecycle state.
    """

    query: ListQueryIn = field(default_factory=ListQueryIn)
    name: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: DestinationStatus | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class DestinationOut:
    id: int
    customer_id: int
    destination: str
    start_date: datetime
    end_date: datetime
    status: str
    created_at: datetime
    updated_at: datetime | None


DestinationPageOut = PageOut[DestinationOut]
