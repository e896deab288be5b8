"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`travelcrm.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``travelcrm.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Shared DTOs (from ``travelcrm.services._shared.dto``)
    * :class:`ListQueryIn`
    * :class:`PageMeta`
    * :class:`PageOut`

- Auth service (from ``travelcrm.services.auth``)
    * :class:`AuthService`
    * DTOs: :class:`LoginIn`, :class:`LoginOut`, :class:`RegisterIn`, :class:`RegisterOut`

- Customer service (from ``travelcrm.services.customers``)
    * :class:`CustomerService`
    * DTOs: :class:`CustomerCreateIn`, :class:`CustomerUpdateIn`,
      :class:`CustomerListIn`, :class:`CustomerOut`

- Destination service (from ``travelcrm.services.destinations``)
    * :class:`DestinationService`
    * DTOs: :class:`DestinationDraftIn`, :class:`DestinationCreateIn`,
      :class:`DestinationUpdateIn`, :class:`DestinationListIn`, :class:`DestinationOut`

- History export (from ``travelcrm.services.history``)
    * :class:`HistoryExportService`, :class:`HistoryExportOut`
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService, ServiceContext

# Shared DTOs (compose these in endpoint-specific DTOs)
from ._shared.dto import ListQueryIn, PageMeta, PageOut

# Auth service + DTOs
from .auth.dto import LoginIn, LoginOut, RegisterIn, RegisterOut
from .auth.service import AuthService

# Customer service + DTOs
from .customers.dto import CustomerCreateIn, CustomerListIn, CustomerOut, CustomerUpdateIn
from .customers.service import CustomerService

# Destination service + DTOs
from .destinations.dto import (
    DestinationCreateIn,
    DestinationDraftIn,
    DestinationListIn,
    DestinationOut,
    DestinationUpdateIn,
)
from .destinations.service import DestinationService

# History export
from .history.service import HistoryExportOut, HistoryExportService

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Shared DTOs
    "ListQueryIn",
    "PageMeta",
    "PageOut",
    # Auth
    "AuthService",
    "LoginIn",
    "LoginOut",
    "RegisterIn",
    "RegisterOut",
    # Customers
    "CustomerService",
    "CustomerCreateIn",
    "CustomerUpdateIn",
    "CustomerListIn",
    "CustomerOut",
    # Destinations
    "DestinationService",
    "DestinationDraftIn",
    "DestinationCreateIn",
    "DestinationUpdateIn",
    "DestinationListIn",
    "DestinationOut",
    # History
    "HistoryExportService",
    "HistoryExportOut",
]
