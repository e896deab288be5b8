"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginResultSchema, LoginSchema, RegisterResultSchema, RegisterSchema
from .common import ListQuerySchema, UTCDateTime, build_envelope, split_query
from .customer import (
    CustomerCreateSchema,
    CustomerQuerySchema,
    CustomerSchema,
    CustomerUpdateSchema,
)
from .destination import (
    DestinationCreateSchema,
    DestinationDraftSchema,
    DestinationQuerySchema,
    DestinationSchema,
    DestinationUpdateSchema,
)

__all__ = [
    "LoginSchema",
    "LoginResultSchema",
    "RegisterSchema",
    "RegisterResultSchema",
    "ListQuerySchema",
    "UTCDateTime",
    "build_envelope",
    "split_query",
    "CustomerCreateSchema",
    "CustomerUpdateSchema",
    "CustomerQuerySchema",
    "CustomerSchema",
    "DestinationDraftSchema",
    "DestinationCreateSchema",
    "DestinationUpdateSchema",
    "DestinationQuerySchema",
    "DestinationSchema",
]
