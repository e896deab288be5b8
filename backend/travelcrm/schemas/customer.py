"""Customer resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from .common import NON_BLANK, ListQuerySchema, UTCDateTime
from .destination import DestinationDraftSchema, DestinationSchema

CUSTOMER_SORT_KEYS = ("id", "name", "createdAt", "updatedAt")


class CustomerCreateSchema(Schema):
    """Payload for creating a customer together with its first trips."""

    name = fields.String(required=True, validate=[validate.Length(min=1, max=120), NON_BLANK])
    email = fields.Email(required=True, validate=validate.Length(max=254))
    destinations = fields.List(
        fields.Nested(DestinationDraftSchema),
        required=True,
        validate=validate.Length(min=1, error="At least one destination is required."),
    )


class CustomerUpdateSchema(Schema):
    """Partial update payload."""

    name = fields.String(validate=[validate.Length(min=1, max=120), NON_BLANK])
    email = fields.Email(validate=validate.Length(max=254))


class CustomerQuerySchema(ListQuerySchema):
    """Supported query parameters when listing customers."""

    SORT_KEYS = CUSTOMER_SORT_KEYS

    name = fields.String(load_default=None, validate=validate.Length(max=120))
    email = fields.String(load_default=None, validate=validate.Length(max=254))
    created_from = UTCDateTime(data_key="createdFrom", load_default=None)
    created_to = UTCDateTime(data_key="createdTo", load_default=None)
    updated_from = UTCDateTime(data_key="updatedFrom", load_default=None)
    updated_to = UTCDateTime(data_key="updatedTo", load_default=None)


class CustomerSchema(Schema):
    """Representation of the customer aggregate."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    email = fields.Email(required=True)
    created_at = fields.DateTime(required=True, data_key="createdAt")
    updated_at = fields.DateTime(allow_none=True, data_key="updatedAt")
    destinations = fields.List(fields.Nested(DestinationSchema))
