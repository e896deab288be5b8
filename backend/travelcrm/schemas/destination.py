"""Destination resource schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from travelcrm.models.destination import DestinationStatus

from .common import MAX_ID, NON_BLANK, ListQuerySchema, UTCDateTime

DESTINATION_SORT_KEYS = (
    "id",
    "customerId",
    "destination",
    "startDate",
    "endDate",
    "createdAt",
    "updatedAt",
)


def _check_window(data: dict[str, Any]) -> None:
    start, end = data.get("start_date"), data.get("end_date")
    if start is not None and end is not None and end < start:
        raise ValidationError("endDate must be on or after startDate.", field_name="endDate")


class DestinationDraftSchema(Schema):
    """One trip inside a customer creation payload."""

    destination = fields.String(required=True, validate=[validate.Length(min=1, max=200), NON_BLANK])
    start_date = UTCDateTime(required=True, data_key="startDate")
    end_date = UTCDateTime(required=True, data_key="endDate")
    status = fields.Enum(DestinationStatus, load_default=None)

    @validates_schema
    def _validate_window(self, data: dict[str, Any], **_: Any) -> None:
        _check_window(data)


class DestinationCreateSchema(DestinationDraftSchema):
    """Payload for adding a trip to an existing customer."""

    customer_id = fields.Integer(
        required=True, data_key="customerId", validate=validate.Range(min=1, max=MAX_ID)
    )


class DestinationUpdateSchema(Schema):
    """Partial update payload; ``customerId`` is not accepted."""

    destination = fields.String(validate=[validate.Length(min=1, max=200), NON_BLANK])
    start_date = UTCDateTime(data_key="startDate")
    end_date = UTCDateTime(data_key="endDate")
    status = fields.Enum(DestinationStatus)

    @validates_schema
    def _validate_window(self, data: dict[str, Any], **_: Any) -> None:
        _check_window(data)


class DestinationQuerySchema(ListQuerySchema):
    """Supported query parameters when listing destinations."""

    SORT_KEYS = DESTINATION_SORT_KEYS

    name = fields.String(load_default=None, validate=validate.Length(max=200))
    start_date = UTCDateTime(data_key="startDate", load_default=None)
    end_date = UTCDateTime(data_key="endDate", load_default=None)
    status = fields.Enum(DestinationStatus, load_default=None)


class DestinationSchema(Schema):
    """Representation of a destination."""

    id = fields.Integer(required=True)
    customer_id = fields.Integer(required=True, data_key="customerId")
    destination = fields.String(required=True)
    start_date = fields.DateTime(required=True, data_key="startDate")
    end_date = fields.DateTime(required=True, data_key="endDate")
    status = fields.String(required=True)
    created_at = fields.DateTime(required=True, data_key="createdAt")
    updated_at = fields.DateTime(allow_none=True, data_key="updatedAt")
