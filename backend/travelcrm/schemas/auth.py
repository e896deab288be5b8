"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from .common import NON_BLANK, PASSWORD_LENGTH


class RegisterSchema(Schema):
    """Input payload for staff registration."""

    name = fields.String(required=True, validate=[validate.Length(min=1, max=120), NON_BLANK])
    username = fields.String(required=True, validate=[validate.Length(min=1, max=50), NON_BLANK])
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=PASSWORD_LENGTH)


class LoginSchema(Schema):
    """Input payload for authenticating a staff member."""

    username = fields.String(required=True, validate=[validate.Length(min=1, max=50), NON_BLANK])
    password = fields.String(required=True, validate=PASSWORD_LENGTH)


class LoginResultSchema(Schema):
    """Principal data returned with the bearer token."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.Email(required=True)
    role = fields.String(required=True)
    token = fields.String(required=True)


class RegisterResultSchema(Schema):
    """Public view of a registered staff member; never carries the password."""

    username = fields.String(required=True)
    name = fields.String(required=True)
    email = fields.Email(required=True)
