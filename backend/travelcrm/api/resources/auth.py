"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, current_app

from travelcrm.api.deps import auth_service, envelope, load_json, timing
from travelcrm.core.extensions import limiter
from travelcrm.schemas import (
    LoginResultSchema,
    LoginSchema,
    RegisterResultSchema,
    RegisterSchema,
)
from travelcrm.services import LoginIn, RegisterIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

register_schema = RegisterSchema()
login_schema = LoginSchema()
login_result_schema = LoginResultSchema()
register_result_schema = RegisterResultSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


@bp.post("/register")
@timing
def register():
    """Register a staff account; the password is never echoed back."""

    data = load_json(register_schema)
    result = auth_service().register(RegisterIn(**data))
    return envelope("User registered successfully.", register_result_schema.dump(result))


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate credentials and issue a bearer token."""

    data = load_json(login_schema)
    result = auth_service().login(LoginIn(**data))
    return envelope("User logged in successfully.", login_result_schema.dump(result))
