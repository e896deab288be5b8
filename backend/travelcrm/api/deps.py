"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from travelcrm.core.errors import BadRequest, Unauthorized
from travelcrm.core.logger import ensure_request_id
from travelcrm.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from travelcrm.infra.pdf.history_renderer import ReportLabHistoryRenderer
from travelcrm.infra.security.password_hasher import WerkzeugPasswordHasher
from travelcrm.schemas.common import MAX_ID, ListQuerySchema, build_envelope, split_query
from travelcrm.services import (
    AuthService,
    CustomerService,
    DestinationService,
    HistoryExportService,
    ListQueryIn,
    ServiceContext,
)
from travelcrm.services._shared.errors import InvalidTokenError
from travelcrm.services._shared.ports import TokenProvider

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True, slots=True)
class Principal:
    """Identity claims carried by a verified bearer token."""

    id: int
    username: str
    email: str
    role: str


def _bearer_token() -> str:
    """Return the raw token from the configured ``Authorization: Bearer`` header."""

    header = request.headers.get(current_app.config.get("JWT_HEADER_NAME", "Authorization"), "")
    scheme, _, token = header.strip().partition(" ")
    if scheme != current_app.config.get("JWT_HEADER_TYPE", "Bearer") or not token.strip():
        raise Unauthorized()
    return token.strip()


def require_auth(func: F) -> F:
    """Ensure the request carries a valid JWT access token.

    The token is checked by :func:`token_provider`; missing, malformed, wrongly
    signed or expired tokens all end as a 401 envelope.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            claims = token_provider().verify(_bearer_token())
        except InvalidTokenError as exc:
            raise Unauthorized() from exc
        try:
            g.principal = Principal(
                id=int(claims["id"]),
                username=str(claims["username"]),
                email=str(claims["email"]),
                role=str(claims["role"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise Unauthorized() from exc
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_principal() -> Principal:
    """Return the principal stored by :func:`require_auth`."""

    principal = g.get("principal")
    if principal is None:
        raise Unauthorized()
    return principal


def service_context() -> ServiceContext:
    """Request-scoped context handed to services."""

    principal = g.get("principal")
    return ServiceContext(
        actor_id=principal.id if principal is not None else None,
        request_id=ensure_request_id(),
    )


def parse_id(raw: str, *, name: str = "id") -> int:
    """Parse a path identifier, accepting integers from 1 to ``MAX_ID``."""

    value = raw.strip()
    if not (value.isascii() and value.isdigit()) or not 1 <= int(value) <= MAX_ID:
        raise BadRequest(f"Invalid {name}: must be a positive integer")
    return int(value)


def parse_list_query(schema_cls: type[ListQuerySchema]) -> tuple[ListQueryIn, dict[str, Any]]:
    """Load ``request.args`` with ``schema_cls`` and split off the pagination part."""

    schema = schema_cls(
        default_limit=current_app.config.get("DEFAULT_PAGE_LIMIT", 5),
        max_limit=current_app.config.get("MAX_PAGE_LIMIT", 100),
    )
    pagination, filters = split_query(schema.load(request.args))
    return ListQueryIn(**pagination), filters


def load_json(schema: Any) -> Any:
    """Validate the JSON body with ``schema``; a missing body counts as ``{}``."""

    return schema.load(request.get_json(silent=True) or {})


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def envelope(message: str, data: Any, *, status: int = 200, **page: Any) -> Response:
    """Wrap ``data`` in the ``{code, message, data}`` envelope."""

    return json_response(build_envelope(code=status, message=message, data=data, **page), status=status)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# ------------------------------ Collaborators ------------------------------


def token_provider() -> TokenProvider:
    return JWTTokenProvider()


def auth_service() -> AuthService:
    return AuthService(
        token_provider=token_provider(),
        password_hasher=WerkzeugPasswordHasher(),
        ctx=service_context(),
    )


def customer_service() -> CustomerService:
    return CustomerService(ctx=service_context())


def destination_service() -> DestinationService:
    return DestinationService(ctx=service_context())


def history_service() -> HistoryExportService:
    renderer = ReportLabHistoryRenderer(current_app.config.get("HISTORY_TIMEZONE", "Asia/Jakarta"))
    return HistoryExportService(renderer=renderer, ctx=service_context())
