"""JSON error responses.

Failures use the same envelope as successful responses, with ``data`` set to
``null`` and a few extra keys::

    {"code": 404, "message": "Customer not found: 7", "data": null,
     "error": "not_found", "request_id": "..."}

Validation failures also carry ``errors``, a mapping of field name to messages.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from travelcrm.core.logger import ensure_request_id
from travelcrm.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
)

log = logging.getLogger(__name__)

ERROR_CODES: dict[int, str] = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    413: "payload_too_large",
    415: "unsupported_media_type",
    429: "too_many_requests",
    500: "internal_server_error",
    503: "service_unavailable",
}


def error_body(
    status: int, message: str, *, error: str | None = None, errors: Any = None
) -> dict[str, Any]:
    """Envelope for a failed request; ``error`` defaults from ``status``."""
    body: dict[str, Any] = {
        "code": int(status),
        "message": message,
        "data": None,
        "error": error or ERROR_CODES.get(int(status), "error"),
    }
    if errors:
        body["errors"] = errors
    body["request_id"] = ensure_request_id()
    return body


def _respond(body: dict[str, Any]) -> Response:
    response = jsonify(body)
    response.status_code = body["code"]
    return response


class APIError(Exception):
    """An error raised by the HTTP layer itself and rendered as-is."""

    status_code: int = HTTPStatus.BAD_REQUEST
    default_message = "Bad request"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return ERROR_CODES.get(int(self.status_code), "error")

    def to_envelope(self) -> dict[str, Any]:
        return error_body(self.status_code, self.message, errors=self.details or None)


class BadRequest(APIError):
    pass


class Unauthorized(APIError):
    status_code = HTTPStatus.UNAUTHORIZED
    default_message = "Unauthorized"


class NotFound(APIError):
    status_code = HTTPStatus.NOT_FOUND
    default_message = "Resource not found"


class Conflict(APIError):
    status_code = HTTPStatus.CONFLICT
    default_message = "Conflict"


# Most specific first: InvalidTokenError is an AuthenticationError.
_SERVICE_ERRORS: tuple[tuple[type[ServiceError], type[APIError]], ...] = (
    (NotFoundError, NotFound),
    (ConflictError, Conflict),
    (AuthenticationError, Unauthorized),
)


def translate_service_error(exc: ServiceError) -> APIError:
    """Pick the HTTP error for a service failure; plain ``ServiceError`` is a 400."""
    for service_type, api_type in _SERVICE_ERRORS:
        if isinstance(exc, service_type):
            return api_type(str(exc))
    return BadRequest(str(exc))


def _log_failure(kind: str, body: dict[str, Any], **kwargs: Any) -> None:
    emit = log.error if body["code"] >= 500 else log.warning
    emit(
        "%s: error=%s status=%s message=%s request_id=%s",
        kind,
        body["error"],
        body["code"],
        body["message"],
        body["request_id"],
        **kwargs,
    )


def init_app(app: Flask) -> None:
    """Register the JSON error handlers on ``app``."""

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        body = err.to_envelope()
        _log_failure("APIError", body)
        return _respond(body)

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        return handle_api_error(translate_service_error(err))

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        messages = err.messages if isinstance(err.messages, dict) else {"_schema": err.messages}
        body = error_body(
            HTTPStatus.BAD_REQUEST, "Validation failed", error="validation_error", errors=messages
        )
        _log_failure("ValidationError", body)
        return _respond(body)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or err.name).strip()
        body = error_body(status, message)
        _log_failure("HTTPException", body)
        return _respond(body)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Raw driver messages stay in the log.
        body = error_body(HTTPStatus.CONFLICT, "Resource conflict")
        _log_failure("IntegrityError", body, exc_info=True)
        return _respond(body)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        body = error_body(HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error")
        _log_failure("Unhandled exception", body, exc_info=True)
        return _respond(body)
