"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or HTTP.
They serve as stable contracts between repositories, domain models, and
application services.

The translation to HTTP responses is handled by ``travelcrm/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name in the message; SQLite reports the
    offending ``table.column`` instead, so callers may pass either form.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        Constraint name (e.g. ``'uq_staff_username'``) or ``table.column``.

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - Raised directly for rejected input or broken business rules; the API
      layer maps the base class to ``400 Bad Request``.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Customer").
    :type entity: str
    :param key: Identifier or search key; omitted from the message when ``None``.
    :type key: str | int | None
    """

    entity: str
    key: str | int | None = None

    def __str__(self) -> str:
        if self.key is None:
            return f"{self.entity} not found"
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "Staff").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class AuthenticationError(ServiceError):
    """Raised when a caller cannot be authenticated."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Malformed, wrongly signed and expired bearer tokens all raise this."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)
