# travelcrm/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param username: Staff login handle.
    :type username: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    username: str
    password: str


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for staff registration.

    :param name: Full name.
    :type name: str
    :param username: Login handle (unique).
    :type username: str
    :param email: Contact email (unique).
    :type email: str
    :param password: Raw password, hashed before it is stored.
    :type password: str
    """

    name: str
    username: str
    email: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO returned after a successful login.

    :param token: Signed bearer token carrying ``id``, ``username``, ``email``
        and ``role``.
    :type token: str
    """

    id: int
    username: str
    email: str
    role: str
    token: str


@dataclass(frozen=True, slots=True)
class RegisterOut:
    """Public view of a freshly registered staff member."""

    username: str
    name: str
    email: str
