# travelcrm/services/auth/service.py
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from travelcrm.models.staff import Staff
from travelcrm.repositories.staff import StaffRepository
from travelcrm.services._shared.base import BaseService, ServiceContext
from travelcrm.services._shared.errors import (
    ConflictError,
    NotFoundError,
    ServiceError,
    violates,
)
from travelcrm.services._shared.ports import PasswordHasher, TokenProvider
from travelcrm.services.auth.dto import LoginIn, LoginOut, RegisterIn, RegisterOut

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Staff authentication service (login / register).

    Tokens are issued through a pluggable :class:`TokenProvider` and passwords
    are checked through a :class:`PasswordHasher`, so the service never
    depends on Flask or on a hashing library directly.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        password_hasher: PasswordHasher,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_provider: Adapter for issuing bearer tokens.
        :param password_hasher: Adapter for hashing and verifying passwords.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_provider
        self.hasher = password_hasher

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Verify credentials and issue a bearer token.

        :param dto: Login input.
        :returns: Principal data plus the signed token.
        :raises NotFoundError: If no staff member has ``dto.username``.
        :raises ServiceError: If the password does not match.
        """
        with self.ro_uow() as uow:
            repo: StaffRepository = uow.staff
            staff = repo.get_by_username(dto.username)
            if staff is None:
                raise NotFoundError("User")
            if not self.hasher.verify(dto.password, staff.password_hash):
                log.warning("Login rejected", extra={"staff_id": staff.id})
                raise ServiceError("Invalid password")

            claims: dict[str, Any] = {
                "id": staff.id,
                "username": staff.username,
                "email": staff.email,
                "role": staff.role.value,
            }

        token = self.tokens.issue(claims)
        log.info("Staff logged in", extra={"staff_id": claims["id"]})
        return LoginOut(token=token, **claims)

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> RegisterOut:
        """
        Create a staff account with a hashed password.

        :param dto: Registration input.
        :returns: Public view of the new account.
        :raises ConflictError: If the username or email is already taken.
        """
        with self.rw_uow() as uow:
            repo: StaffRepository = uow.staff

            if repo.exists_by_username(dto.username):
                raise ConflictError("Staff", "username already in use")
            if repo.exists_by_email(dto.email):
                raise ConflictError("Staff", "email already in use")

            try:
                staff = repo.add(
                    Staff(
                        name=dto.name,
                        username=dto.username,
                        email=dto.email,
                        password_hash=self.hasher.hash(dto.password),
                    )
                )
            except IntegrityError as exc:
                if violates(exc, "uq_staff_username") or violates(exc, "staff.username"):
                    raise ConflictError("Staff", "username already in use") from exc
                if violates(exc, "uq_staff_email") or violates(exc, "staff.email"):
                    raise ConflictError("Staff", "email already in use") from exc
                raise

            out = RegisterOut(username=staff.username, name=staff.name, email=staff.email)
            log.info("Staff registered", extra={"staff_id": staff.id})

        return out
