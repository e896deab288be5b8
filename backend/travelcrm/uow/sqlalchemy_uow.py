"""
Units of work over the Flask-SQLAlchemy scoped session.
"""

from __future__ import annotations

import logging
from contextlib import suppress
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction

from travelcrm.core.extensions import db
from travelcrm.repositories import (
    CustomerRepository,
    DestinationRepository,
    StaffRepository,
)
from travelcrm.uow.base import UnitOfWork

log = logging.getLogger(__name__)

ISOLATION_LEVELS = frozenset(
    {"READ UNCOMMITTED", "READ COMMITTED", "REPEATABLE READ", "SERIALIZABLE"}
)

# First keyword of statements the read-only unit refuses to send
_WRITE_KEYWORDS = frozenset(
    {
        "insert",
        "update",
        "delete",
        "merge",
        "replace",
        "create",
        "alter",
        "drop",
        "truncate",
        "grant",
        "revoke",
    }
)


class _Repositories:
    """Customer, destination and staff repositories bound to one session."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.customers = CustomerRepository(session=session)
        self.destinations = DestinationRepository(session=session)
        self.staff = StaffRepository(session=session)


class SQLAlchemyUnitOfWork(_Repositories, UnitOfWork):
    """
    Read-write unit used by every mutation.

    A clean exit commits; an exception, or a failing commit, rolls back so a
    customer created with its first destinations is stored whole or not at all.
    """

    def __init__(self) -> None:
        super().__init__(db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(_Repositories, UnitOfWork):
    """
    Unit for listings and lookups: one transaction, no writes, always rolled back.

    Holding a single transaction open is what keeps a page and its ``COUNT``
    consistent. On PostgreSQL and MySQL the transaction is also declared
    ``READ ONLY`` with the requested isolation level. SQLite has no
    ``SET TRANSACTION``, so there only the session and cursor guards apply.

    :param isolation_level: e.g. ``"READ COMMITTED"`` or ``"REPEATABLE READ"``;
        ``None`` keeps the connection default.
    :param enforce_db_readonly: issue ``SET TRANSACTION READ ONLY`` where supported.
    """

    def __init__(
        self,
        *,
        isolation_level: str | None = "READ COMMITTED",
        enforce_db_readonly: bool = True,
    ) -> None:
        super().__init__(db.session)
        self.isolation_level = isolation_level
        self.enforce_db_readonly = enforce_db_readonly
        self._owned: SessionTransaction | None = None
        self._guards: list[tuple[Any, str, Any]] = []

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        try:
            self._owned = self.session.begin()
        except InvalidRequestError:
            # Already inside a transaction (autobegin or an enclosing unit): join it.
            self._owned = None

        connection = self.session.connection()
        self._guard(self.session, "before_flush", self._refuse_flush)
        self._guard(connection, "before_cursor_execute", self._refuse_write_sql)

        if self._owned is not None and connection.dialect.name != "sqlite":
            self._declare_transaction(connection.dialect.name)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._owned is not None:
                with suppress(SQLAlchemyError):
                    self.session.rollback()
                self._owned = None
        finally:
            for target, name, fn in self._guards:
                with suppress(InvalidRequestError):
                    event.remove(target, name, fn)
            self._guards.clear()

    def commit(self) -> None:
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    def _declare_transaction(self, dialect: str) -> None:
        try:
            if self.isolation_level:
                level = self.isolation_level.strip().upper()
                if level not in ISOLATION_LEVELS:
                    log.warning("Unknown isolation level %r; sending it unchanged.", level)
                self.session.execute(text(f"SET TRANSACTION ISOLATION LEVEL {level}"))
            if self.enforce_db_readonly and dialect in ("postgresql", "mysql", "mariadb"):
                self.session.execute(text("SET TRANSACTION READ ONLY"))
        except SQLAlchemyError as exc:
            log.warning("SET TRANSACTION rejected (%s); relying on write guards.", exc)

    def _guard(self, target: Any, name: str, fn: Any) -> None:
        event.listen(target, name, fn)
        self._guards.append((target, name, fn))

    def _refuse_flush(self, session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )

    def _refuse_write_sql(self, conn, cursor, statement, parameters, context, executemany) -> None:
        keyword = statement.lstrip().split(None, 1)[0].lower() if statement else ""
        if keyword in _WRITE_KEYWORDS:
            raise RuntimeError(f"Read-only UnitOfWork: SQL statement blocked: {keyword.upper()}")
