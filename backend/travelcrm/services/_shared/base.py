# travelcrm/services/_shared/base.py
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from travelcrm.repositories.base import DEFAULT_SORT_BY, DEFAULT_SORT_ORDER, Pagination
from travelcrm.services._shared.errors import ServiceError
from travelcrm.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

SORT_ORDERS = ("asc", "desc")


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (auth, request ids).

    :param actor_id: Authenticated staff identifier.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Offer shared validation helpers (pagination/sorting).
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - Domain errors raised here are translated to HTTP by ``core.errors``.
    """

    # ---- Configuration defaults (override per subclass if needed) ----
    DEFAULT_READ_ISOLATION = "READ COMMITTED"
    # Page + count must agree, so listings read from one snapshot.
    LISTING_ISOLATION = "REPEATABLE READ"

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (auth, tracing).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param isolation: Transaction isolation level (e.g. "READ COMMITTED", "REPEATABLE READ").
        :type isolation: str | None
        :param enforce_db_readonly: Apply `SET TRANSACTION READ ONLY` when supported.
        :type enforce_db_readonly: bool
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
            enforce_db_readonly=enforce_db_readonly,
        )

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(
        self,
        *,
        page: int,
        limit: int,
        sort_by: str | None,
        sort_order: str | None,
        allowed: Iterable[str],
    ) -> Pagination:
        """
        Build a Pagination value object, rejecting unknown sort options.

        Blank ``sort_by``/``sort_order`` fall back to ``id``/``asc``.

        :param page: 1-based page number.
        :type page: int
        :param limit: Page size.
        :type limit: int
        :param sort_by: Public sort key (camelCase).
        :type sort_by: str | None
        :param sort_order: ``"asc"`` or ``"desc"``.
        :type sort_order: str | None
        :param allowed: Sort keys the repository accepts.
        :type allowed: Iterable[str]
        :returns: Pagination instance.
        :rtype: Pagination
        :raises ServiceError: On ``page``/``limit`` below one or unknown sort options.
        """
        if int(page) < 1:
            raise ServiceError("page must be greater than or equal to 1")
        if int(limit) < 1:
            raise ServiceError("limit must be greater than or equal to 1")

        key = (sort_by or "").strip() or DEFAULT_SORT_BY
        order = (sort_order or "").strip().lower() or DEFAULT_SORT_ORDER
        allowed_keys = set(allowed)
        if key not in allowed_keys:
            raise ServiceError(
                f"Invalid sortBy '{key}'. Allowed: {', '.join(sorted(allowed_keys))}"
            )
        if order not in SORT_ORDERS:
            raise ServiceError(f"Invalid sortOrder '{order}'. Allowed: asc, desc")
        return Pagination(page=int(page), limit=int(limit), sort_by=key, sort_order=order)  # type: ignore[arg-type]
