"""Shared persistence helpers for customer, destination and staff repositories.

Repositories translate filter dataclasses and whitelisted sort keys into
SQLAlchemy 2.x ``select()`` statements. They flush but never commit: the
surrounding Unit of Work owns the transaction.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar, cast

from sqlalchemy import Select, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from travelcrm.core.extensions import db

E = TypeVar("E")

SortOrder = Literal["asc", "desc"]

DEFAULT_SORT_BY = "id"
DEFAULT_SORT_ORDER: SortOrder = "asc"


@dataclass(slots=True)
class Pagination:
    """Requested page window plus a public sort key such as ``"startDate"``."""

    page: int
    limit: int
    sort_by: str = DEFAULT_SORT_BY
    sort_order: SortOrder = DEFAULT_SORT_ORDER

    @property
    def offset(self) -> int:
        """Rows skipped before this page; out-of-range values count as 1."""
        return (max(self.page, 1) - 1) * max(self.limit, 1)


@dataclass(slots=True)
class Page(Generic[E]):
    """One page of rows and the size of the full filtered result."""

    items: Sequence[E]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        if self.total <= 0:
            return 0
        return math.ceil(self.total / max(self.limit, 1))


def _order_by(
    stmt: Select[Any],
    columns: Mapping[str, InstrumentedAttribute[Any]],
    sort_by: str | None,
    sort_order: str | None,
    tiebreaker: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    # Unknown keys were already rejected by the service layer.
    column = columns.get(sort_by or "")
    if column is not None:
        descending = (sort_order or DEFAULT_SORT_ORDER).lower() == "desc"
        stmt = stmt.order_by(column.desc() if descending else column.asc())
    if tiebreaker is not None:
        stmt = stmt.order_by(tiebreaker.asc())
    return stmt


def paginate_select(
    session: Session, stmt: Select[Any], pagination: Pagination
) -> tuple[list[Any], int]:
    """Run ``stmt`` for the page described by ``pagination`` and count every match.

    Both queries go through ``session``; inside the read-only unit of work they
    therefore share one snapshot, so ``total`` always describes ``items``.
    """
    total = session.execute(
        select(func.count()).select_from(stmt.order_by(None).subquery())
    ).scalar_one()
    limit = max(pagination.limit, 1)
    rows = session.execute(stmt.limit(limit).offset(pagination.offset)).scalars()
    return list(rows), int(total)


class BaseRepository(Generic[E]):
    """Thin data access for one mapped ``model``.

    Subclasses set ``model`` and override the hooks they need:
    ``_sortable_fields``, ``_filterable_fields``, ``_updatable_fields``,
    ``_apply_filters`` and ``_default_eagerload``.
    """

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        """The unit of work's session, or Flask-SQLAlchemy's scoped one."""
        return self._session if self._session is not None else cast(Session, db.session)

    # hooks

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        pk = self._pk_attr()
        return {"id": pk} if pk is not None else {}

    def _updatable_fields(self) -> set[str]:
        return set()

    def _apply_filters(self, stmt: Select[Any], spec: Any | None) -> Select[Any]:
        return stmt

    def sortable_keys(self) -> frozenset[str]:
        return frozenset(self._sortable_fields())

    def _select(self, spec: Any | None = None) -> Select[Any]:
        return self._default_eagerload(self._apply_filters(select(self.model), spec))

    def _by_pk(self, entity_id: Any) -> Select[Any]:
        pk = self._pk_attr()
        if pk is None:
            raise RuntimeError(f"{type(self).__name__} has no primary-key attribute.")
        return self._default_eagerload(select(self.model).where(pk == entity_id))

    # reads

    def get(self, entity_id: Any) -> E | None:
        return self.session.execute(self._by_pk(entity_id)).scalars().first()

    def get_for_update(self, entity_id: Any) -> E | None:
        """Like :meth:`get` but takes a row lock; SQLite ignores ``FOR UPDATE``."""
        stmt = self._by_pk(entity_id).with_for_update()
        return self.session.execute(stmt).scalars().first()

    def exists(self, **filters: Any) -> bool:
        """True when a row matches every ``column=value`` pair.

        :raises ValueError: for a key missing from ``_filterable_fields``.
        """
        columns = self._filterable_fields()
        stmt = select(self._pk_attr() or self.model)
        for key, value in filters.items():
            column = columns.get(key)
            if column is None:
                raise ValueError(f"Field '{key}' is not filterable.")
            stmt = stmt.where(column == value)
        return self.session.execute(stmt.limit(1)).first() is not None

    def list(
        self,
        *,
        spec: Any | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder | None = None,
    ) -> list[E]:
        stmt = _order_by(
            self._select(spec), self._sortable_fields(), sort_by, sort_order, self._pk_attr()
        )
        return list(self.session.execute(stmt).scalars().all())

    def paginate(self, pagination: Pagination, *, spec: Any | None = None) -> Page[E]:
        stmt = _order_by(
            self._select(spec),
            self._sortable_fields(),
            pagination.sort_by,
            pagination.sort_order,
            self._pk_attr(),
        )
        items, total = paginate_select(self.session, stmt, pagination)
        return Page(items=items, total=total, page=pagination.page, limit=pagination.limit)

    # writes

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is populated."""
        self.session.add(instance)
        self.session.flush()
        return instance

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.session.flush()

    def flush(self) -> None:
        self.session.flush()

    def update(self, instance: E, **fields: Any) -> E:
        """Assign whitelisted attributes, refresh ``updated_at`` and flush.

        Assignment goes through ``setattr`` so model ``@validates`` hooks run.

        :raises ValueError: when any key is outside ``_updatable_fields``.
        """
        refused = sorted(set(fields) - self._updatable_fields())
        if refused:
            raise ValueError(f"Unknown or non-updatable fields: {refused}")
        for key, value in fields.items():
            setattr(instance, key, value)
        touch = getattr(instance, "touch", None)
        if callable(touch):
            touch()
        self.flush()
        return instance
