# comments in English; reST docstrings strict
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ListQueryIn:
    """
    Input pagination contract shared by listing use cases.

    :param page: 1-based page number.
    :type page: int
    :param limit: Page size (> 0).
    :type limit: int
    :param sort_by: Public sort key such as ``"startDate"``; blank means ``id``.
    :type sort_by: str | None
    :param sort_order: ``"asc"`` or ``"desc"``; blank means ``asc``.
    :type sort_order: str | None
    """

    page: int = 1
    limit: int = 5
    sort_by: str | None = None
    sort_order: str | None = None


@dataclass(frozen=True, slots=True)
class PageMeta:
    """
    Output pagination metadata.

    :param page: Current page (1-based).
    :type page: int
    :param limit: Page size.
    :type limit: int
    :param total: Total rows available.
    :type total: int
    :param total_pages: ``ceil(total / limit)``, zero when nothing matched.
    :type total_pages: int
    """

    page: int
    limit: int
    total: int
    total_pages: int


@dataclass(frozen=True, slots=True)
class PageOut(Generic[T]):
    """A page of output DTOs and its metadata."""

    items: Sequence[T]
    meta: PageMeta
