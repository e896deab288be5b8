"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, time, timezone
from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, validate, validates

SORT_ORDERS = ("asc", "desc")

# Largest value a 64-bit signed INTEGER primary key can hold
MAX_ID = 2**63 - 1
# Keeps ``(page - 1) * limit`` inside the same range
MAX_PAGE = 2**31 - 1

PASSWORD_LENGTH = validate.Length(min=6, max=128)

# Rejects empty and whitespace-only strings
NON_BLANK = validate.Regexp(r"(?s).*\S", error="Must not be blank.")


class UTCDateTime(fields.DateTime):
    """ISO-8601 datetime normalised to timezone-aware UTC.

    Naive values are read as UTC and a bare date means midnight UTC.
    """

    def _deserialize(self, value: Any, attr: str | None, data: Any, **kwargs: Any) -> datetime:
        try:
            parsed = super()._deserialize(value, attr, data, **kwargs)
        except ValidationError:
            try:
                parsed = datetime.combine(date.fromisoformat(str(value)), time.min)
            except ValueError:
                raise self.make_error("invalid", input=value, obj_type=self.OBJ_TYPE) from None
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)


class ListQuerySchema(Schema):
    """Validate pagination and sorting parameters with configurable defaults.

    Subclasses set ``SORT_KEYS`` to the public keys their listing accepts.
    Blank ``sortBy``/``sortOrder`` fall back to ``id``/``asc``; anything
    outside the allow-list is rejected.
    """

    SORT_KEYS: tuple[str, ...] = ("id",)

    class Meta:
        unknown = EXCLUDE

    def __init__(self, *, default_limit: int = 5, max_limit: int = 100, **kwargs: Any) -> None:
        self._default_limit = default_limit
        self._max_limit = max_limit
        super().__init__(**kwargs)

    page = fields.Integer(load_default=1, validate=validate.Range(min=1, max=MAX_PAGE))
    limit = fields.Integer(validate=validate.Range(min=1))
    sort_by = fields.String(data_key="sortBy", load_default=None)
    sort_order = fields.String(data_key="sortOrder", load_default=None)

    @validates("sort_by")
    def _check_sort_by(self, value: str | None, **_: Any) -> None:
        if value and value.strip() and value.strip() not in self.SORT_KEYS:
            raise ValidationError(f"Must be one of: {', '.join(self.SORT_KEYS)}.")

    @validates("sort_order")
    def _check_sort_order(self, value: str | None, **_: Any) -> None:
        if value and value.strip() and value.strip().lower() not in SORT_ORDERS:
            raise ValidationError("Must be one of: asc, desc.")

    @post_load
    def apply_defaults(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        limit = data.get("limit", self._default_limit)
        data["limit"] = min(max(limit, 1), self._max_limit)
        data.setdefault("page", 1)
        data["sort_by"] = (data.get("sort_by") or "").strip() or "id"
        data["sort_order"] = (data.get("sort_order") or "").strip().lower() or "asc"
        return data


def split_query(
    data: dict[str, Any],
    keys: Iterable[str] = ("page", "limit", "sort_by", "sort_order"),
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a loaded listing query into ``(pagination, filters)`` mappings."""

    wanted = set(keys)
    pagination = {k: v for k, v in data.items() if k in wanted}
    filters = {k: v for k, v in data.items() if k not in wanted}
    return pagination, filters


def build_envelope(
    *,
    code: int,
    message: str,
    data: Any,
    page: int | None = None,
    limit: int | None = None,
    total_pages: int | None = None,
) -> dict[str, Any]:
    """Return the ``{code, message, data}`` body; listings add page metadata."""

    body: dict[str, Any] = {"code": int(code), "message": message, "data": data}
    if page is not None:
        body["page"] = int(page)
        body["limit"] = int(limit or 0)
        body["totalPages"] = int(total_pages or 0)
    return body

