"""Assertion helpers shared by the unit and integration suites."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager


@contextmanager
def not_raises(exception: type[BaseException]) -> Iterator[None]:
    """Fail the test, rather than error it, when ``exception`` escapes the block.

    Used where a check (``parse_id``, schema loads) must accept its input.
    """
    try:
        yield
    except exception as exc:  # pragma: no cover
        raise AssertionError(f"Unexpected {type(exc).__name__}: {exc}") from exc
