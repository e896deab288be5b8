from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One trip as printed in the travel history."""

    destination: str
    start_date: datetime
    end_date: datetime
    status: str


@dataclass(frozen=True, slots=True)
class HistoryDocument:
    """Everything the renderer needs for one customer's history."""

    customer_id: int
    customer_name: str
    customer_email: str
    entries: Sequence[HistoryEntry]


class HistoryRenderer(Protocol):
    """Port turning a :class:`HistoryDocument` into printable bytes."""

    def render(self, document: HistoryDocument) -> bytes: ...
