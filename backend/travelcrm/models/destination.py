"""Destination travel records owned by a customer."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from travelcrm.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .customer import Customer


class DestinationStatus(str, Enum):
    """Lifecycle of a single trip."""

    PLANNED = "PLANNED"
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Destination(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    One trip taken (or planned) by a customer.

    ``customer_id`` is fixed at creation time; repositories never expose it as
    an updatable field.
    """

    __tablename__ = "destinations"

    destination: Mapped[str] = mapped_column(String(200), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[DestinationStatus] = mapped_column(
        SAEnum(DestinationStatus, name="destination_status", native_enum=False, length=20),
        nullable=False,
        default=DestinationStatus.PLANNED,
        server_default=DestinationStatus.PLANNED.value,
    )
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id", ondelete="CASCADE"), nullable=False
    )

    customer: Mapped[Customer] = relationship("Customer", back_populates="destinations")

    __table_args__ = (
        Index("ix_destinations_customer_id", "customer_id"),
        Index("ix_destinations_start_date", "start_date"),
    )

    @validates("destination")
    def _normalize_label(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Destination label is required.")
        return value.strip()
