"""Customer aggregate root."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from travelcrm.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .destination import Destination


class Customer(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    A customer of the travel agency.

    Fields
    ------
    name : str
        Display name, never blank.
    email : str
        Contact email. Stored trimmed and lowercased; unique.
    destinations : list[Destination]
        Travel records owned by the customer. Deleting the customer deletes
        them as well.
    """

    __tablename__ = "customers"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)

    destinations: Mapped[list[Destination]] = relationship(
        "Destination",
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="Destination.id",
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_customers_email"),
        Index("ix_customers_name", "name"),
    )

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Customer name is required.")
        return value.strip()

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v
