"""Staff accounts allowed to operate the API."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import String, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, validates

from travelcrm.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class StaffRole(str, Enum):
    """Roles carried in issued tokens."""

    ADMIN = "ADMIN"
    STAFF = "STAFF"


class Staff(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Authentication principal.

    Fields
    ------
    username : str
        Login handle. Unique.
    name : str
        Full name.
    email : str
        Stored normalized (lowercase, trimmed). Unique.
    password_hash : str
        Salted hash produced by the password hasher; never serialized.
    role : StaffRole
        Embedded in issued tokens.
    """

    __tablename__ = "staff"

    username: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[StaffRole] = mapped_column(
        SAEnum(StaffRole, name="staff_role", native_enum=False, length=10),
        nullable=False,
        default=StaffRole.STAFF,
        server_default=StaffRole.STAFF.value,
    )

    __table_args__ = (
        UniqueConstraint("username", name="uq_staff_username"),
        UniqueConstraint("email", name="uq_staff_email"),
    )

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        return value.strip().lower()

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """
        Normalize and validate username.

        :raises ValueError: If username is missing or only whitespace.
        """
        if not isinstance(value, str):
            raise ValueError("Username is required.")
        v = value.strip()
        if not v:
            raise ValueError("Username is required.")
        return v
