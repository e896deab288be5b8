"""Staff repository for authentication lookups."""

from __future__ import annotations

from sqlalchemy import select

from travelcrm.models.staff import Staff
from travelcrm.repositories.base import BaseRepository


class StaffRepository(BaseRepository[Staff]):
    """Persistence-only repository for :class:`Staff`.

    It never touches tokens or password hashing; the auth service owns those.
    """

    model = Staff

    def _filterable_fields(self):
        return {"id": Staff.id, "username": Staff.username, "email": Staff.email}

    def get_by_username(self, username: str) -> Staff | None:
        """Fetch a staff member by exact (trimmed) username.

        :param username: Login handle.
        :type username: str
        :returns: Staff instance or ``None`` when not found.
        :rtype: Staff | None
        """
        stmt = select(Staff).where(Staff.username == username.strip())
        return self.session.execute(stmt).scalars().first()

    def exists_by_username(self, username: str) -> bool:
        return self.exists(username=username.strip())

    def exists_by_email(self, email: str) -> bool:
        return self.exists(email=email.strip().lower())
