"""Factory Boy definition for :class:`travelcrm.models.staff.Staff`."""

from __future__ import annotations

import factory
from tests.factories import BaseFactory
from travelcrm.infra.security.password_hasher import WerkzeugPasswordHasher
from travelcrm.models.staff import Staff, StaffRole

# Hashing is slow on purpose; compute the default once per test session.
DEFAULT_PASSWORD = "Passw0rd!"
DEFAULT_PASSWORD_HASH = WerkzeugPasswordHasher().hash(DEFAULT_PASSWORD)


class StaffFactory(BaseFactory):
    """Build persisted staff accounts that can log in with ``Passw0rd!``."""

    class Meta:
        model = Staff

    id = None  # let autoincrement handle it
    username = factory.Sequence(lambda n: f"staff{n}")
    name = factory.Faker("name")
    email = factory.Sequence(lambda n: f"staff{n}@example.com")
    role = StaffRole.STAFF
    password_hash = DEFAULT_PASSWORD_HASH
