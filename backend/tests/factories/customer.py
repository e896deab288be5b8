"""Factory Boy definition for :class:`travelcrm.models.customer.Customer`."""

from __future__ import annotations

import factory
from tests.factories import BaseFactory
from travelcrm.models.customer import Customer


class CustomerFactory(BaseFactory):
    """
    Build persisted customers.

    Notes
    -----
    - A customer is created without destinations; pass ``trips=n`` (or use
      :class:`DestinationFactory` with ``customer=...``) to attach some.
    """

    class Meta:
        model = Customer

    id = None
    name = factory.Faker("name")
    email = factory.Sequence(lambda n: f"customer{n}@example.com")

    @factory.post_generation
    def trips(obj, create, extracted, **kwargs):
        """Attach ``extracted`` generated destinations to the new customer."""
        if not extracted:
            return
        from tests.factories.destination import DestinationFactory

        for _ in range(int(extracted)):
            DestinationFactory(customer=obj, **kwargs)
