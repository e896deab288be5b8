from datetime import UTC, datetime, timedelta

import pytest
from tests.factories.customer import CustomerFactory
from travelcrm.repositories.base import Pagination
from travelcrm.repositories.customer import CustomerFilter, CustomerRepository


@pytest.fixture()
def repo(session) -> CustomerRepository:
    """Provide repository bound to the current transactional session."""
    return CustomerRepository(session=session)


class TestCustomerRepository:
    def test_get_loads_destinations(self, repo):
        customer = CustomerFactory(trips=2)

        found = repo.get(customer.id)

        assert found is not None
        assert len(found.destinations) == 2

    def test_email_is_normalised(self, repo):
        customer = CustomerFactory(email="  Mixed.Case@Example.COM ")

        assert customer.email == "mixed.case@example.com"
        assert repo.get_by_email("MIXED.case@example.com").id == customer.id
        assert repo.exists(email="mixed.case@example.com")

    def test_filters_by_name_and_email(self, repo):
        CustomerFactory(name="Budi Santoso", email="budi@example.com", trips=1)
        CustomerFactory(name="Ayu Lestari", email="ayu@travel.test", trips=1)

        by_name = repo.paginate(Pagination(page=1, limit=10), spec=CustomerFilter(name="Budi"))
        by_email = repo.paginate(
            Pagination(page=1, limit=10), spec=CustomerFilter(email="travel.test")
        )

        assert [c.name for c in by_name.items] == ["Budi Santoso"]
        assert [c.name for c in by_email.items] == ["Ayu Lestari"]

    def test_filters_by_created_window(self, repo):
        old = CustomerFactory(created_at=datetime(2024, 1, 1, tzinfo=UTC))
        recent = CustomerFactory(created_at=datetime(2025, 6, 1, tzinfo=UTC))

        page = repo.paginate(
            Pagination(page=1, limit=10),
            spec=CustomerFilter(
                created_from=datetime(2025, 1, 1, tzinfo=UTC),
                created_to=datetime(2025, 12, 31, tzinfo=UTC),
            ),
        )

        ids = [c.id for c in page.items]
        assert recent.id in ids
        assert old.id not in ids

    def test_updated_filter_skips_never_updated(self, repo):
        untouched = CustomerFactory()
        touched = CustomerFactory()
        repo.update(touched, name="Renamed")

        page = repo.paginate(
            Pagination(page=1, limit=10),
            spec=CustomerFilter(updated_from=datetime.now(UTC) - timedelta(days=1)),
        )

        ids = [c.id for c in page.items]
        assert touched.id in ids
        assert untouched.id not in ids

    def test_sorts_by_name_descending(self, repo):
        CustomerFactory(name="Aditya", email="a@example.com")
        CustomerFactory(name="Citra", email="c@example.com")
        CustomerFactory(name="Bayu", email="b@example.com")

        page = repo.paginate(
            Pagination(page=1, limit=10, sort_by="name", sort_order="desc"),
            spec=CustomerFilter(email="@example.com"),
        )

        names = [c.name for c in page.items if c.name in {"Aditya", "Bayu", "Citra"}]
        assert names == ["Citra", "Bayu", "Aditya"]

    def test_delete_cascades_to_destinations(self, repo, session):
        from travelcrm.repositories.destination import DestinationRepository

        customer = CustomerFactory(trips=2)
        customer_id = customer.id

        repo.delete(customer)

        assert repo.get(customer_id) is None
        assert DestinationRepository(session=session).count_for_customer(customer_id) == 0
