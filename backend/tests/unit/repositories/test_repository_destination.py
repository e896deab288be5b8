from datetime import UTC, datetime

import pytest
from tests.factories.customer import CustomerFactory
from tests.factories.destination import DestinationFactory
from travelcrm.models.destination import DestinationStatus
from travelcrm.repositories.base import Pagination
from travelcrm.repositories.destination import DestinationFilter, DestinationRepository


@pytest.fixture()
def repo(session) -> DestinationRepository:
    """Provide repository bound to the current transactional session."""
    return DestinationRepository(session=session)


@pytest.fixture()
def trips():
    """Three trips of one customer, inserted out of alphabetical order."""
    customer = CustomerFactory()
    return [
        DestinationFactory(
            customer=customer,
            destination="Bali",
            start_date=datetime(2025, 3, 1, tzinfo=UTC),
            end_date=datetime(2025, 3, 5, tzinfo=UTC),
            status=DestinationStatus.COMPLETED,
        ),
        DestinationFactory(
            customer=customer,
            destination="Aceh",
            start_date=datetime(2025, 1, 10, tzinfo=UTC),
            end_date=datetime(2025, 1, 12, tzinfo=UTC),
            status=DestinationStatus.CANCELLED,
        ),
        DestinationFactory(
            customer=customer,
            destination="Jakarta",
            start_date=datetime(2025, 6, 1, tzinfo=UTC),
            end_date=datetime(2025, 6, 2, tzinfo=UTC),
        ),
    ]


class TestDestinationRepository:
    def test_sorts_by_label(self, repo, trips):
        customer_id = trips[0].customer_id

        page = repo.paginate(
            Pagination(page=1, limit=10, sort_by="destination", sort_order="asc"),
            spec=DestinationFilter(customer_id=customer_id),
        )

        assert [d.destination for d in page.items] == ["Aceh", "Bali", "Jakarta"]

    def test_sorts_descending_by_start_date(self, repo, trips):
        customer_id = trips[0].customer_id

        page = repo.paginate(
            Pagination(page=1, limit=10, sort_by="startDate", sort_order="desc"),
            spec=DestinationFilter(customer_id=customer_id),
        )

        assert [d.destination for d in page.items] == ["Jakarta", "Bali", "Aceh"]

    def test_paginates_with_total_pages(self, repo, trips):
        customer_id = trips[0].customer_id
        spec = DestinationFilter(customer_id=customer_id)

        first = repo.paginate(Pagination(page=1, limit=2), spec=spec)
        second = repo.paginate(Pagination(page=2, limit=2), spec=spec)

        assert first.total == 3
        assert first.total_pages == 2
        assert len(first.items) == 2
        assert len(second.items) == 1

    def test_page_beyond_last_is_empty(self, repo, trips):
        page = repo.paginate(
            Pagination(page=9, limit=2),
            spec=DestinationFilter(customer_id=trips[0].customer_id),
        )

        assert page.items == []
        assert page.total == 3

    def test_filters_by_name_substring(self, repo, trips):
        page = repo.paginate(
            Pagination(page=1, limit=10),
            spec=DestinationFilter(customer_id=trips[0].customer_id, name="ak"),
        )

        assert [d.destination for d in page.items] == ["Jakarta"]

    def test_filters_by_status(self, repo, trips):
        page = repo.paginate(
            Pagination(page=1, limit=10),
            spec=DestinationFilter(
                customer_id=trips[0].customer_id, status=DestinationStatus.CANCELLED
            ),
        )

        assert [d.destination for d in page.items] == ["Aceh"]

    def test_date_bounds_are_independent(self, repo, trips):
        """startDate is a lower bound on start, endDate an upper bound on end."""
        customer_id = trips[0].customer_id

        starting_late = repo.paginate(
            Pagination(page=1, limit=10, sort_by="startDate"),
            spec=DestinationFilter(
                customer_id=customer_id, start_date=datetime(2025, 3, 1, tzinfo=UTC)
            ),
        )
        ending_early = repo.paginate(
            Pagination(page=1, limit=10, sort_by="startDate"),
            spec=DestinationFilter(
                customer_id=customer_id, end_date=datetime(2025, 3, 5, tzinfo=UTC)
            ),
        )

        assert [d.destination for d in starting_late.items] == ["Bali", "Jakarta"]
        assert [d.destination for d in ending_early.items] == ["Aceh", "Bali"]

    def test_count_and_list_for_customer(self, repo, trips):
        customer_id = trips[0].customer_id
        DestinationFactory()  # another customer's trip

        assert repo.count_for_customer(customer_id) == 3
        assert [d.destination for d in repo.list_for_customer(customer_id)] == [
            "Aceh",
            "Bali",
            "Jakarta",
        ]

    def test_customer_id_is_not_updatable(self, repo, trips):
        other = CustomerFactory()

        with pytest.raises(ValueError):
            repo.update(trips[0], customer_id=other.id)

    def test_update_stamps_updated_at(self, repo, trips):
        trip = trips[0]
        assert trip.updated_at is None

        repo.update(trip, destination="Ubud")

        assert trip.destination == "Ubud"
        assert trip.updated_at is not None


@pytest.mark.parametrize(
    ("page", "limit", "offset"),
    [(1, 5, 0), (3, 5, 10), (0, 5, 0), (2, 0, 1)],
)
def test_pagination_offset(page, limit, offset):
    assert Pagination(page=page, limit=limit).offset == offset
