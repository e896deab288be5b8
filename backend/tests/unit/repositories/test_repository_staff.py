from tests.factories.staff import StaffFactory
from travelcrm.repositories.staff import StaffRepository


def test_get_by_username_trims_input(session):
    staff = StaffFactory(username="agent")
    repo = StaffRepository(session=session)

    assert repo.get_by_username("  agent ").id == staff.id
    assert repo.get_by_username("nobody") is None


def test_exists_helpers(session):
    StaffFactory(username="agent", email="agent@example.com")
    repo = StaffRepository(session=session)

    assert repo.exists_by_username("agent")
    assert repo.exists_by_email(" AGENT@example.com ")
    assert not repo.exists_by_email("other@example.com")
