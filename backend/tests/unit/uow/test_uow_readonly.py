import pytest
from sqlalchemy import func, select, text
from tests.factories.customer import CustomerFactory
from travelcrm.models.customer import Customer
from travelcrm.models.staff import Staff
from travelcrm.uow import (
    SQLAlchemyReadOnlyUnitOfWork as ROuow,
)


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, app, db, session):
        """
        Ensure that attempting to flush ORM changes inside the RO UoW raises.
        """
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            # Add a transient object; any flush/autoflush must be blocked.
            uow.session.add(
                Staff(username="ghost", name="Ghost", email="ghost@example.com", password_hash="x")
            )
            uow.session.flush()

    def test_blocks_core_dml(self, app, db, session):
        """
        Ensure that raw SQL DML is blocked inside the RO UoW.
        """
        with ROuow() as uow, pytest.raises(RuntimeError, match="SQL statement blocked"):
            uow.session.execute(
                text("INSERT INTO customers (name, email) VALUES (:name, :email)"),
                {"name": "Raw", "email": "raw@example.com"},
            )

    def test_allows_reads(self, app, db, session):
        """
        Read operations should work normally within RO UoW.
        """
        CustomerFactory(trips=1)

        with ROuow() as uow:
            count = uow.session.execute(select(func.count(Customer.id))).scalar_one()
            assert count >= 1

    def test_disallows_commit(self, app, db, session):
        """
        RO UoW must reject commit().
        """
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_always_rolls_back_changes(self, app, db, session):
        """
        Any attempted modifications must not persist after RO UoW exits.
        """
        customer = CustomerFactory(trips=1, email="before@example.com")
        customer_id = customer.id

        # Attempt to mutate inside RO scope -> should be blocked on flush
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            c = uow.customers.get(customer_id)
            c.email = "mutated-in-ro@example.com"
            uow.session.flush()

        session.expire_all()
        persisted = session.get(Customer, customer_id)
        assert persisted.email == "before@example.com"

    def test_exposes_domain_repositories(self, app, db, session):
        """The repositories share the unit of work session."""
        with ROuow() as uow:
            assert uow.customers.session is uow.session
            assert uow.destinations.session is uow.session
            assert uow.staff.session is uow.session
