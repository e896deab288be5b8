"""
Unit tests for SQLAlchemyUnitOfWork (writer), using factories.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from sqlalchemy import func, select
from travelcrm.models import Customer, Destination
from travelcrm.uow import SQLAlchemyUnitOfWork


def _count(session, model) -> int:
    return session.execute(select(func.count(model.id))).scalar_one()


def _customer() -> Customer:
    return Customer(
        name="Dewi",
        email="dewi@example.com",
        destinations=[
            Destination(
                destination="Bali",
                start_date=datetime(2025, 5, 1, tzinfo=UTC),
                end_date=datetime(2025, 5, 4, tzinfo=UTC),
            )
        ],
    )


class TestSQLAlchemyUnitOfWorkWriter:
    def test_writer_uow_commits_on_success(self, app, db, session):
        """
        GIVEN a writer UoW
        WHEN we create a customer via repo inside the context and leave without exception
        THEN the transaction is committed and the rows are visible afterwards.
        """
        initial = _count(session, Customer)

        with SQLAlchemyUnitOfWork() as uow:
            uow.customers.add(_customer())

        assert _count(session, Customer) == initial + 1
        assert _count(session, Destination) >= 1

    def test_writer_uow_rolls_back_on_exception(self, app, db, session):
        """
        GIVEN a writer UoW
        WHEN an exception is raised inside the context
        THEN the transaction is rolled back and neither the customer nor its
        destination is persisted.
        """
        customers_before = _count(session, Customer)
        destinations_before = _count(session, Destination)

        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            uow.customers.add(_customer())
            raise RuntimeError("boom")  # forces rollback

        assert _count(session, Customer) == customers_before
        assert _count(session, Destination) == destinations_before
