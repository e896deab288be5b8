"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from travelcrm.infra.security.password_hasher import WerkzeugPasswordHasher
from travelcrm.models.customer import Customer
from travelcrm.models.destination import Destination, DestinationStatus
from travelcrm.models.staff import Staff, StaffRole

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

STAFF_FIXTURES: list[dict[str, Any]] = [
    {
        "username": "admin",
        "name": "Agency Admin",
        "email": "admin@travelcrm.local",
        "password_env": "SEED_ADMIN_PASSWORD",
        "password": "admin12345",
        "role": StaffRole.ADMIN,
    },
    {
        "username": "sinta",
        "name": "Sinta Wulandari",
        "email": "sinta@travelcrm.local",
        "password_env": "SEED_STAFF_PASSWORD",
        "password": "staff12345",
        "role": StaffRole.STAFF,
    },
]

CUSTOMER_FIXTURES: list[dict[str, Any]] = [
    {
        "name": "Budi Santoso",
        "email": "budi.santoso@example.com",
        "destinations": [
            {
                "destination": "Bali",
                "start_date": datetime(2024, 3, 1, 2, 0, tzinfo=UTC),
                "end_date": datetime(2024, 3, 7, 10, 0, tzinfo=UTC),
                "status": DestinationStatus.COMPLETED,
            },
            {
                "destination": "Labuan Bajo",
                "start_date": datetime(2025, 7, 10, 1, 30, tzinfo=UTC),
                "end_date": datetime(2025, 7, 14, 9, 0, tzinfo=UTC),
                "status": DestinationStatus.PLANNED,
            },
        ],
    },
    {
        "name": "Ayu Lestari",
        "email": "ayu.lestari@example.com",
        "destinations": [
            {
                "destination": "Yogyakarta",
                "start_date": datetime(2024, 12, 20, 0, 0, tzinfo=UTC),
                "end_date": datetime(2024, 12, 27, 0, 0, tzinfo=UTC),
                "status": DestinationStatus.COMPLETED,
            },
        ],
    },
    {
        "name": "Rahmat Hidayat",
        "email": "rahmat.hidayat@example.com",
        "destinations": [
            {
                "destination": "Aceh",
                "start_date": datetime(2025, 1, 5, 3, 0, tzinfo=UTC),
                "end_date": datetime(2025, 1, 12, 3, 0, tzinfo=UTC),
                "status": DestinationStatus.CANCELLED,
            },
            {
                "destination": "Jakarta",
                "start_date": datetime(2025, 9, 1, 0, 0, tzinfo=UTC),
                "end_date": datetime(2025, 9, 3, 12, 0, tzinfo=UTC),
                "status": DestinationStatus.ONGOING,
            },
        ],
    },
]


def _session(database: SQLAlchemy) -> Session:
    """Return the current SQLAlchemy session."""
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def _get_or_create(
    session: Session,
    model: type[T],
    *,
    defaults: dict[str, Any] | None = None,
    **filters: Any,
) -> tuple[T, bool]:
    """Fetch ``model`` by ``filters`` or create it using ``defaults``."""
    instance = session.execute(select(model).filter_by(**filters)).scalar_one_or_none()
    if instance is not None:
        return instance, False
    params = dict(defaults or {})
    params.update(filters)
    instance = cast(T, model(**params))
    session.add(instance)
    return instance, True


def seed_staff(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create the staff accounts used to log in during development.

    Existing accounts keep their password; only missing ones are created.
    """
    if verbose:
        LOGGER.info("Seeding staff accounts...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    hasher = WerkzeugPasswordHasher()

    with session.begin():
        for fixture in STAFF_FIXTURES:
            password = os.getenv(fixture["password_env"]) or fixture["password"]
            _, created = _get_or_create(
                session,
                Staff,
                username=fixture["username"],
                defaults={
                    "name": fixture["name"],
                    "email": fixture["email"],
                    "role": fixture["role"],
                    "password_hash": hasher.hash(password),
                },
            )
            session.flush()
            _touch(summary, "staff", created)

    return summary


def seed_customers(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create sample customers, each with at least one destination."""
    if verbose:
        LOGGER.info("Seeding customers and destinations...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    with session.begin():
        for fixture in CUSTOMER_FIXTURES:
            customer, created = _get_or_create(
                session,
                Customer,
                email=fixture["email"],
                defaults={"name": fixture["name"]},
            )
            session.flush()
            _touch(summary, "customers", created)

            for trip in fixture["destinations"]:
                _, trip_created = _get_or_create(
                    session,
                    Destination,
                    customer_id=customer.id,
                    destination=trip["destination"],
                    defaults={
                        "start_date": trip["start_date"],
                        "end_date": trip["end_date"],
                        "status": trip["status"],
                    },
                )
                _touch(summary, "destinations", trip_created)
            session.flush()

    return summary


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Run all seeders in the correct foreign-key order."""
    if verbose:
        LOGGER.info("Running full seed pipeline...")
    combined: dict[str, dict[str, int]] = {}
    for func in (seed_staff, seed_customers):
        result = func(database, verbose=verbose)
        for table, counters in result.items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined


__all__ = [
    "seed_staff",
    "seed_customers",
    "run_all",
]
