"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases.
"""

from __future__ import annotations

import os

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker
from travelcrm.core.config import TestingConfig
from travelcrm.core.extensions import db as _db  # Flask-SQLAlchemy instance
from travelcrm.factory import create_app  # application factory under test

from tests.factories.staff import DEFAULT_PASSWORD as STAFF_PASSWORD


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    The application context stays pushed for the whole session so services,
    JWT helpers and factories can run outside of a request.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(autouse=True)
def app_context(app, db):
    """Push a fresh application context per test so ``flask.g`` starts empty."""
    with app.app_context() as ctx:
        yield ctx


@pytest.fixture(scope="function")
def session(db, connection, app_context):
    """Provide a SQLAlchemy session wrapped in a nested transaction.

    Notes
    -----
    The fixture mirrors the SQLAlchemy 2.0 pattern for transactional tests: it
    begins a top-level transaction, starts a SAVEPOINT per test, and reinstalls
    the SAVEPOINT whenever SQLAlchemy ends one. Because the connection is
    already inside a SAVEPOINT, the session joins it in ``create_savepoint``
    mode: ``commit()`` and ``rollback()`` issued by a unit of work only affect
    the session's own SAVEPOINT.
    """
    # 1) Top-level transaction
    top_trans = connection.begin()

    # 2) Scoped session bound to the connection
    SessionFactory = sessionmaker(bind=connection, future=True, autoflush=False)
    scoped = scoped_session(SessionFactory)

    # 3) SAVEPOINT per test
    nested = connection.begin_nested()

    # 4) Re-create SAVEPOINT when the previous nested transaction ends
    @event.listens_for(scoped(), "after_transaction_end")
    def _restart_savepoint(sess, trans):  # pragma: no cover
        if trans.nested and not trans._parent.nested:
            nonlocal nested
            nested = connection.begin_nested()

    # 5) Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


# -- HTTP layer ------------------------------------------------------------------
@pytest.fixture()
def client(app, session):
    """Return a Flask test client sharing the transactional session."""
    return app.test_client()


@pytest.fixture()
def staff():
    """A persisted staff member whose password is :data:`STAFF_PASSWORD`."""
    from tests.factories.staff import StaffFactory

    return StaffFactory(username="sinta", email="sinta@example.com")


@pytest.fixture()
def auth_headers(client, staff):
    """Bearer headers obtained through the real login endpoint."""
    resp = client.post(
        "/auth/login",
        json={"username": staff.username, "password": STAFF_PASSWORD},
    )
    assert resp.status_code == 200, resp.get_json()
    token = resp.get_json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}
