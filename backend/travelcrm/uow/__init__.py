"""Transaction boundaries for the service layer.

``SQLAlchemyUnitOfWork`` wraps customer and destination mutations;
``SQLAlchemyReadOnlyUnitOfWork`` keeps a listing page and its count on one
snapshot. Both expose the ``customers``, ``destinations`` and ``staff``
repositories on a shared session.
"""

from .base import UnitOfWork
from .sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

__all__ = [
    "UnitOfWork",
    "SQLAlchemyReadOnlyUnitOfWork",
    "SQLAlchemyUnitOfWork",
]
