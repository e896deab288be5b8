"""
travelcrm.services._shared.ports
================================

Collection of *ports* (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`: issuing and verifying bearer tokens.

- :mod:`password_hasher`:
    Defines :class:`~.PasswordHasher`: one-way password hashing.

- :mod:`history_renderer`:
    Defines :class:`~.HistoryRenderer` and its input DTOs: printable
    travel-history documents.

Concrete adapters live under ``travelcrm.infra``.
"""

from __future__ import annotations

from .history_renderer import HistoryDocument, HistoryEntry, HistoryRenderer
from .password_hasher import PasswordHasher
from .token_provider import StubTokenProvider, TokenProvider

__all__ = [
    "TokenProvider",
    "StubTokenProvider",
    "PasswordHasher",
    "HistoryRenderer",
    "HistoryDocument",
    "HistoryEntry",
]
