from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

from travelcrm.services._shared.errors import InvalidTokenError


class TokenProvider(Protocol):
    """Port for issuing and verifying bearer tokens."""

    def issue(self, claims: dict[str, Any]) -> str: ...

    def verify(self, token: str) -> dict[str, Any]: ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests."""

    def __init__(self, *, lifetime: timedelta = timedelta(hours=24)) -> None:
        self._seq = 0
        self._lifetime = lifetime
        self._issued: dict[str, dict[str, Any]] = {}

    def issue(self, claims: dict[str, Any]) -> str:
        self._seq += 1
        token = f"stub.{claims.get('id')}.{self._seq}"
        payload = dict(claims)
        payload["exp"] = int((datetime.now(tz=UTC) + self._lifetime).timestamp())
        self._issued[token] = payload
        return token

    def verify(self, token: str) -> dict[str, Any]:
        payload = self._issued.get(token)
        if payload is None:
            raise InvalidTokenError()
        if datetime.fromtimestamp(payload["exp"], tz=UTC) <= datetime.now(tz=UTC):
            raise InvalidTokenError()
        return {k: v for k, v in payload.items() if k != "exp"}
