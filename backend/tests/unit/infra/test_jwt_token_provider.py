from datetime import timedelta

import pytest
from freezegun import freeze_time
from travelcrm.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from travelcrm.services._shared.errors import InvalidTokenError
from travelcrm.services._shared.ports import StubTokenProvider

CLAIMS = {"id": 3, "username": "sinta", "email": "sinta@example.com", "role": "STAFF"}


@pytest.fixture()
def provider(app, db) -> JWTTokenProvider:
    return JWTTokenProvider()


class TestJWTTokenProvider:
    def test_round_trips_principal_claims(self, provider):
        token = provider.issue(CLAIMS)

        assert provider.verify(token) == CLAIMS

    def test_expires_after_one_day(self, provider):
        with freeze_time("2025-01-01 00:00:00"):
            token = provider.issue(CLAIMS)

        with freeze_time("2025-01-01 23:59:00"):
            assert provider.verify(token)["id"] == 3

        with freeze_time("2025-01-02 00:01:00"), pytest.raises(InvalidTokenError):
            provider.verify(token)

    def test_rejects_tampered_token(self, provider):
        token = provider.issue(CLAIMS)
        header, payload, signature = token.split(".")
        forged = ".".join([header, payload, signature[::-1]])

        with pytest.raises(InvalidTokenError):
            provider.verify(forged)

    def test_rejects_garbage(self, provider):
        with pytest.raises(InvalidTokenError):
            provider.verify("not-a-jwt")


class TestStubTokenProvider:
    def test_round_trip_and_expiry(self):
        provider = StubTokenProvider(lifetime=timedelta(hours=1))

        with freeze_time("2025-01-01 00:00:00"):
            token = provider.issue(CLAIMS)
            assert provider.verify(token) == CLAIMS

        with freeze_time("2025-01-01 01:00:01"), pytest.raises(InvalidTokenError):
            provider.verify(token)

    def test_unknown_token(self):
        with pytest.raises(InvalidTokenError):
            StubTokenProvider().verify("stub.1.1")
