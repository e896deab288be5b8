import pytest
from tests.helpers.utils import not_raises
from travelcrm.api import deps
from travelcrm.api.deps import envelope, parse_id, parse_list_query
from travelcrm.core.errors import BadRequest, Unauthorized
from travelcrm.schemas import DestinationQuerySchema
from travelcrm.services._shared.ports import StubTokenProvider


class TestParseId:
    @pytest.mark.parametrize("raw", ["1", "42", " 7 ", "9223372036854775807"])
    def test_accepts_positive_integers(self, raw):
        with not_raises(BadRequest):
            assert parse_id(raw) == int(raw)

    @pytest.mark.parametrize(
        "raw", ["", "0", "-3", "abc", "1e3", "٣", "9223372036854775808", "99999999999999999999"]
    )
    def test_rejects_everything_else(self, raw):
        with pytest.raises(BadRequest, match="must be a positive integer"):
            parse_id(raw)


def test_parse_list_query_uses_configured_defaults(app):
    with app.test_request_context("/destinations?status=ONGOING&sortOrder=DESC"):
        query, filters = parse_list_query(DestinationQuerySchema)

    assert query.page == 1
    assert query.limit == app.config["DEFAULT_PAGE_LIMIT"]
    assert query.sort_by == "id"
    assert query.sort_order == "desc"
    assert filters["status"].value == "ONGOING"


def test_envelope_status_matches_code(app):
    with app.test_request_context("/"):
        resp = envelope("Customer created successfully.", {"id": 1}, status=201)

    assert resp.status_code == 201
    assert resp.get_json() == {
        "code": 201,
        "message": "Customer created successfully.",
        "data": {"id": 1},
    }


class TestRequireAuth:
    @pytest.fixture()
    def stub(self, monkeypatch):
        provider = StubTokenProvider()
        monkeypatch.setattr(deps, "token_provider", lambda: provider)
        return provider

    @staticmethod
    def _view():
        return deps.require_auth(lambda: deps.current_principal())

    def test_principal_comes_from_the_token_provider(self, app, stub):
        token = stub.issue({"id": 3, "username": "ayu", "email": "ayu@example.com", "role": "STAFF"})

        with app.test_request_context("/", headers={"Authorization": f"Bearer {token}"}):
            principal = self._view()()

        assert (principal.id, principal.username) == (3, "ayu")

    @pytest.mark.parametrize("header", ["", "Bearer ", "Token stub.3.1", "Bearer stub.3.99"])
    def test_rejects_missing_or_unknown_tokens(self, app, stub, header):
        with app.test_request_context("/", headers={"Authorization": header}):
            with pytest.raises(Unauthorized):
                self._view()()
