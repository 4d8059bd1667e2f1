"""Tests for the FamilySearch HTTP client (HTTP is mocked)."""

import pytest
import requests

from familysearch_server.client import FamilySearchClient
from familysearch_server.errors import ApiError, NotAuthenticatedError, NotConfiguredError


class TestConstruction:
    """Tests for client setup."""

    def test_production_hosts(self, client):
        assert client.platform_host == "https://api.familysearch.org"
        assert client.ident_host == "https://ident.familysearch.org"

    def test_beta_hosts(self, authed_store, mock_session):
        beta = FamilySearchClient(authed_store, environment="beta", session=mock_session)
        assert beta.platform_host == "https://apibeta.familysearch.org"

    def test_unknown_environment_rejected(self, authed_store, mock_session):
        with pytest.raises(ValueError, match="Unknown FamilySearch environment"):
            FamilySearchClient(authed_store, environment="staging", session=mock_session)

    def test_is_authenticated_follows_store(self, client, authed_store):
        assert client.is_authenticated is True
        authed_store.update(access_token="")
        assert client.is_authenticated is False


class TestGet:
    """Tests for authenticated GET requests."""

    def test_sends_bearer_token_and_timeout(self, client, mock_session, response_factory):
        mock_session.request.return_value = response_factory(json_data={"persons": []})

        result = client.get_ancestry("KW1", 4)

        assert result == {"persons": []}
        args, kwargs = mock_session.request.call_args
        assert args == ("GET", "https://api.familysearch.org/platform/tree/ancestry")
        assert kwargs["params"] == {"person": "KW1", "generations": 4}
        assert kwargs["headers"]["Authorization"] == "Bearer old-token"
        assert kwargs["timeout"] == 30.0

    def test_no_token_raises(self, client, authed_store, mock_session):
        authed_store.update(access_token="")
        with pytest.raises(NotAuthenticatedError):
            client.get_current_user()
        mock_session.request.assert_not_called()

    def test_http_error_raises_api_error(self, client, mock_session, response_factory):
        mock_session.request.return_value = response_factory(
            status_code=404,
            reason="Not Found",
            json_data={"errors": [{"message": "Person not found"}]},
        )
        with pytest.raises(ApiError) as exc_info:
            client.get_person("NOPE")
        assert exc_info.value.status_code == 404
        assert str(exc_info.value) == "Person not found"

    def test_http_error_without_body(self, client, mock_session, response_factory):
        mock_session.request.return_value = response_factory(
            status_code=503, reason="Service Unavailable", json_data=ValueError("no json")
        )
        with pytest.raises(ApiError, match="HTTP 503: Service Unavailable"):
            client.get_person("KW1")

    def test_unauthorized_flag(self, client, mock_session, response_factory):
        mock_session.request.return_value = response_factory(status_code=401, reason="Unauthorized")
        with pytest.raises(ApiError) as exc_info:
            client.get_current_user()
        assert exc_info.value.is_unauthorized

    def test_network_error_raises_api_error(self, client, mock_session):
        mock_session.request.side_effect = requests.ConnectionError("connection refused")
        with pytest.raises(ApiError, match="connection refused") as exc_info:
            client.get_person("KW1")
        assert exc_info.value.status_code is None

    def test_empty_body_returns_empty_dict(self, client, mock_session, response_factory):
        mock_session.request.return_value = response_factory(status_code=204, content=b"")
        assert client.search_persons('name:"X"', 10) == {}

    def test_record_search_collection_filter(self, client, mock_session, response_factory):
        mock_session.request.return_value = response_factory(json_data={"entries": []})
        client.search_records('surname:"Smith"', 5, "1234")
        _, kwargs = mock_session.request.call_args
        assert kwargs["params"] == {"q": 'surname:"Smith"', "count": 5, "f.collectionId": "1234"}

    def test_record_search_without_collection(self, client, mock_session, response_factory):
        mock_session.request.return_value = response_factory(json_data={"entries": []})
        client.search_records('surname:"Smith"', 5)
        _, kwargs = mock_session.request.call_args
        assert "f.collectionId" not in kwargs["params"]


class TestOAuth:
    """Tests for token acquisition and refresh."""

    def test_authenticate_stores_tokens_and_login(self, client, authed_store, mock_session, response_factory):
        mock_session.request.return_value = response_factory(
            json_data={"access_token": "new-token", "refresh_token": "refresh-2"}
        )

        client.authenticate("pat", "secret")

        args, kwargs = mock_session.request.call_args
        assert args == ("POST", "https://ident.familysearch.org/cis-web/oauth2/v3/token")
        assert kwargs["data"] == {
            "grant_type": "password",
            "username": "pat",
            "password": "secret",
            "client_id": "APP-KEY",
        }
        creds = authed_store.get()
        assert creds.access_token == "new-token"
        assert creds.refresh_token == "refresh-2"
        assert creds.username == "pat"

    def test_authenticate_requires_client_id(self, client, authed_store, mock_session):
        authed_store.update(client_id="")
        with pytest.raises(NotConfiguredError):
            client.authenticate("pat", "secret")
        mock_session.request.assert_not_called()

    def test_authenticate_failure_message(self, client, mock_session, response_factory):
        mock_session.request.return_value = response_factory(
            status_code=400,
            reason="Bad Request",
            json_data={"error": "invalid_grant", "error_description": "Bad username or password"},
        )
        with pytest.raises(ApiError, match="Bad username or password"):
            client.authenticate("pat", "wrong")

    def test_token_response_without_access_token(self, client, mock_session, response_factory):
        mock_session.request.return_value = response_factory(json_data={"token_type": "bearer"})
        with pytest.raises(ApiError, match="did not include an access token"):
            client.authenticate("pat", "secret")

    def test_refresh_keeps_old_refresh_token_when_not_rotated(
        self, client, authed_store, mock_session, response_factory
    ):
        mock_session.request.return_value = response_factory(json_data={"access_token": "fresh"})

        client.refresh_access_token()

        _, kwargs = mock_session.request.call_args
        assert kwargs["data"]["grant_type"] == "refresh_token"
        assert kwargs["data"]["refresh_token"] == "refresh-1"
        assert authed_store.get().access_token == "fresh"
        assert authed_store.get().refresh_token == "refresh-1"

    def test_refresh_without_refresh_token(self, client, authed_store):
        authed_store.update(refresh_token="")
        with pytest.raises(NotAuthenticatedError):
            client.refresh_access_token()

    def test_refresh_does_not_overwrite_concurrent_login(
        self, client, authed_store, mock_session, response_factory
    ):
        """A login that lands while the refresh grant is in flight wins."""

        def login_during_refresh(*args, **kwargs):
            authed_store.update(access_token="login-token", refresh_token="login-refresh")
            return response_factory(json_data={"access_token": "stale", "refresh_token": "stale-r"})

        mock_session.request.side_effect = login_during_refresh

        client.refresh_access_token()

        creds = authed_store.get()
        assert creds.access_token == "login-token"
        assert creds.refresh_token == "login-refresh"

    def test_non_string_access_token_rejected(self, client, mock_session, response_factory):
        mock_session.request.return_value = response_factory(json_data={"access_token": 12345})
        with pytest.raises(ApiError, match="did not include an access token"):
            client.authenticate("pat", "secret")
