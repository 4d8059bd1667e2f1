"""Shared fixtures for FamilySearch server tests."""

import os
import tempfile
from unittest.mock import MagicMock

import pytest

# Point the config dir at a throwaway location BEFORE importing familysearch_server
# so the real ~/.familysearch-mcp is never touched. load_dotenv won't override these.
_TEST_CONFIG_DIR = tempfile.mkdtemp(prefix="familysearch-test-")
os.environ["FAMILYSEARCH_CONFIG_DIR"] = _TEST_CONFIG_DIR
os.environ["FAMILYSEARCH_ENVIRONMENT"] = "production"
os.environ["FAMILYSEARCH_TRACING_ENABLED"] = "false"

from familysearch_server import initialize  # noqa: E402

initialize()

from familysearch_server import state  # noqa: E402
from familysearch_server.client import FamilySearchClient  # noqa: E402
from familysearch_server.credentials import CredentialStore  # noqa: E402


@pytest.fixture
def store(tmp_path):
    """An empty credential store backed by a temp file."""
    return CredentialStore(tmp_path / "config.json")


@pytest.fixture
def authed_store(store):
    """A credential store holding a client ID and both tokens."""
    store.update(client_id="APP-KEY", access_token="old-token", refresh_token="refresh-1")
    return store


@pytest.fixture
def mock_session():
    """A stand-in for requests.Session."""
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def client(authed_store, mock_session):
    """A real client over a mocked HTTP session."""
    return FamilySearchClient(authed_store, session=mock_session)


@pytest.fixture
def fake_client(authed_store, monkeypatch):
    """Replace the process-wide client with a mock, keeping a real store."""
    fake = MagicMock(spec=FamilySearchClient)
    fake.credentials = authed_store
    fake.environment = "production"
    fake.is_authenticated = True
    monkeypatch.setattr(state, "client", fake)
    return fake


def make_response(status_code=200, json_data=None, reason="OK", content=b"{}"):
    """Build a mock requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.reason = reason
    response.content = content
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def response_factory():
    return make_response
