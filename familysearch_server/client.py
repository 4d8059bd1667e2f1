"""HTTP client for the FamilySearch platform and identity APIs."""

from __future__ import annotations

import logging
from typing import Any

import requests

from .constants import (
    DEFAULT_ENVIRONMENT,
    DEFAULT_TIMEOUT,
    ENVIRONMENTS,
    FS_JSON,
    GEDCOMX_ATOM_JSON,
    GEDCOMX_JSON,
    TOKEN_PATH,
)
from .credentials import CredentialStore
from .errors import ApiError, NotAuthenticatedError, NotConfiguredError
from .helpers import as_text
from .telemetry import get_tracer

logger = logging.getLogger(__name__)

USER_AGENT = "FamilySearch-MCP-Server/1.0"


def _error_message(response: requests.Response) -> str:
    """Pull the most useful message out of an error response body."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        # OAuth errors
        if body.get("error_description"):
            return str(body["error_description"])
        # Platform errors: {"errors": [{"message": ...}]}
        errors = body.get("errors")
        if isinstance(errors, list):
            messages = [e.get("message") for e in errors if isinstance(e, dict) and e.get("message")]
            if messages:
                return "; ".join(messages)
        if body.get("error"):
            return str(body["error"])

    reason = response.reason or "Request failed"
    return f"HTTP {response.status_code}: {reason}"


class FamilySearchClient:
    """Thin wrapper over the FamilySearch REST API.

    Tokens and the client ID are read from the CredentialStore on every call,
    and new tokens are written back to it, so the store is the single source
    of truth for authentication state.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        environment: str = DEFAULT_ENVIRONMENT,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        if environment not in ENVIRONMENTS:
            raise ValueError(
                f"Unknown FamilySearch environment '{environment}'. "
                f"Expected one of: {', '.join(ENVIRONMENTS)}"
            )
        self.credentials = credentials
        self.environment = environment
        self.ident_host, self.platform_host = ENVIRONMENTS[environment]
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)
        self._tracer = get_tracer(__name__)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.credentials.get().access_token)

    # ============== TRANSPORT ==============

    def _request(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        params: dict | None = None,
        data: dict | None = None,
        headers: dict | None = None,
    ) -> dict:
        with self._tracer.start_as_current_span(f"familysearch.{operation}") as span:
            span.set_attribute("http.method", method)
            span.set_attribute("http.url", url)
            try:
                response = self.session.request(
                    method,
                    url,
                    params=params,
                    data=data,
                    headers=headers,
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                logger.warning(f"FamilySearch {operation} request failed: {e}")
                raise ApiError(str(e)) from e

            span.set_attribute("http.status_code", response.status_code)
            logger.debug(f"{method} {url} -> {response.status_code}")

            if not response.ok:
                message = _error_message(response)
                logger.warning(f"FamilySearch {operation} returned {response.status_code}: {message}")
                raise ApiError(message, status_code=response.status_code)

            if response.status_code == 204 or not response.content:
                return {}
            try:
                payload = response.json()
            except ValueError as e:
                raise ApiError(f"Invalid JSON in response: {e}", status_code=response.status_code) from e
            return payload if isinstance(payload, dict) else {}

    def get(self, operation: str, path: str, params: dict | None = None, accept: str = GEDCOMX_JSON) -> dict:
        """Authenticated GET against the platform host."""
        access_token = self.credentials.get().access_token
        if not access_token:
            raise NotAuthenticatedError()
        headers = {"Authorization": f"Bearer {access_token}", "Accept": accept}
        return self._request(
            operation, "GET", f"{self.platform_host}{path}", params=params, headers=headers
        )

    # ============== OAUTH ==============

    def _token_request(self, operation: str, form: dict) -> dict:
        client_id = self.credentials.get().client_id
        if not client_id:
            raise NotConfiguredError()
        data = self._request(
            operation,
            "POST",
            f"{self.ident_host}{TOKEN_PATH}",
            data={**form, "client_id": client_id},
            headers={"Accept": "application/json"},
        )
        if not isinstance(data, dict) or not as_text(data.get("access_token")):
            raise ApiError("Token response did not include an access token")
        return data

    def authenticate(self, username: str, password: str) -> None:
        """OAuth2 password grant. Stores the new tokens and the login."""
        data = self._token_request(
            "authenticate",
            {"grant_type": "password", "username": username, "password": password},
        )
        current = self.credentials.get()
        self.credentials.update(
            username=username,
            password=password,
            access_token=data["access_token"],
            refresh_token=as_text(data.get("refresh_token")) or current.refresh_token,
        )
        logger.info("Authenticated with FamilySearch")

    def refresh_access_token(self) -> None:
        """OAuth2 refresh-token grant. Stores the new tokens."""
        current = self.credentials.get()
        if not current.refresh_token:
            raise NotAuthenticatedError("No refresh token available")
        data = self._token_request(
            "refresh_token",
            {"grant_type": "refresh_token", "refresh_token": current.refresh_token},
        )
        applied = self.credentials.update_if(
            {"refresh_token": current.refresh_token},
            access_token=data["access_token"],
            refresh_token=as_text(data.get("refresh_token")) or current.refresh_token,
        )
        if not applied:
            logger.info("Credentials changed during token refresh, keeping the newer ones")
            return
        logger.info("Refreshed FamilySearch access token")

    # ============== PLATFORM ==============

    def get_current_user(self) -> dict:
        return self.get("current_user", "/platform/users/current", accept=FS_JSON)

    def search_persons(self, query: str, count: int) -> dict:
        return self.get(
            "search_persons",
            "/platform/tree/search",
            params={"q": query, "count": count},
            accept=GEDCOMX_ATOM_JSON,
        )

    def get_person(self, person_id: str) -> dict:
        return self.get("get_person", f"/platform/tree/persons/{person_id}")

    def get_ancestry(self, person_id: str, generations: int) -> dict:
        return self.get(
            "ancestry",
            "/platform/tree/ancestry",
            params={"person": person_id, "generations": generations},
        )

    def get_descendancy(self, person_id: str, generations: int) -> dict:
        return self.get(
            "descendancy",
            "/platform/tree/descendancy",
            params={"person": person_id, "generations": generations},
        )

    def search_records(self, query: str, count: int, collection_id: str | None = None) -> dict:
        params: dict[str, Any] = {"q": query, "count": count}
        if collection_id:
            params["f.collectionId"] = collection_id
        return self.get(
            "search_records",
            "/platform/records/search",
            params=params,
            accept=GEDCOMX_ATOM_JSON,
        )
