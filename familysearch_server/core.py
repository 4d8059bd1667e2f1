"""Tool handlers: each takes tool arguments and returns the text result.

Every FamilySearchError is caught here and turned into text; nothing
propagates to the MCP layer.
"""

import logging

from . import state
from .constants import DEFAULT_SEARCH_LIMIT, SEARCH_FIELDS
from .errors import ApiError, FamilySearchError
from .formatting import (
    format_current_user,
    format_person_details,
    format_person_results,
    format_record_results,
)
from .helpers import build_search_query, dict_items, dig
from .tree import ancestor_generations, descendant_generations, format_tree

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "Please configure your FamilySearch API credentials first using the 'configure' tool."
NOT_AUTHENTICATED = "Not authenticated. Please authenticate first using the 'authenticate' tool."


def _search_query(**filters: str | None) -> str:
    return build_search_query(**{SEARCH_FIELDS[k]: v for k, v in filters.items()})


def _entries(payload: dict) -> list[dict]:
    return dict_items(dig(payload, "entries"))


def _say_hello(name: str) -> str:
    return f"Hello {name}. You are looking awesome today!"


def _configure(client_id: str, redirect_uri: str | None = None) -> str:
    changes = {"client_id": client_id}
    if redirect_uri:
        changes["redirect_uri"] = redirect_uri
    try:
        state.get_client().credentials.update(**changes)
    except OSError as e:
        return f"Error saving configuration: {e}"
    return f"FamilySearch API credentials configured. Client ID: {client_id}"


def _authenticate(username: str, password: str) -> str:
    client = state.get_client()
    if not client.credentials.get().client_id:
        return NOT_CONFIGURED
    try:
        client.authenticate(username, password)
    except (FamilySearchError, OSError) as e:
        return f"Authentication failed: {e}"
    return "Successfully authenticated with FamilySearch!"


def _fetch_current_user() -> str:
    data = state.get_client().get_current_user()
    user = dig(data, "users", 0)
    return format_current_user(user if isinstance(user, dict) else {})


def _get_current_user() -> str:
    client = state.get_client()
    if not client.is_authenticated:
        return NOT_AUTHENTICATED

    try:
        return _fetch_current_user()
    except ApiError as e:
        if not (e.is_unauthorized and client.credentials.get().refresh_token):
            return f"Error fetching user info: {e}"
        logger.info("Access token rejected, attempting refresh")
    except FamilySearchError as e:
        return f"Error fetching user info: {e}"

    try:
        client.refresh_access_token()
    except (FamilySearchError, OSError) as e:
        return f"Session expired and refresh failed: {e}"

    # Exactly one retry with the refreshed token
    try:
        return _fetch_current_user()
    except FamilySearchError as e:
        return f"Error fetching user info: {e}"


def _search_persons(
    name: str | None = None,
    birth_date: str | None = None,
    birth_place: str | None = None,
    death_date: str | None = None,
    death_place: str | None = None,
    gender: str | None = None,
    limit: int | None = None,
) -> str:
    client = state.get_client()
    if not client.is_authenticated:
        return NOT_AUTHENTICATED

    query = _search_query(
        name=name,
        birth_date=birth_date,
        birth_place=birth_place,
        death_date=death_date,
        death_place=death_place,
        gender=gender,
    )
    try:
        data = client.search_persons(query, limit or DEFAULT_SEARCH_LIMIT)
    except FamilySearchError as e:
        return f"Error searching persons: {e}"
    return format_person_results(_entries(data))


def _get_person(person_id: str) -> str:
    client = state.get_client()
    if not client.is_authenticated:
        return NOT_AUTHENTICATED

    try:
        data = client.get_person(person_id)
    except FamilySearchError as e:
        return f"Error fetching person details: {e}"

    person = dig(data, "persons", 0)
    if not isinstance(person, dict):
        return f"No person found with ID: {person_id}"
    return format_person_details(person_id, person)


def _get_ancestors(person_id: str, generations: int | None = None) -> str:
    client = state.get_client()
    if not client.is_authenticated:
        return NOT_AUTHENTICATED

    gens = ancestor_generations(generations)
    try:
        data = client.get_ancestry(person_id, gens)
    except FamilySearchError as e:
        return f"Error fetching ancestors: {e}"
    return format_tree(person_id, data, "ancestors", gens)


def _get_descendants(person_id: str, generations: int | None = None) -> str:
    client = state.get_client()
    if not client.is_authenticated:
        return NOT_AUTHENTICATED

    gens = descendant_generations(generations)
    try:
        data = client.get_descendancy(person_id, gens)
    except FamilySearchError as e:
        return f"Error fetching descendants: {e}"
    return format_tree(person_id, data, "descendants", gens)


def _search_records(
    given_name: str | None = None,
    surname: str | None = None,
    birth_date: str | None = None,
    birth_place: str | None = None,
    death_date: str | None = None,
    death_place: str | None = None,
    collection_id: str | None = None,
    limit: int | None = None,
) -> str:
    client = state.get_client()
    if not client.is_authenticated:
        return NOT_AUTHENTICATED

    query = _search_query(
        given_name=given_name,
        surname=surname,
        birth_date=birth_date,
        birth_place=birth_place,
        death_date=death_date,
        death_place=death_place,
    )
    try:
        data = client.search_records(query, limit or DEFAULT_SEARCH_LIMIT, collection_id)
    except FamilySearchError as e:
        return f"Error searching records: {e}"
    return format_record_results(_entries(data))


def _get_config_status() -> dict:
    """Configuration summary without secrets."""
    client = state.get_client()
    creds = client.credentials.get()
    return {
        "client_id": creds.client_id or None,
        "redirect_uri": creds.redirect_uri,
        "environment": client.environment,
        "username": creds.username or None,
        "has_access_token": bool(creds.access_token),
        "has_refresh_token": bool(creds.refresh_token),
        "config_path": str(client.credentials.path),
    }
