"""Utility functions for reading GEDCOM X payloads."""

import re
from typing import Any

from .constants import GEDCOMX_PREFIX


def as_text(value: Any) -> str | None:
    """Return value if it is a non-empty string, else None."""
    return value if isinstance(value, str) and value else None


def dict_items(value: Any) -> list[dict]:
    """The dict elements of value when it is a list; anything else yields []."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def extract_year(date_str: str | None) -> str | None:
    """Extract the first four consecutive digits from a free-text date."""
    if not date_str:
        return None
    match = re.search(r"\d{4}", date_str)
    return match.group(0) if match else None


def strip_type_uri(type_uri: str | None) -> str | None:
    """Turn 'http://gedcomx.org/Birth' into 'Birth'. Custom URIs pass through."""
    if not type_uri:
        return None
    if type_uri.startswith(GEDCOMX_PREFIX):
        return type_uri[len(GEDCOMX_PREFIX) :]
    return type_uri


def dig(data: Any, *path: str | int) -> Any:
    """Walk nested dicts/lists, returning None at the first missing step.

    dig(entry, "content", "gedcomx", "persons", 0, "gender", "type")
    """
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
            current = current[key]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(key)
        if current is None:
            return None
    return current


def build_search_query(**filters: str | None) -> str:
    """Build a FamilySearch 'q' string from tool filter values.

    Keys are FamilySearch field names; empty values are dropped.
    """
    terms = []
    for field, value in filters.items():
        if value:
            escaped = str(value).replace('"', "")
            terms.append(f'{field}:"{escaped}"')
    return " ".join(terms)
