"""File-backed store for FamilySearch OAuth credentials.

The store is shared process-wide. Writes are serialized by a lock and land
on disk atomically (temp file + rename), so readers only ever see the old or
the new record, never a partial one.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path

from .constants import DEFAULT_REDIRECT_URI

logger = logging.getLogger(__name__)

# On-disk key names
_JSON_KEYS = {
    "client_id": "clientId",
    "redirect_uri": "redirectUri",
    "access_token": "accessToken",
    "refresh_token": "refreshToken",
    "username": "username",
    "password": "password",
}


@dataclass(frozen=True)
class Credentials:
    client_id: str = ""
    redirect_uri: str = DEFAULT_REDIRECT_URI
    access_token: str = ""
    refresh_token: str = ""
    username: str = ""
    password: str = ""

    def to_json(self) -> dict:
        return {_JSON_KEYS[k]: v for k, v in asdict(self).items()}

    @classmethod
    def from_json(cls, data: dict) -> Credentials:
        if not isinstance(data, dict):
            raise ValueError("credentials file must contain a JSON object")
        values = {}
        for f in fields(cls):
            value = data.get(_JSON_KEYS[f.name])
            if isinstance(value, str):
                values[f.name] = value
        return cls(**values)


class CredentialStore:
    """Holds the current Credentials and persists them to a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._credentials = Credentials()

    def load(self) -> Credentials:
        """Load from disk. A missing or corrupt file leaves the defaults in place."""
        credentials = Credentials()
        if self.path.exists():
            try:
                with open(self.path, encoding="utf-8") as f:
                    credentials = Credentials.from_json(json.load(f))
                logger.info(f"Loaded FamilySearch config from {self.path}")
            except (OSError, ValueError) as e:
                logger.warning(f"Error loading config from {self.path}, using defaults: {e}")
                credentials = Credentials()
        with self._lock:
            self._credentials = credentials
        return credentials

    def get(self) -> Credentials:
        """Snapshot of the current credentials (immutable)."""
        with self._lock:
            return self._credentials

    def update(self, **changes: str) -> Credentials:
        """Apply changes and save them in one locked step."""
        with self._lock:
            updated = replace(self._credentials, **changes)
            self._write(updated)
            self._credentials = updated
        return updated

    def update_if(self, expected: dict[str, str], **changes: str) -> bool:
        """Apply changes only while the fields in expected still hold those values.

        Returns False, leaving the store untouched, when another writer got
        there first.
        """
        with self._lock:
            for name, value in expected.items():
                if getattr(self._credentials, name) != value:
                    return False
            updated = replace(self._credentials, **changes)
            self._write(updated)
            self._credentials = updated
        return True

    def _write(self, credentials: Credentials) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".config-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(credentials.to_json(), f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.info(f"Saved FamilySearch config to {self.path}")
