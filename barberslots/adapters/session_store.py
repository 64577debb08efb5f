"""
Local persistence of the signed-in session (access token and user record).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

logger = logging.getLogger(__name__)


KEYRING_SERVICE_NAME = "barberslots"
KEYRING_USERNAME = "session"


class SessionStore:
    """
    Stores the session in the OS keyring, falling back to a plaintext file.

    The session is a small JSON record: ``{"token": ..., "user": {...}}``.
    """

    def __init__(self, cache_file: Path | None = None, service_name: str = KEYRING_SERVICE_NAME):
        """
        Initialize the session store.

        Args:
            cache_file: Optional path of the fallback session file
            service_name: Keyring service the session is stored under
        """
        self.cache_file = cache_file or Path.home() / ".barberslots_session.json"
        self.service_name = service_name
        self._keyring_supported = True

    @property
    def backend(self) -> str:
        """Return the active storage backend (keyring or file)."""
        return "keyring" if self._keyring_supported else "file"

    def get_token(self) -> Optional[str]:
        return self._load().get("token")

    def set_token(self, token: str) -> None:
        record = self._load()
        record["token"] = token
        self._save(record)

    def get_user(self) -> Optional[Dict[str, Any]]:
        return self._load().get("user")

    def set_user(self, user: Dict[str, Any]) -> None:
        record = self._load()
        record["user"] = user
        self._save(record)

    def clear(self) -> None:
        """Forget the token and user record in every backend."""
        if self.cache_file.exists():
            self.cache_file.unlink()

        try:
            keyring.delete_password(self.service_name, KEYRING_USERNAME)
        except PasswordDeleteError:
            pass  # nothing stored
        except KeyringError as exc:  # pragma: no cover - environment dependent
            logger.warning("Could not remove session from keyring: %s", exc)

    def _load(self) -> Dict[str, Any]:
        serialized = self._load_from_keyring()
        if serialized is None:
            serialized = self._load_from_file()

        if not serialized:
            return {}

        try:
            record = json.loads(serialized)
        except ValueError as exc:
            logger.warning("Could not deserialize session: %s", exc)
            return {}

        return record if isinstance(record, dict) else {}

    def _load_from_keyring(self) -> Optional[str]:
        if not self._keyring_supported:
            return None

        try:
            return keyring.get_password(self.service_name, KEYRING_USERNAME)
        except KeyringError as exc:
            self._handle_keyring_failure(f"reading session failed: {exc}")
            return None

    def _load_from_file(self) -> Optional[str]:
        if self.cache_file.exists():
            try:
                with open(self.cache_file, "r", encoding="utf-8") as file_handle:
                    return file_handle.read()
            except OSError as exc:
                logger.warning("Could not load session file %s: %s", self.cache_file, exc)
        return None

    def _save(self, record: Dict[str, Any]) -> None:
        serialized = json.dumps(record)

        if self._keyring_supported and self._save_to_keyring(serialized):
            return

        self._save_to_file(serialized)

    def _save_to_keyring(self, serialized: str) -> bool:
        try:
            keyring.set_password(self.service_name, KEYRING_USERNAME, serialized)
            return True
        except KeyringError as exc:
            self._handle_keyring_failure(f"writing session failed: {exc}")
            return False

    def _save_to_file(self, serialized: str) -> None:
        try:
            self.cache_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.cache_file, "w", encoding="utf-8") as file_handle:
                file_handle.write(serialized)
            self.cache_file.chmod(0o600)
        except OSError as exc:
            logger.warning("Could not save session to %s: %s", self.cache_file, exc)

    def _handle_keyring_failure(self, reason: str) -> None:
        if self._keyring_supported:
            logger.warning(
                "Secure credential storage unavailable (%s). Falling back to %s.",
                reason,
                self.cache_file,
            )
        self._keyring_supported = False
