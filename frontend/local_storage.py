"""
Durable key/value storage for the blog client.

String values survive process restarts, the way browser local storage
survives a page reload. Backed by one JSON file:

  {
    "pendingRegName": "Ann",
    "pendingRegEmail": "ann@gmail.com",
    "auth.session": "{...}"
  }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

PENDING_NAME_KEY = "pendingRegName"
PENDING_EMAIL_KEY = "pendingRegEmail"
SESSION_KEY = "auth.session"


class LocalStorage:
    """String key/value store persisted to a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._data: dict[str, str] = {}
        self._load()

    def _load(self):
        """Load stored values from disk."""
        if not self.path.exists():
            return
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable local storage %s: %s", self.path, e)
            return
        if isinstance(data, dict):
            self._data = {k: v for k, v in data.items() if isinstance(v, str)}

    def _save(self):
        """Save to disk with owner-only permissions."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(self._data, f, indent=2)
        self.path.chmod(0o600)

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value
        self._save()

    def remove_item(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._save()

    def clear(self) -> None:
        """Drop every value and delete the backing file."""
        self._data = {}
        if self.path.exists():
            self.path.unlink()

    # Pending registration pair

    def get_pending_registration(self) -> dict[str, str] | None:
        name = self.get_item(PENDING_NAME_KEY)
        email = self.get_item(PENDING_EMAIL_KEY)
        if name is None or email is None:
            return None
        return {"name": name, "email": email}

    def set_pending_registration(self, name: str, email: str) -> None:
        self._data[PENDING_NAME_KEY] = name
        self._data[PENDING_EMAIL_KEY] = email
        self._save()

    def clear_pending_registration(self) -> None:
        changed = False
        for key in (PENDING_NAME_KEY, PENDING_EMAIL_KEY):
            if key in self._data:
                del self._data[key]
                changed = True
        if changed:
            self._save()
