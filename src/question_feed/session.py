"""Persisted sign-in session: auth token and current viewer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml

from question_feed.models import Viewer

LOGGER = logging.getLogger(__name__)

DEFAULT_SESSION_PATH = Path.home() / ".question_feed" / "session.yaml"


class SessionStore:
    """YAML-backed session written by the sign-in flow.

    Schema::

        token: <bearer token>
        user:
          id: <user id>
          username: <name>
          role: guest | member | admin

    A missing or unreadable file means nobody is signed in.
    """

    def __init__(self, path: Path = DEFAULT_SESSION_PATH) -> None:
        self.path = Path(path)

    def load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            LOGGER.warning("Cannot read session %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            LOGGER.warning("Ignoring malformed session %s", self.path)
            return {}
        return data

    def save(self, token: str, viewer: Viewer) -> None:
        payload = {
            "token": token,
            "user": {
                "id": viewer.id,
                "username": viewer.username,
                "role": viewer.role.value,
            },
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(payload, f, allow_unicode=True, sort_keys=False)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

    def token(self) -> Optional[str]:
        """Current bearer token, or None when signed out."""
        token = self.load().get("token")
        return str(token) if token else None

    def viewer(self) -> Optional[Viewer]:
        """Current viewer, or None when signed out."""
        user = self.load().get("user")
        if not isinstance(user, dict):
            return None
        return Viewer.from_dict(user)
