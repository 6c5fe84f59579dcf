"""Session tracking with change notifications.

The session is just the access token issued by the auth provider. The user id
and email are read from the token's claims; the server verifies the token.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from errors import ValidationFailure

log = logging.getLogger(__name__)


class SessionEvent(Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


@dataclass(frozen=True)
class Session:
    """An authenticated user."""

    user_id: str
    access_token: str
    email: str | None = None

    @property
    def display_name(self) -> str:
        return self.email or self.user_id

    @classmethod
    def from_access_token(cls, token: str) -> Session:
        """Build a session from a JWT access token.

        Raises ValidationFailure if the token is not a JWT with a ``sub`` claim.
        """
        token = token.strip()
        parts = token.split(".")
        if len(parts) != 3:
            raise ValidationFailure("Access token is not a valid JWT.")
        payload = parts[1] + "=" * (-len(parts[1]) % 4)
        try:
            claims = json.loads(base64.urlsafe_b64decode(payload))
        except (binascii.Error, ValueError) as e:
            raise ValidationFailure(f"Access token payload could not be decoded: {e}") from e
        if not isinstance(claims, dict) or not claims.get("sub"):
            raise ValidationFailure("Access token has no subject claim.")
        return cls(user_id=str(claims["sub"]), access_token=token, email=claims.get("email"))


SessionListener = Callable[[SessionEvent, "Session | None"], None]


class SessionManager:
    """Holds the current session and notifies listeners when it changes.

    Args:
        session_path: JSON file the token is persisted to (None disables persistence)
        access_token: Token that takes precedence over the stored one
    """

    def __init__(self, session_path: Path | None = None, access_token: str | None = None) -> None:
        self._path = session_path
        self._session: Session | None = None
        self._listeners: list[SessionListener] = []
        if access_token:
            self._session = self._try_parse(access_token)
        elif session_path is not None:
            self._session = self._load()

    def get_current_session(self) -> Session | None:
        return self._session

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def sign_in(self, access_token: str) -> Session:
        session = Session.from_access_token(access_token)
        self._session = session
        self._save()
        log.info(f"Signed in as {session.display_name}")
        self._notify(SessionEvent.SIGNED_IN)
        return session

    def sign_out(self) -> None:
        if self._session is None:
            return
        log.info(f"Signed out {self._session.display_name}")
        self._session = None
        if self._path is not None and self._path.exists():
            self._path.unlink()
        self._notify(SessionEvent.SIGNED_OUT)

    def _notify(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            listener(event, self._session)

    def _try_parse(self, token: str) -> Session | None:
        try:
            return Session.from_access_token(token)
        except ValidationFailure as e:
            log.warning(f"Ignoring access token: {e}")
            return None

    def _load(self) -> Session | None:
        if self._path is None or not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            log.warning(f"Could not read session file {self._path}: {e}")
            return None
        token = data.get("access_token") if isinstance(data, dict) else None
        return self._try_parse(token) if token else None

    def _save(self) -> None:
        if self._path is None or self._session is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps({"access_token": self._session.access_token}))
        os.chmod(self._path, 0o600)
