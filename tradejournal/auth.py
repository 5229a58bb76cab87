"""Local authentication for the trade journal.

The signed-in user is remembered in a small TOML session file so that
separate CLI invocations share the same identity.
"""

import logging
import uuid
from pathlib import Path
from typing import Callable, Optional

import toml

from tradejournal.models import User

logger = logging.getLogger(__name__)


AuthCallback = Callable[[Optional[User]], None]


def user_id_for(email: str) -> str:
    """Derive a stable user id from an email address."""
    return uuid.uuid5(uuid.NAMESPACE_URL, f"mailto:{email.strip().lower()}").hex


class LocalAuth:
    """File-backed authentication provider."""

    def __init__(self, session_path: Path):
        """Initialize the provider.

        Args:
            session_path: Path to the session file.
        """
        self.session_path = session_path
        self._listeners: list[AuthCallback] = []
        self._user = self._load()

    def _load(self) -> Optional[User]:
        if not self.session_path.exists():
            return None
        try:
            data = toml.load(self.session_path)
        except toml.TomlDecodeError:
            logger.warning("Ignoring unreadable session file %s", self.session_path)
            return None
        user = data.get("user")
        return User(**user) if user else None

    def _save(self) -> None:
        self.session_path.parent.mkdir(parents=True, exist_ok=True)
        data = {"user": self._user.model_dump()} if self._user else {}
        with open(self.session_path, "w") as f:
            toml.dump(data, f)

    @property
    def current_user(self) -> Optional[User]:
        """The signed-in user, or None."""
        return self._user

    def sign_in(self, email: str, name: Optional[str] = None) -> User:
        """Sign a user in.

        Args:
            email: Email address identifying the user.
            name: Optional display name.

        Returns:
            The signed-in user.

        Raises:
            ValueError: If email is empty.
        """
        email = email.strip()
        if not email:
            raise ValueError("Email is required to sign in")

        self._user = User(uid=user_id_for(email), email=email, name=name or email.split("@")[0])
        self._save()
        logger.info("Signed in as %s", email)
        self._emit()
        return self._user

    def sign_out(self) -> None:
        """Sign the current user out."""
        self._user = None
        self._save()
        logger.info("Signed out")
        self._emit()

    def on_change(self, callback: AuthCallback) -> Callable[[], None]:
        """Register for auth changes.

        The callback fires immediately with the current user and then on
        every sign-in and sign-out.

        Returns:
            Function that unregisters the callback.
        """
        self._listeners.append(callback)
        callback(self._user)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _emit(self) -> None:
        for callback in list(self._listeners):
            callback(self._user)
