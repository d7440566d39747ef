from __future__ import annotations

import secrets
from enum import Enum
from typing import TYPE_CHECKING, Optional

from kitchen.app.domain.models import AppSettings

if TYPE_CHECKING:
    from kitchen.app.context import AppContext


class SessionState(str, Enum):
    LOGGED_OUT = "LOGGED_OUT"
    LOGGED_IN = "LOGGED_IN"


class AdminSession:
    """
    The single shared admin login.

    Credentials are compared in clear text against the current settings.
    There is no hashing, lockout or expiry.
    """

    def __init__(self) -> None:
        self.state = SessionState.LOGGED_OUT
        self._token: Optional[str] = None

    @property
    def is_logged_in(self) -> bool:
        return self.state is SessionState.LOGGED_IN

    def login(self, username: str, password: str, settings: AppSettings) -> Optional[str]:
        if username != settings.adminUsername or password != settings.adminPassword:
            return None
        self.state = SessionState.LOGGED_IN
        self._token = secrets.token_urlsafe(32)
        return self._token

    def logout(self) -> None:
        self.state = SessionState.LOGGED_OUT
        self._token = None

    def is_authenticated(self, token: Optional[str]) -> bool:
        if not self.is_logged_in or not token or self._token is None:
            return False
        # Header values may decode to non-ASCII text, which compare_digest rejects as str.
        return secrets.compare_digest(token.encode("utf-8"), self._token.encode("utf-8"))


class SubscriptionGate:
    def __init__(self, context: "AppContext") -> None:
        self._context = context

    @property
    def is_subscribed(self) -> bool:
        return self._context.is_subscribed

    def allows_generation(self, is_admin: bool) -> bool:
        return is_admin or self.is_subscribed

    def subscribe(self) -> None:
        # Clicking the link is trusted; nothing checks the channel itself.
        self._context.mark_subscribed()
