from __future__ import annotations

from pathlib import Path

import pytest

from kitchen.app.domain.models import AppSettings
from kitchen.app.domain.session import AdminSession, SessionState, SubscriptionGate
from kitchen.services.local_store import SUBSCRIBED_KEY, LocalStore


class ContextStub:
    """Just enough of AppContext for the gate."""

    def __init__(self, store: LocalStore) -> None:
        self.store = store

    @property
    def is_subscribed(self) -> bool:
        return self.store.get(SUBSCRIBED_KEY) == "true"

    def mark_subscribed(self) -> None:
        self.store.set(SUBSCRIBED_KEY, "true")


class TestAdminSession:
    def test_starts_logged_out(self) -> None:
        session = AdminSession()

        assert session.state is SessionState.LOGGED_OUT
        assert not session.is_authenticated("anything")

    def test_matching_credentials_log_in(self) -> None:
        session = AdminSession()

        token = session.login("admin", "password123", AppSettings())

        assert token
        assert session.state is SessionState.LOGGED_IN
        assert session.is_authenticated(token)
        assert not session.is_authenticated("forged")

    @pytest.mark.parametrize(
        "username,password",
        [("admin", "wrong"), ("Admin", "password123"), ("", ""), ("admin", "password123 ")],
    )
    def test_any_mismatch_stays_logged_out(self, username: str, password: str) -> None:
        session = AdminSession()

        assert session.login(username, password, AppSettings()) is None
        assert session.state is SessionState.LOGGED_OUT

    def test_checks_against_current_settings(self) -> None:
        session = AdminSession()
        settings = AppSettings(adminUsername="chef", adminPassword="s3cret")

        assert session.login("admin", "password123", settings) is None
        assert session.login("chef", "s3cret", settings) is not None

    def test_non_ascii_token_is_rejected(self) -> None:
        session = AdminSession()
        session.login("admin", "password123", AppSettings())

        assert not session.is_authenticated("été")

    def test_logout_invalidates_token(self) -> None:
        session = AdminSession()
        token = session.login("admin", "password123", AppSettings())

        session.logout()

        assert session.state is SessionState.LOGGED_OUT
        assert not session.is_authenticated(token)


class TestSubscriptionGate:
    def test_blocks_anonymous_unsubscribed(self, tmp_path: Path) -> None:
        gate = SubscriptionGate(ContextStub(LocalStore(tmp_path / "s.json")))

        assert not gate.allows_generation(is_admin=False)

    def test_admin_bypasses_gate(self, tmp_path: Path) -> None:
        gate = SubscriptionGate(ContextStub(LocalStore(tmp_path / "s.json")))

        assert gate.allows_generation(is_admin=True)

    def test_subscribe_persists(self, tmp_path: Path) -> None:
        path = tmp_path / "s.json"
        SubscriptionGate(ContextStub(LocalStore(path))).subscribe()

        fresh = SubscriptionGate(ContextStub(LocalStore(path)))

        assert fresh.is_subscribed
        assert fresh.allows_generation(is_admin=False)
        assert LocalStore(path).get(SUBSCRIBED_KEY) == "true"
