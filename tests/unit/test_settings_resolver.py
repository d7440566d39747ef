from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from kitchen.app.domain.models import AppSettings
from kitchen.services.gist import GistClient
from kitchen.services.local_store import SETTINGS_KEY, LocalStore
from kitchen.services.settings_resolver import SettingsResolver

RAW_URL = "https://gist.githubusercontent.com/sam/0123456789abcdef0123/raw/settings.json"
DEFAULT_MESSAGE = AppSettings().subscriptionMessage


class RemoteStub:
    def __init__(self, status_code: int = 200, body: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)


def _resolver(store: LocalStore, remote: RemoteStub) -> SettingsResolver:
    gist = GistClient(httpx.Client(transport=httpx.MockTransport(remote)))
    return SettingsResolver(store, gist)


@pytest.fixture
def store(tmp_path: Path) -> LocalStore:
    return LocalStore(tmp_path / "store.json")


def _cache(store: LocalStore, **fields: Any) -> None:
    store.set(SETTINGS_KEY, json.dumps(fields, ensure_ascii=False))


class TestMergeOrder:
    def test_defaults_only(self, store: LocalStore) -> None:
        remote = RemoteStub()

        settings = _resolver(store, remote).resolve()

        assert settings == AppSettings()
        assert remote.requests == []

    def test_local_overrides_defaults(self, store: LocalStore) -> None:
        _cache(store, subscriptionMessage="local")

        settings = _resolver(store, RemoteStub()).resolve()

        assert settings.subscriptionMessage == "local"
        assert settings.adminUsername == "admin"

    def test_remote_overrides_local(self, store: LocalStore) -> None:
        _cache(store, subscriptionMessage="local", gistUrl=RAW_URL)
        remote = RemoteStub(body={"subscriptionMessage": "remote"})

        settings = _resolver(store, remote).resolve()

        assert settings.subscriptionMessage == "remote"
        assert len(remote.requests) == 1
        assert "_" in remote.requests[0].url.params

    def test_field_absent_everywhere_keeps_default(self, store: LocalStore) -> None:
        _cache(store, adminUsername="local-admin", gistUrl=RAW_URL)
        remote = RemoteStub(body={"adminUsername": "remote-admin"})

        settings = _resolver(store, remote).resolve()

        assert settings.adminUsername == "remote-admin"
        assert settings.subscriptionMessage == DEFAULT_MESSAGE

    def test_merge_is_shallow(self, store: LocalStore) -> None:
        _cache(
            store,
            gistUrl=RAW_URL,
            advertisements=[{"imageUrl": "a.png", "text": "one", "linkUrl": "#1"}, {"imageUrl": "b.png", "text": "two", "linkUrl": "#2"}],
        )
        remote = RemoteStub(body={"advertisements": [{"imageUrl": "c.png", "text": "three", "linkUrl": "#3"}]})

        settings = _resolver(store, remote).resolve()

        assert [ad.text for ad in settings.advertisements] == ["three"]

    def test_remote_cannot_repoint_or_leak_credentials(self, store: LocalStore) -> None:
        _cache(store, gistUrl=RAW_URL, githubToken="ghp_local")
        remote = RemoteStub(body={"gistUrl": "https://evil.example/x", "githubToken": "stolen"})

        settings = _resolver(store, remote).resolve()

        assert settings.gistUrl == RAW_URL
        assert settings.githubToken == "ghp_local"


class TestFailurePolicy:
    def test_remote_failure_keeps_local(self, store: LocalStore) -> None:
        _cache(store, subscriptionMessage="local", gistUrl=RAW_URL)

        settings = _resolver(store, RemoteStub(status_code=500)).resolve()

        assert settings.subscriptionMessage == "local"

    def test_malformed_remote_keeps_local(self, store: LocalStore) -> None:
        _cache(store, subscriptionMessage="local", gistUrl=RAW_URL)

        settings = _resolver(store, RemoteStub(text="<html>rate limited</html>")).resolve()

        assert settings.subscriptionMessage == "local"

    def test_malformed_cache_and_failing_remote_never_raise(self, store: LocalStore) -> None:
        store.set(SETTINGS_KEY, "{this is not json")

        settings = _resolver(store, RemoteStub(status_code=500)).resolve()

        assert settings == AppSettings()

    def test_wrongly_typed_fields_are_dropped(self, store: LocalStore) -> None:
        _cache(store, adminUsername=42, subscriptionMessage="local", unknownKey="x")

        settings = _resolver(store, RemoteStub()).resolve()

        assert settings.adminUsername == "admin"
        assert settings.subscriptionMessage == "local"


class TestPersistence:
    def test_result_is_written_back(self, store: LocalStore) -> None:
        _cache(store, subscriptionMessage="local", gistUrl=RAW_URL)

        settings = _resolver(store, RemoteStub(body={"subscriptionMessage": "remote"})).resolve()

        cached = json.loads(store.get(SETTINGS_KEY))
        assert cached["subscriptionMessage"] == "remote"
        assert AppSettings.model_validate(cached) == settings

    def test_defaults_are_written_even_after_a_bad_cache(self, store: LocalStore) -> None:
        store.set(SETTINGS_KEY, "garbage")

        _resolver(store, RemoteStub()).resolve()

        assert json.loads(store.get(SETTINGS_KEY))["adminUsername"] == "admin"
