from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from kitchen.app.domain.models import Advertisement, AppSettings, SettingsEdit
from kitchen.services.gist import GistClient
from kitchen.services.local_store import SETTINGS_KEY, LocalStore
from kitchen.services.settings_sync import SettingsSynchronizer

GIST_ID = "0123456789abcdef0123"
RAW_URL = f"https://gist.githubusercontent.com/sam/{GIST_ID}/raw/settings.json"
NEW_REVISION = "d" * 40
REVISION_URL = f"https://gist.githubusercontent.com/sam/{GIST_ID}/raw/{NEW_REVISION}/settings.json"


class GistApiStub:
    def __init__(self, status_code: int = 200, body: Any = None) -> None:
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"message": "Bad credentials"})
        if self.body is not None:
            return httpx.Response(200, json=self.body)
        return httpx.Response(
            200,
            json={"id": GIST_ID, "owner": {"login": "sam"}, "history": [{"version": NEW_REVISION}]},
        )

    def patched_document(self) -> dict:
        body = json.loads(self.requests[-1].content)
        return json.loads(body["files"]["settings.json"]["content"])


@pytest.fixture
def store(tmp_path: Path) -> LocalStore:
    return LocalStore(tmp_path / "store.json")


def _sync(store: LocalStore, api: GistApiStub) -> SettingsSynchronizer:
    return SettingsSynchronizer(store, GistClient(httpx.Client(transport=httpx.MockTransport(api))))


def _cached(store: LocalStore) -> dict:
    return json.loads(store.get(SETTINGS_KEY))


class TestLocalSave:
    def test_edits_replace_whole_fields(self, store: LocalStore) -> None:
        current = AppSettings()
        edits = SettingsEdit(
            subscriptionMessage="اشترك الآن",
            advertisements=[Advertisement(imageUrl="x.png", text="جديد", linkUrl="https://example.com")],
        )

        result = _sync(store, GistApiStub()).save(current, edits)

        assert result.local_saved
        assert not result.remote_attempted
        assert result.settings.subscriptionMessage == "اشترك الآن"
        assert [ad.text for ad in result.settings.advertisements] == ["جديد"]
        assert _cached(store)["subscriptionMessage"] == "اشترك الآن"

    def test_blank_password_keeps_existing(self, store: LocalStore) -> None:
        current = AppSettings(adminPassword="s3cret")

        result = _sync(store, GistApiStub()).save(current, SettingsEdit(adminUsername="chef", adminPassword="   "))

        assert result.settings.adminUsername == "chef"
        assert result.settings.adminPassword == "s3cret"
        assert _cached(store)["adminPassword"] == "s3cret"

    def test_new_password_is_applied(self, store: LocalStore) -> None:
        result = _sync(store, GistApiStub()).save(AppSettings(), SettingsEdit(adminPassword="n3w"))

        assert result.settings.adminPassword == "n3w"

    def test_url_without_token_is_not_synced(self, store: LocalStore) -> None:
        api = GistApiStub()

        result = _sync(store, api).save(AppSettings(gistUrl=RAW_URL), SettingsEdit())

        assert not result.remote_attempted
        assert api.requests == []


class TestRemoteSync:
    def test_patch_carries_full_document_without_local_fields(self, store: LocalStore) -> None:
        api = GistApiStub()
        current = AppSettings(gistUrl=RAW_URL, githubToken="ghp_write", adminPassword="keep-me")

        result = _sync(store, api).save(current, SettingsEdit(subscriptionMessage="hi", adminPassword=""))

        assert result.ok
        assert result.remote_synced
        request = api.requests[0]
        assert request.method == "PATCH"
        assert str(request.url) == f"https://api.github.com/gists/{GIST_ID}"
        assert request.headers["Authorization"] == "Bearer ghp_write"
        document = api.patched_document()
        assert document["subscriptionMessage"] == "hi"
        assert document["adminPassword"] == "keep-me"
        assert "gistUrl" not in document
        assert "githubToken" not in document

    def test_address_is_repointed_to_new_revision(self, store: LocalStore) -> None:
        current = AppSettings(gistUrl=RAW_URL, githubToken="ghp_write")

        result = _sync(store, GistApiStub()).save(current, SettingsEdit())

        assert result.settings.gistUrl == REVISION_URL
        assert _cached(store)["gistUrl"] == REVISION_URL

    def test_remote_failure_keeps_local_save(self, store: LocalStore) -> None:
        current = AppSettings(gistUrl=RAW_URL, githubToken="expired")

        result = _sync(store, GistApiStub(status_code=401)).save(current, SettingsEdit(adminUsername="chef"))

        assert result.local_saved
        assert result.remote_attempted
        assert not result.remote_synced
        assert not result.ok
        assert "Bad credentials" in result.remote_error
        assert _cached(store)["adminUsername"] == "chef"
        assert _cached(store)["gistUrl"] == RAW_URL

    def test_malformed_update_response_keeps_local_save(self, store: LocalStore) -> None:
        current = AppSettings(gistUrl=RAW_URL, githubToken="ghp_write")
        api = GistApiStub(body={"owner": {"login": "sam"}, "history": [{}], "files": {}})

        result = _sync(store, api).save(current, SettingsEdit(adminUsername="chef"))

        assert result.local_saved
        assert result.remote_attempted
        assert not result.remote_synced
        assert "no revision" in result.remote_error
        assert result.settings.gistUrl == RAW_URL
        assert _cached(store)["adminUsername"] == "chef"

    def test_unparseable_address_is_reported(self, store: LocalStore) -> None:
        current = AppSettings(gistUrl="https://example.com/settings.json", githubToken="ghp_write")
        api = GistApiStub()

        result = _sync(store, api).save(current, SettingsEdit())

        assert result.local_saved
        assert result.remote_error is not None
        assert api.requests == []
