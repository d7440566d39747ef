"""
Startup resolution of the settings document.

Order is fixed: built-in defaults, then the local cache, then the remote
document when one is configured. The result is written back to the local
cache every time. Nothing here raises; a bad source is logged and skipped.
"""
from __future__ import annotations

import json
import logging

from kitchen.app.domain.models import LOCAL_ONLY_FIELDS, AppSettings, coerce_settings_patch
from kitchen.services.errors import RemoteFetchError
from kitchen.services.gist import GistClient
from kitchen.services.local_store import SETTINGS_KEY, LocalStore

logger = logging.getLogger(__name__)


class SettingsResolver:
    def __init__(self, store: LocalStore, gist_client: GistClient) -> None:
        self._store = store
        self._gist = gist_client

    def _load_local(self, settings: AppSettings) -> AppSettings:
        cached = self._store.get(SETTINGS_KEY)
        if cached is None:
            return settings
        try:
            raw = json.loads(cached)
        except json.JSONDecodeError as err:
            logger.warning("Failed to parse cached settings, using defaults: %s", err)
            return settings
        return settings.merged(coerce_settings_patch(raw))

    def _load_remote(self, settings: AppSettings) -> AppSettings:
        try:
            document = self._gist.fetch_document(settings.gistUrl.strip())
        except RemoteFetchError as err:
            logger.warning("Could not load remote settings: %s", err)
            return settings

        patch = coerce_settings_patch(document)
        for field in LOCAL_ONLY_FIELDS:
            patch.pop(field, None)
        return settings.merged(patch)

    def resolve(self) -> AppSettings:
        settings = self._load_local(AppSettings())

        if settings.has_remote:
            settings = self._load_remote(settings)

        try:
            self._store.set(SETTINGS_KEY, settings.model_dump_json())
        except OSError as err:
            logger.warning("Could not persist resolved settings: %s", err)
        return settings
