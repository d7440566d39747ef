# kitchen/app/context.py
"""
Application context: the one place the current settings live.

Readers take ``context.settings``. Only two paths replace it, ``load()``
at startup and ``save()`` from the admin panel, and each replacement is a
single assignment of a freshly merged AppSettings.
"""
from __future__ import annotations

import logging

from kitchen.app.domain.models import AppSettings, SaveResult, SettingsEdit
from kitchen.services.local_store import SUBSCRIBED_KEY, LocalStore
from kitchen.services.settings_resolver import SettingsResolver
from kitchen.services.settings_sync import SettingsSynchronizer

logger = logging.getLogger(__name__)


class AppContext:
    def __init__(
        self,
        store: LocalStore,
        resolver: SettingsResolver,
        synchronizer: SettingsSynchronizer,
    ) -> None:
        self.store = store
        self._resolver = resolver
        self._synchronizer = synchronizer
        self.settings = AppSettings()
        self.ready = False

    def load(self) -> AppSettings:
        self.settings = self._resolver.resolve()
        self.ready = True
        logger.info("Settings resolved (remote configured: %s)", self.settings.has_remote)
        return self.settings

    def save(self, edits: SettingsEdit) -> SaveResult:
        # A save merges onto resolved settings, never onto bare defaults.
        if not self.ready:
            self.load()
        result = self._synchronizer.save(self.settings, edits)
        self.settings = result.settings
        return result

    @property
    def is_subscribed(self) -> bool:
        return self.store.get(SUBSCRIBED_KEY) == "true"

    def mark_subscribed(self) -> None:
        self.store.set(SUBSCRIBED_KEY, "true")
