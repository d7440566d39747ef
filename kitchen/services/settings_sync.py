from __future__ import annotations

import logging

from kitchen.app.domain.models import AppSettings, SaveResult, SettingsEdit
from kitchen.services.errors import InvalidGistAddressError, RemoteSyncError
from kitchen.services.gist import GistClient, parse_gist_address
from kitchen.services.local_store import SETTINGS_KEY, LocalStore

logger = logging.getLogger(__name__)


class SettingsSynchronizer:
    """
    Applies an admin save.

    The local cache is always written first. When the settings point at a
    gist and carry a token, the remote document is then replaced and the
    local address is repointed at the new immutable revision. A failed
    remote update leaves the local save in place.
    """

    def __init__(self, store: LocalStore, gist_client: GistClient) -> None:
        self._store = store
        self._gist = gist_client

    def _persist(self, settings: AppSettings) -> None:
        self._store.set(SETTINGS_KEY, settings.model_dump_json())

    def save(self, current: AppSettings, edits: SettingsEdit) -> SaveResult:
        settings = current.merged(edits.to_patch(current))
        self._persist(settings)
        result = SaveResult(settings=settings, local_saved=True)

        if not settings.can_sync:
            return result

        result.remote_attempted = True
        try:
            address = parse_gist_address(settings.gistUrl)
            revision_url = self._gist.update_file(
                address.gist_id,
                address.filename,
                settings.remote_document(),
                token=settings.githubToken.strip(),
            )
        except (InvalidGistAddressError, RemoteSyncError) as err:
            logger.warning("Remote settings sync failed: %s", err)
            result.remote_error = str(err)
            return result

        settings = settings.merged({"gistUrl": revision_url})
        self._persist(settings)
        logger.info("Settings synced to gist %s, now at %s", address.gist_id, revision_url)

        result.settings = settings
        result.remote_synced = True
        return result
