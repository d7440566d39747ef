"""
Read-only proxy for the hosted settings document.

The latest revision is looked up through the gist metadata API first and
then fetched by its immutable raw URL, so edge caches of an older revision
are never served.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from kitchen.app.config import AppConfig, get_config
from kitchen.app.deps import get_gist_client
from kitchen.services.errors import InvalidGistAddressError, RemoteFetchError
from kitchen.services.gist import GistAddress, GistClient, parse_gist_address

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["settings"])

NO_STORE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _json(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=NO_STORE_HEADERS)


def _configured_address(config: AppConfig) -> Optional[GistAddress]:
    if config.GIST_ID.strip():
        return GistAddress(gist_id=config.GIST_ID.strip())
    if config.GIST_URL.strip():
        return parse_gist_address(config.GIST_URL)
    return None


@router.get("/get-settings")
def get_settings_document(
    config: AppConfig = Depends(get_config),
    gist: GistClient = Depends(get_gist_client),
) -> JSONResponse:
    try:
        address = _configured_address(config)
    except InvalidGistAddressError as err:
        logger.error("Server configuration error: %s", err)
        return _json(500, {"details": f"The server is not configured correctly. {err}"})

    if address is None:
        logger.error("Server configuration error: neither GIST_ID nor GIST_URL is set.")
        return _json(500, {"details": "The server is not configured correctly. The GIST_ID is missing."})

    try:
        revision_url = gist.latest_revision_url(address.gist_id, address.filename)
        document = gist.fetch_document(revision_url)
    except RemoteFetchError as err:
        logger.error("Failed to fetch settings from gist %s: %s", address.gist_id, err)
        return _json(502, {"details": f"Failed to retrieve settings from the source: {err.reason}"})
    except Exception as exc:
        logger.exception("An unexpected error occurred in /api/get-settings")
        return _json(500, {"details": f"An internal error occurred: {exc}"})

    return _json(200, document)
