"""
GitHub Gist access for the shared settings document.

The settings live in one JSON file inside a gist. Reads go through raw URLs
(revision-pinned where possible); writes go through the gists REST API.
"""
from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import httpx

from kitchen.services.errors import InvalidGistAddressError, RemoteFetchError, RemoteSyncError

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
RAW_HOST = "gist.githubusercontent.com"
DEFAULT_FILENAME = "settings.json"

RAW_URL_PATTERN = re.compile(
    r"^https?://gist\.githubusercontent\.com/(?P<owner>[^/]+)/(?P<gist_id>[0-9a-fA-F]+)"
    r"/raw(?:/(?P<revision>[0-9a-fA-F]{40}))?(?:/(?P<filename>[^/?#]+))?/?(?:[?#].*)?$"
)
PAGE_URL_PATTERN = re.compile(
    r"^https?://gist\.github\.com/(?:(?P<owner>[^/]+)/)?(?P<gist_id>[0-9a-fA-F]{20,})/?(?:[?#].*)?$"
)
API_URL_PATTERN = re.compile(
    r"^https?://api\.github\.com/gists/(?P<gist_id>[0-9a-fA-F]+)(?:/(?P<revision>[0-9a-fA-F]{40}))?/?$"
)


@dataclass(frozen=True)
class GistAddress:
    gist_id: str
    filename: str = DEFAULT_FILENAME
    owner: Optional[str] = None
    revision: Optional[str] = None


def parse_gist_address(url: str) -> GistAddress:
    cleaned = (url or "").strip()

    match = RAW_URL_PATTERN.match(cleaned)
    if match:
        return GistAddress(
            gist_id=match.group("gist_id"),
            filename=match.group("filename") or DEFAULT_FILENAME,
            owner=match.group("owner"),
            revision=match.group("revision"),
        )

    match = PAGE_URL_PATTERN.match(cleaned)
    if match:
        return GistAddress(gist_id=match.group("gist_id"), owner=match.group("owner"))

    match = API_URL_PATTERN.match(cleaned)
    if match:
        return GistAddress(gist_id=match.group("gist_id"), revision=match.group("revision"))

    raise InvalidGistAddressError(url)


def revision_raw_url(owner: str, gist_id: str, revision: str, filename: str) -> str:
    return f"https://{RAW_HOST}/{owner}/{gist_id}/raw/{revision}/{filename}"


class GistClient:
    def __init__(
        self,
        http_client: httpx.Client | None = None,
        token: str | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._http = http_client or httpx.Client(follow_redirects=True)
        self.token = token
        self._clock = clock

    def _api_headers(self, token: str | None = None) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        bearer = token or self.token
        if bearer:
            headers["Authorization"] = f"Bearer {bearer}"
        return headers

    def fetch_document(self, url: str) -> dict[str, Any]:
        """GET a JSON document, defeating intermediate caches with a timestamp."""
        cache_buster = str(int(self._clock() * 1000))
        try:
            response = self._http.get(
                url,
                params={"_": cache_buster},
                headers={"Cache-Control": "no-cache"},
            )
        except httpx.HTTPError as err:
            raise RemoteFetchError(url, str(err)) from err

        if not response.is_success:
            raise RemoteFetchError(url, response.reason_phrase or "request failed", response.status_code)

        try:
            document = response.json()
        except ValueError as err:
            raise RemoteFetchError(url, "response is not valid JSON", response.status_code) from err
        if not isinstance(document, dict):
            raise RemoteFetchError(url, "response is not a JSON object", response.status_code)
        return document

    def _get_gist(self, gist_id: str) -> dict[str, Any]:
        url = f"{GITHUB_API_URL}/gists/{gist_id}"
        try:
            response = self._http.get(url, headers=self._api_headers())
        except httpx.HTTPError as err:
            raise RemoteFetchError(url, str(err)) from err
        if not response.is_success:
            raise RemoteFetchError(url, response.reason_phrase or "request failed", response.status_code)
        try:
            gist = response.json()
        except ValueError as err:
            raise RemoteFetchError(url, "gist metadata is not valid JSON", response.status_code) from err
        if not isinstance(gist, dict):
            raise RemoteFetchError(url, "gist metadata is not a JSON object", response.status_code)
        return gist

    def latest_revision_url(self, gist_id: str, filename: str | None = None) -> str:
        """Resolve the raw URL of the newest revision of one gist file."""
        gist = self._get_gist(gist_id)
        files = gist.get("files")
        if not isinstance(files, dict) or not files:
            raise RemoteFetchError(f"{GITHUB_API_URL}/gists/{gist_id}", "gist has no files")

        name = filename if filename in files else next(iter(files))
        revision_url = _newest_revision_url(gist, gist_id, name)
        if revision_url:
            return revision_url

        raw_url = _file_raw_url(gist, name)
        if not raw_url:
            raise RemoteFetchError(f"{GITHUB_API_URL}/gists/{gist_id}", f"no raw url for {name}")
        return raw_url

    def update_file(
        self,
        gist_id: str,
        filename: str,
        content: dict[str, Any],
        token: str | None = None,
    ) -> str:
        """PATCH one file of the gist and return the new revision's raw URL."""
        url = f"{GITHUB_API_URL}/gists/{gist_id}"
        body = {
            "files": {
                filename: {"content": json.dumps(content, indent=2, ensure_ascii=False)},
            }
        }
        try:
            response = self._http.patch(url, json=body, headers=self._api_headers(token))
        except httpx.HTTPError as err:
            raise RemoteSyncError(gist_id, str(err)) from err

        if not response.is_success:
            raise RemoteSyncError(gist_id, _github_message(response), response.status_code)

        try:
            gist = response.json()
        except ValueError as err:
            raise RemoteSyncError(gist_id, "update response is not valid JSON", response.status_code) from err
        if not isinstance(gist, dict):
            raise RemoteSyncError(gist_id, "update response is not a JSON object", response.status_code)

        revision_url = _newest_revision_url(gist, gist_id, filename)
        if revision_url:
            return revision_url

        raw_url = _file_raw_url(gist, filename)
        if not raw_url:
            raise RemoteSyncError(gist_id, "update response carries no revision")
        return raw_url


def _github_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase or f"HTTP {response.status_code}"


def _newest_revision_url(gist: dict[str, Any], gist_id: str, filename: str) -> str | None:
    owner = gist.get("owner")
    login = owner.get("login") if isinstance(owner, dict) else None
    history = gist.get("history")
    if not login or not isinstance(history, list) or not history or not isinstance(history[0], dict):
        return None
    version = history[0].get("version")
    if not isinstance(version, str) or not version:
        return None
    return revision_raw_url(login, gist_id, version, filename)


def _file_raw_url(gist: dict[str, Any], filename: str) -> str | None:
    files = gist.get("files")
    entry = files.get(filename) if isinstance(files, dict) else None
    raw_url = entry.get("raw_url") if isinstance(entry, dict) else None
    return raw_url if isinstance(raw_url, str) and raw_url else None
