# kitchen/app/deps.py (singletons exposed as FastAPI dependencies)

from __future__ import annotations

from typing import Optional

import httpx
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from kitchen.app.config import AppConfig, get_config
from kitchen.app.context import AppContext
from kitchen.app.domain.errors import ConfigurationError
from kitchen.app.domain.messages import GENERATION_FAILED_ERROR, MISSING_API_KEY_MESSAGE
from kitchen.app.presentation import KitchenController
from kitchen.services.gemini_client import GeminiClient
from kitchen.services.generation import (
    DirectGenerationClient,
    GenerationClient,
    ProxiedGenerationClient,
)
from kitchen.services.gist import GistClient
from kitchen.services.local_store import LocalStore
from kitchen.services.settings_resolver import SettingsResolver
from kitchen.services.settings_sync import SettingsSynchronizer

_http: httpx.Client | None = None
_context: AppContext | None = None
_controller: KitchenController | None = None


def get_http_client() -> httpx.Client:
    global _http
    if _http is None:
        _http = httpx.Client(follow_redirects=True)
    return _http


def get_gist_client(
    config: AppConfig = Depends(get_config),
    http: httpx.Client = Depends(get_http_client),
) -> GistClient:
    return GistClient(http, token=config.github_token)


def get_context() -> AppContext:
    global _context
    if _context is None:
        config = get_config()
        store = LocalStore(config.LOCAL_STORE_PATH)
        # The app-side gist client never uses the server token; the write
        # credential comes from the settings document itself.
        gist = GistClient(get_http_client())
        _context = AppContext(
            store=store,
            resolver=SettingsResolver(store, gist),
            synchronizer=SettingsSynchronizer(store, gist),
        )
    return _context


def get_gemini_client(config: AppConfig = Depends(get_config)) -> GeminiClient:
    if not config.gemini_api_key:
        raise ConfigurationError(MISSING_API_KEY_MESSAGE, error=GENERATION_FAILED_ERROR)
    return GeminiClient(api_key=config.gemini_api_key, model_name=config.GEMINI_MODEL)


def get_server_generator(gemini: GeminiClient = Depends(get_gemini_client)) -> GenerationClient:
    return DirectGenerationClient(gemini)


def build_generator(config: AppConfig) -> GenerationClient:
    if config.GENERATION_MODE == "direct":
        return DirectGenerationClient(get_gemini_client(config))
    return ProxiedGenerationClient(config.GENERATE_ENDPOINT_URL, get_http_client())


def get_controller() -> KitchenController:
    global _controller
    if _controller is None:
        _controller = KitchenController(get_context(), build_generator(get_config()))
    return _controller


auth_scheme = HTTPBearer(auto_error=False)


async def get_admin_token(
    cred: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
) -> Optional[str]:
    if cred is None or cred.scheme.lower() != "bearer":
        return None
    return cred.credentials
