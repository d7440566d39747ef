from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    APP_ENV: str = "local"

    GEMINI_API_KEY: Optional[SecretStr] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # "proxied" keeps the Gemini key on the server behind /api/generate.
    GENERATION_MODE: Literal["proxied", "direct"] = "proxied"
    GENERATE_ENDPOINT_URL: str = "http://localhost:8000/api/generate"

    # Settings document hosting: a gist id, or a gist URL it can be derived from.
    GIST_ID: str = ""
    GIST_URL: str = ""
    GITHUB_TOKEN: Optional[SecretStr] = None

    LOCAL_STORE_PATH: Path = Path(".kitchen/local_store.json")

    FRONTEND_CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
    )

    @property
    def gemini_api_key(self) -> str:
        return self.GEMINI_API_KEY.get_secret_value() if self.GEMINI_API_KEY else ""

    @property
    def github_token(self) -> str | None:
        return self.GITHUB_TOKEN.get_secret_value() if self.GITHUB_TOKEN else None


@lru_cache
def get_config() -> AppConfig:
    return AppConfig()
